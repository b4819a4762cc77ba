from dataclasses import dataclass

from sqlalchemy.engine import Engine

from database import database
from jobmatch.config_loader import AppConfig
from jobmatch.engine import MatchingEngine


@dataclass
class AppContext:
    """Application context container that holds all wired dependencies.

    Single source of truth for service instantiation. DB access is obtained
    via match_uow() inside each engine operation.
    """
    config: AppConfig
    engine: Engine
    matching_engine: MatchingEngine

    @classmethod
    def build(cls, config: AppConfig) -> "AppContext":
        """Build an AppContext from config.

        Rebinds the shared SessionLocal to the configured database URL.

        Args:
            config: Loaded application configuration

        Returns:
            Fully wired AppContext instance
        """
        db_engine = database.configure(config.database.url, echo=config.database.echo)
        matching_engine = MatchingEngine(config=config.matching)

        return cls(
            config=config,
            engine=db_engine,
            matching_engine=matching_engine
        )
