import yaml
import os
from typing import Dict, Optional
from pydantic import BaseModel, Field


class DatabaseConfig(BaseModel):
    url: str = "sqlite:///jobmatch.db"
    echo: bool = False


class WebConfig(BaseModel):
    """Web server configuration."""
    host: str = "0.0.0.0"
    port: int = 8080


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def _default_expected_years() -> Dict[str, float]:
    return {
        'entry': 1,
        'mid': 3,
        'senior': 5,
        'lead': 8,
    }


class ScorerConfig(BaseModel):
    """
    Configuration for the ScoreCalculator.

    The defaults reproduce the production scoring formula:
    base coverage + proficiency bonus + experience bonus, capped at 100.
    """
    # Proficiency bonus: (avg_level - neutral_level) * proficiency_weight
    neutral_proficiency: float = 3.0
    proficiency_weight: float = 1.5

    # Experience bonus: clamp((years - expected) * multiplier, min, max)
    experience_multiplier: float = 2.0
    experience_bonus_min: float = -10.0
    experience_bonus_max: float = 5.0
    days_per_year: float = 365.0
    expected_years: Dict[str, float] = Field(default_factory=_default_expected_years)
    default_expected_years: float = 3.0

    # Only the ceiling is enforced. Scores below zero are kept as computed.
    max_score: float = 100.0
    score_precision: int = 2


class MatchingConfig(BaseModel):
    """
    Top-level matching configuration.
    """
    scorer: ScorerConfig = Field(default_factory=ScorerConfig)

    # Scoring is pure, so roles can be scored on a thread pool.
    # 1 keeps the whole pass on the calling thread.
    max_workers: int = Field(default=1, ge=1)

    # Number of matches reported by the stats summaries
    top_matches: int = Field(default=5, ge=1)

    # Number of skills in the user dashboard skill distribution
    top_skills: int = Field(default=10, ge=1)


class AppConfig(BaseModel):
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    web: WebConfig = Field(default_factory=WebConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    matching: MatchingConfig = Field(default_factory=MatchingConfig)


def _apply_env_overrides(data: Dict) -> Dict:
    env_db_url = os.environ.get("DATABASE_URL")
    if env_db_url:
        data.setdefault('database', {})
        data['database']['url'] = env_db_url

    env_web_host = os.environ.get("WEB_HOST")
    if env_web_host:
        data.setdefault('web', {})
        data['web']['host'] = env_web_host

    env_web_port = os.environ.get("WEB_PORT")
    if env_web_port:
        data.setdefault('web', {})
        data['web']['port'] = int(env_web_port)

    env_log_level = os.environ.get("LOG_LEVEL")
    if env_log_level:
        data.setdefault('logging', {})
        data['logging']['level'] = env_log_level

    return data


def load_config(config_path: Optional[str] = "config.yaml") -> AppConfig:
    data = {}

    if config_path:
        if not os.path.exists(config_path):
            # Fall back to the config.yaml shipped next to the package
            base_dir = os.path.dirname(os.path.abspath(__file__))
            config_path = os.path.join(base_dir, "..", os.path.basename(config_path))

        if os.path.exists(config_path):
            with open(config_path, "r") as f:
                data = yaml.safe_load(f) or {}

    data = _apply_env_overrides(data)

    return AppConfig(**data)
