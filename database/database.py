import os
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite:///jobmatch.db")

_SQLITE_MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")


def build_engine(url: str, echo: bool = False) -> Engine:
    """Create an engine; SQLite connections get foreign keys turned on so
    match rows cascade with their resume and role."""
    kwargs = {"echo": echo}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if url in _SQLITE_MEMORY_URLS:
            # Each new connection to :memory: is a separate, empty database
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True

    new_engine = create_engine(url, **kwargs)

    if new_engine.dialect.name == "sqlite":
        @event.listens_for(new_engine, "connect")
        def _enable_sqlite_fks(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return new_engine


engine = build_engine(DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def configure(url: str, echo: bool = False) -> Engine:
    """Rebind the module-level engine and SessionLocal to another database."""
    global engine
    engine = build_engine(url, echo=echo)
    SessionLocal.configure(bind=engine)
    return engine
