import logging
from typing import Optional

from sqlalchemy.engine import Engine
from tenacity import retry, stop_after_attempt, wait_fixed

from database import database
from database.models import Base

logger = logging.getLogger(__name__)


@retry(stop=stop_after_attempt(5), wait=wait_fixed(2), reraise=True)
def init_db(bind: Optional[Engine] = None) -> None:
    """Create all tables, retrying while the database comes up."""
    engine = bind or database.engine
    logger.info(f"Initializing database ({engine.dialect.name})...")
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Tables created or verified.")
    except Exception as e:
        logger.error(f"Error initializing DB: {e}")
        raise
