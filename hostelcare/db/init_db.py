"""Database initialization utilities."""
from typing import Optional

from sqlalchemy.engine import Engine

from hostelcare.core.logging import get_logger
from hostelcare.db.base import Base, import_models

logger = get_logger(__name__)


def init_db(bind: Optional[Engine] = None) -> None:
    """
    Create any missing tables.

    Suitable for development and tests; production schemas should be
    managed by migrations.
    """
    from hostelcare.db.session import engine

    import_models()
    target = bind or engine
    try:
        Base.metadata.create_all(bind=target)
        logger.info(f"Database initialized with {len(Base.metadata.tables)} tables")
    except Exception as e:
        logger.error(f"Error initializing database: {e}")
        raise


def drop_db(bind: Optional[Engine] = None) -> None:
    """
    Drop all tables.

    WARNING: This deletes all data.
    """
    from hostelcare.db.session import engine

    try:
        Base.metadata.drop_all(bind=bind or engine)
        logger.warning("All database tables dropped")
    except Exception as e:
        logger.error(f"Error dropping database: {e}")
        raise
