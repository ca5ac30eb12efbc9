"""Database session management."""
from typing import Any, Dict, Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from hostelcare.config.settings import settings


def engine_options(url: str) -> Dict[str, Any]:
    """Keyword arguments for ``create_engine`` appropriate to the backend."""
    if url.startswith("sqlite"):
        options: Dict[str, Any] = {
            "connect_args": {"check_same_thread": False},
            "echo": settings.DB_ECHO,
        }
        # In-memory databases live inside a single connection
        if url in ("sqlite://", "sqlite:///:memory:"):
            options["poolclass"] = StaticPool
        return options
    return {
        "pool_pre_ping": True,
        "echo": settings.DB_ECHO,
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_POOL_OVERFLOW,
    }


database_url = settings.get_database_url()
engine = create_engine(database_url, **engine_options(database_url))

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """
    Dependency function that yields a database session.

    Usage in FastAPI endpoints:
        @router.get("/workers")
        def list_workers(db: Session = Depends(get_db)):
            ...
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
