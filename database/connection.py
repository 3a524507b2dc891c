import logging
from typing import Generator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from database.base import Base
from core.config import settings

logger = logging.getLogger(__name__)

_engine: Optional[Engine] = None

# Create SessionLocal class (bound lazily, the URL may be absent)
SessionLocal = sessionmaker(autocommit=False, autoflush=False)


def is_database_configured() -> bool:
    return settings.database_configured


def get_engine() -> Engine:
    """Create the engine on first use"""
    global _engine
    if _engine is None:
        url = settings.DATABASE_URL
        if url.startswith("sqlite"):
            _engine = create_engine(
                url,
                poolclass=StaticPool,
                connect_args={"check_same_thread": False},
                echo=settings.SQL_ECHO
            )
        else:
            _engine = create_engine(url, pool_pre_ping=True, echo=settings.SQL_ECHO)
        SessionLocal.configure(bind=_engine)
    return _engine


def dispose_engine() -> None:
    global _engine
    if _engine is not None:
        _engine.dispose()
        _engine = None


# Create all tables
def create_tables() -> bool:
    if not is_database_configured():
        logger.warning("DATABASE_URL is not set; skipping table creation")
        return False
    from models import customer, order, service, pickup_delivery  # noqa: F401
    Base.metadata.create_all(bind=get_engine())
    return True


def drop_tables() -> None:
    Base.metadata.drop_all(bind=get_engine())


# Dependency to get database session; yields None when no database is configured
def get_db() -> Generator[Optional[Session], None, None]:
    if not is_database_configured():
        yield None
        return
    get_engine()
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def require_database(db: Optional[Session]) -> Session:
    """Writes need the hosted database; reads degrade instead of calling this"""
    if db is None:
        from core.exceptions import DatabaseNotConfiguredError
        raise DatabaseNotConfiguredError()
    return db
