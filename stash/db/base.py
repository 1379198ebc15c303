"""Resource store engine and session management."""

from collections.abc import Generator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from stash.config import settings


class Base(DeclarativeBase):
    """SQLAlchemy declarative base."""

    pass


# Engine is created on first use so the API can boot without a database
_engine: Engine | None = None
_SessionLocal: sessionmaker | None = None


def make_engine(database_url: str) -> Engine:
    """Build an engine for the given URL.

    SQLite connections are shared with the threadpool FastAPI runs sync
    handlers in, so same-thread checking is disabled for them.
    """
    if database_url.startswith("sqlite"):
        return create_engine(database_url, connect_args={"check_same_thread": False})
    return create_engine(
        database_url,
        pool_pre_ping=True,  # Test connections before use
        pool_recycle=300,  # Recycle connections after 5 minutes
    )


def get_engine() -> Engine:
    """Get or create the process-wide engine."""
    global _engine
    if _engine is None:
        if not settings.database_url:
            raise ValueError("DATABASE_URL not configured")
        _engine = make_engine(settings.database_url)
    return _engine


def get_session_factory() -> sessionmaker:
    """Get or create session factory."""
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=get_engine())
    return _SessionLocal


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency yielding one session per request."""
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()


def init_db(engine: Engine | None = None) -> None:
    """Create the links, snippets and resumes tables if missing."""
    from stash.db import tables  # noqa: F401

    Base.metadata.create_all(bind=engine or get_engine())
