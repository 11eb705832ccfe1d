"""
Database engine, session factory and declarative base.

SQLite is the default store; a PostgreSQL DATABASE_URL switches the engine
to a pooled connection.
"""
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from app.config import settings
from typing import Generator

Base = declarative_base()


def build_engine(url: str, **options) -> Engine:
    """
    Create an engine for a database URL.

    SQLite connections enforce foreign keys (so ECA applications cascade with
    their citizen) and may be shared across request threads. File databases
    also switch to WAL journaling.

    Args:
        url: SQLAlchemy database URL
        **options: Extra create_engine arguments (e.g. poolclass for tests)
    """
    if not url.startswith("sqlite"):
        kwargs = {"pool_pre_ping": True, "pool_size": 5, "max_overflow": 10}
        kwargs.update(options)
        return create_engine(url, **kwargs)

    kwargs = {"connect_args": {"check_same_thread": False}}
    kwargs.update(options)
    sqlite_engine = create_engine(url, **kwargs)
    in_memory = url in ("sqlite://", "sqlite:///:memory:")

    @event.listens_for(sqlite_engine, "connect")
    def configure_sqlite(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        if not in_memory:
            cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    return sqlite_engine


engine = build_engine(settings.database_url)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Request-scoped session for FastAPI's Depends()."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind: Engine = None) -> None:
    """Create every table registered on Base (citizens, geography, staff, audit, ECA)."""
    import app.models  # noqa: F401
    Base.metadata.create_all(bind=bind or engine)
