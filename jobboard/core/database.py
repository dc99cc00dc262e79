import logging
from typing import Iterator, Optional

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.ext.declarative import declarative_base
from sqlalchemy.orm import Session, sessionmaker

from jobboard.core.config import Settings, settings

logger = logging.getLogger(__name__)

# Create Base class for models
Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores REFERENCES clauses unless this is set per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.close()


def build_engine(config: Settings = settings) -> Engine:
    """
    Create the SQLAlchemy engine for the configured backend.

    Development mode uses a local SQLite file; every other mode connects to
    PostgreSQL at DATABASE_URL over SSL.
    """
    url = config.SQLALCHEMY_DATABASE_URL
    if url.startswith("sqlite"):
        return create_engine(url, connect_args={"check_same_thread": False})

    return create_engine(
        url,
        pool_pre_ping=True,  # Verify connections before using them
        connect_args={"sslmode": "require"},
    )


class DataStore:
    """
    Process-wide handle on the relational store.

    Built once at startup and attached to the application; routes get a
    per-request Session from it through get_db().
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        if engine.dialect.name == "sqlite":
            event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        self.session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    @classmethod
    def from_settings(cls, config: Optional[Settings] = None) -> "DataStore":
        return cls(build_engine(config or settings))

    def session(self) -> Iterator[Session]:
        db = self.session_factory()
        try:
            yield db
        finally:
            db.close()

    def create_schema(self) -> None:
        """Create any missing tables."""
        from jobboard.models import job_posting, candidate  # Import models to register them
        Base.metadata.create_all(bind=self.engine)

    def reset_schema(self) -> None:
        """Drop every table and create the schema again. All data is lost."""
        from jobboard.models import job_posting, candidate  # Import models to register them
        Base.metadata.drop_all(bind=self.engine)
        Base.metadata.create_all(bind=self.engine)
        logger.warning("Database schema dropped and recreated")

    def dispose(self) -> None:
        self.engine.dispose()


def get_store(request: Request) -> DataStore:
    return request.app.state.store


def get_db(request: Request) -> Iterator[Session]:
    """
    Dependency function to get database session.
    Used in FastAPI endpoints with Depends(get_db)
    """
    yield from get_store(request).session()
