"""Database configuration and session management.

This module configures the database engine for the checklist portal. SQLite
is the default store; any SQLAlchemy URL supported by SQLModel works.

SQLite Configuration Choices:
    - **WAL (Write-Ahead Logging)**: Allows history and dashboard reads to
      proceed while a submission is being written.

    - **Foreign Keys**: Disabled by default in SQLite. Enabled so the schema
      behaves the same as on PostgreSQL.

    - **check_same_thread=False**: Required for FastAPI. Sessions created by
      the dependency may be used from a worker thread other than the one
      that opened the connection.
"""

from sqlalchemy import event as sa_event
from sqlmodel import Session, SQLModel, create_engine

from app.core.config import settings

is_sqlite = settings.database_url.startswith("sqlite")

connect_args = {"check_same_thread": False} if is_sqlite else {}

engine = create_engine(
    settings.database_url,
    connect_args=connect_args,
    echo=settings.debug,  # Log SQL statements when DEBUG=true
)


if is_sqlite:

    @sa_event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        """Configure SQLite pragmas on each new connection.

        These settings are connection-level, not database-level, so they must
        be set each time a new connection is established from the pool.
        """
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def create_db_and_tables():
    """Create all database tables."""
    # Import models so they register with SQLModel.metadata
    import app.models  # noqa: F401

    SQLModel.metadata.create_all(engine)


def get_session():
    """Dependency for getting database session."""
    with Session(engine) as session:
        yield session
