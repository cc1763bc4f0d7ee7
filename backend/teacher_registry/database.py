"""Database engine and helpers.

This module configures the SQLModel/SQLAlchemy engine from
`settings.DATABASE_URL` and provides the session dependency used by the
FastAPI application. The default is a local SQLite file next to the
package (`teachers.db`); deployments point `DATABASE_URL` at PostgreSQL.

Timeouts are set on the engine so that a slow or dead store call fails
with an error instead of holding the request: `DB_POOL_TIMEOUT` bounds
the wait for a pooled connection and `DB_STATEMENT_TIMEOUT_MS` becomes
the server-side statement timeout (the busy timeout on SQLite).
"""

from sqlmodel import SQLModel, create_engine, Session
from .config import settings


def build_engine(url: str = None, echo: bool = None):
    """Create an engine for `url` with pool and timeout settings applied."""
    url = url or settings.DATABASE_URL
    echo = settings.DB_ECHO if echo is None else echo
    timeout_ms = settings.DB_STATEMENT_TIMEOUT_MS
    if url.startswith("sqlite"):
        return create_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False, "timeout": timeout_ms / 1000.0},
        )
    connect_args = {}
    if url.startswith("postgresql"):
        connect_args["options"] = f"-c statement_timeout={timeout_ms}"
    return create_engine(
        url,
        echo=echo,
        pool_size=settings.DB_POOL_SIZE,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


engine = build_engine()


def create_db_and_tables(bind=None):
    """Create database tables using SQLModel metadata.

    Intended for local development and tests; deployments apply the SQL
    files in `migrations/` through `run_migrations.py` instead.
    """
    # models must be imported so the table is registered on the metadata
    from . import models  # noqa: F401
    SQLModel.metadata.create_all(bind or engine)


def get_session():
    """Yield a database `Session` for FastAPI dependency injection.

    The generator yields a session and ensures it is closed when the
    request scope finishes.
    """
    with Session(engine) as session:
        yield session
