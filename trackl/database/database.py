"""Database engine and session management for trackl.

This module supports both:
- Local SQLite (default)
- PostgreSQL or any other SQLAlchemy URL via `DATABASE_URL`

Engines are built from an explicit Settings object; there is no module-level engine.
"""

import logging
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from trackl.config import Settings

logger = logging.getLogger(__name__)

# Base class for declarative models
Base = declarative_base()


def _is_sqlite_url(database_url: str) -> bool:
    return "sqlite" in (database_url or "")


def get_engine_kwargs(settings: Settings) -> dict:
    """Return deterministic create_engine kwargs for the configured DB URL.

    This is separated to allow deterministic unit testing without connecting.
    """
    engine_kwargs: dict = {
        "echo": settings.debug,
        "pool_pre_ping": True,
    }

    if _is_sqlite_url(settings.database_url):
        # Handlers run in a thread pool, so connections cross threads.
        engine_kwargs["connect_args"] = {"check_same_thread": False}
        return engine_kwargs

    engine_kwargs["pool_size"] = settings.db_pool_size
    engine_kwargs["max_overflow"] = settings.db_max_overflow
    engine_kwargs["pool_timeout"] = settings.db_pool_timeout_sec
    return engine_kwargs


def set_sqlite_pragmas(dbapi_conn, connection_record):
    """Enable foreign keys and WAL on each new SQLite connection."""
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.close()


def build_engine(settings: Settings) -> Engine:
    engine = create_engine(settings.database_url, **get_engine_kwargs(settings))
    if _is_sqlite_url(settings.database_url):
        event.listen(engine, "connect", set_sqlite_pragmas)
    return engine


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(engine: Engine, settings: Settings) -> None:
    """Initialize database schema.

    - SQLite (default): use `create_all()`.
    - Other databases: prefer Alembic migrations for deterministic schema.
      Enable by setting `RUN_MIGRATIONS=true` in the environment.
    """
    # Register tables on Base.metadata.
    from trackl.database import models  # noqa: F401

    if settings.run_migrations and not _is_sqlite_url(settings.database_url):
        from alembic import command
        from alembic.config import Config

        alembic_cfg = Config(settings.alembic_ini)
        # Ensure Alembic uses the same runtime DB URL.
        alembic_cfg.set_main_option("sqlalchemy.url", settings.database_url)
        logger.info("Running database migrations")
        command.upgrade(alembic_cfg, "head")
        return

    Base.metadata.create_all(bind=engine)
