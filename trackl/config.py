"""Settings for trackl, loaded from environment variables (+ optional .env).

A single Settings object is built at startup and handed to the application
factory and the engine builder; nothing reads the environment at import time.
"""

import os
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from dotenv import load_dotenv


DEFAULT_ADDR = "0.0.0.0:5000"
DEFAULT_DATABASE_URL = "sqlite:///./trackl.db"


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() == "true"


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


def parse_addr(addr: str) -> Tuple[str, int]:
    """Split a "host:port" listen address.

    Raises:
        ValueError: If the port is missing or not a number
    """
    host, sep, port = addr.rpartition(":")
    if not sep or not port.isdigit():
        raise ValueError(f"invalid listen address {addr!r}, expected host:port")
    return host or "0.0.0.0", int(port)


@dataclass(frozen=True)
class Settings:
    """Runtime configuration for trackl."""

    addr: str = DEFAULT_ADDR
    database_url: str = DEFAULT_DATABASE_URL
    debug: bool = False
    run_migrations: bool = False
    alembic_ini: str = "alembic.ini"
    log_level: str = "INFO"
    db_pool_size: int = 5
    db_max_overflow: int = 5
    db_pool_timeout_sec: int = 30

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "Settings":
        """Build settings from the environment, loading .env first if present."""
        load_dotenv(dotenv_path)
        return cls(
            addr=os.getenv("TRACKL_ADDR", DEFAULT_ADDR),
            database_url=os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL),
            debug=_env_bool("DEBUG", False),
            run_migrations=_env_bool("RUN_MIGRATIONS", False),
            alembic_ini=os.getenv("ALEMBIC_INI", "alembic.ini"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            db_pool_size=_env_int("DB_POOL_SIZE", 5),
            db_max_overflow=_env_int("DB_MAX_OVERFLOW", 5),
            db_pool_timeout_sec=_env_int("DB_POOL_TIMEOUT_SEC", 30),
        )

    def with_overrides(self, **changes) -> "Settings":
        """Return a copy with the given non-None fields replaced (CLI flags)."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})
