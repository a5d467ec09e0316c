"""
Single place to read settings from the environment.

Variables (a local .env file is loaded first if present):
- DATABASE_URL  SQLAlchemy URL for players and results (default: local SQLite file)
- APP_ENV       "local" auto-creates tables on startup
- LOG_LEVEL     root log level, e.g. DEBUG / INFO
- SECRET_SEED   integer seed for reproducible secrets (unset = OS randomness)
- FINISHED_GAME_TTL  seconds a finished game stays readable in memory (default 3600)
"""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

DEFAULT_DATABASE_URL = "sqlite+pysqlite:///./masterand.db"


@dataclass(frozen=True)
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    app_env: str = "local"
    log_level: str = "INFO"
    secret_seed: Optional[int] = None
    finished_game_ttl: float = 3600.0


def _parse_seed(raw: Optional[str]) -> Optional[int]:
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"SECRET_SEED must be an integer, got {raw!r}.")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached settings; call get_settings.cache_clear() after changing env vars."""
    # dev convenience; in prod the platform injects env vars
    load_dotenv()
    return Settings(
        database_url=os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL),
        app_env=os.getenv("APP_ENV", "local"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        secret_seed=_parse_seed(os.getenv("SECRET_SEED")),
        finished_game_ttl=float(os.getenv("FINISHED_GAME_TTL", "3600")),
    )


def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(
        level=level or get_settings().log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
