"""Application settings loaded from environment with safe fallbacks.

Environment precedence:
- Loads `.env` from the repo root before reading process env vars.
- Most values are pulled straight from env; booleans go through `_env_flag` so `"0"/"false"` work.
- Redis is optional: failure to build a client logs an error and the memory cache bin is used.

Key expectations (defaults in parentheses):
- `APP_ENV` controls settings class selection (`production` default).
- Redis: `REDIS_URL` enables the shared cache bins; absence keeps them in process memory.
- Solr: `SOLR_ENABLED` (false), `SOLR_URL` (http://localhost:8983/solr), `SOLR_CORE` (search).
- Local search: `SEARCH_DOCUMENTS_PATH` points at a JSON list of documents to index when Solr is off.
- Spellcheck: `SPELLCHECK_CACHE_BIN` (data) names the bin spellcheck payloads are written to.
"""

import logging
import os
from pathlib import Path
from typing import ClassVar, Optional

import redis
from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# (__file__ is search_spellcheck/core/config/settings.py, so traverse three levels up)
BASE_DIR = Path(__file__).resolve().parents[3]


load_dotenv(BASE_DIR / ".env")

logger = logging.getLogger(__name__)


def _env_flag(name: str, *, default: Optional[bool] = False) -> Optional[bool]:
    """
    Helper to parse boolean-like environment variables.
    """
    value = os.getenv(name)
    if value is None:
        return default
    return value.lower() in {"1", "true", "yes", "on"}


class Settings(BaseSettings):
    """Application configuration loaded from environment variables.

    Behavior highlights:
    - Loads `.env` at repo root, then lets process env override.
    - Feature toggles parsed via `_env_flag` to accept common truthy/falsey strings.
    - Redis optional: failures disable the shared cache but do not stop startup.
    """

    model_config: ClassVar[SettingsConfigDict] = SettingsConfigDict(
        env_file=str(BASE_DIR / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
        ignored_types=(redis.Redis,),
    )

    environment: str = os.getenv("APP_ENV", "production")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_dir: Optional[str] = os.getenv("LOG_DIR")
    use_json_logs: bool = bool(_env_flag("USE_JSON_LOGS", default=True))
    SITE_NAME: str = os.getenv("SITE_NAME", "Search Spellcheck")

    REDIS_URL: Optional[str] = os.getenv("REDIS_URL")

    solr_enabled: bool = bool(_env_flag("SOLR_ENABLED", default=False))
    solr_url: str = os.getenv("SOLR_URL", "http://localhost:8983/solr")
    solr_core: str = os.getenv("SOLR_CORE", "search")
    solr_timeout: float = float(os.getenv("SOLR_TIMEOUT", "3"))

    search_documents_path: Optional[str] = os.getenv("SEARCH_DOCUMENTS_PATH")
    search_items_per_page: int = int(os.getenv("SEARCH_ITEMS_PER_PAGE", 10))

    spellcheck_cache_bin: str = os.getenv("SPELLCHECK_CACHE_BIN", "data")
    spellcheck_memory_maxsize: int = int(os.getenv("SPELLCHECK_MEMORY_MAXSIZE", 1024))

    redis_client: ClassVar[Optional[redis.Redis]] = None

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        env_override = os.getenv("APP_ENV")
        if env_override:
            object.__setattr__(self, "environment", env_override)

        if self.REDIS_URL:
            try:
                self.__class__.redis_client = redis.Redis.from_url(self.REDIS_URL)
                logger.info("Redis client successfully initialized.")
            except Exception as e:
                logger.error(f"Error connecting to Redis: {str(e)}")
                self.__class__.redis_client = None
        else:
            logger.warning(
                "REDIS_URL is not set, cache bins will be kept in process memory."
            )

    @property
    def solr_select_url(self) -> str:
        """Full URL of the Solr `select` handler for the configured core."""
        return f"{self.solr_url.rstrip('/')}/{self.solr_core}/select"
