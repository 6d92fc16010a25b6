"""Settings for the shot chart API, store, client and renderer."""

from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models.bins import CANVAS_MARGIN_PX


class Environment(str, Enum):
    TEST = "TEST"
    DEV = "DEV"
    PROD = "PROD"


_ENV_ALIASES = {
    "TEST": Environment.TEST,
    "TESTING": Environment.TEST,
    "DEV": Environment.DEV,
    "DEVELOPMENT": Environment.DEV,
    "LOCAL": Environment.DEV,
    "PROD": Environment.PROD,
    "PRODUCTION": Environment.PROD,
}

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("json", "text")
ASYNC_DB_SCHEMES = ("sqlite+aiosqlite", "postgresql+asyncpg")


class AppSettings(BaseSettings):
    """Environment-driven settings; a ``.env`` file is read when present.

    Defaults are safe for tests: an in-memory SQLite store, a local API and
    an 800x600 court canvas.
    """

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore',
    )

    ENV: Environment = Field(default=Environment.TEST, description='TEST, DEV or PROD')

    # Shot record store
    DB_URI: str = Field(
        default='sqlite+aiosqlite:///:memory:',
        description='Async SQLAlchemy URL, sqlite+aiosqlite or postgresql+asyncpg',
    )
    DB_POOL_SIZE: int = Field(default=10, ge=1, description='Pool size for server databases')
    DB_MAX_OVERFLOW: int = Field(default=20, ge=0, description='Connections allowed above the pool size')
    DB_ECHO: bool = Field(default=False, description='Log every SQL statement')

    # HTTP API server
    API_HOST: str = Field(default='127.0.0.1')
    API_PORT: int = Field(default=3001, ge=1, le=65535)
    CORS_ORIGINS: str = Field(default='*', description='Comma-separated allowed origins')

    # API client
    API_BASE_URL: str = Field(default='http://localhost:3001/api', description='Prefix for client requests')
    TIMEOUT_S: float = Field(default=15.0, gt=0, description='Client request timeout in seconds')

    # Court canvas
    CANVAS_WIDTH: int = Field(default=800, description='Court canvas width in pixels')
    CANVAS_HEIGHT: int = Field(default=600, description='Court canvas height in pixels')

    # Logging
    LOG_LEVEL: str = Field(default='INFO')
    LOG_FORMAT: str = Field(default='json', description='json or text')
    LOG_FILE: Optional[Path] = Field(default=None, description='Also write logs to this file')

    @field_validator('ENV', mode='before')
    @classmethod
    def normalize_env(cls, v) -> Environment:
        if isinstance(v, Environment):
            return v
        env = _ENV_ALIASES.get(str(v).upper())
        if env is None:
            raise ValueError(f"ENV must be TEST, DEV, or PROD (got: {v})")
        return env

    @field_validator('DB_URI')
    @classmethod
    def require_async_driver(cls, v: str) -> str:
        scheme = v.split('://', 1)[0]
        if scheme not in ASYNC_DB_SCHEMES:
            raise ValueError(f"DB_URI must use one of {', '.join(ASYNC_DB_SCHEMES)} (got: {scheme})")
        return v

    @field_validator('LOG_LEVEL')
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        if v.upper() not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of: {', '.join(LOG_LEVELS)}")
        return v.upper()

    @field_validator('LOG_FORMAT')
    @classmethod
    def normalize_log_format(cls, v: str) -> str:
        if v.lower() not in LOG_FORMATS:
            raise ValueError("LOG_FORMAT must be 'json' or 'text'")
        return v.lower()

    @model_validator(mode='after')
    def check_canvas(self) -> 'AppSettings':
        if self.CANVAS_WIDTH <= 0 or self.CANVAS_HEIGHT <= CANVAS_MARGIN_PX:
            raise ValueError(
                f"Canvas must be wider than 0 and taller than {CANVAS_MARGIN_PX:g} pixels"
            )
        return self

    def is_test(self) -> bool:
        return self.ENV == Environment.TEST

    def is_prod(self) -> bool:
        return self.ENV == Environment.PROD

    def get_database_url(self) -> str:
        return self.DB_URI

    def cors_origins(self) -> List[str]:
        """Allowed CORS origins as a list."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(',') if origin.strip()]


@lru_cache()
def get_settings() -> AppSettings:
    """Settings loaded once per process from the environment and ``.env``."""
    return AppSettings()
