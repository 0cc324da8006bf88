"""Service settings read from BLOBSTORE_* environment variables (and an optional .env file)."""
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix='BLOBSTORE_',
        env_file='.env',
        case_sensitive=False,
        extra='ignore',
    )

    host: str = '0.0.0.0'
    port: int = Field(8282, ge=0, le=65535)
    log_level: Literal['critical', 'error', 'warning', 'info', 'debug'] = 'info'
    # "random" hands out a fresh uuid per upload, "sha256" addresses by content
    oid_strategy: Literal['random', 'sha256'] = 'random'

    @field_validator('log_level', mode='before')
    @classmethod
    def lower_log_level(cls, value):
        if isinstance(value, str):
            return value.lower()
        return value


@lru_cache
def get_settings() -> Settings:
    return Settings()


_settings = get_settings()

HOST = _settings.host
PORT = _settings.port
LOG_LEVEL = _settings.log_level
OID_STRATEGY = _settings.oid_strategy
