"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - Shard parameters come from environment variables or .env, never hardcoded per host
    - get_settings() is cached (lru_cache): single instance per process

Design Decisions:
    - Defaults describe a legacy unsharded process: works out-of-the-box for
      tenants that predate sharding
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

from shardid.core.domain_types import DEFAULT_STRIPE_SIZE


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Shard membership
    shard_number: int = 0
    shard_count: int = 0
    shard_stripe_size: int = int(DEFAULT_STRIPE_SIZE)

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
