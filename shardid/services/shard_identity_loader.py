"""Shard Identity Loader: builds this process's ShardIdentity once, at startup.

Invariants:
    - Settings are validated through ShardIdentityConfig, then ShardIdentity.new
    - A rejected config is logged with its error code and re-raised, never defaulted
    - start_shard() installs logging from settings before anything is logged
"""

import logging

from pydantic import ValidationError

from shardid.config import Settings, get_settings
from shardid.core.errors import InvalidShardConfig
from shardid.core.shard_identity import ShardIdentity
from shardid.infrastructure.observability import setup_logging
from shardid.schemas.shard import ShardIdentityConfig

logger = logging.getLogger(__name__)

INVALID_SHARD_SETTINGS: str = "INVALID_SHARD_SETTINGS"


def start_shard(settings: Settings | None = None) -> ShardIdentity:
    """Process startup: configure logging, then load the shard identity."""
    if settings is None:
        settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    return load_shard_identity(settings)


def load_shard_identity(settings: Settings | None = None) -> ShardIdentity:
    if settings is None:
        settings = get_settings()
    settings_extra = {
        "shard_number": settings.shard_number,
        "shard_count": settings.shard_count,
        "stripe_size": settings.shard_stripe_size,
    }
    try:
        config = ShardIdentityConfig(
            number=settings.shard_number,
            count=settings.shard_count,
            stripe_size=settings.shard_stripe_size,
        )
        identity = config.to_identity()
    except ValidationError as exc:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in exc.errors())
        logger.error(
            f"Rejected shard settings: out of range ({fields})",
            extra={"error_code": INVALID_SHARD_SETTINGS, **settings_extra},
        )
        raise
    except InvalidShardConfig as exc:
        logger.error(
            f"Rejected shard config: {exc.message}",
            extra={"error_code": exc.code, **settings_extra},
        )
        raise

    logger.info(
        "Loaded shard identity"
        + (" (unsharded)" if identity.is_unsharded() else f" {identity.shard_index()}"),
        extra={
            "shard_number": int(identity.number),
            "shard_count": int(identity.count),
            "stripe_size": int(identity.stripe_size),
            "layout": int(identity.layout),
        },
    )
    return identity
