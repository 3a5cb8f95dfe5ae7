"""Shard Schemas: Pydantic models with field-level validation for attach and config boundaries.

Invariants:
    - ShardIdentityConfig.number/count: 0–255; stripe_size: 0..2**32-1 pages
      (a zero stripe size is left for ShardIdentity.new to reject)
    - number == count == 0 selects the legacy identity; anything else goes through
      ShardIdentity.new and its ordered checks
    - TenantShardAttach.tenant_shard_id accepts the text form, the 18-byte form,
      or an instance; model_dump_json() writes the text form back
"""

from pydantic import BaseModel, Field

from shardid.core.domain_types import DEFAULT_STRIPE_SIZE
from shardid.core.shard_identity import ShardIdentity
from shardid.core.tenant_shard_id import TenantShardId


class ShardIdentityConfig(BaseModel):
    """Shard parameters as they appear in settings or stored config."""
    number: int = Field(0, ge=0, le=255)
    count: int = Field(0, ge=0, le=255)
    stripe_size: int = Field(DEFAULT_STRIPE_SIZE, ge=0, le=2**32 - 1)

    def to_identity(self) -> ShardIdentity:
        if self.number == 0 and self.count == 0:
            return ShardIdentity.unsharded()
        return ShardIdentity.new(self.number, self.count, self.stripe_size)


class TenantShardAttach(BaseModel):
    """Request to attach one tenant shard."""
    tenant_shard_id: TenantShardId
    stripe_size: int | None = Field(None, ge=0, le=2**32 - 1)

    def shard_identity(self) -> ShardIdentity:
        """Identity handed to routing logic once the shard is attached."""
        if self.tenant_shard_id.is_unsharded():
            return ShardIdentity.unsharded()
        return ShardIdentity.new(
            self.tenant_shard_id.shard_number,
            self.tenant_shard_id.shard_count,
            self.stripe_size if self.stripe_size is not None else DEFAULT_STRIPE_SIZE,
        )
