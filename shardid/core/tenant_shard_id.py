"""TenantShardId: identifies a unit of work, i.e. one shard of one tenant.

Written as `<tenant_id>-<shard number><shard count>`, for example the second
shard of a two-shard tenant:

    072f1291a5310026820b2fe4b2968934-0102

Tenants predating sharding were identified by a bare TenantId. They are
represented with shard_count == 0, which is distinct from a modern single-shard
tenant (number 0, count 1), and are written as the bare TenantId with no suffix.
The text form is therefore compatible in both directions: a legacy TenantId
decodes as a TenantShardId, and a legacy TenantShardId re-encodes to exactly
the original TenantId string.

The binary form has no legacy special case: it is always 18 bytes, because no
binary structure containing a bare TenantId had to be preserved.

Invariants:
    - Ordering is (tenant_id, shard_number, shard_count), so all shards of one
      tenant form one contiguous range (see tenant_range / select_tenant_shards)
    - Text form: 32 chars (legacy) or 37 chars; anything else is rejected
    - Binary form: exactly 18 bytes; from_bytes accepts any byte values
"""

from bisect import bisect_left, bisect_right
from dataclasses import dataclass
from typing import Any, Sequence

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from shardid.core.codec import dual_mode_core_schema, expect_size
from shardid.core.domain_types import ShardCount, ShardNumber
from shardid.core.errors import InvalidStringLength
from shardid.core.shard_index import (
    SHARD_INDEX_HEX_LEN,
    SHARD_INDEX_SIZE,
    ShardIndex,
    format_shard_pair,
    parse_shard_pair,
)
from shardid.core.tenant_id import TENANT_ID_HEX_LEN, TENANT_ID_SIZE, TenantId

TENANT_SHARD_ID_SIZE: int = TENANT_ID_SIZE + SHARD_INDEX_SIZE
TENANT_SHARD_ID_HEX_LEN: int = TENANT_ID_HEX_LEN + 1 + SHARD_INDEX_HEX_LEN
SHARD_SEPARATOR: str = "-"


@dataclass(frozen=True, order=True, slots=True)
class TenantShardId:
    tenant_id: TenantId
    shard_number: ShardNumber
    shard_count: ShardCount

    BINARY_SIZE = TENANT_SHARD_ID_SIZE

    def __post_init__(self) -> None:
        if isinstance(self.tenant_id, str):
            object.__setattr__(self, "tenant_id", TenantId.parse(self.tenant_id))
        elif not isinstance(self.tenant_id, TenantId):
            raise TypeError(
                f"tenant_id must be a TenantId, got {type(self.tenant_id).__name__}"
            )
        object.__setattr__(self, "shard_number", ShardNumber(self.shard_number))
        object.__setattr__(self, "shard_count", ShardCount(self.shard_count))

    @classmethod
    def unsharded(cls, tenant_id: TenantId) -> "TenantShardId":
        return cls(tenant_id, ShardNumber(0), ShardCount(0))

    @classmethod
    def from_index(cls, tenant_id: TenantId, index: ShardIndex) -> "TenantShardId":
        return cls(tenant_id, index.shard_number, index.shard_count)

    @classmethod
    def tenant_range(cls, tenant_id: TenantId) -> tuple["TenantShardId", "TenantShardId"]:
        """Inclusive (low, high) bounds of every TenantShardId of one tenant.

        Lets an ordered collection keyed by TenantShardId answer "all shards of
        tenant X" without a secondary index.
        """
        return (
            cls(tenant_id, ShardNumber(0), ShardCount(0)),
            cls(tenant_id, ShardNumber.MAX, ShardCount.MAX),
        )

    def is_unsharded(self) -> bool:
        return self.shard_number == 0 and self.shard_count == 0

    def to_index(self) -> ShardIndex:
        return ShardIndex(self.shard_number, self.shard_count)

    def shard_slug(self) -> str:
        return format_shard_pair(self.shard_number, self.shard_count)

    # ─── Text form ───────────────────────────────────────────────

    def __str__(self) -> str:
        if self.shard_count != 0:
            return f"{self.tenant_id}{SHARD_SEPARATOR}{self.shard_slug()}"
        # legacy: just the tenant id, distinct from the single shard case (count == 1)
        return str(self.tenant_id)

    def __repr__(self) -> str:
        return f"TenantShardId({self})"

    @classmethod
    def parse(cls, text: str) -> "TenantShardId":
        if len(text) == TENANT_ID_HEX_LEN:
            return cls.unsharded(TenantId.parse(text))
        if len(text) == TENANT_SHARD_ID_HEX_LEN:
            tenant_id = TenantId.parse(text[:TENANT_ID_HEX_LEN])
            # the separator position is skipped, not checked
            number, count = parse_shard_pair(
                text[TENANT_ID_HEX_LEN + 1:], offset=TENANT_ID_HEX_LEN + 1,
            )
            return cls(tenant_id, number, count)
        raise InvalidStringLength(
            len(text), (TENANT_ID_HEX_LEN, TENANT_SHARD_ID_HEX_LEN),
        )

    # ─── Binary form ─────────────────────────────────────────────

    def to_bytes(self) -> bytes:
        return self.tenant_id.as_bytes() + bytes((self.shard_number, self.shard_count))

    @classmethod
    def from_bytes(cls, data: bytes) -> "TenantShardId":
        data = expect_size(data, TENANT_SHARD_ID_SIZE)
        return cls(
            TenantId(data[:TENANT_ID_SIZE]),
            ShardNumber(data[TENANT_ID_SIZE]),
            ShardCount(data[TENANT_ID_SIZE + 1]),
        )

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source: Any, handler: GetCoreSchemaHandler,
    ) -> core_schema.CoreSchema:
        return dual_mode_core_schema(cls)


def select_tenant_shards(
    keys: Sequence[TenantShardId], tenant_id: TenantId,
) -> Sequence[TenantShardId]:
    """Slice of an ascending sequence of keys holding every shard of `tenant_id`."""
    low, high = TenantShardId.tenant_range(tenant_id)
    return keys[bisect_left(keys, low):bisect_right(keys, high)]
