"""ShardIndex: which shard of a tenant, without naming the tenant.

Used within the context of a particular tenant, when the full ShardIdentity is
not needed (no key->shard mapping happens) and the fully qualified TenantShardId
is not needed either, e.g. to build remote storage path suffixes.

Invariants:
    - Construction does not validate number < count; ShardIdentity owns that rule
    - (0, 0) is the legacy "unsharded" sentinel
    - Text form: exactly 4 hex characters NNCC
    - Binary form: exactly 2 bytes [number, count]
"""

from dataclasses import dataclass
from typing import Any

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from shardid.core.codec import dual_mode_core_schema, expect_size
from shardid.core.domain_types import ShardCount, ShardNumber
from shardid.core.errors import InvalidStringLength
from shardid.core.hex_codec import decode_hex

SHARD_INDEX_SIZE: int = 2
SHARD_INDEX_HEX_LEN: int = SHARD_INDEX_SIZE * 2


def format_shard_pair(number: int, count: int) -> str:
    return f"{number:02x}{count:02x}"


def parse_shard_pair(text: str, offset: int = 0) -> tuple[ShardNumber, ShardCount]:
    number, count = decode_hex(text, SHARD_INDEX_SIZE, offset)
    return ShardNumber(number), ShardCount(count)


@dataclass(frozen=True, order=True, slots=True)
class ShardIndex:
    shard_number: ShardNumber
    shard_count: ShardCount

    BINARY_SIZE = SHARD_INDEX_SIZE

    def __post_init__(self) -> None:
        object.__setattr__(self, "shard_number", ShardNumber(self.shard_number))
        object.__setattr__(self, "shard_count", ShardCount(self.shard_count))

    @classmethod
    def unsharded(cls) -> "ShardIndex":
        return cls(ShardNumber(0), ShardCount(0))

    def is_unsharded(self) -> bool:
        return self.shard_number == 0 and self.shard_count == 0

    def get_suffix(self) -> str:
        """Suffix to append to a TenantId when building remote storage paths.

        Returns an empty string when unsharded, so that the legacy pre-sharding
        remote key format is preserved.
        """
        if self.is_unsharded():
            return ""
        return "-" + format_shard_pair(self.shard_number, self.shard_count)

    # ─── Text form ───────────────────────────────────────────────

    def __str__(self) -> str:
        return format_shard_pair(self.shard_number, self.shard_count)

    def __repr__(self) -> str:
        return f"ShardIndex({self})"

    @classmethod
    def parse(cls, text: str) -> "ShardIndex":
        if len(text) != SHARD_INDEX_HEX_LEN:
            raise InvalidStringLength(len(text), (SHARD_INDEX_HEX_LEN,))
        return cls(*parse_shard_pair(text))

    # ─── Binary form ─────────────────────────────────────────────

    def to_bytes(self) -> bytes:
        return bytes((self.shard_number, self.shard_count))

    @classmethod
    def from_bytes(cls, data: bytes) -> "ShardIndex":
        number, count = expect_size(data, SHARD_INDEX_SIZE)
        return cls(ShardNumber(number), ShardCount(count))

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source: Any, handler: GetCoreSchemaHandler,
    ) -> core_schema.CoreSchema:
        return dual_mode_core_schema(cls)
