"""ShardIdentity: what one member of a sharded tenant needs to resolve a key to a
shard and then check whether that shard is itself.

Invariants:
    - ShardIdentity.new: count >= 1, number < count, stripe_size >= 1, checked in
      that order, first failure wins
    - ShardIdentity.unsharded() is the only way to get number=0, count=0 (legacy);
      modern single-shard tenants use number=0, count=1
    - Every identity built here carries LAYOUT_V1
    - Serialized form is a plain mapping; loading it goes back through the same
      constructors, so a stored identity cannot bypass validation

Design Decisions:
    - Validation failures raise InvalidShardConfig synchronously from the constructor,
      never later from routing code
"""

from dataclasses import dataclass
from typing import Any, Mapping

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from shardid.core.domain_types import (
    DEFAULT_STRIPE_SIZE,
    LAYOUT_V1,
    ShardCount,
    ShardLayout,
    ShardNumber,
    ShardStripeSize,
)
from shardid.core.errors import InvalidShardConfig, ShardConfigError
from shardid.core.shard_index import ShardIndex


@dataclass(frozen=True, slots=True)
class ShardIdentity:
    layout: ShardLayout
    number: ShardNumber
    count: ShardCount
    stripe_size: ShardStripeSize

    def __post_init__(self) -> None:
        object.__setattr__(self, "layout", ShardLayout(self.layout))
        object.__setattr__(self, "number", ShardNumber(self.number))
        object.__setattr__(self, "count", ShardCount(self.count))
        object.__setattr__(self, "stripe_size", ShardStripeSize(self.stripe_size))

    @classmethod
    def unsharded(cls) -> "ShardIdentity":
        """The "none" identity of legacy tenants. Modern single-shard tenants use new(0, 1)."""
        return cls(
            layout=LAYOUT_V1,
            number=ShardNumber(0),
            count=ShardCount(0),
            stripe_size=DEFAULT_STRIPE_SIZE,
        )

    @classmethod
    def new(
        cls,
        number: int,
        count: int,
        stripe_size: int = DEFAULT_STRIPE_SIZE,
    ) -> "ShardIdentity":
        """Validated constructor. For the legacy case (count == 0) use unsharded()."""
        number, count = ShardNumber(number), ShardCount(count)
        stripe_size = ShardStripeSize(stripe_size)
        if count == 0:
            raise InvalidShardConfig(ShardConfigError.INVALID_COUNT)
        if number > count - 1:
            raise InvalidShardConfig(ShardConfigError.INVALID_NUMBER)
        if stripe_size == 0:
            raise InvalidShardConfig(ShardConfigError.INVALID_STRIPE_SIZE)
        return cls(layout=LAYOUT_V1, number=number, count=count, stripe_size=stripe_size)

    def is_unsharded(self) -> bool:
        return self.number == 0 and self.count == 0

    def shard_index(self) -> ShardIndex:
        return ShardIndex(self.number, self.count)

    # ─── Serialization ───────────────────────────────────────────

    def to_dict(self) -> dict[str, int]:
        return {
            "layout": int(self.layout),
            "number": int(self.number),
            "count": int(self.count),
            "stripe_size": int(self.stripe_size),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ShardIdentity":
        layout = data.get("layout", LAYOUT_V1)
        if layout != LAYOUT_V1:
            raise ValueError(f"Unsupported shard layout {layout}")
        number, count = data["number"], data["count"]
        if number == 0 and count == 0:
            # legacy identities always carry the default stripe size
            return cls.unsharded()
        return cls.new(number, count, data.get("stripe_size", DEFAULT_STRIPE_SIZE))

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source: Any, handler: GetCoreSchemaHandler,
    ) -> core_schema.CoreSchema:
        byte = core_schema.int_schema(ge=0, le=255)
        fields = core_schema.typed_dict_schema({
            "layout": core_schema.typed_dict_field(byte, required=False),
            "number": core_schema.typed_dict_field(byte),
            "count": core_schema.typed_dict_field(byte),
            "stripe_size": core_schema.typed_dict_field(
                core_schema.int_schema(ge=0, le=2**32 - 1), required=False,
            ),
        })
        from_mapping = core_schema.no_info_after_validator_function(cls.from_dict, fields)
        return core_schema.json_or_python_schema(
            json_schema=from_mapping,
            python_schema=core_schema.union_schema([
                core_schema.is_instance_schema(cls), from_mapping,
            ]),
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda identity: identity.to_dict(),
            ),
        )
