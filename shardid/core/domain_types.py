"""Domain Types: bounded scalars that replace bare ints across the codebase.

Invariants:
    - ShardNumber, ShardCount, ShardLayout hold 0–255 (one byte)
    - ShardStripeSize holds 0–2**32-1 pages
    - ShardCount(0) is the legacy "no sharding" sentinel, not an ordinary count
    - Construction outside the range raises ValueError; values never change afterwards

Design Decisions:
    - int subclasses over NewType: the range is enforced at runtime, ordering and
      hashing come from int, and the values pack straight into bytes()
"""

import operator
from typing import ClassVar


class _BoundedScalar(int):
    """Unsigned integer of a fixed bit width."""

    BITS: ClassVar[int] = 8

    def __new__(cls, value: int = 0):
        value = operator.index(value)
        if not 0 <= value < (1 << cls.BITS):
            raise ValueError(
                f"{cls.__name__} must be in 0..{(1 << cls.BITS) - 1}, got {value}"
            )
        return super().__new__(cls, value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({int(self)})"

    __str__ = int.__repr__


class ShardNumber(_BoundedScalar):
    """Zero-based index of a shard within its tenant."""
    MAX: ClassVar["ShardNumber"]


class ShardCount(_BoundedScalar):
    """Number of shards a tenant is split into. 0 means legacy/unsharded."""
    MAX: ClassVar["ShardCount"]


class ShardStripeSize(_BoundedScalar):
    """Stripe size in pages."""
    BITS = 32


class ShardLayout(_BoundedScalar):
    """Version of the key->shard mapping, for future layout upgrades."""


ShardNumber.MAX = ShardNumber(255)
ShardCount.MAX = ShardCount(255)


# ─── Constants ───────────────────────────────────────────────────

LAYOUT_V1 = ShardLayout(1)

PAGE_SIZE_KIB: int = 8

# 256MiB divided by 8KiB page size
DEFAULT_STRIPE_SIZE = ShardStripeSize(256 * 1024 // PAGE_SIZE_KIB)
