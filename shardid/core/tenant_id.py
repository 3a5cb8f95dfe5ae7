"""TenantId: opaque 16-byte random tenant identifier.

Only the surface the shard identifiers need: parse from hex, format to hex,
build from 16 raw bytes, view as 16 raw bytes.

Invariants:
    - Exactly 16 bytes; text form is exactly 32 lowercase hex characters
    - Ordering and hashing follow the raw bytes
"""

import secrets
from dataclasses import dataclass

from shardid.core.errors import InvalidByteLength, InvalidStringLength
from shardid.core.hex_codec import decode_hex, encode_hex

TENANT_ID_SIZE: int = 16
TENANT_ID_HEX_LEN: int = TENANT_ID_SIZE * 2


@dataclass(frozen=True, order=True, slots=True)
class TenantId:
    raw: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.raw, bytes):
            object.__setattr__(self, "raw", bytes(self.raw))
        if len(self.raw) != TENANT_ID_SIZE:
            raise InvalidByteLength(len(self.raw), TENANT_ID_SIZE)

    @classmethod
    def generate(cls) -> "TenantId":
        return cls(secrets.token_bytes(TENANT_ID_SIZE))

    @classmethod
    def parse(cls, text: str) -> "TenantId":
        if len(text) != TENANT_ID_HEX_LEN:
            raise InvalidStringLength(len(text), (TENANT_ID_HEX_LEN,))
        return cls(decode_hex(text, TENANT_ID_SIZE))

    @classmethod
    def from_bytes(cls, data: bytes) -> "TenantId":
        return cls(bytes(data))

    def as_bytes(self) -> bytes:
        return self.raw

    def __str__(self) -> str:
        return encode_hex(self.raw)

    def __repr__(self) -> str:
        return f"TenantId({self})"
