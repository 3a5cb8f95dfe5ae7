"""Dual-Mode Codec: human-readable text and fixed-size binary encodings, side by side.

Invariants:
    - Every identifier type implements BOTH forms (DualEncodable); never just one
    - The caller picks the form explicitly: TextCodec or BinaryCodec, or the
      serialization mode at a pydantic boundary (json -> text, python -> bytes)
    - Decoding never truncates, pads or defaults: wrong sizes raise IdDecodeError

Design Decisions:
    - Text and binary codecs are separate objects; the pydantic bridge is the only
      place that dispatches on the serialization mode
"""

from enum import Enum
from typing import Any, Callable, ClassVar, Generic, Iterable, Protocol, TypeVar

from pydantic_core import core_schema

from shardid.core.errors import InvalidByteLength


class SerializationMode(str, Enum):
    """Format negotiation flag for identifier serialization."""
    HUMAN_READABLE = "human_readable"
    BINARY = "binary"


class DualEncodable(Protocol):
    """Structural contract for types with a text form and a fixed-size binary form."""
    BINARY_SIZE: ClassVar[int]

    def __str__(self) -> str: ...
    def to_bytes(self) -> bytes: ...

    @classmethod
    def parse(cls, text: str) -> Any: ...

    @classmethod
    def from_bytes(cls, data: bytes) -> Any: ...


T = TypeVar("T", bound=DualEncodable)


def expect_size(data: bytes, size: int) -> bytes:
    """Return `data` as bytes if it is exactly `size` long."""
    data = bytes(data)
    if len(data) != size:
        raise InvalidByteLength(len(data), size)
    return data


# ─── Explicit Codecs ─────────────────────────────────────────────

class TextCodec(Generic[T]):
    """Hex text form, for URLs, logs and file paths."""
    mode = SerializationMode.HUMAN_READABLE

    def __init__(self, target: type[T]):
        self.target = target

    def encode(self, value: T) -> str:
        return str(value)

    def decode(self, text: str) -> T:
        return self.target.parse(text)


class BinaryCodec(Generic[T]):
    """Fixed-size byte form, for serialized metadata and wire structures."""
    mode = SerializationMode.BINARY

    def __init__(self, target: type[T]):
        self.target = target
        self.size = target.BINARY_SIZE

    def encode(self, value: T) -> bytes:
        return value.to_bytes()

    def decode(self, data: bytes) -> T:
        return self.target.from_bytes(data)

    def encode_many(self, values: Iterable[T]) -> bytes:
        """Pack values back to back, no header or separator."""
        return b"".join(value.to_bytes() for value in values)

    def decode_many(self, data: bytes) -> list[T]:
        """Unpack a buffer produced by encode_many."""
        if len(data) % self.size:
            raise InvalidByteLength(len(data), self.size)
        return [
            self.target.from_bytes(data[offset:offset + self.size])
            for offset in range(0, len(data), self.size)
        ]


def codec_for(target: type[T], mode: SerializationMode) -> TextCodec[T] | BinaryCodec[T]:
    if mode is SerializationMode.HUMAN_READABLE:
        return TextCodec(target)
    return BinaryCodec(target)


# ─── Pydantic Bridge ─────────────────────────────────────────────

def _build_validator(target: type[T]) -> Callable[[Any], T]:
    def validate(value: Any) -> T:
        if isinstance(value, target):
            return value
        if isinstance(value, str):
            return target.parse(value)
        if isinstance(value, (bytes, bytearray, memoryview)):
            return target.from_bytes(bytes(value))
        if isinstance(value, (list, tuple)):
            # array-of-bytes form, e.g. a binary tuple decoded by an array-oriented format
            try:
                raw = bytes(value)
            except TypeError as exc:
                raise ValueError(
                    f"{target.__name__} byte array must contain only ints"
                ) from exc
            return target.from_bytes(raw)
        raise ValueError(
            f"{target.__name__} expects a hex string or {target.BINARY_SIZE} bytes, "
            f"got {type(value).__name__}"
        )
    return validate


def _serialize(value: DualEncodable, info: core_schema.SerializationInfo) -> str | bytes:
    if info.mode_is_json():
        return str(value)
    return value.to_bytes()


def dual_mode_core_schema(target: type[T]) -> core_schema.CoreSchema:
    """Core schema making `target` usable as a pydantic field type.

    JSON serialization emits the text form; python-mode serialization emits
    the fixed-size bytes.
    """
    return core_schema.no_info_plain_validator_function(
        _build_validator(target),
        serialization=core_schema.plain_serializer_function_ser_schema(
            _serialize, info_arg=True,
        ),
    )
