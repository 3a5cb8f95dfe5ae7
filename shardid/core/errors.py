"""Error Hierarchy: typed, categorized exceptions for identifier decoding and shard config.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Decode errors never carry a partial result
    - Decode errors are ValueError subclasses, so pydantic validators report them as
      validation errors without extra mapping
    - ShardConfigError is a bare discriminant; InvalidShardConfig is the exception carrying it

Design Decisions:
    - Single hierarchy with ShardIdError base, code and category on every error
    - ErrorContext as dataclass, filled by callers that know the offending input
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    DECODE = "decode"
    VALIDATION = "validation"


class ShardConfigError(str, Enum):
    """Reasons a shard identity fails validation."""
    INVALID_COUNT = "INVALID_COUNT"
    INVALID_NUMBER = "INVALID_NUMBER"
    INVALID_STRIPE_SIZE = "INVALID_STRIPE_SIZE"


_SHARD_CONFIG_MESSAGES: dict[ShardConfigError, str] = {
    ShardConfigError.INVALID_COUNT: "Invalid shard count",
    ShardConfigError.INVALID_NUMBER: "Invalid shard number",
    ShardConfigError.INVALID_STRIPE_SIZE: "Invalid stripe size",
}


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    input_value: str | None = None
    type_name: str | None = None
    debug_info: dict[str, Any] | None = None


class ShardIdError(Exception):
    """Base exception for all shardid errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 400,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "input_value": self.context.input_value,
                    "type_name": self.context.type_name,
                },
            }
        }


# ─── Decode Errors ──────────────────────────────────────────────

class IdDecodeError(ShardIdError, ValueError):
    """Text or binary identifier could not be decoded."""

    def __init__(self, message: str, code: str, context: ErrorContext | None = None):
        super().__init__(
            message, code, ErrorCategory.DECODE,
            ErrorSeverity.ERROR, context, 400,
        )


class InvalidStringLength(IdDecodeError):
    """Text form is none of the accepted fixed lengths."""
    def __init__(
        self, length: int, expected: tuple[int, ...], context: ErrorContext | None = None,
    ):
        accepted = " or ".join(str(n) for n in expected)
        super().__init__(
            f"Invalid string length {length}, expected {accepted}",
            "INVALID_STRING_LENGTH", context,
        )
        self.length = length
        self.expected = expected


class InvalidHexCharacter(IdDecodeError):
    """Text form contains a character that is not a hex digit."""
    def __init__(self, char: str, index: int, context: ErrorContext | None = None):
        super().__init__(
            f"Invalid character {char!r} at position {index}",
            "INVALID_HEX_CHARACTER", context,
        )
        self.char = char
        self.index = index


class InvalidByteLength(IdDecodeError):
    """Binary form is not the fixed size of the target type."""
    def __init__(self, length: int, expected: int, context: ErrorContext | None = None):
        super().__init__(
            f"Invalid byte length {length}, expected {expected}",
            "INVALID_BYTE_LENGTH", context,
        )
        self.length = length
        self.expected = expected


# ─── Validation Errors ──────────────────────────────────────────

class InvalidShardConfig(ShardIdError, ValueError):
    """ShardIdentity parameters rejected by the validated constructor."""
    def __init__(self, reason: ShardConfigError, context: ErrorContext | None = None):
        super().__init__(
            _SHARD_CONFIG_MESSAGES[reason], reason.value,
            ErrorCategory.VALIDATION, ErrorSeverity.ERROR, context, 400,
        )
        self.reason = reason
