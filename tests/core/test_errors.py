"""Error Hierarchy: codes, categories and response envelope."""

from shardid.core.errors import (
    ErrorCategory,
    ErrorContext,
    IdDecodeError,
    InvalidByteLength,
    InvalidHexCharacter,
    InvalidShardConfig,
    InvalidStringLength,
    ShardConfigError,
    ShardIdError,
)


def test_decode_errors_are_value_errors():
    for error in (
        InvalidStringLength(3, (4,)),
        InvalidHexCharacter("g", 1),
        InvalidByteLength(1, 2),
    ):
        assert isinstance(error, IdDecodeError)
        assert isinstance(error, ShardIdError)
        assert isinstance(error, ValueError)
        assert error.category is ErrorCategory.DECODE
        assert error.http_status == 400


def test_decode_error_codes():
    assert InvalidStringLength(3, (32, 37)).code == "INVALID_STRING_LENGTH"
    assert InvalidHexCharacter("g", 1).code == "INVALID_HEX_CHARACTER"
    assert InvalidByteLength(1, 18).code == "INVALID_BYTE_LENGTH"


def test_string_length_message_lists_accepted_lengths():
    assert str(InvalidStringLength(3, (32, 37))) == "Invalid string length 3, expected 32 or 37"


def test_shard_config_error_has_three_reasons():
    assert set(ShardConfigError) == {
        ShardConfigError.INVALID_COUNT,
        ShardConfigError.INVALID_NUMBER,
        ShardConfigError.INVALID_STRIPE_SIZE,
    }


def test_invalid_shard_config_carries_reason():
    error = InvalidShardConfig(ShardConfigError.INVALID_STRIPE_SIZE)
    assert error.reason is ShardConfigError.INVALID_STRIPE_SIZE
    assert error.code == "INVALID_STRIPE_SIZE"
    assert error.category is ErrorCategory.VALIDATION
    assert str(error) == "Invalid stripe size"


def test_to_response_envelope():
    context = ErrorContext(input_value="0d1", type_name="ShardIndex")
    response = InvalidStringLength(3, (4,), context).to_response()
    assert response["error"]["code"] == "INVALID_STRING_LENGTH"
    assert response["error"]["category"] == "decode"
    assert response["error"]["severity"] == "error"
    assert response["error"]["context"] == {"input_value": "0d1", "type_name": "ShardIndex"}
