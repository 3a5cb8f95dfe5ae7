"""Hex Codec: strict fixed-width hex for identifier text forms.

Invariants:
    - encode_hex always emits lowercase, two digits per byte
    - decode_hex accepts upper or lower case digits and nothing else (no whitespace,
      no separators, no 0x prefix)
    - Length is checked before content: a wrong length is never reported as a bad digit
"""

import string

from shardid.core.errors import InvalidHexCharacter, InvalidStringLength

_HEX_DIGITS = frozenset(string.hexdigits)


def encode_hex(data: bytes) -> str:
    return data.hex()


def decode_hex(text: str, size: int, offset: int = 0) -> bytes:
    """Decode exactly `size` bytes from `text`.

    `offset` is added to the reported position of a bad digit, so callers
    decoding a slice of a longer identifier point at the right character.
    """
    if len(text) != size * 2:
        raise InvalidStringLength(len(text), (size * 2,))
    for index, char in enumerate(text):
        if char not in _HEX_DIGITS:
            raise InvalidHexCharacter(char, index + offset)
    return bytes.fromhex(text)
