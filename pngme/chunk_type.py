from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Union

from .constants import (
    CHUNK_TYPE_LEN,
    LOWER_MAX,
    LOWER_MIN,
    PROPERTY_BIT,
    UPPER_MAX,
    UPPER_MIN,
)
from .errors import InvalidTagByte, InvalidTagLength


def is_valid_byte(b: int) -> bool:
    return UPPER_MIN <= b <= UPPER_MAX or LOWER_MIN <= b <= LOWER_MAX


def _check(raw: bytes) -> bytes:
    if len(raw) != CHUNK_TYPE_LEN:
        raise InvalidTagLength(len(raw))
    for i, b in enumerate(raw):
        if not is_valid_byte(b):
            raise InvalidTagByte(i, b)
    return raw


@dataclass(frozen=True)
class ChunkType:
    """Four-letter chunk type code.

    The case of each letter carries a property flag (bit 5):

    - byte 0, ancillary bit: uppercase means critical
    - byte 1, private bit: uppercase means public
    - byte 2, reserved bit: must be uppercase for conforming types
    - byte 3, safe-to-copy bit: lowercase means safe to copy

    Letter legality is checked at construction; ``is_valid`` only reports the
    reserved bit.
    """

    raw: bytes

    def __post_init__(self):
        object.__setattr__(self, "raw", _check(bytes(self.raw)))

    @classmethod
    def from_bytes(cls, raw: Union[bytes, Iterable[int]]) -> "ChunkType":
        return cls(bytes(raw))

    @classmethod
    def from_str(cls, s: str) -> "ChunkType":
        # Non-ASCII characters encode to bytes >= 0x80 and fail the letter check
        return cls(s.encode("utf-8"))

    def bytes(self) -> bytes:
        return self.raw

    def __bytes__(self) -> bytes:
        return self.raw

    def is_critical(self) -> bool:
        return self.raw[0] & PROPERTY_BIT == 0

    def is_public(self) -> bool:
        return self.raw[1] & PROPERTY_BIT == 0

    def is_reserved_bit_valid(self) -> bool:
        return self.raw[2] & PROPERTY_BIT == 0

    def is_safe_to_copy(self) -> bool:
        return self.raw[3] & PROPERTY_BIT != 0

    def is_valid(self) -> bool:
        return self.is_reserved_bit_valid()

    def __str__(self) -> str:
        return self.raw.decode("ascii")

    def __repr__(self) -> str:
        return f"ChunkType({str(self)!r})"
