from __future__ import annotations

import struct
import zlib
from dataclasses import dataclass
from typing import BinaryIO, Iterator, Union

from .chunk_type import ChunkType
from .constants import CHUNK_OVERHEAD, CHUNK_TYPE_LEN, MAX_CHUNK_LENGTH
from .errors import ChecksumMismatch, InvalidEncoding, TrailingBytes, TruncatedInput


# Chunk layout (big-endian)
#  - length u32 (payload bytes only)
#  - type[4]
#  - data[length]
#  - crc u32 (CRC-32 over type + data)
_LEN_STRUCT = struct.Struct(">I")
_HDR_STRUCT = struct.Struct(">I4s")
_CRC_STRUCT = struct.Struct(">I")


def chunk_crc(chunk_type: ChunkType, data: bytes) -> int:
    return zlib.crc32(data, zlib.crc32(chunk_type.bytes())) & 0xFFFFFFFF


def _check_fields(chunk_type, data) -> bytes:
    if not isinstance(chunk_type, ChunkType):
        raise TypeError(f"chunk_type must be a ChunkType, not {type(chunk_type).__name__}")
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"chunk data must be bytes-like, not {type(data).__name__}")
    return bytes(data)


def read_exact(f: BinaryIO, n: int) -> bytes:
    b = f.read(n)
    if len(b) != n:
        raise TruncatedInput(n, len(b))
    return b


def _read_body(f: BinaryIO, length: int) -> "Chunk":
    # Everything after the length field
    chunk_type = ChunkType.from_bytes(read_exact(f, CHUNK_TYPE_LEN))
    data = read_exact(f, length)
    (stored_crc,) = _CRC_STRUCT.unpack(read_exact(f, _CRC_STRUCT.size))
    return Chunk(chunk_type, data, stored_crc)


@dataclass(frozen=True)
class Chunk:
    """A single length/type/data/CRC record.

    Instances are built with :meth:`build` (CRC computed) or decoded with
    :meth:`parse`/:meth:`read` (CRC read). Every construction path verifies
    ``crc`` against type + data, so a Chunk always serializes to a record
    that parses back. ``length`` is always ``len(data)``.
    """

    chunk_type: ChunkType
    data: bytes
    crc: int

    def __post_init__(self):
        data = _check_fields(self.chunk_type, self.data)
        object.__setattr__(self, "data", data)
        calc_crc = chunk_crc(self.chunk_type, data)
        if calc_crc != self.crc:
            raise ChecksumMismatch(self.crc, calc_crc)

    @classmethod
    def build(cls, chunk_type: ChunkType, data: Union[bytes, bytearray, memoryview]) -> "Chunk":
        data = _check_fields(chunk_type, data)
        if len(data) > MAX_CHUNK_LENGTH:
            raise ValueError(f"chunk data too large: {len(data)} bytes")
        return cls(chunk_type, data, chunk_crc(chunk_type, data))

    @classmethod
    def parse(cls, raw: Union[bytes, bytearray, memoryview]) -> "Chunk":
        """Decode exactly one chunk from ``raw``.

        Raises:
            TruncatedInput: fewer than 12 bytes, or less data than declared.
            InvalidTagByte: the type field is not four ASCII letters.
            ChecksumMismatch: stored CRC disagrees with type + data.
            TrailingBytes: bytes remain after the CRC.
        """
        raw = bytes(raw)
        if len(raw) < CHUNK_OVERHEAD:
            raise TruncatedInput(CHUNK_OVERHEAD, len(raw))
        length, type_raw = _HDR_STRUCT.unpack_from(raw, 0)
        end = CHUNK_OVERHEAD + length
        if end > len(raw):
            raise TruncatedInput(end, len(raw))
        chunk_type = ChunkType.from_bytes(type_raw)
        data_off = _HDR_STRUCT.size
        data = raw[data_off : data_off + length]
        (stored_crc,) = _CRC_STRUCT.unpack_from(raw, data_off + length)
        chunk = cls(chunk_type, data, stored_crc)
        if len(raw) > end:
            raise TrailingBytes(len(raw) - end)
        return chunk

    @classmethod
    def read(cls, f: BinaryIO) -> "Chunk":
        """Read one chunk from a binary stream, leaving it positioned after the CRC."""
        (length,) = _LEN_STRUCT.unpack(read_exact(f, _LEN_STRUCT.size))
        return _read_body(f, length)

    @classmethod
    def iter_read(cls, f: BinaryIO) -> Iterator["Chunk"]:
        """Yield chunks until the stream ends cleanly on a chunk boundary."""
        while True:
            head = f.read(_LEN_STRUCT.size)
            if not head:
                return
            if len(head) != _LEN_STRUCT.size:
                raise TruncatedInput(_LEN_STRUCT.size, len(head))
            (length,) = _LEN_STRUCT.unpack(head)
            yield _read_body(f, length)

    @property
    def length(self) -> int:
        return len(self.data)

    def data_as_string(self) -> str:
        try:
            return self.data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidEncoding(f"chunk {self.chunk_type} data is not valid UTF-8: {e}") from e

    def to_bytes(self) -> bytes:
        return _HDR_STRUCT.pack(self.length, self.chunk_type.bytes()) + self.data + _CRC_STRUCT.pack(self.crc)

    def __bytes__(self) -> bytes:
        return self.to_bytes()

    def __str__(self) -> str:
        return f"Chunk {{ length: {self.length}, type: {self.chunk_type}, crc: 0x{self.crc:08x}, data: {self.length} bytes }}"
