from __future__ import annotations

import io
from typing import Iterable, List, Optional, Tuple

from .chunk import Chunk
from .constants import PNG_SIGNATURE
from .errors import ChunkNotFound, InvalidSignature


class Png:
    """PNG signature followed by a sequence of chunks.

    Chunks are kept in file order; nothing here interprets chunk data or
    requires IHDR/IEND to be present.
    """

    def __init__(self, chunks: Iterable[Chunk] = ()):
        self._chunks: List[Chunk] = list(chunks)

    @classmethod
    def from_bytes(cls, raw: bytes) -> "Png":
        if raw[: len(PNG_SIGNATURE)] != PNG_SIGNATURE:
            raise InvalidSignature("Bad PNG signature")
        f = io.BytesIO(raw)
        f.seek(len(PNG_SIGNATURE))
        return cls(Chunk.iter_read(f))

    @classmethod
    def from_file(cls, path: str) -> "Png":
        with open(path, "rb") as fh:
            return cls.from_bytes(fh.read())

    def write_file(self, path: str) -> None:
        with open(path, "wb") as fh:
            fh.write(self.to_bytes())

    @property
    def header(self) -> bytes:
        return PNG_SIGNATURE

    @property
    def chunks(self) -> Tuple[Chunk, ...]:
        return tuple(self._chunks)

    def append_chunk(self, chunk: Chunk) -> None:
        self._chunks.append(chunk)

    def remove_first_chunk(self, chunk_type: str) -> Chunk:
        for i, c in enumerate(self._chunks):
            if str(c.chunk_type) == chunk_type:
                return self._chunks.pop(i)
        raise ChunkNotFound(chunk_type)

    def chunk_by_type(self, chunk_type: str) -> Optional[Chunk]:
        for c in self._chunks:
            if str(c.chunk_type) == chunk_type:
                return c
        return None

    def to_bytes(self) -> bytes:
        return PNG_SIGNATURE + b"".join(c.to_bytes() for c in self._chunks)

    def __bytes__(self) -> bytes:
        return self.to_bytes()

    def __str__(self) -> str:
        lines = [f"Png {{ chunks: {len(self._chunks)} }}"]
        lines.extend(f"  {c}" for c in self._chunks)
        return "\n".join(lines)
