"""
pngme — hide messages in PNG chunks.

The core is a codec for PNG-style chunks (length, type, data, CRC-32):

- ChunkType: four ASCII letters whose case bits carry the critical, public,
  reserved and safe-to-copy properties.
- Chunk: build (CRC computed), parse exactly one chunk from bytes, or read
  one chunk from a stream; serialize back to the canonical layout.

On top of it, Png holds a signature plus chunk list, and the CLI
(encode/decode/remove/print) uses Png to store text under a chunk type.
Malformed input always surfaces as a pngme.errors.PngmeError subclass.
"""

__version__ = "0.1"

from .chunk import Chunk
from .chunk_type import ChunkType
from .png import Png

__all__ = [
    "Chunk",
    "ChunkType",
    "Png",
    "constants",
    "errors",
]
