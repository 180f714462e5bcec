from __future__ import annotations

import sys
import argparse

from typing import List, Optional

from pngme.chunk import Chunk
from pngme.chunk_type import ChunkType
from pngme.png import Png
from pngme.constants import (
    EXIT_CHECKSUM,
    EXIT_CHUNK_NOT_FOUND,
    EXIT_ENCODING,
    EXIT_INVALID_TAG,
    EXIT_IO,
    EXIT_NOT_FOUND,
    EXIT_SIGNATURE,
    EXIT_TRAILING,
    EXIT_TRUNCATED,
)
from pngme.errors import (
    PngmeError,
    InvalidTag,
    TruncatedInput,
    ChecksumMismatch,
    TrailingBytes,
    InvalidEncoding,
    InvalidSignature,
    ChunkNotFound,
)


# Most specific first; the first isinstance match wins
_EXIT_CODES = (
    (InvalidTag, EXIT_INVALID_TAG),
    (TruncatedInput, EXIT_TRUNCATED),
    (ChecksumMismatch, EXIT_CHECKSUM),
    (TrailingBytes, EXIT_TRAILING),
    (InvalidEncoding, EXIT_ENCODING),
    (InvalidSignature, EXIT_SIGNATURE),
    (ChunkNotFound, EXIT_CHUNK_NOT_FOUND),
)


def exit_code_for(exc: BaseException) -> int:
    if isinstance(exc, FileNotFoundError):
        return EXIT_NOT_FOUND
    for cls, code in _EXIT_CODES:
        if isinstance(exc, cls):
            return code
    return EXIT_IO


def cmd_encode(path: str, chunk_type: str, message: str, *, output: Optional[str] = None) -> None:
    """Append a message chunk to a PNG file.

    Args:
        path: Input PNG path.
        chunk_type: Four-letter chunk type to store the message under.
        message: Text to hide; stored as UTF-8.
        output: Destination path. Defaults to rewriting ``path`` in place.
    """
    ctype = ChunkType.from_str(chunk_type)
    png = Png.from_file(path)
    png.append_chunk(Chunk.build(ctype, message.encode("utf-8")))
    png.write_file(output or path)


def cmd_decode(path: str, chunk_type: str) -> None:
    """Print the message stored in the first chunk of ``chunk_type``."""
    ChunkType.from_str(chunk_type)
    png = Png.from_file(path)
    chunk = png.chunk_by_type(chunk_type)
    if chunk is None:
        raise ChunkNotFound(chunk_type)
    print(chunk.data_as_string())


def cmd_remove(path: str, chunk_type: str) -> None:
    ChunkType.from_str(chunk_type)
    png = Png.from_file(path)
    removed = png.remove_first_chunk(chunk_type)
    png.write_file(path)
    print(f"Removed {removed}")


def cmd_print(path: str) -> None:
    png = Png.from_file(path)
    print(png)


def main(argv: List[str] | None = None):
    ap = argparse.ArgumentParser(
        prog="pngme",
        description="Hide and recover messages in PNG chunks",
    )
    sub = ap.add_subparsers(dest="cmd", required=True)

    ap_encode = sub.add_parser("encode", help="Store a message in a new chunk")
    ap_encode.add_argument("file", help="PNG path")
    ap_encode.add_argument("chunk_type", help="Four-letter chunk type, e.g. ruSt")
    ap_encode.add_argument("message", help="Message text")
    ap_encode.add_argument("output", nargs="?", help="Output path (default: rewrite input)")

    ap_decode = sub.add_parser("decode", help="Print the message in a chunk")
    ap_decode.add_argument("file", help="PNG path")
    ap_decode.add_argument("chunk_type", help="Chunk type to look up")

    ap_remove = sub.add_parser("remove", help="Remove the first chunk of a type")
    ap_remove.add_argument("file", help="PNG path")
    ap_remove.add_argument("chunk_type", help="Chunk type to remove")

    ap_print = sub.add_parser("print", help="List every chunk")
    ap_print.add_argument("file", help="PNG path")

    args = ap.parse_args(argv)
    try:
        if args.cmd == "encode":
            cmd_encode(args.file, args.chunk_type, args.message, output=args.output)
        elif args.cmd == "decode":
            cmd_decode(args.file, args.chunk_type)
        elif args.cmd == "remove":
            cmd_remove(args.file, args.chunk_type)
        elif args.cmd == "print":
            cmd_print(args.file)
        else:
            raise RuntimeError("Unknown command")
    except (PngmeError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(exit_code_for(e))


if __name__ == "__main__":
    main()
