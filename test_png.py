from __future__ import annotations

import contextlib
import io
import struct
import tempfile
import unittest
from pathlib import Path

from pngme.chunk import Chunk
from pngme.chunk_type import ChunkType
from pngme.cli import cmd_decode, cmd_encode, cmd_print, cmd_remove, exit_code_for, main
from pngme.constants import (
    EXIT_CHECKSUM,
    EXIT_CHUNK_NOT_FOUND,
    EXIT_INVALID_TAG,
    EXIT_NOT_FOUND,
    EXIT_SIGNATURE,
    PNG_SIGNATURE,
)
from pngme.errors import ChecksumMismatch, ChunkNotFound, InvalidSignature, TruncatedInput
from pngme.png import Png


def _chunk(ctype: str, data: bytes) -> Chunk:
    return Chunk.build(ChunkType.from_str(ctype), data)


def _sample_png() -> Png:
    ihdr = struct.pack(">IIBBBBB", 1, 1, 8, 0, 0, 0, 0)
    return Png([
        _chunk("IHDR", ihdr),
        _chunk("FrSt", b"I am the first chunk"),
        _chunk("miDl", b"I am another chunk"),
        _chunk("LASt", b"I am the last chunk"),
        _chunk("IEND", b""),
    ])


class PngTests(unittest.TestCase):
    def test_from_bytes_roundtrip(self):
        png = _sample_png()
        raw = png.to_bytes()
        self.assertTrue(raw.startswith(PNG_SIGNATURE))
        again = Png.from_bytes(raw)
        self.assertEqual(again.chunks, png.chunks)
        self.assertEqual(bytes(again), raw)
        self.assertEqual(again.header, PNG_SIGNATURE)

    def test_bad_signature(self):
        raw = _sample_png().to_bytes()
        with self.assertRaises(InvalidSignature):
            Png.from_bytes(b"\x00" + raw[1:])
        with self.assertRaises(InvalidSignature):
            Png.from_bytes(b"")

    def test_corrupt_chunk(self):
        raw = bytearray(_sample_png().to_bytes())
        raw[-20] ^= 0x01  # inside the LASt data
        with self.assertRaises(ChecksumMismatch):
            Png.from_bytes(bytes(raw))

    def test_truncated_file(self):
        raw = _sample_png().to_bytes()
        with self.assertRaises(TruncatedInput):
            Png.from_bytes(raw[:-3])

    def test_chunk_by_type(self):
        png = _sample_png()
        self.assertEqual(png.chunk_by_type("FrSt").data, b"I am the first chunk")
        self.assertIsNone(png.chunk_by_type("NoPe"))

    def test_append_and_remove(self):
        png = _sample_png()
        png.append_chunk(_chunk("TeSt", b"Message"))
        self.assertEqual(png.chunks[-1].data_as_string(), "Message")
        removed = png.remove_first_chunk("TeSt")
        self.assertEqual(removed.data, b"Message")
        self.assertIsNone(png.chunk_by_type("TeSt"))
        with self.assertRaises(ChunkNotFound):
            png.remove_first_chunk("TeSt")

    def test_str(self):
        s = str(_sample_png())
        self.assertIn("IHDR", s)
        self.assertIn("IEND", s)


class CliWorkflowTests(unittest.TestCase):
    def run_with_tmpdir(self, func):
        with tempfile.TemporaryDirectory() as tmp:
            p = Path(tmp) / "in.png"
            p.write_bytes(_sample_png().to_bytes())
            func(Path(tmp), p)

    def test_encode_decode_remove(self):
        def scenario(tmp: Path, p: Path):
            out = tmp / "out.png"
            self.assertIsNone(cmd_encode(str(p), "ruSt", "hidden message", output=str(out)))
            self.assertEqual(p.read_bytes(), _sample_png().to_bytes())

            buf = io.StringIO()
            with contextlib.redirect_stdout(buf):
                cmd_decode(str(out), "ruSt")
            self.assertEqual(buf.getvalue().strip(), "hidden message")

            with contextlib.redirect_stdout(io.StringIO()):
                cmd_remove(str(out), "ruSt")
            self.assertEqual(out.read_bytes(), p.read_bytes())

        self.run_with_tmpdir(scenario)

    def test_encode_in_place_and_print(self):
        def scenario(tmp: Path, p: Path):
            cmd_encode(str(p), "ruSt", "in place")
            self.assertEqual(Png.from_file(str(p)).chunks[-1].data, b"in place")
            buf = io.StringIO()
            with contextlib.redirect_stdout(buf):
                cmd_print(str(p))
            self.assertIn("ruSt", buf.getvalue())

        self.run_with_tmpdir(scenario)

    def test_decode_missing_chunk(self):
        def scenario(tmp: Path, p: Path):
            with self.assertRaises(ChunkNotFound):
                cmd_decode(str(p), "NoPe")

        self.run_with_tmpdir(scenario)

    def _main_exit(self, argv) -> int:
        with contextlib.redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit) as cm:
                main(argv)
        return cm.exception.code

    def test_main_exit_codes(self):
        def scenario(tmp: Path, p: Path):
            self.assertEqual(self._main_exit(["decode", str(tmp / "missing.png"), "ruSt"]), EXIT_NOT_FOUND)
            self.assertEqual(self._main_exit(["encode", str(p), "ru5t", "x"]), EXIT_INVALID_TAG)
            self.assertEqual(self._main_exit(["decode", str(p), "NoPe"]), EXIT_CHUNK_NOT_FOUND)

            bad = tmp / "bad.png"
            bad.write_bytes(b"GIF89a" + b"\x00" * 16)
            self.assertEqual(self._main_exit(["print", str(bad)]), EXIT_SIGNATURE)

            raw = bytearray(p.read_bytes())
            raw[-20] ^= 0x01
            bad.write_bytes(bytes(raw))
            self.assertEqual(self._main_exit(["print", str(bad)]), EXIT_CHECKSUM)

        self.run_with_tmpdir(scenario)

    def test_main_success(self):
        def scenario(tmp: Path, p: Path):
            with contextlib.redirect_stdout(io.StringIO()):
                main(["encode", str(p), "ruSt", "via main"])
            self.assertEqual(Png.from_file(str(p)).chunk_by_type("ruSt").data_as_string(), "via main")

        self.run_with_tmpdir(scenario)

    def test_exit_code_for(self):
        self.assertEqual(exit_code_for(ChecksumMismatch(1, 2)), EXIT_CHECKSUM)
        self.assertEqual(exit_code_for(FileNotFoundError("x")), EXIT_NOT_FOUND)


if __name__ == "__main__":
    unittest.main()
