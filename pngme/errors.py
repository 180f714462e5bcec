class PngmeError(Exception):
    """Base class for pngme-specific errors."""


# Chunk type
class InvalidTag(PngmeError):
    pass


class InvalidTagLength(InvalidTag):
    def __init__(self, length: int):
        super().__init__(f"chunk type must be 4 bytes, got {length}")
        self.length = length


class InvalidTagByte(InvalidTag):
    def __init__(self, index: int, value: int):
        super().__init__(f"chunk type byte {index} is not an ASCII letter: 0x{value:02x}")
        self.index = index
        self.value = value


# Chunk framing/integrity
class TruncatedInput(PngmeError):
    def __init__(self, needed: int, available: int):
        super().__init__(f"truncated chunk: need {needed} bytes, have {available}")
        self.needed = needed
        self.available = available


class ChecksumMismatch(PngmeError):
    def __init__(self, expected: int, actual: int):
        super().__init__(f"chunk CRC mismatch: stored 0x{expected:08x}, computed 0x{actual:08x}")
        self.expected = expected
        self.actual = actual


class TrailingBytes(PngmeError):
    def __init__(self, count: int):
        super().__init__(f"{count} trailing byte(s) after chunk")
        self.count = count


class InvalidEncoding(PngmeError):
    pass


# Container
class InvalidSignature(PngmeError):
    pass


class ChunkNotFound(PngmeError):
    def __init__(self, chunk_type: str):
        super().__init__(f"no chunk of type {chunk_type!r}")
        self.chunk_type = chunk_type
