# Container signature: "\x89PNG\r\n\x1a\n"
PNG_SIGNATURE = bytes([0x89, 0x50, 0x4E, 0x47, 0x0D, 0x0A, 0x1A, 0x0A])

# Chunk framing: length u32 + type[4] + crc u32
CHUNK_TYPE_LEN = 4
CHUNK_OVERHEAD = 12
MAX_CHUNK_LENGTH = 0xFFFFFFFF

# Case bit of each chunk type byte
PROPERTY_BIT = 0x20

# Legal chunk type bytes (ASCII letters)
UPPER_MIN = 0x41  # 'A'
UPPER_MAX = 0x5A  # 'Z'
LOWER_MIN = 0x61  # 'a'
LOWER_MAX = 0x7A  # 'z'


# CLI exit codes
EXIT_OK = 0
EXIT_NOT_FOUND = 2
EXIT_INVALID_TAG = 3
EXIT_TRUNCATED = 4
EXIT_CHECKSUM = 5
EXIT_TRAILING = 6
EXIT_ENCODING = 7
EXIT_SIGNATURE = 8
EXIT_CHUNK_NOT_FOUND = 9
EXIT_IO = 10
