"""
Pytest configuration and binary fixture builders for MP4 duration tests.

Settings overrides can be placed in a .env file at the project root.
"""

import struct
from pathlib import Path

from dotenv import load_dotenv

# Load .env file from project root
project_root = Path(__file__).parent.parent
load_dotenv(project_root / ".env")


def build_box(box_type: bytes, payload: bytes = b"") -> bytes:
    """Build a box with a standard 32-bit size header."""
    assert len(box_type) == 4, "box type must be 4 bytes"
    return struct.pack(">I4s", len(payload) + 8, box_type) + payload


def build_extended_box(box_type: bytes, payload: bytes = b"") -> bytes:
    """Build a box using the size == 1 / 64-bit largesize convention."""
    return struct.pack(">I4sQ", 1, box_type, len(payload) + 16) + payload


def build_mvhd_v0(timescale: int, duration: int, size: int = 100) -> bytes:
    payload = bytearray(size)
    payload[0] = 0
    struct.pack_into(">II", payload, 4, 3_600_000_000, 3_600_000_001)
    struct.pack_into(">II", payload, 12, timescale, duration)
    return bytes(payload)


def build_mvhd_v1(timescale: int, duration: int, size: int = 112) -> bytes:
    payload = bytearray(size)
    payload[0] = 1
    struct.pack_into(">QQ", payload, 4, 3_600_000_000, 3_600_000_001)
    struct.pack_into(">IQ", payload, 20, timescale, duration)
    return bytes(payload)


def build_mp4(mvhd_payload: bytes) -> bytes:
    ftyp = build_box(b"ftyp", b"isom")
    moov = build_box(b"moov", build_box(b"mvhd", mvhd_payload))
    return ftyp + moov


class RecordingStream:
    """
    Seekable reader over a sparse virtual file.

    ``regions`` maps absolute offsets to real bytes; everything else reads
    as zeros. Every read size is recorded so tests can assert that large
    boxes are skipped with a seek instead of being read.
    """

    def __init__(self, size: int, regions: dict[int, bytes]):
        self.size = size
        self.regions = regions
        self.position = 0
        self.read_sizes: list[int] = []

    def tell(self) -> int:
        return self.position

    def seek(self, offset: int, whence: int = 0) -> int:
        if whence == 0:
            self.position = offset
        elif whence == 1:
            self.position += offset
        else:
            self.position = self.size + offset
        return self.position

    def read(self, size: int = -1) -> bytes:
        if size < 0:
            size = self.size - self.position
        size = max(0, min(size, self.size - self.position))
        self.read_sizes.append(size)
        out = bytearray(size)
        for start, data in self.regions.items():
            lo = max(start, self.position)
            hi = min(start + len(data), self.position + size)
            if lo < hi:
                out[lo - self.position : hi - self.position] = data[lo - start : hi - start]
        self.position += size
        return bytes(out)
