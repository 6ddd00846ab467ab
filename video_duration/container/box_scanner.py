"""
ISO base media (MP4/MOV) box scanner.

Walks length-prefixed, type-tagged boxes directly on a seekable stream.
Unlike a bytes-based parser, a box is never loaded just to get past it:
skipping is a single ``seek`` to the end of the box, so a multi-gigabyte
``mdat`` sibling costs no more memory than an empty ``free`` box.

Provides:
- BoxHeader: parsed box header with absolute offsets
- read_box_header / skip_box / iter_boxes: one level of the box tree
- find_box_path: descend through nested containers by box type
- read_box_payload: read a small leaf payload with a size cap
"""

import io
import logging
import struct
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import BinaryIO

from video_duration.const import BOX_HEADER_SIZE, EXTENDED_BOX_HEADER_SIZE
from video_duration.errors import BoxNotFoundError, MalformedContainerError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BoxHeader:
    """Header of a single box, positioned absolutely within the stream."""

    box_type: bytes
    offset: int  # Absolute offset of the size field
    header_size: int  # 8, or 16 when a 64-bit size follows the type
    size: int  # Total box size including the header

    @property
    def payload_offset(self) -> int:
        return self.offset + self.header_size

    @property
    def payload_size(self) -> int:
        return self.size - self.header_size

    @property
    def end(self) -> int:
        return self.offset + self.size

    @property
    def type_name(self) -> str:
        return self.box_type.decode("latin-1")


def _read_exact(stream: BinaryIO, length: int, what: str) -> bytes:
    data = stream.read(length)
    if len(data) != length:
        raise MalformedContainerError(f"truncated {what}: expected {length} bytes, got {len(data)}")
    return data


def stream_size(stream: BinaryIO) -> int:
    """Return the total length of a seekable stream, leaving its position unchanged."""
    position = stream.tell()
    size = stream.seek(0, io.SEEK_END)
    stream.seek(position)
    return size


def read_box_header(stream: BinaryIO, limit: int) -> BoxHeader:
    """
    Read a box header at the current stream position.

    Args:
        stream: Seekable binary stream positioned at a box boundary.
        limit: Absolute offset the box must not extend past (end of the
            parent box, or end of stream at top level).

    Returns:
        The parsed header. The stream is left at the start of the payload.

    Raises:
        MalformedContainerError: if fewer header bytes remain than required,
            the declared size is smaller than the header, or the box
            overruns ``limit``.
    """
    offset = stream.tell()
    if offset + BOX_HEADER_SIZE > limit:
        raise MalformedContainerError(
            f"truncated box header at offset {offset}: {max(limit - offset, 0)} bytes remain"
        )

    size, box_type = struct.unpack(">I4s", _read_exact(stream, BOX_HEADER_SIZE, "box header"))
    header_size = BOX_HEADER_SIZE

    if size == 1:  # Extended size (64-bit)
        if offset + EXTENDED_BOX_HEADER_SIZE > limit:
            raise MalformedContainerError(f"truncated extended size for {box_type!r} at offset {offset}")
        size = struct.unpack(">Q", _read_exact(stream, 8, "extended box size"))[0]
        header_size = EXTENDED_BOX_HEADER_SIZE
    elif size == 0:  # Box extends to end of the enclosing level
        size = limit - offset

    if size < header_size:
        raise MalformedContainerError(f"invalid box size {size} for {box_type!r} at offset {offset}")
    if offset + size > limit:
        raise MalformedContainerError(
            f"box {box_type!r} at offset {offset} (size {size}) exceeds parent bounds ({limit})"
        )

    return BoxHeader(box_type=box_type, offset=offset, header_size=header_size, size=size)


def skip_box(stream: BinaryIO, header: BoxHeader) -> None:
    """Position the stream just past ``header``'s box without reading its payload."""
    stream.seek(header.end)


def iter_boxes(stream: BinaryIO, end: int) -> Iterator[BoxHeader]:
    """
    Iterate over the boxes from the current position up to ``end``.

    After each yield the stream is moved past the yielded box, so callers
    may read its payload or ignore it.
    """
    while stream.tell() < end:
        header = read_box_header(stream, end)
        yield header
        skip_box(stream, header)


def find_box_path(stream: BinaryIO, path: Sequence[bytes], end: int | None = None) -> BoxHeader:
    """
    Descend a box hierarchy: find_box_path(f, [b"moov", b"mvhd"]).

    Scans from the current position up to ``end`` (end of stream if None).
    Boxes whose type does not match the next path segment are skipped
    with a seek; the first matching box is entered, or returned if it is
    the last segment.

    Returns:
        The header of the last box in ``path``; the stream is positioned
        at the start of its payload.

    Raises:
        BoxNotFoundError: the subclass matching the first segment that
            could not be found at its level.
        MalformedContainerError: if a box header at a scanned level is bad.
    """
    if not path:
        raise ValueError("find_box_path requires at least one box type")
    if end is None:
        end = stream_size(stream)

    target, rest = path[0], path[1:]
    for header in iter_boxes(stream, end):
        if header.box_type != target:
            logger.debug(
                "[box_scanner] Skipping %r box (%d bytes) at %d", header.box_type, header.size, header.offset
            )
            continue
        if not rest:
            return header
        logger.debug("[box_scanner] Entering %r container at %d", header.box_type, header.offset)
        return find_box_path(stream, rest, header.end)

    raise BoxNotFoundError.for_box(target)


def read_box_payload(stream: BinaryIO, header: BoxHeader, max_size: int) -> bytes:
    """Read a leaf box payload, refusing payloads larger than ``max_size``."""
    if header.payload_size > max_size:
        raise MalformedContainerError(
            f"{header.type_name} payload too large: {header.payload_size} bytes (max {max_size})"
        )
    stream.seek(header.payload_offset)
    return _read_exact(stream, header.payload_size, f"{header.type_name} payload")
