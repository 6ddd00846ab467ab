"""
Movie Header box (mvhd) decoder.

The mvhd payload is a FullBox: version(1) + flags(3), followed by a
version-dependent fixed layout. Each supported version owns its offset
table; anything else is rejected instead of being read with a guessed
layout.
"""

import logging
import struct
from dataclasses import dataclass
from datetime import timedelta

from video_duration.const import NANOS_PER_SECOND
from video_duration.errors import InvalidTimescaleError, MalformedContainerError, UnsupportedVersionError

logger = logging.getLogger(__name__)

_MAX_TIMEDELTA_US = timedelta.max // timedelta(microseconds=1)


@dataclass(frozen=True)
class MovieHeaderLayout:
    """Field offsets (within the mvhd payload) for one mvhd version."""

    min_size: int
    time_format: str  # struct code for creation/modification time
    creation_offset: int
    modification_offset: int
    timescale_offset: int
    duration_format: str
    duration_offset: int


MOVIE_HEADER_LAYOUTS = {
    # version(1)+flags(3)+creation(4)+modification(4)+timescale(4)+duration(4)
    0: MovieHeaderLayout(
        min_size=20,
        time_format=">I",
        creation_offset=4,
        modification_offset=8,
        timescale_offset=12,
        duration_format=">I",
        duration_offset=16,
    ),
    # version(1)+flags(3)+creation(8)+modification(8)+timescale(4)+duration(8)
    1: MovieHeaderLayout(
        min_size=32,
        time_format=">Q",
        creation_offset=4,
        modification_offset=12,
        timescale_offset=20,
        duration_format=">Q",
        duration_offset=24,
    ),
}


@dataclass(frozen=True)
class MovieHeader:
    version: int
    flags: int
    creation_time: int  # Seconds since 1904-01-01 UTC
    modification_time: int
    timescale: int  # Ticks per second
    duration_ticks: int

    @property
    def duration_ns(self) -> int:
        """Duration in nanoseconds, truncated toward zero when not exact."""
        return self.duration_ticks * NANOS_PER_SECOND // self.timescale

    @property
    def duration(self) -> timedelta:
        """Duration as a timedelta, clamped to timedelta.max for 64-bit tick counts it cannot hold."""
        return timedelta(microseconds=min(self.duration_ns // 1000, _MAX_TIMEDELTA_US))


def parse_full_box_header(data: bytes) -> tuple[int, int]:
    """
    Parse a full box header (version + flags).

    Returns:
        (version, flags)
    """
    if len(data) < 4:
        raise MalformedContainerError(f"full box header needs 4 bytes, got {len(data)}")
    version = data[0]
    flags = (data[1] << 16) | (data[2] << 8) | data[3]
    return version, flags


def parse_mvhd(data: bytes) -> MovieHeader:
    """
    Decode an mvhd payload (the bytes after the box header).

    Raises:
        MalformedContainerError: if the payload is shorter than its version requires.
        UnsupportedVersionError: if the version is neither 0 nor 1.
        InvalidTimescaleError: if the timescale is zero.
    """
    if not data:
        raise MalformedContainerError("mvhd box is empty")

    version = data[0]
    layout = MOVIE_HEADER_LAYOUTS.get(version)
    if layout is None:
        raise UnsupportedVersionError(version)
    if len(data) < layout.min_size:
        raise MalformedContainerError(
            f"mvhd payload too small for version {version}: {len(data)} bytes (need {layout.min_size})"
        )

    _, flags = parse_full_box_header(data)
    creation_time = struct.unpack_from(layout.time_format, data, layout.creation_offset)[0]
    modification_time = struct.unpack_from(layout.time_format, data, layout.modification_offset)[0]
    timescale = struct.unpack_from(">I", data, layout.timescale_offset)[0]
    duration_ticks = struct.unpack_from(layout.duration_format, data, layout.duration_offset)[0]

    if timescale == 0:
        raise InvalidTimescaleError()

    header = MovieHeader(
        version=version,
        flags=flags,
        creation_time=creation_time,
        modification_time=modification_time,
        timescale=timescale,
        duration_ticks=duration_ticks,
    )
    logger.debug(
        "[movie_header] mvhd v%d: timescale=%d, duration=%d ticks", version, timescale, duration_ticks
    )
    return header
