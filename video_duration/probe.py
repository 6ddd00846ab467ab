"""
Playback duration probing for uploaded MP4/MOV files.

Locates moov/mvhd with the box scanner and decodes it. Only the mvhd
payload is ever read into memory; every other box is skipped by seeking.
Nothing is retried: a malformed container fails on the first problem
and the caller decides what to do with the file.
"""

import logging
import os
from typing import BinaryIO

from video_duration.configs import settings
from video_duration.const import MOVIE_HEADER_PATH
from video_duration.container.box_scanner import find_box_path, read_box_payload
from video_duration.container.movie_header import MovieHeader, parse_mvhd

logger = logging.getLogger(__name__)


def read_movie_header(stream: BinaryIO) -> MovieHeader:
    """Find and decode the movie header of a seekable binary stream."""
    stream.seek(0)
    header = find_box_path(stream, MOVIE_HEADER_PATH)
    payload = read_box_payload(stream, header, settings.max_movie_header_size)
    return parse_mvhd(payload)


def duration_from_reader(stream: BinaryIO) -> int:
    """
    Return the duration, in nanoseconds, of the MP4/MOV data in ``stream``.

    Raises:
        ContainerError: a subclass describing why no duration could be read.
        OSError: if reading or seeking the stream fails.
    """
    movie_header = read_movie_header(stream)
    logger.debug(
        "[probe] Duration %d ticks at %d/s = %dns",
        movie_header.duration_ticks,
        movie_header.timescale,
        movie_header.duration_ns,
    )
    return movie_header.duration_ns


def duration_from_path(path: str | os.PathLike) -> int:
    """Open ``path`` read-only and return its duration in nanoseconds."""
    with open(path, "rb") as f:
        return duration_from_reader(f)
