from video_duration.errors import (
    BoxNotFoundError,
    ContainerError,
    InvalidTimescaleError,
    MalformedContainerError,
    MovieHeaderNotFoundError,
    MovieMetadataNotFoundError,
    UnsupportedVersionError,
)
from video_duration.probe import duration_from_path, duration_from_reader, read_movie_header

__all__ = [
    "BoxNotFoundError",
    "ContainerError",
    "InvalidTimescaleError",
    "MalformedContainerError",
    "MovieHeaderNotFoundError",
    "MovieMetadataNotFoundError",
    "UnsupportedVersionError",
    "duration_from_path",
    "duration_from_reader",
    "read_movie_header",
]
