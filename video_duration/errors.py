from video_duration.const import MOOV, MVHD


class ContainerError(Exception):
    """Base class for every error raised while reading an MP4/MOV container."""

    def __init__(self, message):
        self.message = message
        super().__init__(message)


class MalformedContainerError(ContainerError):
    """A header or payload is shorter than required, or a box exceeds its parent."""


class BoxNotFoundError(ContainerError):
    def __init__(self, box_type: bytes, message: str | None = None):
        self.box_type = box_type
        super().__init__(message or f"{box_type.decode('latin-1')!r} box not found")

    @classmethod
    def for_box(cls, box_type: bytes) -> "BoxNotFoundError":
        """Build the most specific not-found error for ``box_type``."""
        error_cls = _NOT_FOUND_ERRORS.get(box_type, cls)
        return error_cls(box_type)


class MovieMetadataNotFoundError(BoxNotFoundError):
    def __init__(self, box_type: bytes = MOOV, message: str | None = None):
        super().__init__(box_type, message or "moov box not found in media file")


class MovieHeaderNotFoundError(BoxNotFoundError):
    def __init__(self, box_type: bytes = MVHD, message: str | None = None):
        super().__init__(box_type, message or "mvhd box not found in moov container")


class UnsupportedVersionError(ContainerError):
    def __init__(self, version: int):
        self.version = version
        super().__init__(f"unsupported mvhd version {version}")


class InvalidTimescaleError(ContainerError):
    def __init__(self, message: str = "mvhd timescale is zero"):
        super().__init__(message)


_NOT_FOUND_ERRORS = {
    MOOV: MovieMetadataNotFoundError,
    MVHD: MovieHeaderNotFoundError,
}
