import argparse
import logging
import sys

from video_duration.configs import settings
from video_duration.const import NANOS_PER_SECOND
from video_duration.errors import ContainerError
from video_duration.probe import duration_from_path

logger = logging.getLogger("video_duration")


def main(argv: list[str] | None = None) -> int:
    arg_parser = argparse.ArgumentParser(
        prog="video_duration", description="Print the playback duration of MP4/MOV files."
    )
    arg_parser.add_argument("files", nargs="+", help="Paths of the media files to probe")
    arg_parser.add_argument("--ns", action="store_true", help="Print nanoseconds instead of seconds")
    args = arg_parser.parse_args(argv)

    logging.basicConfig(level=settings.log_level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    exit_code = 0
    for path in args.files:
        try:
            duration_ns = duration_from_path(path)
        except (ContainerError, OSError) as e:
            logger.warning("[cli] Could not read duration of %s: %s", path, e)
            exit_code = 1
            continue
        if args.ns:
            value = str(duration_ns)
        else:
            seconds, remainder_ns = divmod(duration_ns, NANOS_PER_SECOND)
            value = f"{seconds}.{remainder_ns // 1_000_000:03d}"
        print(f"{path}\t{value}")
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
