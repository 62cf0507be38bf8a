"""Command-line caller: convert a source image into a multi-size Windows .ico file."""
import argparse
import logging

from .builder import build_icon
from .config import IconConfig
from .errors import IconError, ValidationError

logger = logging.getLogger("icogen")


def parse_sizes(text: str):
    """Parse a comma-separated size list such as ``"16, 32,48"``."""
    sizes = []
    for token in text.split(','):
        token = token.strip()
        if not token:
            continue
        try:
            sizes.append(int(token))
        except ValueError as e:
            raise ValidationError(f"Invalid icon size: {token!r}") from e
    return sizes


def _setup_logging(level):
    if not isinstance(level, int):
        level = logging.getLevelName(level)
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def _build_parser():
    parser = argparse.ArgumentParser(description="Convert an image into a multi-size Windows icon.")
    parser.add_argument("source", nargs="?", help="source image (default from config)")
    parser.add_argument("output", nargs="?", help="destination .ico (default from config)")
    parser.add_argument("--sizes", help="comma-separated icon sizes, e.g. 16,32,48,256")
    parser.add_argument("--config", help="path to a JSON config file")
    parser.add_argument("-v", "--verbose", action="store_true", help="log per-frame detail")
    return parser


def main(argv=None):
    args = _build_parser().parse_args(argv)
    config = IconConfig(args.config)
    _setup_logging(logging.DEBUG if args.verbose else config.get_log_level())

    source = args.source or config.get_source()
    output = args.output or config.get_output()
    try:
        sizes = parse_sizes(args.sizes) if args.sizes else config.get_sizes()
        result = build_icon(source, output, sizes)
    except IconError as e:
        logger.error("%s", e)
        return 1

    print(f"Wrote: {result.destination} ({result.frame_count} frames)")
    return 0
