"""Decode the source image into an RGBA pixel buffer."""
import logging
from contextlib import contextmanager
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from .errors import DecodeError, NotFoundError

logger = logging.getLogger(__name__)


@contextmanager
def load_source(path):
    """Open ``path`` and yield it as a fully decoded RGBA image.

    The image is closed when the block exits, whether or not it raised.
    """
    path = Path(path)
    if not path.is_file():
        raise NotFoundError(f"Source image not found: {path}")

    try:
        with Image.open(path) as raw:
            # Force decoding now so truncated files fail here, not mid-resample
            raw.load()
            img = raw.convert("RGBA") if raw.mode != "RGBA" else raw.copy()
    except FileNotFoundError as e:
        raise NotFoundError(f"Source image not found: {path}") from e
    except (UnidentifiedImageError, Image.DecompressionBombError, SyntaxError) as e:
        raise DecodeError(f"Could not decode {path} as an image: {e}") from e
    except OSError as e:
        raise DecodeError(f"Could not read image data from {path}: {e}") from e

    logger.info("Loaded source %s (%dx%d, %s)", path, img.width, img.height, img.mode)
    try:
        yield img
    finally:
        img.close()
