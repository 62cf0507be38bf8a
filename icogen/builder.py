"""Build a multi-size icon container from one source image.

This is the core pipeline: load the source once, resample and encode one frame
per requested size, and only then write the container. Any failure aborts the
whole build before the destination is touched.
"""
import logging
from pathlib import Path
from typing import Iterable, List, NamedTuple

from .container import MAX_SIZE, write_icon
from .encoder import Frame, encode_frame
from .errors import ValidationError
from .loader import load_source
from .resample import resample

logger = logging.getLogger(__name__)

DEFAULT_SIZES = (16, 32, 48, 256)


class BuildResult(NamedTuple):
    destination: Path
    frame_count: int


def usable_sizes(sizes: Iterable[int]) -> List[int]:
    """Drop non-positive sizes, keeping order and duplicates.

    Raises ValidationError if nothing is left or a size is too large for the
    container's single-byte dimension field.
    """
    usable = []
    for size in sizes:
        if isinstance(size, bool) or (isinstance(size, float) and not size.is_integer()):
            raise ValidationError(f"Icon size must be an integer, got {size!r}")
        try:
            size = int(size)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Icon size must be an integer, got {size!r}") from e
        if size <= 0:
            logger.warning("Skipping non-positive icon size %d", size)
            continue
        if size > MAX_SIZE:
            raise ValidationError(
                f"Icon size {size} is larger than {MAX_SIZE} and cannot be stored"
            )
        usable.append(size)
    if not usable:
        raise ValidationError("No usable icon sizes; at least one size must be positive")
    return usable


def render_frames(source, sizes: Iterable[int]) -> List[Frame]:
    """Resample and encode ``source`` once per size, in order."""
    frames = []
    for size in sizes:
        with resample(source, size) as bitmap:
            frames.append(encode_frame(bitmap))
    return frames


def build_icon(source_path, destination, sizes: Iterable[int] = DEFAULT_SIZES) -> BuildResult:
    """Convert the image at ``source_path`` into an icon file at ``destination``."""
    sizes = usable_sizes(sizes)
    destination = Path(destination)

    with load_source(source_path) as source:
        frames = render_frames(source, sizes)

    write_icon(frames, destination)
    return BuildResult(destination=destination, frame_count=len(frames))
