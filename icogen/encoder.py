"""Compress resampled bitmaps into standalone PNG blobs."""
import io
import logging
from typing import NamedTuple

from PIL import Image

logger = logging.getLogger(__name__)


class Frame(NamedTuple):
    """One encoded image at a single square size."""

    size: int
    blob: bytes

    @property
    def blob_length(self) -> int:
        return len(self.blob)


def encode_frame(bitmap: Image.Image) -> Frame:
    """Encode a square RGBA bitmap as PNG, fully in memory."""
    width, height = bitmap.size
    if width != height:
        raise ValueError(f"bitmap must be square, got {width}x{height}")
    if bitmap.mode != "RGBA":
        raise ValueError(f"bitmap must be RGBA, got {bitmap.mode}")

    buf = io.BytesIO()
    bitmap.save(buf, format="PNG")
    frame = Frame(size=width, blob=buf.getvalue())
    logger.debug("Encoded %dx%d frame (%d bytes)", width, width, frame.blob_length)
    return frame
