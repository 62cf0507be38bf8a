"""Scale the source image onto square transparent canvases."""
from PIL import Image

TRANSPARENT = (0, 0, 0, 0)


def resample(source: Image.Image, size: int) -> Image.Image:
    """Return a new ``size`` x ``size`` RGBA bitmap filled by ``source``.

    The source is stretched to the square regardless of its aspect ratio.
    Pillow resizes RGBA images on premultiplied alpha, so fully transparent
    pixels do not bleed colour into the edges. The scaled image is then
    composited over a transparent canvas.

    The caller owns the returned image and should close it when done.
    """
    if size <= 0:
        raise ValueError(f"size must be positive, got {size}")
    if source.mode != "RGBA":
        raise ValueError(f"source must be RGBA, got {source.mode}")

    canvas = Image.new("RGBA", (size, size), TRANSPARENT)
    try:
        with source.resize((size, size), Image.Resampling.BICUBIC) as scaled:
            canvas.alpha_composite(scaled)
    except Exception:
        canvas.close()
        raise
    return canvas
