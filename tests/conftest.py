import struct

import pytest
from PIL import Image, ImageDraw


def _draw_source(size):
    """A transparent canvas with an opaque disc and a half-transparent bar."""
    img = Image.new("RGBA", size, (0, 0, 0, 0))
    draw = ImageDraw.Draw(img)
    w, h = size
    draw.ellipse((w // 8, h // 8, w - w // 8, h - h // 8), fill=(30, 120, 220, 255))
    draw.rectangle((0, h // 2 - 2, w - 1, h // 2 + 2), fill=(240, 60, 20, 128))
    return img


@pytest.fixture
def square_png(tmp_path):
    path = tmp_path / "source.png"
    _draw_source((128, 128)).save(path)
    return path


@pytest.fixture
def wide_png(tmp_path):
    """80x40 source: left half red, right half blue."""
    img = Image.new("RGBA", (80, 40), (255, 0, 0, 255))
    img.paste((0, 0, 255, 255), (40, 0, 80, 40))
    path = tmp_path / "wide.png"
    img.save(path)
    return path


def _parse_ico(data):
    reserved, kind, count = struct.unpack_from("<HHH", data, 0)
    entries = []
    for i in range(count):
        width, height, colours, res, planes, bits, length, offset = struct.unpack_from(
            "<BBBBHHII", data, 6 + 16 * i
        )
        entries.append({
            "width": width,
            "height": height,
            "colours": colours,
            "reserved": res,
            "planes": planes,
            "bits": bits,
            "length": length,
            "offset": offset,
            "blob": data[offset:offset + length],
        })
    return {"reserved": reserved, "type": kind, "count": count, "entries": entries}


@pytest.fixture
def parse_ico():
    """Return a helper that splits ICO bytes into header fields and entries."""
    return _parse_ico
