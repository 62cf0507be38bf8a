"""Serialize encoded frames into a Windows icon container.

Layout, little-endian throughout::

    header      reserved u16 = 0, type u16 = 1, count u16
    directory   count x 16-byte entries:
                width u8, height u8, colours u8 = 0, reserved u8 = 0,
                planes u16 = 1, bit depth u16 = 32, length u32, offset u32
    data        the PNG blobs, concatenated in directory order

Offsets are only known once every blob is encoded, so the writer collects all
frames first, then computes the layout, then writes.
"""
import logging
import os
import struct
import tempfile
from pathlib import Path
from typing import Iterable, List

from .encoder import Frame
from .errors import StateError, ValidationError, WriteError

logger = logging.getLogger(__name__)

HEADER = struct.Struct("<HHH")
ENTRY = struct.Struct("<BBBBHHII")
ICON_TYPE = 1
PLANES = 1
BIT_DEPTH = 32
# Largest size the single-byte dimension field can describe (stored as 0)
MAX_SIZE = 256

COLLECTING = "collecting"
LAYOUT = "layout"
WRITING = "writing"


def dimension_byte(size: int) -> int:
    """Return the directory byte for ``size``; 256 is stored as 0."""
    if size <= 0 or size > MAX_SIZE:
        raise ValidationError(
            f"Icon size {size} cannot be stored; sizes must be between 1 and {MAX_SIZE}"
        )
    return 0 if size == MAX_SIZE else size


def directory_size(count: int) -> int:
    return HEADER.size + ENTRY.size * count


def compute_offsets(frames: List[Frame]) -> List[int]:
    """Return each frame's absolute offset, packed back to back after the directory."""
    offsets = []
    offset = directory_size(len(frames))
    for frame in frames:
        offsets.append(offset)
        offset += frame.blob_length
    return offsets


class IconWriter:
    """Builds one icon file: collect frames, compute the layout, then write.

    Each state is entered once, in order. Calling a step out of order raises
    StateError.
    """

    def __init__(self, frames: Iterable[Frame] = ()):
        self.state = COLLECTING
        self._frames: List[Frame] = []
        self._offsets: List[int] = []
        for frame in frames:
            self.add_frame(frame)

    @property
    def frames(self) -> List[Frame]:
        return list(self._frames)

    @property
    def offsets(self) -> List[int]:
        return list(self._offsets)

    def add_frame(self, frame: Frame):
        if self.state != COLLECTING:
            raise StateError(f"Cannot add frames while {self.state}")
        dimension_byte(frame.size)
        self._frames.append(frame)

    def compute_layout(self) -> List[int]:
        if self.state != COLLECTING:
            raise StateError(f"Layout already computed (state: {self.state})")
        if not self._frames:
            raise ValidationError("An icon needs at least one frame")
        # The header count field is a u16
        if len(self._frames) > 0xFFFF:
            raise ValidationError(f"Too many frames: {len(self._frames)}")
        self._offsets = compute_offsets(self._frames)
        self.state = LAYOUT
        return self.offsets

    def to_bytes(self) -> bytes:
        """Return the complete container; the layout must be computed first."""
        if self.state != LAYOUT:
            raise StateError(f"Layout must be computed before serializing (state: {self.state})")
        parts = [HEADER.pack(0, ICON_TYPE, len(self._frames))]
        for frame, offset in zip(self._frames, self._offsets):
            dim = dimension_byte(frame.size)
            parts.append(ENTRY.pack(dim, dim, 0, 0, PLANES, BIT_DEPTH, frame.blob_length, offset))
        parts.extend(frame.blob for frame in self._frames)
        return b"".join(parts)

    def write(self, destination) -> int:
        """Write the container to ``destination`` and return its byte length.

        Data goes to a temporary file beside the destination, which then
        replaces it. A failed write leaves any existing destination untouched.
        """
        data = self.to_bytes()
        self.state = WRITING
        destination = Path(destination)
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{destination.name}.", suffix=".tmp", dir=destination.parent
            )
        except OSError as e:
            raise WriteError(f"Could not create {destination}: {e}") from e

        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            # mkstemp creates the file owner-only
            os.chmod(tmp_name, 0o644)
            os.replace(tmp_name, destination)
        except OSError as e:
            try:
                os.unlink(tmp_name)
            except OSError:
                logger.debug("Temporary file %s already gone", tmp_name)
            raise WriteError(f"Could not write {destination}: {e}") from e

        logger.info("Wrote %s (%d frames, %d bytes)", destination, len(self._frames), len(data))
        return len(data)


def write_icon(frames: Iterable[Frame], destination) -> int:
    """Lay out ``frames`` and write them to ``destination`` in one step."""
    writer = IconWriter(frames)
    writer.compute_layout()
    return writer.write(destination)
