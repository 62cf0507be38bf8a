"""Exceptions raised while building an icon container.

Every error derives from IconError so callers can catch the whole family, and
each one also subclasses the closest builtin so generic handlers still work.
"""


class IconError(Exception):
    """Base class for all icon building errors."""


class NotFoundError(IconError, FileNotFoundError):
    """The source image does not exist."""


class DecodeError(IconError, ValueError):
    """The source could not be decoded as a raster image."""


class ValidationError(IconError, ValueError):
    """The requested sizes leave nothing that can be written."""


class WriteError(IconError, OSError):
    """The destination file could not be created or written."""


class StateError(IconError, RuntimeError):
    """The container writer was used out of order."""
