"""
Exceptions raised by imagez.

Every failure surfaces as one of these named conditions. They also derive
from the matching builtin (ValueError / IOError) so callers that already
catch those keep working.
"""


class ImagezError(Exception):
    """Base exception for imagez."""


class UnsupportedFormatError(ImagezError, ValueError):
    """No image writer is registered for the requested extension."""

    def __init__(self, extension):
        self.extension = extension
        super().__init__(f"No image writer registered for format: {extension!r}")


class DecodeError(ImagezError, IOError):
    """Source image could not be read or decoded."""

    def __init__(self, source, reason=None):
        self.source = source
        message = f"Failed to load image from {source!r}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class InvalidParameterError(ImagezError, ValueError):
    """An argument value is not supported (rotation angle, flip direction, ...)."""


class SaveFailedError(ImagezError, IOError):
    """Writing an image to its destination failed."""

    def __init__(self, path, reason=None):
        self.path = path
        message = f"Failed to save image to {path!r}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
