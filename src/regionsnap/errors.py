# src/regionsnap/errors.py

"""Exception types raised by RegionSnap."""


class RegionSnapError(Exception):
    """Base class for all RegionSnap errors."""


class InvalidGestureError(RegionSnapError):
    """A pointer release arrived without a matching press, so no region was selected."""


class CaptureError(RegionSnapError):
    """The screen could not be grabbed."""


class ExportError(RegionSnapError):
    """A captured image could not be written to disk."""
