"""Errors raised for malformed inspection input."""


class InspectionError(ValueError):
    """Base class for precondition violations in the inspection core."""


class InvalidFrameError(InspectionError):
    """Frame is missing, empty, or has an unexpected shape."""


class PointOutOfBoundsError(InspectionError):
    """A pixel coordinate lies outside the frame."""


class InvalidRegionError(InspectionError):
    """A sub-region is empty or extends past the frame edge."""
