"""
Custom exceptions for the gesture scoring engine.
"""


class HandSignError(Exception):
    """Base exception for hand sign recognition errors."""
    pass


class InvalidLandmarksError(HandSignError, ValueError):
    """Raised when a landmark set does not hold 21 finite 3-D points."""
    pass


class TemplateError(HandSignError, ValueError):
    """Raised when a gesture template or registry is malformed."""
    pass


class ConfigError(HandSignError, ValueError):
    """Raised when configuration values are missing or invalid."""
    pass
