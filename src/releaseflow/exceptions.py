"""Custom exceptions for releaseflow."""


class ReleaseFlowError(Exception):
    """Base exception for all releaseflow errors."""

    pass


class ParseError(ReleaseFlowError):
    """Raised when a release file cannot be read or decoded."""

    pass


class ValidationError(ReleaseFlowError):
    """Raised when release records fail validation."""

    pass


class ReleaseNotFoundError(ReleaseFlowError):
    """Raised when the requested release does not exist in the project data."""

    pass


class ConfigError(ReleaseFlowError):
    """Raised when a configuration file is missing or invalid."""

    pass
