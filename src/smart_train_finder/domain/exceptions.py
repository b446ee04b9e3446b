"""Custom exceptions for smart train finder."""


class TrainFinderError(Exception):
    """Base exception for smart train finder errors."""


class TimetableParseError(TrainFinderError):
    """Raised when a provider document cannot be parsed."""


class CorridorConfigurationError(TrainFinderError, ValueError):
    """Raised when the configured corridor is incomplete or malformed."""
