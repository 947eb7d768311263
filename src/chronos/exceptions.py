################################################################################
# © Copyright 2024 Zapata Computing Inc.
################################################################################

"""Custom exceptions for chronos."""

import typing as t


class BaseChronosError(Exception):
    """Base class for errors raised by the datetime factories."""

    def __init__(self, message: t.Optional[str] = None):
        super().__init__(message)
        self.message = message


class ConfigurationError(BaseChronosError):
    """Raised when the chronos settings can't be loaded or are invalid."""

    pass


class InvalidTimezone(BaseChronosError, ValueError):
    """Raised when a timezone identifier is not known to the timezone database."""

    def __init__(self, timezone: t.Any, message: t.Optional[str] = None):
        super().__init__(message or f"Unknown or bad timezone ({timezone})")
        self.timezone = timezone


class InvalidTimestamp(BaseChronosError, ValueError):
    """Raised when a Unix timestamp falls outside of the representable range."""

    def __init__(self, timestamp: t.Union[int, float], message: t.Optional[str] = None):
        super().__init__(
            message or f"Timestamp {timestamp} is out of the supported range"
        )
        self.timestamp = timestamp


# Parsing Errors
class DateTimeParseError(BaseChronosError, ValueError):
    """Raised when a string can't be turned into an instant.

    ``errors`` keeps each diagnostic reported by the parser. The exception message
    is the same diagnostics joined with newlines.
    """

    def __init__(self, errors: t.Sequence[str]):
        self.errors = list(errors)
        super().__init__("\n".join(self.errors))


class InvalidDateTimeFormat(DateTimeParseError):
    """Raised when a text doesn't match the given format or relative phrase."""

    pass


class InvalidDateTimeFields(DateTimeParseError):
    """Raised when calendar fields don't form a valid date and time.

    For example: ``create(2024, 2, 30)``.
    """

    pass
