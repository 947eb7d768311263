################################################################################
# © Copyright 2024 Zapata Computing Inc.
################################################################################
from pydantic import BaseModel, ConfigDict, field_validator

from .._base._timezones import timezone_from_name

DEFAULT_TIMEZONE_NAME = "UTC"


class Settings(BaseModel):
    """Process-wide configuration of the datetime factories.

    Instances are immutable. Changing the configuration means swapping the whole
    object, see ``chronos.configure()``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    # Used whenever a factory is called without a timezone.
    default_timezone: str = DEFAULT_TIMEZONE_NAME

    @field_validator("default_timezone")
    def _timezone_is_known(cls, v: str) -> str:
        # Raises InvalidTimezone, a ValueError, which pydantic turns into a
        # ValidationError.
        timezone_from_name(v)
        return v

    def __str__(self):
        return f"Settings with default timezone '{self.default_timezone}'"
