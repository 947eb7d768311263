################################################################################
# © Copyright 2024 Zapata Computing Inc.
################################################################################
"""Construction of instants from heterogeneous inputs.

``DateTimeFactory`` holds the construction policy: which fields fall back to
"now", how timezones are resolved and how parse failures are reported. It
produces values of the class it's built with, so the same policy serves
``Instant`` and its subclasses.
"""
import logging
import typing as t
from dataclasses import asdict, dataclass
from datetime import datetime, timezone, tzinfo

from .. import exceptions
from . import _engine
from ._timezones import TimezoneSpec, resolve_timezone

if t.TYPE_CHECKING:
    from ._instant import Instant

InstantT = t.TypeVar("InstantT", bound="Instant")

logger = logging.getLogger(__name__)

# Year is zero-padded because "%Y" only accepts four digits. Month, day and hour
# may come unpadded.
CREATE_FORMAT = "%Y-%m-%d %H:%M:%S"

TODAY = "midnight"
TOMORROW = "tomorrow, midnight"
YESTERDAY = "yesterday, midnight"


@dataclass(frozen=True)
class FieldSet:
    """Calendar fields passed to ``create()``. Any of them may be missing."""

    year: t.Optional[int] = None
    month: t.Optional[int] = None
    day: t.Optional[int] = None
    hour: t.Optional[int] = None
    minute: t.Optional[int] = None
    second: t.Optional[int] = None

    def with_defaults(self, now: datetime) -> "FieldSet":
        """Fills in the missing fields.

        The date falls back to ``now``'s date. Without an hour, the whole time
        falls back to ``now`` field by field. With an hour, missing minutes and
        seconds are 0.
        """
        year = now.year if self.year is None else self.year
        month = now.month if self.month is None else self.month
        day = now.day if self.day is None else self.day

        if self.hour is None:
            hour = now.hour
            minute = now.minute if self.minute is None else self.minute
            second = now.second if self.second is None else self.second
        else:
            hour = self.hour
            minute = 0 if self.minute is None else self.minute
            second = 0 if self.second is None else self.second

        return FieldSet(year, month, day, hour, minute, second)

    def to_string(self) -> str:
        """Formats complete fields for parsing with ``CREATE_FORMAT``.

        Raises:
            TypeError: a field isn't an integer.
        """
        for name, value in asdict(self).items():
            if not isinstance(value, int) or isinstance(value, bool):
                raise TypeError(f"{name} must be an integer, got {value!r}")

        return (
            f"{self.year:04d}-{self.month}-{self.day} "
            f"{self.hour}:{self.minute:02d}:{self.second:02d}"
        )


def _civil_string(value: datetime) -> str:
    return (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d} "
        f"{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
        f".{value.microsecond:06d}"
    )


class DateTimeFactory(t.Generic[InstantT]):
    """Builds instances of ``instant_type``.

    Args:
        instant_type: the class of produced values. It's called as
            ``instant_type(text, tz)`` to parse free-form text, and its
            ``from_datetime()`` converts aware datetimes.
        default_timezone: used when a call doesn't specify a timezone. If not
            passed, the process-wide settings are consulted on every call.
    """

    def __init__(
        self,
        instant_type: t.Type[InstantT],
        default_timezone: t.Optional[TimezoneSpec] = None,
    ):
        self._instant_type = instant_type
        self._default_timezone = default_timezone

    def resolve_timezone(self, tz: TimezoneSpec) -> tzinfo:
        return resolve_timezone(tz, self._default_timezone)

    def _wrap(self, value: datetime) -> InstantT:
        return self._instant_type.from_datetime(value)

    def instance(self, existing: datetime) -> InstantT:
        """Converts any datetime into the factory's type.

        Values that already have the right type are copied, keeping their exact
        class. Other datetimes are rebuilt from their wall time and timezone.
        Naive ones get the default timezone.
        """
        if isinstance(existing, self._instant_type):
            return type(existing).from_datetime(existing)

        return self.parse(_civil_string(existing), existing.tzinfo)

    def parse(self, time: t.Optional[str] = None, tz: TimezoneSpec = None) -> InstantT:
        """Builds an instant from a free-form string, like ``"tomorrow, noon"``.

        Raises:
            chronos.exceptions.InvalidDateTimeFormat: the string isn't understood.
            chronos.exceptions.InvalidTimezone: ``tz`` can't be resolved.
        """
        return self._instant_type(time, self.resolve_timezone(tz))

    def now(self, tz: TimezoneSpec = None) -> InstantT:
        return self.parse(None, tz)

    def today(self, tz: TimezoneSpec = None) -> InstantT:
        return self.parse(TODAY, tz)

    def tomorrow(self, tz: TimezoneSpec = None) -> InstantT:
        return self.parse(TOMORROW, tz)

    def yesterday(self, tz: TimezoneSpec = None) -> InstantT:
        return self.parse(YESTERDAY, tz)

    def create(
        self,
        year: t.Optional[int] = None,
        month: t.Optional[int] = None,
        day: t.Optional[int] = None,
        hour: t.Optional[int] = None,
        minute: t.Optional[int] = None,
        second: t.Optional[int] = None,
        tz: TimezoneSpec = None,
    ) -> InstantT:
        """Builds an instant from calendar fields.

        If any of ``year``, ``month`` or ``day`` is ``None``, the current date's
        value is used.

        If ``hour`` is ``None`` it's set to the current hour, and missing
        ``minute`` and ``second`` default to their current values. If ``hour`` is
        set, missing ``minute`` and ``second`` default to 0.

        All "current" values come from a single clock read in the resolved
        timezone.

        Raises:
            chronos.exceptions.InvalidDateTimeFields: the fields don't form a valid
                date and time, e.g. February 30th or minute 61.
            chronos.exceptions.InvalidTimezone: ``tz`` can't be resolved.
        """
        zone = self.resolve_timezone(tz)
        requested = FieldSet(year, month, day, hour, minute, second)
        fields = requested.with_defaults(_engine.current(zone))
        logger.debug("Defaulted %s to %s", requested, fields)

        try:
            text = fields.to_string()
        except (ValueError, TypeError) as e:
            raise exceptions.InvalidDateTimeFields(
                [f"Can't format the date and time fields: {e}"]
            ) from e

        try:
            return self.create_from_format(CREATE_FORMAT, text, zone)
        except exceptions.InvalidDateTimeFormat as e:
            raise exceptions.InvalidDateTimeFields(e.errors) from e

    def create_from_date(
        self,
        year: t.Optional[int] = None,
        month: t.Optional[int] = None,
        day: t.Optional[int] = None,
        tz: TimezoneSpec = None,
    ) -> InstantT:
        """Builds an instant from a date. The time is set to now."""
        return self.create(year, month, day, None, None, None, tz)

    def create_from_time(
        self,
        hour: t.Optional[int] = None,
        minute: t.Optional[int] = None,
        second: t.Optional[int] = None,
        tz: TimezoneSpec = None,
    ) -> InstantT:
        """Builds an instant from a time. The date is set to today."""
        return self.create(None, None, None, hour, minute, second, tz)

    def create_from_format(
        self, format: str, time: str, tz: TimezoneSpec = None
    ) -> InstantT:
        """Builds an instant by strictly parsing ``time`` with ``format``.

        Args:
            format: ``datetime.strptime`` directives, e.g. ``"%Y-%m-%d"``.
            time: the string to parse.
            tz: timezone for the parsed wall time. When ``None``, the parser's
                ambient default applies. An offset parsed with ``%z`` wins.

        Raises:
            chronos.exceptions.InvalidDateTimeFormat: ``time`` doesn't match
                ``format`` or isn't a valid date.
            chronos.exceptions.InvalidTimezone: ``tz`` can't be resolved.
        """
        zone = self.resolve_timezone(tz) if tz is not None else None
        result = _engine.parse_with_format(format, time, zone)
        if result.value is None:
            raise exceptions.InvalidDateTimeFormat(result.errors)

        return self.instance(result.value)

    def create_from_timestamp(
        self, timestamp: t.Union[int, float], tz: TimezoneSpec = None
    ) -> InstantT:
        """Builds an instant from a Unix timestamp, shown in ``tz``.

        Raises:
            chronos.exceptions.InvalidTimestamp: the timestamp is out of range.
        """
        return self._wrap(_engine.set_epoch(self.now(tz), timestamp))

    def create_from_timestamp_utc(self, timestamp: t.Union[int, float]) -> InstantT:
        """Builds an instant from a Unix timestamp, shown in UTC.

        Raises:
            chronos.exceptions.InvalidTimestamp: the timestamp is out of range.
        """
        return self._wrap(_engine.construct_from_epoch(timestamp, timezone.utc))

    def max_value(self) -> InstantT:
        """The latest whole-second instant that can be represented."""
        return self.create_from_timestamp(_engine.MAX_TIMESTAMP, timezone.utc)

    def min_value(self) -> InstantT:
        """The earliest instant that can be represented."""
        return self.create_from_timestamp(_engine.MIN_TIMESTAMP, timezone.utc)
