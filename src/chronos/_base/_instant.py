################################################################################
# © Copyright 2024 Zapata Computing Inc.
################################################################################
"""Timezone-aware datetime type returned by the factories."""

import typing as t
from datetime import datetime, timezone

from . import _engine
from ._factory import DateTimeFactory
from ._timezones import TimezoneSpec, resolve_timezone

_FIELD_KWARGS = frozenset(
    ["year", "month", "day", "hour", "minute", "second", "microsecond", "tzinfo"]
)

InstantT = t.TypeVar("InstantT", bound="Instant")


def _is_field_construction(args: t.Tuple[t.Any, ...], kwargs: t.Dict[str, t.Any]):
    # The datetime internals (arithmetic, replace(), unpickling) call the class with
    # calendar fields or with a packed state.
    if kwargs.keys() & _FIELD_KWARGS:
        return True
    if not args:
        return False
    if isinstance(args[0], bytes):
        return True
    return len(args) > 1 and all(
        isinstance(arg, int) and not isinstance(arg, bool) for arg in args[:2]
    )


class Instant(datetime):
    """A point in time with a timezone attached.

    Can be created like a regular ``datetime`` (``tzinfo`` is required), or from a
    free-form time specification and a timezone:

    - ``Instant()``: now, in the default timezone.
    - ``Instant("tomorrow, noon", "Europe/Warsaw")``: free-form text.
    - ``Instant(1700000000)``: Unix timestamp, in UTC unless ``tz`` is passed.
    - ``Instant(some_datetime)``: copy of an aware datetime. Naive datetimes get
      ``tz``, or the default timezone.

    The classmethods (``now()``, ``create()``, ``create_from_format()``, ...)
    always return the class they're called on.
    """

    def __new__(cls, *args, **kwargs):
        if _is_field_construction(args, kwargs):
            self = super().__new__(cls, *args, **kwargs)
            self._enforce_timezone_aware()
            return self

        return cls._from_time_spec(*args, **kwargs)

    @classmethod
    def _from_time_spec(
        cls: t.Type[InstantT],
        time: t.Union[None, str, int, float, datetime] = None,
        tz: TimezoneSpec = None,
    ) -> InstantT:
        if time is None or isinstance(time, str):
            value = _engine.construct_from_text(time, resolve_timezone(tz))
        elif isinstance(time, datetime):
            value = _engine.localize(time, resolve_timezone(tz))
        elif isinstance(time, (int, float)) and not isinstance(time, bool):
            zone = timezone.utc if tz is None else resolve_timezone(tz)
            value = _engine.construct_from_epoch(time, zone)
        else:
            raise NotImplementedError(
                f"Cannot initialise {cls.__name__} from type {type(time)}"
            )

        return cls.from_datetime(value)

    @classmethod
    def from_datetime(cls: t.Type[InstantT], value: datetime) -> InstantT:
        """Copies the fields of an aware datetime into a new instance."""
        return super().__new__(
            cls,
            value.year,
            value.month,
            value.day,
            value.hour,
            value.minute,
            value.second,
            value.microsecond,
            value.tzinfo,
            fold=value.fold,
        )._enforce_timezone_aware()

    def _enforce_timezone_aware(self: InstantT) -> InstantT:
        """Enforce the requirement that the Instant includes timezone information.

        Raises:
            ValueError: when the Instant is not timezone-aware.
        """
        if self.tzinfo is None:
            raise ValueError("We only work with timezone-aware datetimes")
        return self

    def replace(self: InstantT, *args, **kwargs) -> InstantT:
        # Some interpreters build the result without going through __new__.
        replaced = t.cast(InstantT, super().replace(*args, **kwargs))
        return replaced._enforce_timezone_aware()

    @classmethod
    def _factory(cls: t.Type[InstantT]) -> DateTimeFactory[InstantT]:
        return DateTimeFactory(cls)

    # region: factories

    @classmethod
    def instance(cls: t.Type[InstantT], dt: datetime) -> InstantT:
        """Creates an instance from any ``datetime``.

        If ``dt`` is already of this class, an equal copy is returned.
        """
        return cls._factory().instance(dt)

    @classmethod
    def parse(
        cls: t.Type[InstantT], time: t.Optional[str] = None, tz: TimezoneSpec = None
    ) -> InstantT:
        """Creates an instance from a string, e.g. ``"yesterday, noon"``.

        This is an alias for the constructor that reads better in chains:
        ``Instant.parse("+1 week").date()``.
        """
        return cls._factory().parse(time, tz)

    @classmethod
    def now(  # type: ignore[override]
        cls: t.Type[InstantT], tz: TimezoneSpec = None
    ) -> InstantT:
        """Creates an instance for the current date and time."""
        return cls._factory().now(tz)

    @classmethod
    def today(  # type: ignore[override]
        cls: t.Type[InstantT], tz: TimezoneSpec = None
    ) -> InstantT:
        """Creates an instance for today, at midnight."""
        return cls._factory().today(tz)

    @classmethod
    def tomorrow(cls: t.Type[InstantT], tz: TimezoneSpec = None) -> InstantT:
        """Creates an instance for tomorrow, at midnight."""
        return cls._factory().tomorrow(tz)

    @classmethod
    def yesterday(cls: t.Type[InstantT], tz: TimezoneSpec = None) -> InstantT:
        """Creates an instance for yesterday, at midnight."""
        return cls._factory().yesterday(tz)

    @classmethod
    def max_value(cls: t.Type[InstantT]) -> InstantT:
        """Creates an instance for the greatest supported date."""
        return cls._factory().max_value()

    @classmethod
    def min_value(cls: t.Type[InstantT]) -> InstantT:
        """Creates an instance for the lowest supported date."""
        return cls._factory().min_value()

    @classmethod
    def create(
        cls: t.Type[InstantT],
        year: t.Optional[int] = None,
        month: t.Optional[int] = None,
        day: t.Optional[int] = None,
        hour: t.Optional[int] = None,
        minute: t.Optional[int] = None,
        second: t.Optional[int] = None,
        tz: TimezoneSpec = None,
    ) -> InstantT:
        """Creates an instance from a specific date and time.

        If any of ``year``, ``month`` or ``day`` are ``None``, their current values
        are used.

        If ``hour`` is ``None`` it's set to its current value, and so are
        ``minute`` and ``second`` when they're ``None``. If ``hour`` is not
        ``None``, ``minute`` and ``second`` default to 0.
        """
        return cls._factory().create(year, month, day, hour, minute, second, tz)

    @classmethod
    def create_from_date(
        cls: t.Type[InstantT],
        year: t.Optional[int] = None,
        month: t.Optional[int] = None,
        day: t.Optional[int] = None,
        tz: TimezoneSpec = None,
    ) -> InstantT:
        """Creates an instance from just a date. The time is set to now."""
        return cls._factory().create_from_date(year, month, day, tz)

    @classmethod
    def create_from_time(
        cls: t.Type[InstantT],
        hour: t.Optional[int] = None,
        minute: t.Optional[int] = None,
        second: t.Optional[int] = None,
        tz: TimezoneSpec = None,
    ) -> InstantT:
        """Creates an instance from just a time. The date is set to today."""
        return cls._factory().create_from_time(hour, minute, second, tz)

    @classmethod
    def create_from_format(
        cls: t.Type[InstantT], format: str, time: str, tz: TimezoneSpec = None
    ) -> InstantT:
        """Creates an instance from a ``strptime`` format and a matching string."""
        return cls._factory().create_from_format(format, time, tz)

    @classmethod
    def create_from_timestamp(
        cls: t.Type[InstantT], timestamp: t.Union[int, float], tz: TimezoneSpec = None
    ) -> InstantT:
        """Creates an instance from a Unix timestamp, shown in ``tz``."""
        return cls._factory().create_from_timestamp(timestamp, tz)

    @classmethod
    def create_from_timestamp_utc(
        cls: t.Type[InstantT], timestamp: t.Union[int, float]
    ) -> InstantT:
        """Creates an instance from a Unix timestamp, shown in UTC."""
        return cls._factory().create_from_timestamp_utc(timestamp)

    # endregion
