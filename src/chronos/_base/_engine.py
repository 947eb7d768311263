################################################################################
# © Copyright 2024 Zapata Computing Inc.
################################################################################
"""Low-level construction of timezone-aware datetimes.

Everything here returns plain ``datetime`` objects. Turning them into ``Instant``
is the factory's job.
"""
import re
import typing as t
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone, tzinfo

from .. import exceptions
from ._timezones import timezone_from_name

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Whole-second bounds of what ``datetime`` can represent, as Unix timestamps.
_SECOND = timedelta(seconds=1)
MAX_TIMESTAMP = (datetime.max.replace(tzinfo=timezone.utc) - EPOCH) // _SECOND
MIN_TIMESTAMP = (datetime.min.replace(tzinfo=timezone.utc) - EPOCH) // _SECOND

_RELATIVE_UNITS = {
    "sec": "seconds",
    "secs": "seconds",
    "second": "seconds",
    "seconds": "seconds",
    "min": "minutes",
    "mins": "minutes",
    "minute": "minutes",
    "minutes": "minutes",
    "hour": "hours",
    "hours": "hours",
    "day": "days",
    "days": "days",
    "week": "weeks",
    "weeks": "weeks",
}
_AMOUNT_RE = re.compile(r"^[+-]?\d+$")
_GLUED_RELATIVE_RE = re.compile(r"^(?P<amount>[+-]?\d+)(?P<unit>[a-z]+)$")
_WORD_SPLIT_RE = re.compile(r"[\s,]+")


@dataclass(frozen=True)
class ParseResult:
    """Outcome of parsing a string against a format.

    Exactly one of ``value`` and ``errors`` is set.
    """

    value: t.Optional[datetime] = None
    errors: t.List[str] = field(default_factory=list)


def current(zone: tzinfo) -> datetime:
    """Reads the wall clock once."""
    return datetime.now(zone)


def ambient_timezone() -> tzinfo:
    """The timezone applied when a caller doesn't pass one to the parser."""
    # Deferred to avoid a circular import through the settings schema.
    from ._config import get_settings

    return timezone_from_name(get_settings().default_timezone)


def localize(value: datetime, zone: tzinfo) -> datetime:
    """Attaches ``zone`` to a naive wall time.

    Aware values are returned unchanged. Wall times that fall into a DST gap are
    moved forward by the gap's length.
    """
    if value.tzinfo is not None:
        return value

    aware = value.replace(tzinfo=zone)
    if isinstance(zone, timezone):
        # Fixed offsets have no gaps.
        return aware

    try:
        return aware.astimezone(timezone.utc).astimezone(zone)
    except OverflowError:
        # Too close to datetime.min/max to shift. Nothing to normalize there anyway.
        return aware


def construct_from_civil_fields(
    year: int,
    month: int,
    day: int,
    hour: int,
    minute: int,
    second: int,
    zone: tzinfo,
    microsecond: int = 0,
) -> datetime:
    return localize(
        datetime(year, month, day, hour, minute, second, microsecond), zone
    )


def parse_with_format(
    format: str, text: str, zone: t.Optional[tzinfo] = None
) -> ParseResult:
    """Strictly parses ``text`` with ``strptime`` directives.

    Args:
        format: ``datetime.strptime`` format, e.g. ``"%Y-%m-%d %H:%M"``.
        text: the string to parse.
        zone: timezone for parsed wall times. Defaults to ``ambient_timezone()``.
            Ignored when the format parses an offset (``%z``).
    """
    try:
        parsed = datetime.strptime(text, format)
    except (ValueError, TypeError) as e:
        return ParseResult(errors=[str(e)])

    if zone is None:
        zone = ambient_timezone()

    return ParseResult(value=localize(parsed, zone))


def construct_from_epoch(
    timestamp: t.Union[int, float], zone: tzinfo = timezone.utc
) -> datetime:
    """Converts a Unix timestamp into an aware datetime in ``zone``.

    Raises:
        chronos.exceptions.InvalidTimestamp: the timestamp (or its local time in
            ``zone``) can't be represented.
    """
    try:
        return (EPOCH + timedelta(seconds=timestamp)).astimezone(zone)
    except (OverflowError, TypeError, ValueError) as e:
        raise exceptions.InvalidTimestamp(timestamp) from e


def set_epoch(value: datetime, timestamp: t.Union[int, float]) -> datetime:
    """Moves ``value`` to ``timestamp``, keeping its timezone."""
    if value.tzinfo is None:
        raise ValueError("Can't move a naive datetime to a timestamp")
    return construct_from_epoch(timestamp, value.tzinfo)


def _parse_epoch(text: str) -> datetime:
    raw = text[1:].strip()
    try:
        timestamp: t.Union[int, float] = float(raw) if "." in raw else int(raw)
    except ValueError as e:
        raise exceptions.InvalidDateTimeFormat(
            [f"The timestamp '{raw}' could not be parsed"]
        ) from e
    return construct_from_epoch(timestamp)


def _parse_iso(text: str, zone: tzinfo) -> t.Optional[datetime]:
    normalized = text[:-1] + "+00:00" if text.endswith(("Z", "z")) else text
    try:
        parsed = datetime.fromisoformat(normalized)
    except ValueError:
        return None
    return localize(parsed, zone)


def _midnight(day: date, zone: tzinfo) -> datetime:
    return construct_from_civil_fields(day.year, day.month, day.day, 0, 0, 0, zone)


def _apply_phrase(words: t.List[str], text: str, start: datetime) -> datetime:
    zone = start.tzinfo
    assert zone is not None

    value = start
    i = 0
    while i < len(words):
        word = words[i]
        if word == "now":
            pass
        elif word in ("today", "midnight"):
            value = _midnight(value.date(), zone)
        elif word == "noon":
            value = construct_from_civil_fields(
                value.year, value.month, value.day, 12, 0, 0, zone
            )
        elif word == "tomorrow":
            value = _midnight(value.date() + timedelta(days=1), zone)
        elif word == "yesterday":
            value = _midnight(value.date() - timedelta(days=1), zone)
        elif (
            _AMOUNT_RE.match(word)
            and i + 1 < len(words)
            and words[i + 1] in _RELATIVE_UNITS
        ):
            unit = _RELATIVE_UNITS[words[i + 1]]
            value = value + timedelta(**{unit: int(word)})
            i += 1
        elif (
            match := _GLUED_RELATIVE_RE.match(word)
        ) is not None and match.group("unit") in _RELATIVE_UNITS:
            unit = _RELATIVE_UNITS[match.group("unit")]
            value = value + timedelta(**{unit: int(match.group("amount"))})
        else:
            raise exceptions.InvalidDateTimeFormat(
                [
                    f"Failed to parse time string ({text}) at word '{word}': "
                    "the word was not recognized"
                ]
            )
        i += 1

    # Wall-clock arithmetic may land in a DST gap.
    return localize(value.replace(tzinfo=None), zone)


def construct_from_text(text: t.Optional[str], zone: tzinfo) -> datetime:
    """Builds a datetime from a free-form string.

    Understands ISO 8601, ``"@<timestamp>"`` (always UTC) and phrases made of
    ``now``, ``today``, ``midnight``, ``noon``, ``tomorrow``, ``yesterday`` and
    relative offsets like ``"+3 days"`` or ``"-2 hours"``, applied left to right.
    An empty string or ``None`` means now.

    Raises:
        chronos.exceptions.InvalidDateTimeFormat: the text isn't understood.
    """
    now = current(zone)
    if text is None:
        return now

    stripped = text.strip()
    if not stripped:
        return now

    if stripped.startswith("@"):
        return _parse_epoch(stripped)

    if stripped[0].isdigit() and (parsed := _parse_iso(stripped, zone)) is not None:
        return parsed

    words = [word for word in _WORD_SPLIT_RE.split(stripped.lower()) if word]
    return _apply_phrase(words, text, now)
