################################################################################
# © Copyright 2024 Zapata Computing Inc.
################################################################################
"""Turns the ``tz`` argument accepted by the factories into a ``tzinfo`` object."""

import logging
import re
import typing as t
import zoneinfo
from datetime import timedelta, timezone, tzinfo

from .. import exceptions

TimezoneSpec = t.Union[None, str, tzinfo]

_UTC_ALIASES = {"utc", "z"}
_OFFSET_RE = re.compile(r"^(?P<sign>[+-])(?P<hours>\d{2})(?::?(?P<minutes>\d{2}))?$")

logger = logging.getLogger(__name__)


def _fixed_offset(name: str) -> t.Optional[tzinfo]:
    match = _OFFSET_RE.match(name)
    if match is None:
        return None

    hours = int(match.group("hours"))
    minutes = int(match.group("minutes") or 0)
    if hours > 23 or minutes > 59:
        return None

    offset = timedelta(hours=hours, minutes=minutes)
    if match.group("sign") == "-":
        offset = -offset
    return timezone(offset)


def timezone_from_name(name: str) -> tzinfo:
    """Builds a timezone object from an identifier.

    Accepts IANA names (``"Europe/Warsaw"``), ``"UTC"``/``"Z"`` and fixed offsets
    (``"+05:30"``, ``"-0800"``, ``"+02"``).

    Raises:
        chronos.exceptions.InvalidTimezone: if the name isn't recognized.
    """
    stripped = name.strip()
    if stripped.lower() in _UTC_ALIASES:
        return timezone.utc

    if (offset := _fixed_offset(stripped)) is not None:
        return offset

    try:
        return zoneinfo.ZoneInfo(stripped)
    except (zoneinfo.ZoneInfoNotFoundError, ValueError, OSError) as e:
        # ValueError covers malformed keys, like absolute paths. OSError covers keys
        # that point at a directory of the database, like "Europe".
        raise exceptions.InvalidTimezone(name) from e


def resolve_timezone(
    spec: TimezoneSpec, default: t.Optional[TimezoneSpec] = None
) -> tzinfo:
    """Normalizes a timezone argument.

    Args:
        spec: ``None``, a timezone name, or an already built ``tzinfo``. ``tzinfo``
            objects are returned as-is.
        default: used when ``spec`` is ``None``. If not passed, the process-wide
            default timezone from the settings is used.

    Raises:
        chronos.exceptions.InvalidTimezone: when ``spec`` is a name that can't be
            resolved, or isn't a supported type.
    """
    if spec is None:
        if default is None:
            # Deferred to avoid a circular import: the settings validate timezone
            # names with this module.
            from ._config import get_settings

            default = get_settings().default_timezone
        logger.debug("No timezone passed, falling back to %r", default)
        return resolve_timezone(default)

    if isinstance(spec, tzinfo):
        return spec

    if isinstance(spec, str):
        return timezone_from_name(spec)

    raise exceptions.InvalidTimezone(
        spec, f"Can't build a timezone from type {type(spec)}"
    )
