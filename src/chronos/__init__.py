################################################################################
# © Copyright 2024 Zapata Computing Inc.
################################################################################
"""Single place to build timezone-aware datetimes without shooting yourself in the
foot.
"""
from . import exceptions
from ._base._config import configure, get_settings
from ._base._factory import DateTimeFactory, FieldSet
from ._base._instant import Instant
from ._base._timezones import resolve_timezone

instance = Instant.instance
parse = Instant.parse
now = Instant.now
today = Instant.today
tomorrow = Instant.tomorrow
yesterday = Instant.yesterday
create = Instant.create
create_from_date = Instant.create_from_date
create_from_time = Instant.create_from_time
create_from_format = Instant.create_from_format
create_from_timestamp = Instant.create_from_timestamp
create_from_timestamp_utc = Instant.create_from_timestamp_utc
max_value = Instant.max_value
min_value = Instant.min_value

__all__ = [
    "DateTimeFactory",
    "FieldSet",
    "Instant",
    "configure",
    "create",
    "create_from_date",
    "create_from_format",
    "create_from_time",
    "create_from_timestamp",
    "create_from_timestamp_utc",
    "exceptions",
    "get_settings",
    "instance",
    "max_value",
    "min_value",
    "now",
    "parse",
    "resolve_timezone",
    "today",
    "tomorrow",
    "yesterday",
]
