################################################################################
# © Copyright 2024 Zapata Computing Inc.
################################################################################
"""
Unit tests for ``chronos._base._engine``.
"""
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest
from freezegun import freeze_time

from chronos import exceptions
from chronos._base import _engine

WARSAW = ZoneInfo("Europe/Warsaw")


class TestParseWithFormat:
    @staticmethod
    def test_valid():
        # When
        result = _engine.parse_with_format("%Y-%m-%d %H:%M", "2024-02-29 13:45", WARSAW)

        # Then
        assert result.value is not None
        assert result.errors == []
        assert result.value == datetime(2024, 2, 29, 13, 45, tzinfo=WARSAW)
        assert result.value.tzinfo is WARSAW

    @staticmethod
    @pytest.mark.parametrize(
        "format,text",
        [
            pytest.param("%Y-%m-%d", "2024-02-30", id="february-30th"),
            pytest.param("%Y-%m-%d", "2024-02-29 10:00", id="trailing-data"),
            pytest.param("%Y-%m-%d", "29.02.2024", id="wrong-layout"),
            pytest.param("%H:%M", "25:00", id="hour-out-of-range"),
        ],
    )
    def test_invalid(format: str, text: str):
        # When
        result = _engine.parse_with_format(format, text, WARSAW)

        # Then
        assert result.value is None
        assert len(result.errors) == 1

    @staticmethod
    def test_non_string_input():
        result = _engine.parse_with_format("%Y", 2024)  # type: ignore[arg-type]

        assert result.value is None

    @staticmethod
    def test_uses_ambient_timezone_by_default(warsaw_default):
        # When
        result = _engine.parse_with_format("%Y-%m-%d", "2024-01-01")

        # Then
        assert result.value is not None
        assert result.value.tzinfo == WARSAW

    @staticmethod
    def test_parsed_offset_wins():
        # When
        result = _engine.parse_with_format(
            "%Y-%m-%dT%H:%M%z", "2024-01-01T10:00+0400", WARSAW
        )

        # Then
        assert result.value is not None
        assert result.value.utcoffset() == timedelta(hours=4)


class TestLocalize:
    @staticmethod
    def test_aware_is_unchanged():
        value = datetime(2024, 1, 1, tzinfo=timezone.utc)

        assert _engine.localize(value, WARSAW) is value

    @staticmethod
    def test_regular_wall_time():
        # When
        value = _engine.localize(datetime(2024, 7, 1, 12, 0), WARSAW)

        # Then
        assert (value.hour, value.minute) == (12, 0)
        assert value.utcoffset() == timedelta(hours=2)

    @staticmethod
    def test_dst_gap_moves_forward():
        # Given
        # Clocks in Warsaw jumped from 02:00 to 03:00 on this day.
        wall_time = datetime(2024, 3, 31, 2, 30)

        # When
        value = _engine.localize(wall_time, WARSAW)

        # Then
        assert (value.hour, value.minute) == (3, 30)
        assert value.utcoffset() == timedelta(hours=2)

    @staticmethod
    def test_datetime_bounds_dont_overflow():
        value = _engine.localize(datetime.max, ZoneInfo("Asia/Tokyo"))

        assert value.replace(tzinfo=None) == datetime.max


class TestEpoch:
    @staticmethod
    def test_bounds():
        assert _engine.MAX_TIMESTAMP == 253402300799
        assert _engine.MIN_TIMESTAMP == -62135596800

    @staticmethod
    def test_zero():
        assert _engine.construct_from_epoch(0) == _engine.EPOCH

    @staticmethod
    def test_fractional():
        value = _engine.construct_from_epoch(1.25)

        assert value.microsecond == 250000

    @staticmethod
    def test_in_timezone():
        # When
        value = _engine.construct_from_epoch(0, ZoneInfo("Asia/Tokyo"))

        # Then
        assert value.hour == 9
        assert value.tzinfo == ZoneInfo("Asia/Tokyo")

    @staticmethod
    @pytest.mark.parametrize(
        "timestamp",
        [_engine.MAX_TIMESTAMP + 1, _engine.MIN_TIMESTAMP - 1, 10**20, float("nan")],
    )
    def test_out_of_range(timestamp):
        with pytest.raises(exceptions.InvalidTimestamp):
            _engine.construct_from_epoch(timestamp)

    @staticmethod
    def test_set_epoch_keeps_timezone():
        # Given
        value = datetime(2024, 5, 10, 12, 0, tzinfo=WARSAW)

        # When
        moved = _engine.set_epoch(value, 0)

        # Then
        assert moved.tzinfo is WARSAW
        assert moved == _engine.EPOCH
        assert moved.hour == 1

    @staticmethod
    def test_set_epoch_rejects_naive():
        with pytest.raises(ValueError):
            _engine.set_epoch(datetime(2024, 5, 10, 12, 0), 0)


@pytest.fixture
def frozen_clock():
    with freeze_time("2024-05-10 15:30:45"):
        yield


@pytest.mark.usefixtures("frozen_clock")
class TestConstructFromText:
    @staticmethod
    @pytest.mark.parametrize("text", [None, "", "  ", "now", "NOW"])
    def test_now(text):
        # When
        value = _engine.construct_from_text(text, timezone.utc)

        # Then
        assert value == datetime(2024, 5, 10, 15, 30, 45, tzinfo=timezone.utc)

    @staticmethod
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("midnight", datetime(2024, 5, 10)),
            ("today", datetime(2024, 5, 10)),
            ("noon", datetime(2024, 5, 10, 12)),
            ("tomorrow, midnight", datetime(2024, 5, 11)),
            ("yesterday, midnight", datetime(2024, 5, 9)),
            ("Yesterday noon", datetime(2024, 5, 9, 12)),
            ("+2 days", datetime(2024, 5, 12, 15, 30, 45)),
            ("-3hours", datetime(2024, 5, 10, 12, 30, 45)),
            ("1 week", datetime(2024, 5, 17, 15, 30, 45)),
            ("tomorrow +90 min", datetime(2024, 5, 11, 1, 30)),
            ("today, -1 sec", datetime(2024, 5, 9, 23, 59, 59)),
        ],
    )
    def test_phrases(text: str, expected: datetime):
        # When
        value = _engine.construct_from_text(text, timezone.utc)

        # Then
        assert value == expected.replace(tzinfo=timezone.utc)
        assert value.tzinfo is timezone.utc

    @staticmethod
    def test_midnight_in_timezone():
        # It's already 17:30 in Warsaw. Midnight is local.
        value = _engine.construct_from_text("tomorrow, midnight", WARSAW)

        assert value == datetime(2024, 5, 11, tzinfo=WARSAW)
        assert value.utcoffset() == timedelta(hours=2)

    @staticmethod
    def test_midnight_crosses_date_line():
        # 15:30 UTC is already past midnight in Kiritimati (UTC+14).
        value = _engine.construct_from_text("today", ZoneInfo("Pacific/Kiritimati"))

        assert (value.year, value.month, value.day) == (2024, 5, 11)
        assert (value.hour, value.minute, value.second) == (0, 0, 0)

    @staticmethod
    def test_epoch_is_utc():
        # When
        value = _engine.construct_from_text("@86400", WARSAW)

        # Then
        assert value == datetime(1970, 1, 2, tzinfo=timezone.utc)
        assert value.tzinfo is timezone.utc

    @staticmethod
    def test_fractional_epoch():
        value = _engine.construct_from_text("@1.5", WARSAW)

        assert value.microsecond == 500000

    @staticmethod
    @pytest.mark.parametrize(
        "text,offset",
        [
            ("2024-01-01T10:00:00+04:00", timedelta(hours=4)),
            ("2024-01-01T10:00:00Z", timedelta(0)),
        ],
    )
    def test_iso_with_offset(text: str, offset: timedelta):
        value = _engine.construct_from_text(text, WARSAW)

        assert value.utcoffset() == offset
        assert value.hour == 10

    @staticmethod
    def test_naive_iso_gets_zone():
        # When
        value = _engine.construct_from_text("2024-01-01 10:00:00.250000", WARSAW)

        # Then
        assert value == datetime(2024, 1, 1, 10, 0, 0, 250000, tzinfo=WARSAW)
        assert value.tzinfo is WARSAW

    @staticmethod
    @pytest.mark.parametrize(
        "text", ["next thursday", "2024-13-45", "+2 fortnights", "@abc"]
    )
    def test_not_understood(text: str):
        with pytest.raises(exceptions.InvalidDateTimeFormat) as exc_info:
            _engine.construct_from_text(text, timezone.utc)

        assert len(exc_info.value.errors) == 1
