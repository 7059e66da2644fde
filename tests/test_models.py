"""Value types and time helpers."""

from datetime import time

import pytest

from conftest import at, make_reading
from pisense.core.timeutil import format_duration_ms, ms_since_midnight
from pisense.domain.models import ScheduleOffset


def test_average_temperature_rounds_to_one_decimal():
    assert make_reading(21.27, 21.33).average_temperature == 21.3
    assert make_reading(20.0, 21.0).average_temperature == 20.5


def test_summary_format():
    reading = make_reading(21.27, 21.33, 1002.5, 40.1)
    assert reading.summary() == "Temperature: 21.3°c, pressure: 1002.5hPa, humidity: 40.1%"


def test_reading_is_immutable():
    reading = make_reading()
    with pytest.raises(AttributeError):
        reading.pressure = 0


def test_schedule_offset_from_times():
    offsets = ScheduleOffset.from_times(time(8, 0), time(22, 0, 30))
    assert offsets.turn_on_ms == 8 * 3600 * 1000
    assert offsets.turn_off_ms == (22 * 3600 + 30) * 1000
    assert not offsets.wraps_midnight
    assert not offsets.degenerate


def test_schedule_offset_wraps_midnight():
    offsets = ScheduleOffset.from_times(time(22, 0), time(8, 0))
    assert offsets.wraps_midnight
    assert offsets.is_on_at(23 * 3600 * 1000)
    assert offsets.is_on_at(0)
    assert not offsets.is_on_at(12 * 3600 * 1000)


@pytest.mark.parametrize("on, off", [(-1, 0), (0, 86_400_000), (90_000_000, 0)])
def test_schedule_offset_out_of_range(on, off):
    with pytest.raises(ValueError):
        ScheduleOffset(turn_on_ms=on, turn_off_ms=off)


def test_ms_since_midnight():
    assert ms_since_midnight(at(0)) == 0
    assert ms_since_midnight(at(23, 59, 59, 999)) == 86_399_999
    assert ms_since_midnight(at(7, 0, 12, 345)) == 25_212_345


def test_format_duration_ms():
    assert format_duration_ms(9 * 3600 * 1000) == "9:00:00.000"
    assert format_duration_ms(3_723_004) == "1:02:03.004"
