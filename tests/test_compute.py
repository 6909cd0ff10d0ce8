"""Tests for solar event times, day length and the yearly dataset."""

from datetime import date, datetime, time, timedelta

import pytest

from suncountdown.compute import (
    compute_for_context,
    compute_solar_time,
    day_length,
    event_hour,
    format_day_length,
    is_daylight_time,
    next_event_time,
    retarget_event,
    year_event_times,
)
from suncountdown.models import CalculationContext, SolarEvent
from suncountdown.yeargraph import date_for_x, x_for_date

ZAGREB = (45.8150, 15.9819)


def _days(year: int) -> list[date]:
    start = date(year, 1, 1)
    return [start + timedelta(days=i) for i in range((date(year + 1, 1, 1) - start).days)]


def test_zagreb_midsummer_sunrise_and_sunset() -> None:
    """Sunrise a little after 05:00 CEST, sunset a little before 21:00."""
    sunrise = compute_solar_time(date(2024, 6, 21), *ZAGREB, SolarEvent.SUNRISE)
    sunset = compute_solar_time(date(2024, 6, 21), *ZAGREB, SolarEvent.SUNSET)

    assert sunrise.date() == date(2024, 6, 21)
    assert time(4, 50) <= sunrise.time() <= time(5, 20)
    assert time(20, 35) <= sunset.time() <= time(21, 5)


def test_zagreb_solar_noon_in_summer_time() -> None:
    noon = compute_solar_time(date(2024, 6, 21), *ZAGREB, SolarEvent.SOLAR_NOON)
    assert time(12, 45) <= noon.time() <= time(13, 10)


def test_sunrise_before_noon_before_sunset_all_year() -> None:
    for day in _days(2024):
        sunrise = compute_solar_time(day, *ZAGREB, SolarEvent.SUNRISE)
        noon = compute_solar_time(day, *ZAGREB, SolarEvent.SOLAR_NOON)
        sunset = compute_solar_time(day, *ZAGREB, SolarEvent.SUNSET)
        assert sunrise <= noon <= sunset, day


def test_twilight_events_nest_around_sunrise() -> None:
    day = date(2024, 3, 20)
    times = [
        compute_solar_time(day, *ZAGREB, event)
        for event in (
            SolarEvent.ASTRONOMICAL_DAWN,
            SolarEvent.NAUTICAL_DAWN,
            SolarEvent.CIVIL_DAWN,
            SolarEvent.SUNRISE,
            SolarEvent.SUNSET,
            SolarEvent.CIVIL_DUSK,
            SolarEvent.NAUTICAL_DUSK,
            SolarEvent.ASTRONOMICAL_DUSK,
        )
    ]
    assert times == sorted(times)


def test_polar_day_and_night_return_sentinels() -> None:
    never_sets = compute_solar_time(date(2024, 6, 21), 80.0, 15.0, SolarEvent.SUNRISE)
    never_rises = compute_solar_time(date(2024, 12, 21), 80.0, 15.0, SolarEvent.SUNRISE)

    assert never_sets == datetime(2024, 6, 21, 23, 59, 59)
    assert never_rises == datetime(2024, 12, 21, 0, 0, 0)


def test_dst_flag_shifts_result_by_one_hour() -> None:
    day = date(2024, 6, 21)
    summer = compute_solar_time(day, *ZAGREB, SolarEvent.SOLAR_NOON, is_dst=True)
    winter = compute_solar_time(day, *ZAGREB, SolarEvent.SOLAR_NOON, is_dst=False)
    assert (summer - winter).total_seconds() == pytest.approx(3600.0)


def test_daylight_time_follows_central_european_calendar() -> None:
    assert is_daylight_time(date(2024, 7, 1))
    assert not is_daylight_time(date(2024, 1, 15))
    # Clocks change at 02:00 on 31 March 2024, after midnight
    assert not is_daylight_time(date(2024, 3, 31))
    assert is_daylight_time(date(2024, 4, 1))


def test_datetime_input_uses_its_date() -> None:
    from_date = compute_solar_time(date(2024, 6, 21), *ZAGREB, SolarEvent.SUNSET)
    from_datetime = compute_solar_time(
        datetime(2024, 6, 21, 15, 30), *ZAGREB, SolarEvent.SUNSET
    )
    assert from_date == from_datetime


def test_compute_for_context_matches_direct_call() -> None:
    context = CalculationContext(date(2024, 9, 1), *ZAGREB, SolarEvent.CIVIL_DUSK)
    assert compute_for_context(context) == compute_solar_time(
        date(2024, 9, 1), *ZAGREB, SolarEvent.CIVIL_DUSK
    )


def test_day_length_at_equator_stays_near_twelve_hours() -> None:
    for day in _days(2023):
        hours = day_length(day, 0.0, 0.0) / 3600.0
        assert 11.5 <= hours <= 12.5, day


@pytest.mark.parametrize("latitude", [-89.0, -70.0, 0.0, 66.5, 80.0, 89.0])
def test_day_length_always_within_one_day(latitude: float) -> None:
    for day in _days(2024)[::7]:
        assert 0.0 <= day_length(day, latitude, 15.0) < 86400.0


def test_day_length_during_polar_day_is_zero() -> None:
    # Both sunrise and sunset collapse onto the 23:59:59 sentinel
    assert day_length(date(2024, 6, 21), 80.0, 15.0) == 0.0


def test_format_day_length() -> None:
    assert format_day_length(3661.0) == "1 hrs 1 mins 1 secs"
    assert format_day_length(15 * 3600 + 44 * 60) == "15 hrs 44 mins 0 secs"


def test_event_hour() -> None:
    assert event_hour(datetime(2024, 1, 1, 6, 30, 36)) == pytest.approx(6.51)


def test_year_event_times_shape_and_cache() -> None:
    first = year_event_times(2024, *ZAGREB)
    second = year_event_times(2024, *ZAGREB)

    assert first is second
    assert set(first) == set(SolarEvent)
    for hours in first.values():
        assert len(hours) == 366
        assert all(0.0 <= h < 24.0 for h in hours)
    assert len(year_event_times(2023, *ZAGREB)[SolarEvent.SUNRISE]) == 365


def test_next_event_time_rolls_over_to_tomorrow() -> None:
    early = next_event_time(datetime(2024, 6, 21, 3, 0), *ZAGREB, SolarEvent.SUNRISE)
    late = next_event_time(datetime(2024, 6, 21, 12, 0), *ZAGREB, SolarEvent.SUNRISE)

    assert early.date() == date(2024, 6, 21)
    assert late.date() == date(2024, 6, 22)
    assert late == compute_solar_time(date(2024, 6, 22), *ZAGREB, SolarEvent.SUNRISE)


def test_retarget_event_keeps_the_day() -> None:
    target = datetime(2024, 10, 5, 7, 15)
    moved = retarget_event(target, *ZAGREB, SolarEvent.SUNSET)
    assert moved.date() == target.date()
    assert moved == compute_solar_time(date(2024, 10, 5), *ZAGREB, SolarEvent.SUNSET)


def test_graph_pick_targets_event_on_picked_day() -> None:
    """A click on a day column moves the target to that day's event, not its midnight."""
    x = x_for_date(date(2024, 3, 10), 760)
    picked = retarget_event(date_for_x(x, 760, 2024), *ZAGREB, SolarEvent.CIVIL_DUSK)

    assert picked.date() == date(2024, 3, 10)
    assert picked.time() != time()
    assert picked == compute_solar_time(date(2024, 3, 10), *ZAGREB, SolarEvent.CIVIL_DUSK)
    assert 17.0 < event_hour(picked) < 19.5
