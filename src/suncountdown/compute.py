"""Solar time computation layer — event times, day length, and the year-long dataset for the graph."""

import logging
import math
from datetime import date, datetime, time, timedelta
from functools import lru_cache

from pytz import timezone

from suncountdown.angles import (
    deg_to_rad,
    normalize_angle_360,
    normalize_hours_24,
    rad_to_deg,
)
from suncountdown.config import DEFAULT_TIMEZONE
from suncountdown.models import CalculationContext, SolarEvent
from suncountdown.yeargraph import days_in_year

logger = logging.getLogger(__name__)

_NEVER_SETS = timedelta(hours=23, minutes=59, seconds=59)


def _as_day(day: date | datetime) -> date:
    return day.date() if isinstance(day, datetime) else day


def is_daylight_time(day: date | datetime, tz_name: str = DEFAULT_TIMEZONE) -> bool:
    """Whether local midnight of ``day`` falls in daylight-saving time in the reference zone."""
    local = timezone(tz_name).localize(
        datetime.combine(_as_day(day), time()), is_dst=False
    )
    return bool(local.dst())


def compute_solar_time(
    day: date | datetime,
    latitude: float,
    longitude: float,
    event: SolarEvent,
    is_dst: bool | None = None,
    tz_name: str = DEFAULT_TIMEZONE,
) -> datetime:
    """Return the local clock time of a solar event on a given day.

    Approximate sunrise/sunset algorithm (Almanac for Computers, as used by
    NOAA's simplified calculator). The result is naive: midnight of ``day``
    plus the event's hour in the reference zone's civil time, which is UTC+1
    or UTC+2 depending on that zone's DST calendar.

    Polar days and nights do not fail: when the sun never reaches the event's
    zenith the result is 00:00:00, and when it never drops past it the result
    is 23:59:59.

    Args:
        day: Calendar day (the date part of a datetime is used).
        latitude: Observer latitude in degrees. Not validated.
        longitude: Observer longitude in degrees, east positive.
        event: Which crossing to compute.
        is_dst: Force the +2h (True) or +1h (False) offset. Derived from
            ``tz_name`` when None.
        tz_name: IANA zone supplying the DST calendar.

    Returns:
        Naive datetime on ``day``.
    """
    day = _as_day(day)
    midnight = datetime.combine(day, time())

    n = day.timetuple().tm_yday
    lng_hour = longitude / 15.0
    approx_time = n + (event.base_hour - lng_hour) / 24.0

    # Sun's mean anomaly and true longitude
    m = 0.9856 * approx_time - 3.289
    sun_lng = normalize_angle_360(
        m
        + 1.916 * math.sin(deg_to_rad(m))
        + 0.020 * math.sin(deg_to_rad(2 * m))
        + 282.634
    )

    # Right ascension, moved into the same quadrant as the true longitude
    ra = normalize_angle_360(
        rad_to_deg(math.atan(0.91764 * math.tan(deg_to_rad(sun_lng))))
    )
    ra += math.floor(sun_lng / 90.0) * 90.0 - math.floor(ra / 90.0) * 90.0
    ra /= 15.0

    sin_dec = 0.39782 * math.sin(deg_to_rad(sun_lng))
    cos_dec = math.cos(math.asin(sin_dec))

    if event is SolarEvent.SOLAR_NOON:
        local_mean_time = ra - 0.06571 * approx_time - 6.622
    else:
        lat_rad = deg_to_rad(latitude)
        cos_h = (math.cos(deg_to_rad(event.zenith)) - sin_dec * math.sin(lat_rad)) / (
            cos_dec * math.cos(lat_rad)
        )
        if cos_h > 1:
            return midnight
        if cos_h < -1:
            return midnight + _NEVER_SETS

        h = rad_to_deg(math.acos(cos_h))
        if event.is_dawn:
            h = 360.0 - h
        h /= 15.0
        local_mean_time = h + ra - 0.06571 * approx_time - 6.622

    ut = normalize_hours_24(local_mean_time - lng_hour)

    if is_dst is None:
        is_dst = is_daylight_time(day, tz_name)
    ut = normalize_hours_24(ut + (2.0 if is_dst else 1.0))

    return midnight + timedelta(hours=ut)


def compute_for_context(
    context: CalculationContext, tz_name: str = DEFAULT_TIMEZONE
) -> datetime:
    return compute_solar_time(
        context.day, context.latitude, context.longitude, context.event, tz_name=tz_name
    )


def day_length(
    day: date | datetime,
    latitude: float,
    longitude: float,
    tz_name: str = DEFAULT_TIMEZONE,
) -> float:
    """Seconds between sunrise and sunset, wrapped into [0, 86400)."""
    sunrise = compute_solar_time(
        day, latitude, longitude, SolarEvent.SUNRISE, tz_name=tz_name
    )
    sunset = compute_solar_time(
        day, latitude, longitude, SolarEvent.SUNSET, tz_name=tz_name
    )
    length = (sunset - sunrise).total_seconds()
    if length < 0:
        length += 86400.0
    return length


def format_day_length(seconds: float) -> str:
    hrs = int(seconds // 3600)
    mins = int((seconds % 3600) // 60)
    secs = int(seconds % 60)
    return f"{hrs} hrs {mins} mins {secs} secs"


def event_hour(moment: datetime) -> float:
    """Clock time of ``moment`` as fractional hours since its midnight."""
    return moment.hour + moment.minute / 60.0 + moment.second / 3600.0


@lru_cache(maxsize=8)
def year_event_times(
    year: int,
    latitude: float,
    longitude: float,
    tz_name: str = DEFAULT_TIMEZONE,
) -> dict[SolarEvent, tuple[float, ...]]:
    """Fractional clock hours of every event for every day of ``year``.

    The graph needs 9 x 365 calculator calls, so results are memoized per
    year and location; redraws within the same year reuse them.

    Returns:
        Mapping of event to a tuple of hours indexed by 0-based day of year.
    """
    logger.debug(
        "Computing solar events for %d at (%.4f, %.4f)", year, latitude, longitude
    )
    start = date(year, 1, 1)
    days = [start + timedelta(days=i) for i in range(days_in_year(year))]
    return {
        event: tuple(
            event_hour(compute_solar_time(d, latitude, longitude, event, tz_name=tz_name))
            for d in days
        )
        for event in SolarEvent
    }


def next_event_time(
    now: datetime,
    latitude: float,
    longitude: float,
    event: SolarEvent,
    tz_name: str = DEFAULT_TIMEZONE,
) -> datetime:
    """Today's occurrence of ``event``, or tomorrow's if today's is not after ``now``."""
    today = compute_solar_time(now, latitude, longitude, event, tz_name=tz_name)
    if today > now:
        return today
    return compute_solar_time(
        now + timedelta(days=1), latitude, longitude, event, tz_name=tz_name
    )


def retarget_event(
    target: datetime,
    latitude: float,
    longitude: float,
    event: SolarEvent,
    tz_name: str = DEFAULT_TIMEZONE,
) -> datetime:
    """Keep the target's day but move its clock time to ``event``."""
    return compute_solar_time(target, latitude, longitude, event, tz_name=tz_name)
