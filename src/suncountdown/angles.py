"""Degree/radian conversion and reduction of angles and hours to their canonical ranges."""

import math


def deg_to_rad(degrees: float) -> float:
    return degrees * math.pi / 180.0


def rad_to_deg(radians: float) -> float:
    return radians * 180.0 / math.pi


def _normalize(value: float, period: float) -> float:
    reduced = value % period
    # -1e-20 % 360.0 rounds to 360.0; the canonical range is half-open
    if reduced >= period:
        return 0.0
    return reduced


def normalize_angle_360(degrees: float) -> float:
    """Reduce an angle into [0, 360)."""
    return _normalize(degrees, 360.0)


def normalize_hours_24(hours: float) -> float:
    """Reduce an hour-of-day value into [0, 24)."""
    return _normalize(hours, 24.0)
