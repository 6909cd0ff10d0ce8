"""Year graph layout — maps calendar days to horizontal pixels and clock hours to vertical pixels.

Coordinate system (screen pixels, origin top-left):
  x ∈ [40, width]        Jan 1 at the left margin, one column per day
  y ∈ [0, height - 50]   24:00 at the top, 00:00 on the x axis
"""

import math
from datetime import date, timedelta

GRAPH_LEFT_MARGIN = 40.0
GRAPH_BOTTOM_MARGIN = 50.0

_MONTH_ABBR = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)  # fmt: skip


def days_in_year(year: int) -> int:
    return (date(year + 1, 1, 1) - date(year, 1, 1)).days


def day_of_year(day: date) -> int:
    """1-indexed ordinal day (Jan 1 = 1)."""
    return day.timetuple().tm_yday


def day_index_for_x(x: float, width: float, total_days: int) -> int:
    """0-based day index under pixel ``x``, clamped to the year."""
    effective_width = width - GRAPH_LEFT_MARGIN
    # Halves round up, not to even
    index = math.floor((x - GRAPH_LEFT_MARGIN) * total_days / effective_width + 0.5)
    return max(0, min(total_days - 1, index))


def date_for_x(x: float, width: float, year: int) -> date:
    """Calendar day under pixel ``x`` on a graph of the given width."""
    index = day_index_for_x(x, width, days_in_year(year))
    return date(year, 1, 1) + timedelta(days=index)


def x_for_day_index(index: int, width: float, total_days: int) -> float:
    return GRAPH_LEFT_MARGIN + index * (width - GRAPH_LEFT_MARGIN) / total_days


def x_for_date(day: date, width: float) -> float:
    """Pixel column of ``day`` within its own year. Inverse of ``date_for_x``."""
    return x_for_day_index(day_of_year(day) - 1, width, days_in_year(day.year))


def plot_height(height: float) -> float:
    return height - GRAPH_BOTTOM_MARGIN


def y_for_hour(hour: float, height: float) -> float:
    """Pixel row of a clock hour; hour 0 sits on the x axis."""
    max_height = plot_height(height)
    return max_height - hour * max_height / 24.0


def hour_ticks(height: float) -> list[tuple[float, str]]:
    return [(y_for_hour(h, height), f"{h}:00") for h in range(25)]


def month_ticks(year: int, width: float) -> list[tuple[float, str]]:
    """(x, "Jan") pairs at the first of each month."""
    return [
        (x_for_date(date(year, month, 1), width), _MONTH_ABBR[month - 1])
        for month in range(1, 13)
    ]


def cursor_label(day: date) -> str:
    """``dd Mon`` caption drawn above the cursor line."""
    return f"{day.day:02d} {_MONTH_ABBR[day.month - 1]}"
