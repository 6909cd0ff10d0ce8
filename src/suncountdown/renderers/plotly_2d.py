"""Plotly renderers for the year graph and the world map.

Both figures are drawn directly in screen pixels (origin top-left, y axis
reversed) so that a click's x/y can be fed straight back into
``yeargraph.date_for_x`` or ``MapViewport.unproject``.
"""

from collections import defaultdict
from datetime import date

import numpy as np
import plotly.graph_objects as go

from suncountdown.colors import country_color_css
from suncountdown.models import Country, SolarEvent
from suncountdown.projection import MapViewport
from suncountdown.yeargraph import (
    GRAPH_LEFT_MARGIN,
    cursor_label,
    hour_ticks,
    month_ticks,
    plot_height,
    x_for_date,
)

_BG = "#ffffff"
_AXIS_COLOR = "#000000"
_GRID_COLOR = "#999999"
_MARKER_COLOR = "#ff0000"
_LAND_OUTLINE = "rgba(0,0,0,0.25)"

# Map click targets: one invisible marker every _PICK_STEP pixels
_PICK_STEP = 12

EVENT_COLORS: dict[SolarEvent, str] = {
    SolarEvent.SUNRISE: "#ffd60a",
    SolarEvent.SUNSET: "#ff3b30",
    SolarEvent.CIVIL_DAWN: "rgb(135,206,235)",
    SolarEvent.CIVIL_DUSK: "#af52de",
    SolarEvent.NAUTICAL_DAWN: "#007aff",
    SolarEvent.NAUTICAL_DUSK: "#a2845e",
    SolarEvent.ASTRONOMICAL_DAWN: "#5856d6",
    SolarEvent.ASTRONOMICAL_DUSK: "#000000",
    SolarEvent.SOLAR_NOON: "#34c759",
}


def _pixel_layout(fig: go.Figure, width: float, height: float) -> None:
    fig.update_layout(
        paper_bgcolor=_BG,
        plot_bgcolor=_BG,
        margin=dict(l=0, r=0, t=0, b=0),
        width=int(width),
        height=int(height),
        clickmode="event+select",
        dragmode=False,
        xaxis=dict(
            visible=False, range=[0, width], autorange=False, fixedrange=True
        ),
        yaxis=dict(
            visible=False, range=[height, 0], autorange=False, fixedrange=True
        ),
    )


def _line(
    x0: float,
    y0: float,
    x1: float,
    y1: float,
    color: str,
    width: float = 1,
    dash: str = "solid",
) -> dict:
    return dict(
        type="line",
        x0=x0,
        y0=y0,
        x1=x1,
        y1=y1,
        line=dict(color=color, width=width, dash=dash),
    )


def _label(x: float, y: float, text: str) -> dict:
    return dict(x=x, y=y, text=text, showarrow=False, font=dict(size=8))


def render_sun_graph(
    year: int,
    event_times: dict[SolarEvent, tuple[float, ...]],
    cursor_day: date,
    width: float = 760,
    height: float = 300,
) -> go.Figure:
    """Render a year of solar event times as one line per event.

    x: day of year (Jan 1 at the 40px margin). y: clock hour, 0:00 on the
    axis and 24:00 at the top. A dashed cursor marks ``cursor_day``. Every
    day column carries a transparent bar, so clicking anywhere in the plot
    selects a point whose x is that day's column.

    Args:
        year: Graph year (for month ticks).
        event_times: Output of ``compute.year_event_times``.
        cursor_day: Day under the cursor line.
        width: Figure width in pixels.
        height: Figure height in pixels; the bottom 50px hold ticks and legend.

    Returns:
        Plotly Figure object.
    """
    max_height = plot_height(height)
    total_days = len(next(iter(event_times.values())))
    step = (width - GRAPH_LEFT_MARGIN) / total_days
    xs = GRAPH_LEFT_MARGIN + np.arange(total_days) * step

    pick_trace = go.Bar(
        x=xs,
        y=np.full(total_days, max_height),
        base=0,
        width=step,
        marker=dict(color="rgba(0,0,0,0)", line=dict(width=0)),
        hoverinfo="skip",
        showlegend=False,
        name="days",
    )

    event_traces = []
    for event in SolarEvent:
        hours = np.asarray(event_times[event])
        event_traces.append(
            go.Scatter(
                x=xs,
                y=max_height - hours * max_height / 24.0,
                mode="lines",
                line=dict(color=EVENT_COLORS[event], width=1.5),
                hoverinfo="skip",
                name=event.label,
            )
        )

    fig = go.Figure(data=[pick_trace, *event_traces])
    _pixel_layout(fig, width, height)

    shapes: list[dict] = [
        _line(GRAPH_LEFT_MARGIN, 0, GRAPH_LEFT_MARGIN, max_height, _AXIS_COLOR),
        _line(GRAPH_LEFT_MARGIN, max_height, width, max_height, _AXIS_COLOR),
    ]
    annotations: list[dict] = []

    for y, label in hour_ticks(height):
        shapes.append(_line(35, y, GRAPH_LEFT_MARGIN, y, _GRID_COLOR))
        annotations.append(_label(20, y, label))

    for x, label in month_ticks(year, width):
        shapes.append(_line(x, max_height, x, 0, _GRID_COLOR, dash="dot"))
        annotations.append(_label(x + 15, max_height + 10, label))

    cursor_x = x_for_date(cursor_day, width)
    shapes.append(_line(cursor_x, 0, cursor_x, max_height, _AXIS_COLOR, 2, "dash"))
    annotations.append(_label(cursor_x, 5, f"<b>{cursor_label(cursor_day)}</b>"))

    fig.update_layout(
        shapes=shapes,
        annotations=annotations,
        showlegend=True,
        legend=dict(
            orientation="h",
            x=GRAPH_LEFT_MARGIN / width,
            y=0,
            yanchor="top",
            font=dict(size=8),
        ),
    )
    return fig


def render_world_map(
    countries: tuple[Country, ...],
    viewport: MapViewport,
    marker: tuple[float, float],
) -> go.Figure:
    """Render countries as filled Mercator polygons with a location marker.

    Polygons sharing a colour go into one trace, separated by None gaps.
    A grid of invisible markers makes every pixel region clickable; the
    selected point's x/y are canvas pixels for ``viewport.unproject``.

    Args:
        countries: Output of ``worldmap.load_world_map``.
        viewport: Canvas size, pan and zoom.
        marker: (latitude, longitude) of the selected location.

    Returns:
        Plotly Figure object.
    """
    by_color: dict[str, tuple[list[float | None], list[float | None]]] = defaultdict(
        lambda: ([], [])
    )
    for country in countries:
        for polygon in country.polygons:
            if not polygon.coordinates:
                continue
            lats = np.array([c.latitude for c in polygon.coordinates])
            lons = np.array([c.longitude for c in polygon.coordinates])
            xs, ys = viewport.project_many(lats, lons)
            px, py = by_color[country_color_css(country.name, polygon.first_latitude)]
            px += [*xs.tolist(), xs[0].item(), None]
            py += [*ys.tolist(), ys[0].item(), None]

    land_traces = [
        go.Scatter(
            x=px,
            y=py,
            mode="lines",
            fill="toself",
            fillcolor=color,
            line=dict(color=_LAND_OUTLINE, width=0.5),
            hoverinfo="skip",
            showlegend=False,
        )
        for color, (px, py) in by_color.items()
    ]

    gx, gy = np.meshgrid(
        np.arange(_PICK_STEP / 2, viewport.width, _PICK_STEP),
        np.arange(_PICK_STEP / 2, viewport.height, _PICK_STEP),
    )
    pick_trace = go.Scatter(
        x=gx.ravel(),
        y=gy.ravel(),
        mode="markers",
        marker=dict(size=_PICK_STEP, color="rgba(0,0,0,0)"),
        hoverinfo="none",
        showlegend=False,
        name="pick",
    )

    mx, my = viewport.project(*marker)
    marker_trace = go.Scatter(
        x=[mx],
        y=[my],
        mode="markers",
        marker=dict(
            size=10,
            color="rgba(0,0,0,0)",
            line=dict(color=_MARKER_COLOR, width=2),
        ),
        hoverinfo="skip",
        showlegend=False,
        name="location",
    )

    fig = go.Figure(data=[*land_traces, pick_trace, marker_trace])
    _pixel_layout(fig, viewport.width, viewport.height)
    fig.update_layout(showlegend=False)
    return fig
