"""Structure checks for the Plotly figures."""

from datetime import date

import pytest

from suncountdown.compute import year_event_times
from suncountdown.models import Country, GeoCoordinate, Polygon, SolarEvent
from suncountdown.projection import MapViewport
from suncountdown.renderers.plotly_2d import render_sun_graph, render_world_map
from suncountdown.yeargraph import x_for_date


def test_sun_graph_has_one_line_per_event() -> None:
    times = year_event_times(2024, 45.8150, 15.9819)
    fig = render_sun_graph(2024, times, date(2024, 6, 21), 760, 300)

    names = [trace.name for trace in fig.data]
    assert names[0] == "days"
    assert names[1:] == [event.label for event in SolarEvent]
    assert len(fig.data[0].x) == 366
    assert fig.layout.width == 760


def test_sun_graph_cursor_sits_on_the_day_column() -> None:
    times = year_event_times(2024, 45.8150, 15.9819)
    fig = render_sun_graph(2024, times, date(2024, 6, 21), 760, 300)

    cursor = fig.layout.shapes[-1]
    assert cursor.x0 == pytest.approx(x_for_date(date(2024, 6, 21), 760))
    assert fig.layout.annotations[-1].text == "<b>21 Jun</b>"


def test_world_map_groups_polygons_by_colour() -> None:
    ring = (GeoCoordinate(40.0, 10.0), GeoCoordinate(40.0, 20.0), GeoCoordinate(50.0, 20.0))
    countries = (
        Country("Squareland", (Polygon(ring), Polygon(ring))),
        Country("Otherland", (Polygon(ring),)),
        Country("Empty", (Polygon(()),)),
    )
    viewport = MapViewport(900, 600)
    fig = render_world_map(countries, viewport, (45.8150, 15.9819))

    # two land colours, the click grid, the marker
    assert len(fig.data) == 4
    land = fig.data[0]
    assert list(land.y).count(None) == 2
    assert land.fill == "toself"

    marker = fig.data[-1]
    assert (marker.x[0], marker.y[0]) == pytest.approx(viewport.project(45.8150, 15.9819))


def test_world_map_without_data_still_draws_marker() -> None:
    fig = render_world_map((), MapViewport(300, 200), (0.0, 0.0))
    assert [trace.name for trace in fig.data] == ["pick", "location"]
    assert fig.data[-1].x[0] == pytest.approx(150.0)
