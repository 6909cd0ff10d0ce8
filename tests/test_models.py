"""Tests for the solar event table and geometry records."""

from dataclasses import fields
from datetime import datetime

import pytest

from suncountdown.models import GeoCoordinate, Polygon, SolarEvent, ViewState


def test_event_table() -> None:
    assert len(SolarEvent) == 9
    assert SolarEvent.SUNRISE.zenith == 90.833
    assert SolarEvent.CIVIL_DUSK.zenith == 96.0
    assert SolarEvent.NAUTICAL_DAWN.zenith == 102.0
    assert SolarEvent.ASTRONOMICAL_DUSK.zenith == 108.0
    assert SolarEvent.SOLAR_NOON.label == "Solar Noon"


def test_dawn_polarity_and_base_hour() -> None:
    dawns = {e for e in SolarEvent if e.is_dawn}
    assert dawns == {
        SolarEvent.SUNRISE,
        SolarEvent.CIVIL_DAWN,
        SolarEvent.NAUTICAL_DAWN,
        SolarEvent.ASTRONOMICAL_DAWN,
    }
    assert SolarEvent.CIVIL_DAWN.base_hour == 6.0
    assert SolarEvent.SUNSET.base_hour == 18.0
    assert SolarEvent.SOLAR_NOON.base_hour == 12.0


def test_from_label() -> None:
    assert SolarEvent.from_label("Nautical Dusk") is SolarEvent.NAUTICAL_DUSK
    with pytest.raises(ValueError):
        SolarEvent.from_label("Moonrise")


def test_polygon_first_latitude() -> None:
    assert Polygon(coordinates=()).first_latitude == 0.0
    ring = Polygon((GeoCoordinate(-33.9, 18.4), GeoCoordinate(-34.0, 18.5)))
    assert ring.first_latitude == -33.9


def test_view_state_holds_only_what_the_ui_reads() -> None:
    view = ViewState(target=datetime(2024, 6, 21, 5, 6, 23))
    assert [f.name for f in fields(view)] == [
        "target",
        "event",
        "latitude",
        "longitude",
        "offset_x",
        "offset_y",
        "scale",
    ]
    assert (view.event, view.scale) == (SolarEvent.SUNRISE, 2.0)
