"""Data model definitions — explicit boundaries between input, compute, and render layers."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum


@dataclass(frozen=True)
class SolarEventInfo:
    """Fixed per-event record: display label, crossing threshold, dawn/dusk polarity."""

    label: str  # Display name ("Civil Dawn")
    zenith: float  # Zenith angle of the crossing threshold (degrees)
    is_dawn: bool  # Morning root of the hour-angle equation


class SolarEvent(Enum):
    """Named solar events. Attributes come from the _EVENT_INFO table below."""

    SUNRISE = 0
    SUNSET = 1
    CIVIL_DAWN = 2
    CIVIL_DUSK = 3
    NAUTICAL_DAWN = 4
    NAUTICAL_DUSK = 5
    ASTRONOMICAL_DAWN = 6
    ASTRONOMICAL_DUSK = 7
    SOLAR_NOON = 8

    @property
    def info(self) -> SolarEventInfo:
        return _EVENT_INFO[self]

    @property
    def label(self) -> str:
        return _EVENT_INFO[self].label

    @property
    def zenith(self) -> float:
        return _EVENT_INFO[self].zenith

    @property
    def is_dawn(self) -> bool:
        return _EVENT_INFO[self].is_dawn

    @property
    def base_hour(self) -> float:
        """Local hour the approximate-time iteration starts from."""
        if self is SolarEvent.SOLAR_NOON:
            return 12.0
        return 6.0 if self.is_dawn else 18.0

    @classmethod
    def from_label(cls, label: str) -> "SolarEvent":
        for event in cls:
            if _EVENT_INFO[event].label == label:
                return event
        raise ValueError(f"Unknown solar event: {label!r}")


_EVENT_INFO: dict[SolarEvent, SolarEventInfo] = {
    SolarEvent.SUNRISE: SolarEventInfo("Sunrise", 90.833, True),
    SolarEvent.SUNSET: SolarEventInfo("Sunset", 90.833, False),
    SolarEvent.CIVIL_DAWN: SolarEventInfo("Civil Dawn", 96.0, True),
    SolarEvent.CIVIL_DUSK: SolarEventInfo("Civil Dusk", 96.0, False),
    SolarEvent.NAUTICAL_DAWN: SolarEventInfo("Nautical Dawn", 102.0, True),
    SolarEvent.NAUTICAL_DUSK: SolarEventInfo("Nautical Dusk", 102.0, False),
    SolarEvent.ASTRONOMICAL_DAWN: SolarEventInfo("Astronomical Dawn", 108.0, True),
    SolarEvent.ASTRONOMICAL_DUSK: SolarEventInfo("Astronomical Dusk", 108.0, False),
    SolarEvent.SOLAR_NOON: SolarEventInfo("Solar Noon", 90.0, False),
}


@dataclass(frozen=True)
class GeoCoordinate:
    """A point on the globe."""

    latitude: float  # Decimal degrees, [-90, 90]
    longitude: float  # Decimal degrees, [-180, 180]


@dataclass(frozen=True)
class Polygon:
    """A single ring. Rings from the loader are closed (last point repeats the first)."""

    coordinates: tuple[GeoCoordinate, ...]

    @property
    def first_latitude(self) -> float:
        return self.coordinates[0].latitude if self.coordinates else 0.0


@dataclass(frozen=True)
class Country:
    """A named boundary. Islands and multi-polygon parts are separate flat rings."""

    name: str  # "Unknown" when the source feature has no name
    polygons: tuple[Polygon, ...]


@dataclass(frozen=True)
class CalculationContext:
    """Inputs to one solar time calculation. Recomputed on demand."""

    day: date  # Calendar day, timezone-naive
    latitude: float
    longitude: float
    event: SolarEvent


@dataclass
class ViewState:
    """UI state held in the Streamlit session. The core only reads it as plain inputs."""

    target: datetime  # Countdown target (naive, reference-zone civil time)
    event: SolarEvent = SolarEvent.SUNRISE
    latitude: float = 45.8150
    longitude: float = 15.9819
    offset_x: float = 0.0  # Map pan (pixels)
    offset_y: float = 0.0
    scale: float = 2.0  # Map zoom multiplier
