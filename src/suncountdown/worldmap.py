"""World boundary loading — GeoJSON FeatureCollection to flat per-country ring lists."""

import json
import logging
from pathlib import Path
from typing import Any

from shapely.errors import ShapelyError
from shapely.geometry import shape

from suncountdown.models import Country, GeoCoordinate, Polygon

logger = logging.getLogger(__name__)

_SUPPORTED_TYPES = ("Polygon", "MultiPolygon")

# What shapely raises on coordinates it cannot build a geometry from
_GEOMETRY_ERRORS = (
    ShapelyError,
    ValueError,
    TypeError,
    KeyError,
    IndexError,
    RecursionError,
)


class WorldMapError(Exception):
    """Boundary dataset has an unexpected structure."""


def _ring_to_polygon(ring) -> Polygon:
    """Shapely ring of (lon, lat[, alt]) tuples → Polygon in (lat, lon) order."""
    return Polygon(
        coordinates=tuple(
            GeoCoordinate(latitude=float(pos[1]), longitude=float(pos[0]))
            for pos in ring.coords
        )
    )


def _polygon_rings(part) -> list[Polygon]:
    if part.is_empty:
        return []
    return [_ring_to_polygon(part.exterior)] + [
        _ring_to_polygon(interior) for interior in part.interiors
    ]


def decode_geometry(geometry: Any) -> list[Polygon]:
    """Flatten a geometry into rings, dispatching on its ``type`` field.

    Polygon and MultiPolygon both become a flat list: every ring (outer or
    hole) of every part is its own Polygon. Other types and null geometry
    yield no rings.

    Raises:
        WorldMapError: When the geometry object or its coordinates are invalid.
    """
    if geometry is None:
        return []
    if not isinstance(geometry, dict) or not isinstance(geometry.get("type"), str):
        raise WorldMapError("Geometry must be an object with a string 'type'")
    geom_type = geometry["type"]
    if geom_type not in _SUPPORTED_TYPES:
        return []
    if "coordinates" not in geometry:
        raise WorldMapError(f"{geom_type} geometry has no coordinates")

    try:
        geom = shape(geometry)
        if geom.geom_type == "MultiPolygon":
            return [ring for part in geom.geoms for ring in _polygon_rings(part)]
        return _polygon_rings(geom)
    except _GEOMETRY_ERRORS as e:
        raise WorldMapError(f"Invalid {geom_type} coordinates: {e}") from e


def parse_feature_collection(data: Any) -> tuple[Country, ...]:
    """Convert a decoded GeoJSON FeatureCollection into Country records.

    Args:
        data: Parsed JSON object with a ``features`` list.

    Returns:
        One Country per feature, in source order. Features with unsupported
        geometry are kept with an empty polygon tuple.

    Raises:
        WorldMapError: When the document or a feature is structurally invalid.
    """
    if not isinstance(data, dict) or not isinstance(data.get("features"), list):
        raise WorldMapError("Expected a FeatureCollection with a 'features' list")

    countries: list[Country] = []
    for feature in data["features"]:
        if not isinstance(feature, dict):
            raise WorldMapError("Feature must be an object")
        properties = feature.get("properties") or {}
        name = properties.get("name") if isinstance(properties, dict) else None
        polygons = decode_geometry(feature.get("geometry"))
        countries.append(
            Country(
                name=name if isinstance(name, str) else "Unknown",
                polygons=tuple(polygons),
            )
        )
    return tuple(countries)


def load_world_map(path: Path) -> tuple[Country, ...]:
    """Read the boundary dataset. Any failure leaves the map empty.

    Args:
        path: GeoJSON file path.

    Returns:
        Parsed countries, or an empty tuple if the file is missing or invalid.
    """
    try:
        with path.open(encoding="utf-8") as f:
            data = json.load(f)
        countries = parse_feature_collection(data)
    except OSError as e:
        logger.warning("World map unavailable (%s): %s", path, e)
        return ()
    except (ValueError, RecursionError, WorldMapError) as e:  # JSONDecodeError, bad UTF-8
        logger.warning("World map could not be parsed (%s): %s", path, e)
        return ()

    logger.info("Loaded %d countries from %s", len(countries), path)
    return countries
