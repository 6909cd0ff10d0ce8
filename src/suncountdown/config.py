"""Runtime settings read from the environment (populated from .env by python-dotenv)."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

_ROOT = Path(__file__).parent.parent.parent

DEFAULT_TIMEZONE = "Europe/Zagreb"
DEFAULT_LATITUDE = 45.8150
DEFAULT_LONGITUDE = 15.9819


@dataclass(frozen=True)
class Settings:
    """Application settings. Built once at startup."""

    timezone: str  # IANA zone whose DST calendar selects the +1h/+2h offset
    world_geojson_path: Path
    latitude: float  # Initial location
    longitude: float
    log_level: str


def _float_env(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not a number, using %s", name, raw, default)
        return default


def load_settings() -> Settings:
    """Read settings from os.environ, falling back to defaults.

    Call python-dotenv's ``load_dotenv()`` first to pick up a local .env file.
    """
    geojson = os.environ.get("WORLD_GEOJSON_PATH")
    return Settings(
        timezone=os.environ.get("SUNCOUNTDOWN_TIMEZONE") or DEFAULT_TIMEZONE,
        world_geojson_path=(
            Path(geojson) if geojson else _ROOT / "resources" / "world.geo.json"
        ),
        latitude=_float_env("SUNCOUNTDOWN_LATITUDE", DEFAULT_LATITUDE),
        longitude=_float_env("SUNCOUNTDOWN_LONGITUDE", DEFAULT_LONGITUDE),
        log_level=(os.environ.get("SUNCOUNTDOWN_LOG_LEVEL") or "INFO").upper(),
    )
