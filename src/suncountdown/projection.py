"""Spherical Mercator projection with pan and zoom, centred in a canvas.

Forward projection clamps latitude to ±89.5° to stay clear of the pole
singularity. The inverse needs no clamp: 2·atan(exp(y)) − π/2 is always
inside [−90°, 90°].
"""

import math
from dataclasses import dataclass, replace

import numpy as np

from suncountdown.angles import deg_to_rad, rad_to_deg

MAX_MERCATOR_LATITUDE = 89.5

# Below this the inverse would divide by ~0; taps are ignored instead.
_MIN_PROJ_SCALE = 1e-9


def clamp_latitude(latitude: float) -> float:
    return max(-MAX_MERCATOR_LATITUDE, min(MAX_MERCATOR_LATITUDE, latitude))


def mercator_y(latitude: float) -> float:
    lat_rad = deg_to_rad(clamp_latitude(latitude))
    return math.log(math.tan(math.pi / 4 + lat_rad / 2))


def mercator_y_to_latitude(y: float) -> float:
    # 2·atan(exp(y)) − π/2, written with tanh so far-off-map taps can't overflow exp
    return rad_to_deg(2 * math.atan(math.tanh(y / 2)))


@dataclass(frozen=True)
class MapViewport:
    """Canvas size plus the user's pan (pixels) and zoom (multiplier)."""

    width: float
    height: float
    offset_x: float = 0.0
    offset_y: float = 0.0
    scale: float = 2.0

    @property
    def proj_scale(self) -> float:
        """Pixels per radian of longitude."""
        return self.scale * min(self.width, self.height) / (2 * math.pi)

    @property
    def origin(self) -> tuple[float, float]:
        """Pixel position of (0°, 0°)."""
        return self.width / 2 + self.offset_x, self.height / 2 + self.offset_y

    def project(self, latitude: float, longitude: float) -> tuple[float, float]:
        """Geographic degrees → canvas pixels (y grows downward)."""
        origin_x, origin_y = self.origin
        s = self.proj_scale
        return (
            origin_x + s * deg_to_rad(longitude),
            origin_y - s * mercator_y(latitude),
        )

    def project_many(
        self, latitudes: np.ndarray, longitudes: np.ndarray
    ) -> tuple[np.ndarray, np.ndarray]:
        """Vectorised ``project`` for whole rings."""
        origin_x, origin_y = self.origin
        s = self.proj_scale
        lat_rad = np.radians(
            np.clip(latitudes, -MAX_MERCATOR_LATITUDE, MAX_MERCATOR_LATITUDE)
        )
        xs = origin_x + s * np.radians(longitudes)
        ys = origin_y - s * np.log(np.tan(np.pi / 4 + lat_rad / 2))
        return xs, ys

    def unproject(self, x: float, y: float) -> tuple[float, float] | None:
        """Canvas pixels → (latitude, longitude) degrees.

        Returns None when the zoom is so small that the inverse is undefined.
        """
        s = self.proj_scale
        if abs(s) < _MIN_PROJ_SCALE:
            return None
        origin_x, origin_y = self.origin
        lon_rad = (x - origin_x) / s
        return mercator_y_to_latitude((origin_y - y) / s), rad_to_deg(lon_rad)

    def panned(self, dx: float, dy: float) -> "MapViewport":
        return replace(self, offset_x=self.offset_x + dx, offset_y=self.offset_y + dy)

    def zoomed(self, factor: float) -> "MapViewport":
        return replace(self, scale=self.scale * factor)
