# khasra/core/viewport.py
"""
Geographic <-> screen transform for a slippy-map view (Web Mercator, 256 px tiles).
The layout engine only needs something with to_screen/to_geo; Viewport is the
stock implementation hosts and tests use.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Protocol

from khasra.core.config import TILE_SIZE_PX
from khasra.core.projection import project_points, unproject_points

# Half the Web Mercator world extent in meters (pi * WGS84 semi-major axis).
_HALF_WORLD_M = math.pi * 6378137.0
_MERCATOR = "WEB_MERCATOR"


class ScreenTransform(Protocol):
    """Geographic <-> screen mapping valid for the current viewport."""

    def to_screen(self, lon: float, lat: float) -> tuple[float, float]: ...

    def to_geo(self, x: float, y: float) -> tuple[float, float]: ...


@dataclass(frozen=True)
class Viewport:
    """Map view centered on (center_lon, center_lat) at a zoom level; screen y grows downwards."""
    center_lon: float
    center_lat: float
    zoom: float
    width_px: int = 800
    height_px: int = 600

    @property
    def world_px(self) -> float:
        return TILE_SIZE_PX * (2.0 ** self.zoom)

    def _global_px(self, lon: float, lat: float) -> tuple[float, float]:
        x, y = project_points([(lon, lat)], _MERCATOR)[0]
        scale = self.world_px / (2.0 * _HALF_WORLD_M)
        return ((x + _HALF_WORLD_M) * scale, (_HALF_WORLD_M - y) * scale)

    def _origin(self) -> tuple[float, float]:
        cx, cy = self._global_px(self.center_lon, self.center_lat)
        return (cx - self.width_px / 2.0, cy - self.height_px / 2.0)

    def to_screen(self, lon: float, lat: float) -> tuple[float, float]:
        gx, gy = self._global_px(lon, lat)
        ox, oy = self._origin()
        return (float(gx - ox), float(gy - oy))

    def to_geo(self, x: float, y: float) -> tuple[float, float]:
        ox, oy = self._origin()
        scale = (2.0 * _HALF_WORLD_M) / self.world_px
        mx = (x + ox) * scale - _HALF_WORLD_M
        my = _HALF_WORLD_M - (y + oy) * scale
        lon, lat = unproject_points([(mx, my)], _MERCATOR)[0]
        return (float(lon), float(lat))

    def panned(self, dx_px: float, dy_px: float) -> "Viewport":
        """Viewport moved by (dx, dy) screen px."""
        lon, lat = self.to_geo(self.width_px / 2.0 + dx_px, self.height_px / 2.0 + dy_px)
        return Viewport(lon, lat, self.zoom, self.width_px, self.height_px)

    def zoomed(self, zoom: float) -> "Viewport":
        return Viewport(self.center_lon, self.center_lat, zoom, self.width_px, self.height_px)
