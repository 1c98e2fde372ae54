# khasra/core/projection.py
"""
Geographic (lon, lat) -> planar meters under a named reference frame.
Frames are a small fixed set (see config.REFERENCE_FRAMES); unknown names are rejected.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Sequence

import numpy as np
from pyproj import CRS, Transformer

from khasra.core.config import FRAME_BOUNDS_TOLERANCE_DEG, GEOGRAPHIC_CRS, REFERENCE_FRAMES
from khasra.core.errors import PROJECTION_FAILED, ConfigurationError, GeometryError


def available_frames() -> list[str]:
    """Names of the supported reference frames."""
    return list(REFERENCE_FRAMES)


def resolve_frame(name: str) -> str:
    """Return the canonical frame name (case-insensitive) or raise ConfigurationError."""
    key = (name or "").strip().upper()
    if key not in REFERENCE_FRAMES:
        raise ConfigurationError(
            f"Unknown reference frame {name!r}; expected one of {', '.join(REFERENCE_FRAMES)}"
        )
    return key


@lru_cache(maxsize=None)
def _transformer(frame: str, inverse: bool = False) -> Transformer:
    code = REFERENCE_FRAMES[frame]
    if inverse:
        return Transformer.from_crs(code, GEOGRAPHIC_CRS, always_xy=True)
    return Transformer.from_crs(GEOGRAPHIC_CRS, code, always_xy=True)


@lru_cache(maxsize=None)
def frame_bounds(frame: str) -> tuple[float, float, float, float] | None:
    """(west, south, east, north) in degrees from the CRS area of use; None if unpublished."""
    aou = CRS.from_user_input(REFERENCE_FRAMES[resolve_frame(frame)]).area_of_use
    if aou is None:
        return None
    return (aou.west, aou.south, aou.east, aou.north)


def _check_domain(pts: np.ndarray, frame: str, tol: float = FRAME_BOUNDS_TOLERANCE_DEG) -> None:
    bounds = frame_bounds(frame)
    if bounds is None:
        return
    west, south, east, north = bounds
    lon = pts[:, 0]
    lat = pts[:, 1]
    outside = (lon < west - tol) | (lon > east + tol) | (lat < south - tol) | (lat > north + tol)
    if np.any(outside):
        lon_bad, lat_bad = pts[int(np.argmax(outside))]
        raise GeometryError(
            f"({lon_bad}, {lat_bad}) is outside reference frame {frame} "
            f"(lon {west}..{east}, lat {south}..{north})",
            error_key=PROJECTION_FAILED,
        )


def project_points(lonlat: Sequence[Sequence[float]] | np.ndarray, frame: str) -> np.ndarray:
    """
    Project (lon, lat) pairs to planar (x, y) meters. Returns (N, 2) float array.
    Raises ConfigurationError for an unknown frame and GeometryError when a
    coordinate falls outside the frame's area of use or projects to a non-finite value.
    """
    key = resolve_frame(frame)
    pts = np.asarray(lonlat, dtype=float).reshape(-1, 2)
    if pts.shape[0] == 0:
        return np.zeros((0, 2))
    _check_domain(pts, key)
    x, y = _transformer(key).transform(pts[:, 0], pts[:, 1])
    xy = np.column_stack([np.asarray(x, dtype=float), np.asarray(y, dtype=float)])
    if not np.all(np.isfinite(xy)):
        raise GeometryError(
            f"Coordinates fall outside reference frame {key}", error_key=PROJECTION_FAILED
        )
    return xy


def unproject_points(xy: Sequence[Sequence[float]] | np.ndarray, frame: str) -> np.ndarray:
    """Inverse of project_points: planar (x, y) -> (lon, lat). Returns (N, 2) float array."""
    key = resolve_frame(frame)
    pts = np.asarray(xy, dtype=float).reshape(-1, 2)
    if pts.shape[0] == 0:
        return np.zeros((0, 2))
    lon, lat = _transformer(key, inverse=True).transform(pts[:, 0], pts[:, 1])
    return np.column_stack([np.asarray(lon, dtype=float), np.asarray(lat, dtype=float)])
