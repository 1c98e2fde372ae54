# khasra/core/geometry.py
"""
Ring measurement: normalization, projection, shoelace area, edge lengths.
All functions are pure; nothing is cached between calls.
"""

from __future__ import annotations

import math

import numpy as np

from khasra.core.config import MIN_DISTINCT_VERTICES
from khasra.core.errors import DEGENERATE_RING, MALFORMED_RING, GeometryError
from khasra.core.projection import project_points
from khasra.core.types import EdgeDimension, LonLat, SurveyStats, VertexRing
from khasra.core.units import convert_area_to_local_units, format_length_label


def _as_lonlat_list(ring: VertexRing) -> list[LonLat]:
    """Convert vertices to float (lon, lat) pairs; extra ordinates (z) are ignored."""
    out: list[LonLat] = []
    for i, vertex in enumerate(ring):
        try:
            lon, lat = float(vertex[0]), float(vertex[1])
        except (TypeError, ValueError, IndexError) as exc:
            raise GeometryError(
                f"Vertex {i} is not a (lon, lat) pair: {vertex!r}", error_key=MALFORMED_RING
            ) from exc
        if not (math.isfinite(lon) and math.isfinite(lat)):
            raise GeometryError(f"Vertex {i} is not finite: {vertex!r}", error_key=MALFORMED_RING)
        out.append((lon, lat))
    return out


def normalize_ring(ring: VertexRing) -> list[LonLat]:
    """Return vertices as float pairs with a repeated closing vertex dropped."""
    pts = _as_lonlat_list(ring)
    if len(pts) > 1 and pts[0] == pts[-1]:
        pts = pts[:-1]
    return pts


def count_distinct_vertices(ring: VertexRing) -> int:
    return len(set(_as_lonlat_list(ring)))


def _require_measurable(pts: list[LonLat]) -> None:
    n = len(set(pts))
    if n < MIN_DISTINCT_VERTICES:
        raise GeometryError(
            f"Ring has {n} distinct vertices; at least {MIN_DISTINCT_VERTICES} required",
            error_key=DEGENERATE_RING,
        )


def project(ring: VertexRing, frame: str) -> np.ndarray:
    """
    Project a ring into planar meters. One row per vertex after dropping a
    repeated closing vertex. Raises ConfigurationError for an unknown frame.
    """
    return project_points(normalize_ring(ring), frame)


def shoelace_area(xy: np.ndarray) -> float:
    """
    Surveyor's formula over planar vertices; the ring is closed implicitly.
    Absolute value, so winding direction does not matter.
    """
    xy = np.asarray(xy, dtype=float)
    if xy.shape[0] < 3:
        return 0.0
    x = xy[:, 0]
    y = xy[:, 1]
    x_next = np.roll(x, -1)
    y_next = np.roll(y, -1)
    return float(abs(np.sum(x * y_next - x_next * y)) / 2.0)


def compute_area(ring: VertexRing, frame: str) -> float:
    """Area in m² of the ring projected into frame. Raises GeometryError if degenerate."""
    pts = normalize_ring(ring)
    _require_measurable(pts)
    xy = project_points(pts, frame)
    return shoelace_area(xy)


def compute_edge_lengths(ring: VertexRing, frame: str) -> list[EdgeDimension]:
    """
    One EdgeDimension per consecutive pair of the original vertices (n - 1 for
    n vertices). No wraparound segment is added; an explicitly closed ring
    closes itself through its final pair.
    """
    pts = _as_lonlat_list(ring)
    _require_measurable(pts)
    xy = project_points(pts, frame)
    lengths = np.hypot(np.diff(xy[:, 0]), np.diff(xy[:, 1]))
    dims: list[EdgeDimension] = []
    for i, length in enumerate(lengths):
        (lon1, lat1), (lon2, lat2) = pts[i], pts[i + 1]
        meters = float(length)
        dims.append(
            EdgeDimension(
                midpoint=((lon1 + lon2) / 2.0, (lat1 + lat2) / 2.0),
                length_meters=meters,
                display_label=format_length_label(meters),
            )
        )
    return dims


def measure_ring(ring: VertexRing, frame: str) -> tuple[SurveyStats, list[EdgeDimension]]:
    """Area stats and edge dimensions for one ring."""
    stats = convert_area_to_local_units(compute_area(ring, frame))
    return stats, compute_edge_lengths(ring, frame)
