# khasra/core/features.py
"""
Measure GeoJSON-like parcel features (Polygon / MultiPolygon).
A feature that cannot be measured is skipped and reported; the rest of the
batch is still measured.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from shapely.errors import ShapelyError
from shapely.geometry import shape

from khasra.core.config import DEFAULT_REFERENCE_FRAME
from khasra.core.errors import UNSUPPORTED_GEOMETRY, GeometryError, KhasraError
from khasra.core.geometry import compute_area, compute_edge_lengths
from khasra.core.projection import resolve_frame
from khasra.core.types import EdgeDimension, LonLat, ParcelMeasurement, VertexRing
from khasra.core.units import convert_area_to_local_units

logger = logging.getLogger(__name__)


@dataclass
class MeasurementBatch:
    """Measured parcels plus the ids that were skipped (id -> error key)."""
    frame: str
    measurements: list[ParcelMeasurement]
    skipped: dict[str, str] = field(default_factory=dict)


def extract_rings(geometry: Mapping[str, Any]) -> list[list[VertexRing]]:
    """
    Return polygon parts as [exterior, *holes] ring lists.
    Polygon -> one part; MultiPolygon -> one per polygon. Other types raise GeometryError.
    """
    if not geometry:
        raise GeometryError("Feature has no geometry", error_key=UNSUPPORTED_GEOMETRY)
    gtype = geometry.get("type")
    coords = geometry.get("coordinates") or []
    if gtype == "Polygon":
        parts = [coords]
    elif gtype == "MultiPolygon":
        parts = list(coords)
    else:
        raise GeometryError(f"Unsupported geometry type {gtype!r}", error_key=UNSUPPORTED_GEOMETRY)
    parts = [list(p) for p in parts if p]
    if not parts:
        raise GeometryError(f"{gtype} has no rings", error_key=UNSUPPORTED_GEOMETRY)
    return parts


def _center(geometry: Mapping[str, Any]) -> LonLat:
    """Centroid of the feature in (lon, lat); anchor for the area label."""
    try:
        c = shape(geometry).centroid
    except (ShapelyError, ValueError) as exc:
        raise GeometryError(f"Cannot build polygon: {exc}") from exc
    if c.is_empty:
        raise GeometryError("Feature centroid is empty")
    return (float(c.x), float(c.y))


def measure_feature(
    feature: Mapping[str, Any],
    frame: str = DEFAULT_REFERENCE_FRAME,
    feature_id: str | None = None,
) -> ParcelMeasurement:
    """
    Area (exteriors minus holes) and edge dimensions of every exterior ring.
    Raises GeometryError / ConfigurationError.
    """
    key = resolve_frame(frame)
    geometry = feature.get("geometry") or {}
    area = 0.0
    dimensions: list[EdgeDimension] = []
    for rings in extract_rings(geometry):
        exterior, holes = rings[0], rings[1:]
        area += compute_area(exterior, key)
        for hole in holes:
            area -= compute_area(hole, key)
        dimensions.extend(compute_edge_lengths(exterior, key))
    fid = feature_id if feature_id is not None else str(feature.get("id", ""))
    return ParcelMeasurement(
        feature_id=fid,
        frame=key,
        stats=convert_area_to_local_units(max(0.0, area)),
        dimensions=dimensions,
        center=_center(geometry),
        properties=dict(feature.get("properties") or {}),
    )


def iter_features(collection: Mapping[str, Any] | Iterable[Mapping[str, Any]]) -> list[Mapping[str, Any]]:
    """Accept a FeatureCollection mapping or a plain sequence of features."""
    if isinstance(collection, Mapping):
        if collection.get("type") == "FeatureCollection":
            return list(collection.get("features") or [])
        return [collection]
    return list(collection)


def _unique_feature_id(feature: Mapping[str, Any], index: int, seen: set[str]) -> str:
    raw = feature.get("id")
    fid = str(raw) if raw is not None else f"poly-{index}"
    if fid in seen:
        dup = fid
        fid = f"{dup}#{index}"
        while fid in seen:
            fid += "#"
        logger.warning("Duplicate feature id %s at index %d; using %s.", dup, index, fid)
    seen.add(fid)
    return fid


def measure_features(
    collection: Mapping[str, Any] | Iterable[Mapping[str, Any]],
    frame: str = DEFAULT_REFERENCE_FRAME,
) -> MeasurementBatch:
    """
    Measure every feature. Ids: the feature's "id" when present, else poly-<index>;
    a repeated id gets "#<index>" appended so ids stay unique within the batch.
    Errors (including an unknown frame) skip only the feature that raised them.
    """
    batch = MeasurementBatch(frame=frame, measurements=[])
    seen: set[str] = set()
    for index, feature in enumerate(iter_features(collection)):
        fid = _unique_feature_id(feature, index, seen)
        try:
            batch.measurements.append(measure_feature(feature, frame, feature_id=fid))
        except KhasraError as exc:
            batch.skipped[fid] = exc.error_key
            logger.warning("Skipping feature %s: %s", fid, exc)
    logger.debug(
        "Measured %d feature(s) in %s, skipped %d.",
        len(batch.measurements), frame, len(batch.skipped),
    )
    return batch
