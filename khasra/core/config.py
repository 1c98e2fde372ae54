# khasra/core/config.py
"""
Central configuration for parcel measurement and label placement.
All tunable values live here; no magic numbers in other modules.
"""

from __future__ import annotations

import logging
import os

# ----- Unit chain -----
METERS_PER_FOOT: float = 0.3048
"""International foot."""

FEET_PER_KARAM: float = 5.5
"""1 Karam = 5.5 ft."""

METERS_PER_KARAM: float = FEET_PER_KARAM * METERS_PER_FOOT
"""1.6764 m."""

SQUARE_KARAMS_PER_MARLA: float = 9.0
"""1 Marla = 9 square Karams."""

MARLAS_PER_KANAL: int = 20
"""1 Kanal = 20 Marlas."""

SQUARE_METERS_PER_MARLA: float = SQUARE_KARAMS_PER_MARLA * METERS_PER_KARAM ** 2
"""25.29285264 m²."""

UNIT_EPSILON: float = 1e-4
"""Guard added before flooring whole units, so float noise does not flicker across a boundary."""

# ----- Reference frames -----
REFERENCE_FRAMES: dict[str, str] = {
    "UTM_42N": "EPSG:32642",
    "UTM_43N": "EPSG:32643",
    "KALIANPUR_1962_UTM_42N": "EPSG:24312",
    "KALIANPUR_1962_UTM_43N": "EPSG:24313",
    "WEB_MERCATOR": "EPSG:3857",
}
"""Supported planar frames: name -> EPSG code. Input coordinates are always EPSG:4326 (lon, lat)."""

GEOGRAPHIC_CRS: str = "EPSG:4326"

FRAME_BOUNDS_TOLERANCE_DEG: float = 0.5
"""Slack (degrees) around a frame's published area of use; parcels just over a zone edge still project."""

DEFAULT_REFERENCE_FRAME: str = "UTM_43N"

MIN_DISTINCT_VERTICES: int = 3

# ----- Label footprint (fixed per-character heuristic) -----
PRIMARY_CHAR_WIDTH_PX: float = 7.5
PRIMARY_PADDING_PX: float = 12.0
PRIMARY_HEIGHT_PX: float = 26.0

SECONDARY_CHAR_WIDTH_PX: float = 6.0
SECONDARY_PADDING_PX: float = 8.0
SECONDARY_HEIGHT_PX: float = 18.0

# ----- Collision avoidance -----
NEAR_OFFSET_PX: float = 24.0
"""Radius of the first ring of cardinal and diagonal offsets."""

FAR_OFFSET_PX: float = 48.0
"""Radius of the outer cardinal offsets."""

OCCUPIED_MARGIN_PX: float = 4.0
"""Each accepted box is grown by this much before it is recorded as occupied."""

LABEL_OFFSETS_PX: tuple[tuple[float, float], ...] = (
    (0.0, 0.0),
    (0.0, -NEAR_OFFSET_PX),
    (NEAR_OFFSET_PX, 0.0),
    (0.0, NEAR_OFFSET_PX),
    (-NEAR_OFFSET_PX, 0.0),
    (NEAR_OFFSET_PX, -NEAR_OFFSET_PX),
    (NEAR_OFFSET_PX, NEAR_OFFSET_PX),
    (-NEAR_OFFSET_PX, NEAR_OFFSET_PX),
    (-NEAR_OFFSET_PX, -NEAR_OFFSET_PX),
    (0.0, -FAR_OFFSET_PX),
    (FAR_OFFSET_PX, 0.0),
    (0.0, FAR_OFFSET_PX),
    (-FAR_OFFSET_PX, 0.0),
)
"""Tried in order: center; N, E, S, W near; NE, SE, SW, NW near; N, E, S, W far. Screen y grows downwards."""

JITTER_MAX_PX: float = 30.0
"""Fallback jitter is uniform in [-JITTER_MAX_PX, JITTER_MAX_PX] on each axis."""

SEED: int | None = 42
"""Seed for the jitter fallback; None for non-deterministic."""

# ----- Viewport -----
TILE_SIZE_PX: int = 256
"""Slippy-map tile size; world width in px is TILE_SIZE_PX * 2**zoom."""

# ----- Rendering -----
RENDER_WIDTH_PX: int = 800
RENDER_HEIGHT_PX: int = 600

# ----- Logging -----
LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO").upper()
"""Set env LOG_LEVEL=DEBUG to see layout summaries and fallbacks."""


def configure_logging(level: str | None = None) -> None:
    """Configure root logging from LOG_LEVEL (or the given level name)."""
    name = (level or LOG_LEVEL).upper()
    logging.basicConfig(level=getattr(logging, name, logging.INFO))
