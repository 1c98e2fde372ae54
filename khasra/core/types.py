# khasra/core/types.py
"""
Dataclasses for survey stats, edge dimensions, label candidates and placement results.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Sequence

from shapely.geometry import Polygon, box

LonLat = tuple[float, float]
VertexRing = Sequence[Sequence[float]]
"""Ordered (lon, lat) pairs; the closing vertex may or may not be repeated."""

PriorityClass = Literal["primary", "secondary"]
PRIMARY: PriorityClass = "primary"
SECONDARY: PriorityClass = "secondary"

PlacementMode = Literal["offset", "jitter_fallback"]


@dataclass(frozen=True)
class SurveyStats:
    """Area of one parcel in m², ft² and Kanal/Marla."""
    area_square_meters: float
    area_square_feet: float
    total_local_units: float  # total Marlas
    whole_unit_count: int  # Kanals
    remainder_unit: float  # Marlas in [0, 20), rounded to 2 decimals
    display_label: str


@dataclass(frozen=True)
class EdgeDimension:
    """One boundary segment: label anchor at the geographic midpoint."""
    midpoint: LonLat
    length_meters: float
    display_label: str


@dataclass(frozen=True)
class LabelCandidate:
    """Pending text annotation. id must be stable for a given feature/edge across rebuilds."""
    id: str
    anchor: LonLat
    text: str
    priority: PriorityClass = SECONDARY


@dataclass(frozen=True)
class Box:
    """Axis-aligned screen rectangle (y grows downwards)."""
    x1: float
    y1: float
    x2: float
    y2: float

    @classmethod
    def centered(cls, cx: float, cy: float, width: float, height: float) -> "Box":
        hw = width / 2.0
        hh = height / 2.0
        return cls(cx - hw, cy - hh, cx + hw, cy + hh)

    @property
    def center(self) -> tuple[float, float]:
        return ((self.x1 + self.x2) / 2.0, (self.y1 + self.y2) / 2.0)

    def padded(self, margin: float) -> "Box":
        return Box(self.x1 - margin, self.y1 - margin, self.x2 + margin, self.y2 + margin)

    def to_polygon(self) -> Polygon:
        return box(self.x1, self.y1, self.x2, self.y2)

    def is_disjoint(self, other: "Box") -> bool:
        """True only when strictly separated; touching boxes overlap."""
        return self.to_polygon().disjoint(other.to_polygon())


@dataclass
class PlacementResult:
    """Final position of one candidate for one placement pass."""
    candidate_id: str
    text: str
    priority: PriorityClass
    screen_position: tuple[float, float]  # label center, screen px
    geo_position: LonLat  # screen_position mapped back to (lon, lat)
    occupied_box: Box  # label footprint; the occupied list holds it grown by OCCUPIED_MARGIN_PX
    mode: PlacementMode
    offset_index: int | None = None  # index into the offset table; None on fallback

    @property
    def is_fallback(self) -> bool:
        return self.mode == "jitter_fallback"


@dataclass
class ParcelMeasurement:
    """Everything measured for one feature under one reference frame."""
    feature_id: str
    frame: str
    stats: SurveyStats
    dimensions: list[EdgeDimension]
    center: LonLat
    properties: dict = field(default_factory=dict)
