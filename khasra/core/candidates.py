# khasra/core/candidates.py
"""
Build the ordered label candidate list from parcel measurements:
all area (primary) labels first, then edge (secondary) labels.
Ids are derived from feature id and edge index so they stay stable across rebuilds.
"""

from __future__ import annotations

from typing import Sequence

from khasra.core.types import PRIMARY, SECONDARY, LabelCandidate, ParcelMeasurement

PROPERTY_FIELD_PREFIX = "property:"


def area_label_text(measurement: ParcelMeasurement, field: str = "area") -> str:
    """
    Text of the area label. field is "area" (Kanal/Marla), "square_feet", "id",
    or "property:<name>" to show a feature attribute such as the Khasra number
    (falls back to the feature id when the attribute is missing).
    """
    if field == "square_feet":
        return f"{measurement.stats.area_square_feet:,.0f} sq ft"
    if field == "id":
        return measurement.feature_id
    if field.startswith(PROPERTY_FIELD_PREFIX):
        value = measurement.properties.get(field[len(PROPERTY_FIELD_PREFIX):])
        return str(value) if value is not None else measurement.feature_id
    return measurement.stats.display_label


def _label_keys(measurements: Sequence[ParcelMeasurement]) -> list[str]:
    """Feature ids, with "#<position>" appended to repeats so candidate ids never collide."""
    seen: set[str] = set()
    keys: list[str] = []
    for pos, m in enumerate(measurements):
        key = m.feature_id
        if key in seen:
            key = f"{key}#{pos}"
            while key in seen:
                key += "#"
        seen.add(key)
        keys.append(key)
    return keys


def build_label_candidates(
    measurements: Sequence[ParcelMeasurement],
    area_label_field: str = "area",
    include_dimensions: bool = True,
) -> list[LabelCandidate]:
    keys = _label_keys(measurements)
    out: list[LabelCandidate] = [
        LabelCandidate(
            id=f"{key}-area",
            anchor=m.center,
            text=area_label_text(m, area_label_field),
            priority=PRIMARY,
        )
        for key, m in zip(keys, measurements)
    ]
    if include_dimensions:
        for key, m in zip(keys, measurements):
            for k, dim in enumerate(m.dimensions):
                out.append(
                    LabelCandidate(
                        id=f"{key}-dim-{k}",
                        anchor=dim.midpoint,
                        text=dim.display_label,
                        priority=SECONDARY,
                    )
                )
    return out
