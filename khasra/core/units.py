# khasra/core/units.py
"""
Kanal / Marla / Karam conversions.

1 Karam = 5.5 ft, 1 Marla = 9 square Karams, 1 Kanal = 20 Marlas.
Whole units are floored with a small epsilon so that values a hair below a
boundary (float noise) do not show up as e.g. "20.00 M".
"""

from __future__ import annotations

import math

from khasra.core.config import (
    FEET_PER_KARAM,
    MARLAS_PER_KANAL,
    METERS_PER_FOOT,
    METERS_PER_KARAM,
    SQUARE_METERS_PER_MARLA,
    UNIT_EPSILON,
)
from khasra.core.types import SurveyStats


def square_meters_to_square_feet(area_sq_m: float) -> float:
    return area_sq_m / (METERS_PER_FOOT ** 2)


def meters_to_karams(meters: float) -> float:
    return meters / METERS_PER_KARAM


def _area_label(kanals: int, marlas: float) -> str:
    if kanals > 0 and marlas >= 0.01:
        return f"{kanals} K - {marlas:.2f} M"
    if kanals > 0:
        return f"{kanals} Kanal"
    return f"{marlas:.2f} Marla"


def convert_area_to_local_units(area_sq_m: float) -> SurveyStats:
    """
    Convert m² to Kanal/Marla. remainder_unit is always in [0, 20): a remainder
    that rounds to 20.00 is folded into the next Kanal.
    """
    area = max(0.0, float(area_sq_m))
    total_marlas = area / SQUARE_METERS_PER_MARLA
    kanals = int(math.floor(total_marlas / MARLAS_PER_KANAL + UNIT_EPSILON))
    marlas = round(total_marlas - MARLAS_PER_KANAL * kanals, 2)
    if marlas >= MARLAS_PER_KANAL:
        kanals += 1
        marlas = 0.0
    marlas = max(0.0, marlas)
    return SurveyStats(
        area_square_meters=area,
        area_square_feet=square_meters_to_square_feet(area),
        total_local_units=total_marlas,
        whole_unit_count=kanals,
        remainder_unit=marlas,
        display_label=_area_label(kanals, marlas),
    )


def format_length_label(meters: float) -> str:
    """
    Edge length as "<karam>k - <feet>ft", "<karam>k" or "<feet>ft".
    Remainder feet are rounded to one decimal; 5.5 ft rolls over into a Karam.
    """
    meters = max(0.0, float(meters))
    karams = int(math.floor(meters / METERS_PER_KARAM + UNIT_EPSILON))
    feet = round((meters - karams * METERS_PER_KARAM) / METERS_PER_FOOT, 1)
    if feet >= FEET_PER_KARAM:
        karams += 1
        feet = 0.0
    feet = max(0.0, feet)
    if karams == 0:
        return f"{feet:.1f}ft"
    if feet == 0.0:
        return f"{karams}k"
    return f"{karams}k - {feet:.1f}ft"
