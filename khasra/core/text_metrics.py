# khasra/core/text_metrics.py
"""
Label footprint in screen px from string length and priority class.
A fixed per-character width, not font metrics: the layout must be a pure
function of the text so it comes out the same in every environment.
"""

from __future__ import annotations

from khasra.core.config import (
    PRIMARY_CHAR_WIDTH_PX,
    PRIMARY_HEIGHT_PX,
    PRIMARY_PADDING_PX,
    SECONDARY_CHAR_WIDTH_PX,
    SECONDARY_HEIGHT_PX,
    SECONDARY_PADDING_PX,
)
from khasra.core.types import PRIMARY, PriorityClass


def measure_label_px(text: str, priority: PriorityClass) -> tuple[float, float]:
    """Return (width_px, height_px)."""
    n = len(text or "")
    if priority == PRIMARY:
        return (n * PRIMARY_CHAR_WIDTH_PX + PRIMARY_PADDING_PX, PRIMARY_HEIGHT_PX)
    return (n * SECONDARY_CHAR_WIDTH_PX + SECONDARY_PADDING_PX, SECONDARY_HEIGHT_PX)
