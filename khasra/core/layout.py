# khasra/core/layout.py
"""
Label de-confliction: greedy first-fit over a fixed offset table, one full
pass per trigger (selection, label field, pan, zoom). No state survives a pass.

Primary (area) labels go first so dimension labels never take their slot.
When no offset is free the label is jittered around its anchor and accepted
anyway, so every candidate gets exactly one result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

import numpy as np
from shapely.geometry.base import BaseGeometry
from shapely.ops import unary_union

from khasra.core.config import (
    JITTER_MAX_PX,
    LABEL_OFFSETS_PX,
    OCCUPIED_MARGIN_PX,
    SEED,
)
from khasra.core.text_metrics import measure_label_px
from khasra.core.types import PRIMARY, Box, LabelCandidate, PlacementResult
from khasra.core.viewport import ScreenTransform

logger = logging.getLogger(__name__)


@dataclass
class LayoutSummary:
    """Summary of one placement pass."""
    n_labels: int
    placed_count: int
    fallback_count: int
    results: list[PlacementResult]


def order_candidates(candidates: Sequence[LabelCandidate]) -> list[LabelCandidate]:
    """Stable partition: every primary before every secondary, input order kept within a class."""
    primary = [c for c in candidates if c.priority == PRIMARY]
    secondary = [c for c in candidates if c.priority != PRIMARY]
    ordered = primary + secondary
    if ordered != list(candidates):
        logger.debug("Primary labels moved ahead of secondary labels (%d primary).", len(primary))
    return ordered


def occupied_union(occupied: Sequence[Box]) -> BaseGeometry:
    """Union of the occupied boxes as one shapely geometry (empty when nothing is placed)."""
    return unary_union([b.to_polygon() for b in occupied])


def overlaps_any(rect: Box, occupied: Sequence[Box] | BaseGeometry) -> bool:
    """True if rect intersects or touches the occupied set."""
    if not isinstance(occupied, BaseGeometry):
        occupied = occupied_union(occupied)
    return rect.to_polygon().intersects(occupied)


def find_free_slot(
    anchor_xy: tuple[float, float],
    size: tuple[float, float],
    occupied: Sequence[Box],
    offsets: Sequence[tuple[float, float]] = LABEL_OFFSETS_PX,
) -> tuple[int, Box] | None:
    """
    First offset whose label box overlaps nothing in occupied.
    Returns (offset_index, box) or None when every offset is taken.
    """
    ax, ay = anchor_xy
    width, height = size
    occupied_geom = occupied_union(occupied)
    for i, (dx, dy) in enumerate(offsets):
        rect = Box.centered(ax + dx, ay + dy, width, height)
        if not overlaps_any(rect, occupied_geom):
            return i, rect
    return None


def _jitter(
    anchor_xy: tuple[float, float],
    size: tuple[float, float],
    rng: np.random.Generator,
    max_px: float = JITTER_MAX_PX,
) -> Box:
    dx, dy = rng.uniform(-max_px, max_px, size=2)
    return Box.centered(anchor_xy[0] + float(dx), anchor_xy[1] + float(dy), size[0], size[1])


def place_labels(
    candidates: Sequence[LabelCandidate],
    transform: ScreenTransform,
    rng: np.random.Generator | None = None,
    seed: int | None = SEED,
    margin_px: float = OCCUPIED_MARGIN_PX,
    offsets: Sequence[tuple[float, float]] = LABEL_OFFSETS_PX,
) -> list[PlacementResult]:
    """
    Place every candidate; returns results in processing order (primary first).
    Accepted (non-fallback) boxes are pairwise disjoint. rng drives the jitter
    fallback only; pass a seeded generator to make fallbacks reproducible.
    """
    if rng is None:
        rng = np.random.default_rng(seed)
    occupied: tuple[Box, ...] = ()
    results: list[PlacementResult] = []

    for cand in order_candidates(candidates):
        anchor_xy = transform.to_screen(cand.anchor[0], cand.anchor[1])
        size = measure_label_px(cand.text, cand.priority)
        slot = find_free_slot(anchor_xy, size, occupied, offsets)
        if slot is not None:
            offset_index, rect = slot
            occupied = occupied + (rect.padded(margin_px),)
            mode = "offset"
        else:
            offset_index, rect = None, _jitter(anchor_xy, size, rng)
            mode = "jitter_fallback"
            logger.debug("No free slot for label %r; jittered.", cand.id)
        cx, cy = rect.center
        results.append(
            PlacementResult(
                candidate_id=cand.id,
                text=cand.text,
                priority=cand.priority,
                screen_position=(cx, cy),
                geo_position=transform.to_geo(cx, cy),
                occupied_box=rect,
                mode=mode,
                offset_index=offset_index,
            )
        )
    return results


def run_label_layout(
    candidates: Sequence[LabelCandidate],
    transform: ScreenTransform,
    rng: np.random.Generator | None = None,
    seed: int | None = SEED,
) -> LayoutSummary:
    """Run one placement pass and summarize it."""
    results = place_labels(candidates, transform, rng=rng, seed=seed)
    fallback_count = sum(1 for r in results if r.is_fallback)
    logger.debug(
        "Label layout: %d labels, %d placed, %d jittered.",
        len(results), len(results) - fallback_count, fallback_count,
    )
    return LayoutSummary(
        n_labels=len(results),
        placed_count=len(results) - fallback_count,
        fallback_count=fallback_count,
        results=results,
    )
