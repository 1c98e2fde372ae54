# tests/test_layout_collisions.py
"""
Label de-confliction: accepted boxes never overlap, primary labels win
contested slots, jitter fallback is bounded and reproducible with a seed.
"""

from __future__ import annotations

import itertools

import numpy as np
import pytest

from khasra.core.config import JITTER_MAX_PX, LABEL_OFFSETS_PX
from khasra.core.layout import (
    find_free_slot,
    order_candidates,
    overlaps_any,
    place_labels,
    run_label_layout,
)
from khasra.core.types import PRIMARY, SECONDARY, Box, LabelCandidate


def _assert_accepted_disjoint(results) -> None:
    accepted = [r for r in results if not r.is_fallback]
    for a, b in itertools.combinations(accepted, 2):
        assert a.occupied_box.is_disjoint(b.occupied_box), (a.candidate_id, b.candidate_id)


def test_box_touching_counts_as_overlap() -> None:
    a = Box(0, 0, 10, 10)
    assert not a.is_disjoint(Box(10, 0, 20, 10))
    assert a.is_disjoint(Box(10.5, 0, 20, 10))
    assert a.is_disjoint(Box(0, -10, 10, -0.1))


def test_offset_table_shape() -> None:
    assert len(LABEL_OFFSETS_PX) == 13
    assert LABEL_OFFSETS_PX[0] == (0.0, 0.0)


def test_find_free_slot_first_fit() -> None:
    occupied = (Box.centered(0, 0, 10, 10),)
    slot = find_free_slot((0.0, 0.0), (10.0, 10.0), occupied)
    assert slot is not None
    index, rect = slot
    assert index == 1
    assert rect.center == pytest.approx((0.0, -24.0))


def test_find_free_slot_none_when_blocked() -> None:
    occupied = (Box.centered(0, 0, 200, 200),)
    assert find_free_slot((0.0, 0.0), (10.0, 10.0), occupied) is None


def test_find_free_slot_touching_edge_is_taken() -> None:
    occupied = (Box(-5, -5, 5, 5),)
    assert find_free_slot((0.0, 0.0), (10.0, 10.0), occupied, offsets=((10.0, 0.0),)) is None
    slot = find_free_slot((0.0, 0.0), (10.0, 10.0), occupied, offsets=((10.01, 0.0),))
    assert slot is not None
    assert slot[1].x1 == pytest.approx(5.01)


def test_overlaps_any_against_several_boxes() -> None:
    occupied = (Box(0, 0, 10, 10), Box(30, 0, 40, 10))
    assert overlaps_any(Box(35, 5, 45, 15), occupied)
    assert not overlaps_any(Box(15, 0, 25, 10), occupied)
    assert not overlaps_any(Box(0, 0, 1, 1), ())


def test_clustered_labels_do_not_overlap(identity_transform) -> None:
    cands = [LabelCandidate(id=f"c{i}", anchor=(200.0, 200.0), text="x") for i in range(13)]
    results = place_labels(cands, identity_transform)
    assert [r.candidate_id for r in results] == [c.id for c in cands]
    _assert_accepted_disjoint(results)
    assert results[0].offset_index == 0


def test_random_cluster_one_result_each(identity_transform) -> None:
    rng = np.random.default_rng(7)
    cands = [
        LabelCandidate(
            id=f"c{i}",
            anchor=(float(300 + rng.uniform(-30, 30)), float(300 + rng.uniform(-30, 30))),
            text="12k - 3.5ft",
            priority=PRIMARY if i % 5 == 0 else SECONDARY,
        )
        for i in range(30)
    ]
    results = place_labels(cands, identity_transform, seed=1)
    assert len(results) == 30
    assert sorted(r.candidate_id for r in results) == sorted(c.id for c in cands)
    _assert_accepted_disjoint(results)


def test_primary_takes_only_slot(identity_transform) -> None:
    cands = [
        LabelCandidate(id="edge", anchor=(100.0, 100.0), text="12k", priority=SECONDARY),
        LabelCandidate(id="area", anchor=(100.0, 100.0), text="1 Kanal", priority=PRIMARY),
    ]
    results = place_labels(cands, identity_transform, offsets=((0.0, 0.0),))
    assert results[0].candidate_id == "area"
    assert results[0].mode == "offset"
    assert results[0].screen_position == pytest.approx((100.0, 100.0))
    assert results[1].candidate_id == "edge"
    assert results[1].is_fallback


def test_primary_keeps_center_secondary_moves(identity_transform) -> None:
    cands = [
        LabelCandidate(id="edge", anchor=(100.0, 100.0), text="12k", priority=SECONDARY),
        LabelCandidate(id="area", anchor=(100.0, 100.0), text="1 Kanal", priority=PRIMARY),
    ]
    results = place_labels(cands, identity_transform)
    by_id = {r.candidate_id: r for r in results}
    assert by_id["area"].offset_index == 0
    assert by_id["edge"].is_fallback or by_id["edge"].offset_index > 0


def test_order_candidates_is_stable_partition() -> None:
    cands = [
        LabelCandidate(id="s1", anchor=(0, 0), text="a", priority=SECONDARY),
        LabelCandidate(id="p1", anchor=(0, 0), text="a", priority=PRIMARY),
        LabelCandidate(id="s2", anchor=(0, 0), text="a", priority=SECONDARY),
        LabelCandidate(id="p2", anchor=(0, 0), text="a", priority=PRIMARY),
    ]
    assert [c.id for c in order_candidates(cands)] == ["p1", "p2", "s1", "s2"]


def test_fallback_jitter_bounded_and_reproducible(identity_transform) -> None:
    cands = [LabelCandidate(id=f"c{i}", anchor=(50.0, 50.0), text="1 K - 2.00 M", priority=PRIMARY) for i in range(4)]
    one_slot = ((0.0, 0.0),)
    a = place_labels(cands, identity_transform, rng=np.random.default_rng(3), offsets=one_slot)
    b = place_labels(cands, identity_transform, rng=np.random.default_rng(3), offsets=one_slot)
    assert a == b
    fallbacks = [r for r in a if r.is_fallback]
    assert len(fallbacks) == 3
    for r in fallbacks:
        x, y = r.screen_position
        assert abs(x - 50.0) <= JITTER_MAX_PX
        assert abs(y - 50.0) <= JITTER_MAX_PX
        assert r.offset_index is None


def test_geo_position_maps_back(identity_transform) -> None:
    cands = [LabelCandidate(id="a", anchor=(10.0, 20.0), text="abc")]
    (r,) = place_labels(cands, identity_transform)
    assert r.geo_position == r.screen_position


def test_run_label_layout_summary(identity_transform) -> None:
    cands = [LabelCandidate(id=f"c{i}", anchor=(0.0, 0.0), text="x") for i in range(3)]
    summary = run_label_layout(cands, identity_transform)
    assert summary.n_labels == 3
    assert summary.placed_count + summary.fallback_count == 3


def test_empty_candidates(identity_transform) -> None:
    assert place_labels([], identity_transform) == []
