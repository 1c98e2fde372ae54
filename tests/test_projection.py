# tests/test_projection.py
"""Reference frame lookup and pyproj-backed projection."""

from __future__ import annotations

import pytest

from khasra.core.errors import PROJECTION_FAILED, UNKNOWN_REFERENCE_FRAME, ConfigurationError, GeometryError
from khasra.core.projection import (
    available_frames,
    frame_bounds,
    project_points,
    resolve_frame,
    unproject_points,
)


def test_available_frames() -> None:
    frames = available_frames()
    assert "UTM_43N" in frames
    assert "WEB_MERCATOR" in frames


def test_resolve_frame_normalizes() -> None:
    assert resolve_frame(" utm_42n ") == "UTM_42N"


def test_resolve_frame_unknown() -> None:
    with pytest.raises(ConfigurationError) as exc:
        resolve_frame("LAMBERT")
    assert exc.value.error_key == UNKNOWN_REFERENCE_FRAME
    assert isinstance(exc.value, ValueError)


def test_project_and_back() -> None:
    lonlat = [(74.3587, 31.5204)]
    xy = project_points(lonlat, "UTM_43N")
    assert xy.shape == (1, 2)
    assert 100000 < xy[0, 0] < 900000
    back = unproject_points(xy, "UTM_43N")
    assert back[0, 0] == pytest.approx(74.3587, abs=1e-9)
    assert back[0, 1] == pytest.approx(31.5204, abs=1e-9)


def test_project_empty() -> None:
    assert project_points([], "UTM_43N").shape == (0, 2)


def test_kalianpur_frame_is_planar_meters() -> None:
    xy = project_points([(74.3587, 31.5204)], "KALIANPUR_1962_UTM_43N")
    assert 100000 < xy[0, 0] < 900000
    assert 3000000 < xy[0, 1] < 4000000


def test_frame_bounds_cover_lahore() -> None:
    west, south, east, north = frame_bounds("UTM_43N")
    assert west <= 74.3587 <= east
    assert south <= 31.5204 <= north


def test_point_outside_utm_zone_fails() -> None:
    # pyproj still returns finite numbers this far from the zone.
    with pytest.raises(GeometryError) as exc:
        project_points([(74.3587, 31.5204), (-100.0, 31.0)], "UTM_43N")
    assert exc.value.error_key == PROJECTION_FAILED


def test_pole_outside_web_mercator_fails() -> None:
    with pytest.raises(GeometryError) as exc:
        project_points([(74.0, 90.0)], "WEB_MERCATOR")
    assert exc.value.error_key == PROJECTION_FAILED


def test_point_just_past_zone_edge_is_tolerated() -> None:
    west, _, _, _ = frame_bounds("UTM_43N")
    xy = project_points([(west - 0.1, 31.5)], "UTM_43N")
    assert xy.shape == (1, 2)
