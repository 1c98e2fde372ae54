# tests/conftest.py
"""Shared ring builders: squares laid out in UTM 43N meters, returned as (lon, lat)."""

from __future__ import annotations

import pytest

from khasra.core.projection import unproject_points

# Near Lahore, inside UTM zone 43N.
ORIGIN_X = 440000.0
ORIGIN_Y = 3487000.0


def utm_square(side_m: float, x0: float = ORIGIN_X, y0: float = ORIGIN_Y, closed: bool = True) -> list[tuple[float, float]]:
    corners = [(x0, y0), (x0 + side_m, y0), (x0 + side_m, y0 + side_m), (x0, y0 + side_m)]
    ring = [(float(lon), float(lat)) for lon, lat in unproject_points(corners, "UTM_43N")]
    if closed:
        ring.append(ring[0])
    return ring


@pytest.fixture
def square_ring() -> list[tuple[float, float]]:
    """Closed 50 m x 50 m parcel (5 vertices)."""
    return utm_square(50.0)


class IdentityTransform:
    """Screen px == (lon, lat); keeps layout tests in plain pixel numbers."""

    def to_screen(self, lon: float, lat: float) -> tuple[float, float]:
        return (lon, lat)

    def to_geo(self, x: float, y: float) -> tuple[float, float]:
        return (x, y)


@pytest.fixture
def identity_transform() -> IdentityTransform:
    return IdentityTransform()


@pytest.fixture
def make_square():
    """Factory: make_square(side_m, x0=..., y0=..., closed=True) -> ring."""
    return utm_square
