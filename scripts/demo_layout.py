#!/usr/bin/env python3
"""
Build a small block of sample parcels near Lahore, measure them, place labels
on a zoom-18 viewport and write reports/demo_layout.png.

Parcels are laid out in UTM 43N meters and converted to (lon, lat), the way
surveyed boundaries arrive from a shapefile.
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np

from khasra.core.candidates import build_label_candidates
from khasra.core.config import configure_logging
from khasra.core.features import measure_features
from khasra.core.layout import run_label_layout
from khasra.core.projection import unproject_points
from khasra.core.render import render_layout
from khasra.core.viewport import Viewport

OUTPUT_DIR = Path(__file__).parent.parent / "reports"

# Base coordinates (UTM 43N, meters)
BASE_X = 440000.0
BASE_Y = 3487000.0

logger = logging.getLogger("demo_layout")


def parcel(x0: float, y0: float, w: float, h: float, skew: float = 0.0) -> list[list[float]]:
    """Quadrilateral parcel; skew shifts the top edge sideways (m)."""
    corners = [(x0, y0), (x0 + w, y0), (x0 + w + skew, y0 + h), (x0 + skew, y0 + h)]
    lonlat = unproject_points(corners, "UTM_43N")
    ring = [[float(lon), float(lat)] for lon, lat in lonlat]
    ring.append(ring[0])
    return ring


def sample_collection(seed: int = 42) -> dict:
    rng = np.random.default_rng(seed)
    features = []
    for row in range(3):
        for col in range(4):
            w = float(rng.uniform(25, 60))
            h = float(rng.uniform(25, 60))
            ring = parcel(BASE_X + col * 65.0, BASE_Y + row * 65.0, w, h, skew=float(rng.uniform(-8, 8)))
            features.append({
                "type": "Feature",
                "id": f"khasra-{row * 4 + col + 1}",
                "properties": {},
                "geometry": {"type": "Polygon", "coordinates": [ring]},
            })
    return {"type": "FeatureCollection", "features": features}


def main() -> None:
    configure_logging()
    collection = sample_collection()
    batch = measure_features(collection, "UTM_43N")
    for m in batch.measurements:
        logger.info("%s: %s (%.0f sq ft)", m.feature_id, m.stats.display_label, m.stats.area_square_feet)

    lons = [m.center[0] for m in batch.measurements]
    lats = [m.center[1] for m in batch.measurements]
    view = Viewport(sum(lons) / len(lons), sum(lats) / len(lats), zoom=18, width_px=1000, height_px=800)
    summary = run_label_layout(build_label_candidates(batch.measurements), view)
    logger.info("Placed %d / %d labels (%d jittered).", summary.placed_count, summary.n_labels, summary.fallback_count)

    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    out = OUTPUT_DIR / "demo_layout.png"
    rings = [f["geometry"]["coordinates"][0] for f in collection["features"]]
    render_layout(summary.results, out, width_px=view.width_px, height_px=view.height_px, rings=rings, transform=view)
    print(out)


if __name__ == "__main__":
    main()
