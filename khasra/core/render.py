# khasra/core/render.py
"""
Matplotlib PNG of one placement pass in screen space: parcel outlines,
label boxes (fallbacks dashed) and label text. Debug aid only.
"""

from __future__ import annotations

import warnings
from pathlib import Path
from typing import Sequence

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.patches import Rectangle

from khasra.core.config import RENDER_HEIGHT_PX, RENDER_WIDTH_PX
from khasra.core.types import PRIMARY, PlacementResult, VertexRing
from khasra.core.viewport import ScreenTransform


def _new_fig(width_px: int, height_px: int) -> tuple[plt.Figure, plt.Axes]:
    fig = plt.figure(
        figsize=(width_px / 100.0, height_px / 100.0),
        dpi=100,
        constrained_layout=False,
    )
    ax = fig.add_axes([0, 0, 1, 1])  # full-canvas axes
    ax.set_xlim(0, width_px)
    ax.set_ylim(height_px, 0)  # screen y grows downwards
    ax.set_aspect("equal", adjustable="box")
    ax.axis("off")
    return fig, ax


def _draw_ring(ax: plt.Axes, ring: VertexRing, transform: ScreenTransform) -> None:
    xy = np.array([transform.to_screen(float(v[0]), float(v[1])) for v in ring])
    if xy.shape[0] < 2:
        return
    ax.fill(xy[:, 0], xy[:, 1], facecolor="#ef4444", edgecolor="#ef4444", linewidth=2, alpha=0.1)
    ax.plot(np.append(xy[:, 0], xy[0, 0]), np.append(xy[:, 1], xy[0, 1]), color="#ef4444", linewidth=2)


def render_layout(
    results: Sequence[PlacementResult],
    output_path: str | Path,
    width_px: int = RENDER_WIDTH_PX,
    height_px: int = RENDER_HEIGHT_PX,
    rings: Sequence[VertexRing] | None = None,
    transform: ScreenTransform | None = None,
) -> None:
    """Render placed labels (and optionally parcel rings through transform) to a PNG."""
    fig, ax = _new_fig(width_px, height_px)
    if rings and transform is not None:
        for ring in rings:
            _draw_ring(ax, ring, transform)

    for r in results:
        b = r.occupied_box
        primary = r.priority == PRIMARY
        ax.add_patch(
            Rectangle(
                (b.x1, b.y1), b.x2 - b.x1, b.y2 - b.y1,
                facecolor="#dc2626" if primary else "#0f172a",
                edgecolor="black",
                linestyle="--" if r.is_fallback else "-",
                linewidth=0.8,
                alpha=0.9,
                zorder=4,
            )
        )
        cx, cy = r.screen_position
        ax.text(
            cx, cy, r.text,
            fontsize=10 if primary else 7,
            fontweight="bold" if primary else "normal",
            ha="center", va="center",
            color="white",
            zorder=5,
        )

    with warnings.catch_warnings():
        warnings.filterwarnings("ignore", message=".*constrained_layout.*", category=UserWarning)
        fig.savefig(output_path, dpi=100, facecolor="white")
    plt.close(fig)
