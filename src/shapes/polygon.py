from __future__ import annotations

import numpy as np

from engine.core.diagram import Diagram, curve, polygon
from engine.core.tags import TAG

from .registry import shape


def _regular_polygon_vertices(n_sides: int, radius: float) -> np.ndarray:
    """正多角形の頂点配列を生成します。

    引数:
        n_sides: 辺の数。
        radius: 外接円の半径。

    返り値:
        `(n_sides, 2)` の頂点配列。最初の頂点は +Y 軸上（真上）。
    """
    t = np.linspace(0.0, 2.0 * np.pi, n_sides, endpoint=False) + np.pi / 2.0
    return np.stack([np.cos(t) * radius, np.sin(t) * radius], axis=1)


@shape
def regular_polygon(n: int = 6, radius: float = 1.0) -> Diagram:
    """原点中心・外接円半径 `radius` の正 `n` 角形。

    引数:
        n: 辺の数（3 以上）。
        radius: 外接円の半径。
    """
    sides = int(n)
    if sides < 3:
        raise ValueError(f"regular_polygon の辺数は 3 以上です: got {n}")
    vertices = _regular_polygon_vertices(sides, float(radius))
    return polygon(vertices.tolist()).move_origin((0.0, 0.0))


@shape
def regular_polygon_side(n: int = 6, sidelength: float = 1.0) -> Diagram:
    """1 辺の長さ `sidelength` の正 `n` 角形。"""
    sides = int(n)
    if sides < 3:
        raise ValueError(f"regular_polygon_side の辺数は 3 以上です: got {n}")
    radius = float(sidelength) / (2.0 * np.sin(np.pi / sides))
    return regular_polygon(sides, radius)


@shape
def circle(radius: float = 1.0, segments: int = 50) -> Diagram:
    """正多角形で近似した円（CIRCLE タグ付き）。"""
    return regular_polygon(segments, radius).append_tags(TAG.CIRCLE)


@shape
def arc(radius: float = 1.0, angle: float = 2.0 * np.pi, segments: int = 100) -> Diagram:
    """+X 軸から反時計回りに `angle` ラジアンの円弧。origin は円の中心。"""
    n = max(2, int(segments))
    a = np.linspace(0.0, float(angle), n)
    pts = np.stack([np.cos(a) * radius, np.sin(a) * radius], axis=1)
    return curve(pts.tolist()).move_origin((0.0, 0.0))
