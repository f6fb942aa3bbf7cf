"""
どこで: `shapes.curves`。
何を: 曲線の連結、2 次/3 次ベジェ、自然 3 次スプライン補間。
なぜ: 制御点から滑らかな curve を作る操作を、numpy でまとめてサンプルして core の `curve()` に渡すため。
"""

from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np

from engine.core.diagram import Diagram, curve
from engine.core.vector import Vector2, to_vector2

from .registry import shape


def _points_array(points: Iterable[Vector2 | Sequence[float]]) -> np.ndarray:
    return np.array([tuple(to_vector2(p)) for p in points], dtype=np.float64).reshape(-1, 2)


def _bernstein_curve(control: np.ndarray, weights: np.ndarray) -> Diagram:
    # weights: (n_sample, n_control)
    return curve((weights @ control).tolist())


def _sample_t(n_sample: int) -> np.ndarray:
    n = int(n_sample)
    if n < 2:
        raise ValueError(f"n_sample は 2 以上が必要です: got {n_sample}")
    return np.linspace(0.0, 1.0, n)[:, None]


@shape
def curve_combine(*curves: Diagram) -> Diagram:
    """各 curve/polygon の点を順に連結した 1 本の curve。

    向きを揃えるには事前に `reverse_path()` を使う。
    """
    points: list[Vector2] = []
    for c in curves:
        points.extend(c.require_path().points)
    return curve(points)


@shape
def bezier_quadratic(p0, p1, p2, n_sample: int = 100) -> Diagram:
    """2 次ベジェ `B(t) = (1-t)²P0 + 2t(1-t)P1 + t²P2` を `n_sample` 点でサンプル。"""
    t = _sample_t(n_sample)
    u = 1.0 - t
    weights = np.hstack([u * u, 2.0 * t * u, t * t])
    return _bernstein_curve(_points_array([p0, p1, p2]), weights)


@shape
def bezier_cubic(p0, p1, p2, p3, n_sample: int = 100) -> Diagram:
    """3 次ベジェ `B(t) = (1-t)³P0 + 3t(1-t)²P1 + 3t²(1-t)P2 + t³P3` を `n_sample` 点でサンプル。"""
    t = _sample_t(n_sample)
    u = 1.0 - t
    weights = np.hstack([u**3, 3.0 * t * u * u, 3.0 * t * t * u, t**3])
    return _bernstein_curve(_points_array([p0, p1, p2, p3]), weights)


def interpolate_cubic_spline(points: Iterable[Vector2 | Sequence[float]], n: int = 10) -> list[Vector2]:
    """`y = f(x)` としての自然 3 次スプライン補間点。

    各区間を x 方向に `n` 等分し、区間の継ぎ目は 1 回だけ含める
    （戻り値の点数は `(len(points) - 1) * n + 1`）。
    x が重複する点があると ValueError。
    """
    pts = _points_array(points)
    count = pts.shape[0]
    steps = int(n)
    if count < 2:
        raise ValueError(f"スプライン補間には 2 点以上が必要です: got {count}")
    if steps < 1:
        raise ValueError(f"n は 1 以上が必要です: got {n}")
    x, a = pts[:, 0], pts[:, 1]
    h = np.diff(x)
    if np.any(h == 0.0):
        raise ValueError("スプライン補間の x 座標は重複できません")

    # 端点の 2 階微分を 0 とする三重対角系を解いて c を得る
    system = np.eye(count)
    rhs = np.zeros(count)
    for i in range(1, count - 1):
        system[i, i - 1] = h[i - 1]
        system[i, i] = 2.0 * (h[i - 1] + h[i])
        system[i, i + 1] = h[i]
        rhs[i] = 3.0 * ((a[i + 1] - a[i]) / h[i] - (a[i] - a[i - 1]) / h[i - 1])
    c = np.linalg.solve(system, rhs)
    b = (a[1:] - a[:-1]) / h - h * (c[1:] + 2.0 * c[:-1]) / 3.0
    d = (c[1:] - c[:-1]) / (3.0 * h)

    local = np.arange(steps)[None, :] * (h[:, None] / steps)  # (区間, steps)
    xs = x[:-1, None] + local
    ys = a[:-1, None] + b[:, None] * local + c[:-1, None] * local**2 + d[:, None] * local**3
    out = np.stack([xs.ravel(), ys.ravel()], axis=1)
    out = np.vstack([out, pts[-1:]])
    return [Vector2(float(px), float(py)) for px, py in out]


@shape
def cubic_spline(points: Iterable[Vector2 | Sequence[float]], n: int = 10) -> Diagram:
    """`interpolate_cubic_spline` の結果を curve にしたもの。"""
    return curve(interpolate_cubic_spline(points, n))


__all__ = [
    "curve_combine",
    "bezier_quadratic",
    "bezier_cubic",
    "interpolate_cubic_spline",
    "cubic_spline",
]
