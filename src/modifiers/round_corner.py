"""
round_corner modifier（角の丸め）

- 指定頂点を、隣接 2 辺に接する半径 `radius` の円弧（`count` 点）で置き換える。
- 接点までの距離は隣接辺の半分を上限とし、超える場合は半径を縮める。

Parameters
----------
radius : float | Sequence[float], default 1.0
    角の半径。列を渡すと対象頂点の並びに沿って循環適用する。
point_indices : Sequence[int], optional
    丸める頂点番号。省略時は全頂点（curve の両端は除く）。範囲外の番号は無視。
count : int, optional
    1 つの角あたりの円弧点数。省略時は `settings.ROUND_CORNER_COUNT`。

Notes
-----
- 直線上に並ぶ（角度 0 または π の）頂点はそのまま残す。
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from common import settings
from engine.core.diagram import Diagram, DiagramType
from engine.core.vector import Vdir, Vector2
from util.utils import array_repeat, linspace

from .base import ModifierFunc, function_handle_path_type, replace_points
from .registry import modifier

_EPS = 1e-12


def _round_corner_arc_points(
    radius: float, p1: Vector2, p2: Vector2, p3: Vector2, count: int
) -> list[Vector2]:
    """`p1 → p2 → p3` の角 `p2` を丸める円弧の点列（`p1` 側の接点から `p3` 側の接点まで）。"""
    d1 = p1.sub(p2).length()
    d3 = p3.sub(p2).length()
    if d1 < _EPS or d3 < _EPS:
        return [p2]
    v1 = p1.sub(p2).scale(1.0 / d1)
    v3 = p3.sub(p2).scale(1.0 / d3)
    corner_angle = float(np.arccos(np.clip(v1.dot(v3), -1.0, 1.0)))
    if abs(np.sin(corner_angle)) < _EPS:
        return [p2]

    half_tan = float(np.tan(corner_angle / 2.0))
    s_dist = min(radius / half_tan, d1 / 2.0, d3 / 2.0)
    r = s_dist * half_tan

    pa = p2.add(v1.scale(s_dist))
    pb = p2.add(v3.scale(s_dist))
    distc = float(np.hypot(r, s_dist))
    pc = p2.add(v1.add(v3).normalize().scale(distc))

    angle_a = pa.sub(pc).angle()
    angle_b = pb.sub(pc).angle()
    # 短い側の向きで回るよう angle_b を ±2π から選ぶ
    candidates = (angle_b, angle_b + 2.0 * np.pi, angle_b - 2.0 * np.pi)
    angle_b = min(candidates, key=lambda b: abs(angle_a - b))

    return [pc.add(Vdir(a).scale(r)) for a in linspace(angle_a, angle_b, count)]


@modifier
def round_corner(
    radius: float | Sequence[float] = 1.0,
    point_indices: Sequence[int] | None = None,
    count: int | None = None,
) -> ModifierFunc:
    """頂点を円弧で丸める modifier を返す。"""
    radii = [float(radius)] if isinstance(radius, (int, float)) else [float(r) for r in radius]
    n_arc = settings.get().ROUND_CORNER_COUNT if count is None else int(count)

    def func(d: Diagram) -> Diagram:
        points = d.require_path().points
        n = len(points)
        if n < 3:
            return d
        closed = d.type is DiagramType.POLYGON
        valid = range(n) if closed else range(1, n - 1)
        requested = list(valid) if point_indices is None else list(point_indices)
        targets = [i for i in requested if i in valid]
        if not targets:
            return d
        radius_of = dict(zip(targets, array_repeat(radii, len(targets))))

        new_points: list[Vector2] = []
        for i, p in enumerate(points):
            if i not in radius_of:
                new_points.append(p)
                continue
            prev_p = points[(i - 1) % n]
            next_p = points[(i + 1) % n]
            new_points.extend(_round_corner_arc_points(radius_of[i], prev_p, p, next_p, n_arc))
        return replace_points(d, new_points)

    return function_handle_path_type(func)


__all__ = ["round_corner"]
