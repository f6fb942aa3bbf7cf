"""
どこで: `engine.core` の変換ユーティリティ。
何を: `Vector2 -> Vector2` の点変換関数を生成する小さな純関数群と、その合成 `compose()`。
なぜ: Diagram の translate/rotate/scale/skew/reflect をすべて単一の `Diagram.transform(f)`
     に集約し、変換の定義と木の走査を分離するため。
"""

from __future__ import annotations

import math
from typing import Callable

from .vector import Vector2

TransformFunc = Callable[[Vector2], Vector2]


def translate(v: Vector2) -> TransformFunc:
    """平行移動 `p + v`。"""
    return lambda p: p.add(v)


def rotate(angle: float, pivot: Vector2) -> TransformFunc:
    """`pivot` まわりに `angle`（ラジアン、反時計回り）回転。"""
    return lambda p: p.sub(pivot).rotate(angle).add(pivot)


def scale(factor: Vector2, origin: Vector2) -> TransformFunc:
    """`origin` を基準に成分ごと拡大縮小。"""
    return lambda p: p.sub(origin).mul(factor).add(origin)


def reflect_over_point(q: Vector2) -> TransformFunc:
    """点 `q` に関する点対称。"""
    return lambda p: p.reflect_over_point(q)


def reflect_over_line(p1: Vector2, p2: Vector2) -> TransformFunc:
    """`p1`-`p2` を通る直線に関する線対称。"""
    return lambda p: p.reflect_over_line(p1, p2)


def skew_x(angle: float, ybase: float) -> TransformFunc:
    """x 方向のせん断。`y == ybase` の点は動かない。"""
    t = math.tan(angle)
    return lambda p: Vector2(p.x + (ybase - p.y) * t, p.y)


def skew_y(angle: float, xbase: float) -> TransformFunc:
    """y 方向のせん断。`x == xbase` の点は動かない。"""
    t = math.tan(angle)
    return lambda p: Vector2(p.x, p.y + (xbase - p.x) * t)


def compose(*fs: TransformFunc) -> TransformFunc:
    """左から順に適用する合成変換（`compose(f, g)(p) == g(f(p))`）。"""

    def _f(p: Vector2) -> Vector2:
        for f in fs:
            p = f(p)
        return p

    return _f


__all__ = [
    "TransformFunc",
    "translate",
    "rotate",
    "scale",
    "reflect_over_point",
    "reflect_over_line",
    "skew_x",
    "skew_y",
    "compose",
]
