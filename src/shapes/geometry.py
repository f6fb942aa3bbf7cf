"""
どこで: `shapes.geometry`。
何を: 線分・円の幾何クエリ（端点、交点、接点、半径、寸法）と線分の延長。
なぜ: 作図（補助線・接線・交点への注記）を core の公開契約だけで組み立てるため。

前提:
- 線分は `line()` で作った LINE タグ付きの 2 点 curve、円は `circle()` で作った CIRCLE タグ付き polygon。
- タグの無い入力や、交点・接点が存在しない配置は ValueError。
"""

from __future__ import annotations

import math

from engine.core.diagram import Diagram
from engine.core.path import Path
from engine.core.tags import TAG
from engine.core.vector import V2, Vector2, to_vector2

from .registry import shape


def line_points(l: Diagram) -> tuple[Vector2, Vector2]:  # noqa: E741
    """線分の始点と終点。"""
    if not l.contain_tag(TAG.LINE):
        raise ValueError("line_points には line() で作った線分が必要です")
    points = l.require_path().points
    return points[0], points[1]


def line_intersection_y(l: Diagram, yi: float) -> Vector2:  # noqa: E741
    """線分を延長した直線と水平線 `y = yi` の交点。"""
    a, b = line_points(l)
    if b.y == a.y:
        raise ValueError("水平な線分は水平線と交わりません")
    xi = a.x + (b.x - a.x) * (yi - a.y) / (b.y - a.y)
    return V2(xi, yi)


def line_intersection_x(l: Diagram, xi: float) -> Vector2:  # noqa: E741
    """線分を延長した直線と垂直線 `x = xi` の交点。"""
    a, b = line_points(l)
    if b.x == a.x:
        raise ValueError("垂直な線分は垂直線と交わりません")
    yi = a.y + (b.y - a.y) * (xi - a.x) / (b.x - a.x)
    return V2(xi, yi)


def line_intersection(l1: Diagram, l2: Diagram) -> Vector2:
    """2 本の線分を延長した直線どうしの交点（平行なら ValueError）。"""
    a1, b1 = line_points(l1)
    a2, b2 = line_points(l2)
    d1 = a1.sub(b1)
    d2 = a2.sub(b2)
    den = d1.cross(d2)
    if den == 0.0:
        raise ValueError("平行な 2 直線の交点は存在しません")
    c1 = a1.cross(b1)
    c2 = a2.cross(b2)
    return V2((c1 * d2.x - d1.x * c2) / den, (c1 * d2.y - d1.y * c2) / den)


@shape
def line_extend(l: Diagram, len1: float, len2: float) -> Diagram:  # noqa: E741
    """線分を始点側へ `len1`、終点側へ `len2` だけ延ばす（負値は縮める）。"""
    p0, p1 = line_points(l)
    if p0 == p1:
        raise ValueError("長さ 0 の線分は延長できません")
    v = p1.sub(p0).normalize()
    newd = l.copy_if_not_mutable()
    newd.path = Path([p0.sub(v.scale(len1)), p1.add(v.scale(len2))], mutable=newd.mutable)
    return newd


def size(diagram: Diagram) -> tuple[float, float]:
    """バウンディングボックスの幅と高さ。"""
    bmin, bmax = diagram.bounding_box()
    return bmax.x - bmin.x, bmax.y - bmin.y


def circle_radius(c: Diagram) -> float:
    if not c.contain_tag(TAG.CIRCLE):
        raise ValueError("circle_radius には circle() で作った円が必要です")
    center = c.get_anchor("center-center")
    return center.sub(c.require_path().points[0]).length()


def circle_tangent_point_from_point(point: Vector2 | tuple[float, float], c: Diagram) -> tuple[Vector2, Vector2]:
    """円外の点 `point` から円 `c` へ引いた 2 本の接線の接点。

    中心 C、半径 r、`v0 = point - C`、`d² = |v0|²` として
    `C + (r²/d²)·v0 ± (r·√(d² - r²)/d²)·perp(v0)`。点が円の内側にあれば ValueError。
    """
    p = to_vector2(point)
    r = circle_radius(c)
    center = c.get_anchor("center-center")
    v0 = p.sub(center)
    d2 = v0.length_sq()
    r2 = r * r
    if d2 < r2:
        raise ValueError("円の内側の点からは接線を引けません")
    along = v0.scale(r2 / d2)
    across = V2(-v0.y, v0.x).scale(r * math.sqrt(d2 - r2) / d2)
    return along.add(across).add(center), along.sub(across).add(center)


__all__ = [
    "line_points",
    "line_intersection",
    "line_intersection_x",
    "line_intersection_y",
    "line_extend",
    "size",
    "circle_radius",
    "circle_tangent_point_from_point",
]
