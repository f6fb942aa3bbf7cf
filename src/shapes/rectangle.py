"""
どこで: `shapes.rectangle`。
何を: 軸平行の矩形（中心指定 / 角指定）と正方形。
なぜ: 表・枠・背景などレイアウト系が最も頻繁に使う図形を 1 箇所に置くため。
"""

from __future__ import annotations

from engine.core.diagram import Diagram, polygon
from engine.core.vector import V2, Vector2, to_vector2

from .registry import shape


@shape
def rectangle(width: float = 1.0, height: float = 1.0) -> Diagram:
    """原点中心の矩形。頂点は左下→左上→右上→右下の順。"""
    w, h = float(width) / 2.0, float(height) / 2.0
    return polygon([V2(-w, -h), V2(-w, h), V2(w, h), V2(w, -h)])


@shape
def square(side: float = 1.0) -> Diagram:
    return rectangle(side, side)


@shape
def rectangle_corner(
    bottomleft: Vector2 | tuple[float, float], topright: Vector2 | tuple[float, float]
) -> Diagram:
    """左下 `bottomleft`・右上 `topright` の矩形。origin は中心。"""
    bl = to_vector2(bottomleft)
    tr = to_vector2(topright)
    return polygon([bl, V2(bl.x, tr.y), tr, V2(tr.x, bl.y)])
