"""
どこで: `shapes.arrow`。
何を: 矢印（線 + 三角形の矢じり）。片矢印 `arrow`/`arrow1` と両矢印 `arrow2`。
なぜ: 注釈・力学図などで共通に使う矢印の構造（ARROW_LINE / ARROW_HEAD タグ）を固定するため。

構造:
- 合成ノードの子は `[線(ARROW_LINE), 矢じり(ARROW_HEAD)...]`。
- 矢じりは polygon `[先端, 根元左, 根元右]`。`modifiers.arrowhead_replace` はこの並びに依存する。
- 矢じりの origin は先端。矢印全体の origin は始点。
- 線は矢じりの根元で止める（先端で線幅がはみ出さないように）。
"""

from __future__ import annotations

from engine.core.diagram import Diagram, diagram_combine, line, polygon
from engine.core.tags import TAG
from engine.core.vector import V2, Vector2, to_vector2

from .registry import shape


def _arrowhead(tip: Vector2, direction: Vector2, headsize: float) -> tuple[Diagram, Vector2]:
    unit = direction.normalize()
    perp = V2(-unit.y, unit.x)
    base = tip.sub(unit.scale(headsize / 2.0))
    left = base.sub(perp.scale(headsize / 2.0))
    right = base.add(perp.scale(headsize / 2.0))
    head = polygon([tip, left, right]).fill("black").stroke("none").move_origin(tip)
    head = head.append_tags(TAG.ARROW_HEAD)
    return head, base


@shape
def arrow(vector: Vector2 | tuple[float, float], headsize: float = 3.0) -> Diagram:
    """原点から `vector` へ向かう矢印。"""
    v = to_vector2(vector)
    if v.length() == 0.0:
        raise ValueError("長さ 0 のベクトルから矢印は作れません")
    head, base = _arrowhead(v, v, float(headsize))
    shaft = line(V2(0, 0), base).append_tags(TAG.ARROW_LINE)
    return diagram_combine(shaft, head).move_origin(V2(0, 0))


@shape
def arrow1(
    start: Vector2 | tuple[float, float],
    end: Vector2 | tuple[float, float],
    headsize: float = 3.0,
) -> Diagram:
    """`start` から `end` への片矢印。origin は `start`。"""
    s, e = to_vector2(start), to_vector2(end)
    return arrow(e.sub(s), headsize).translate(s)


@shape
def arrow2(
    start: Vector2 | tuple[float, float],
    end: Vector2 | tuple[float, float],
    headsize: float = 3.0,
) -> Diagram:
    """両端に矢じりを持つ矢印。"""
    s, e = to_vector2(start), to_vector2(end)
    d = e.sub(s)
    if d.length() == 0.0:
        raise ValueError("始点と終点が一致する矢印は作れません")
    head_end, base_end = _arrowhead(e, d, float(headsize))
    head_start, base_start = _arrowhead(s, d.scale(-1.0), float(headsize))
    shaft = line(base_start, base_end).append_tags(TAG.ARROW_LINE)
    return diagram_combine(shaft, head_end, head_start).move_origin(s)
