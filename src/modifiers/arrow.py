"""
add_arrow / arrowhead_replace modifier（矢印の付加と矢じりの差し替え）

- add_arrow: curve の終端（`flip=True` なら始端）に、最後の区間の向きで矢印を付ける。
- arrowhead_replace: ARROW_HEAD タグの付いた矢じりを任意の Diagram に差し替える。
  差し替え図形は「+X 向き・先端が origin」の姿勢で用意し、元の矢じりの向きへ回転・配置する。
"""

from __future__ import annotations

from engine.core.diagram import Diagram, diagram_combine
from engine.core.tags import TAG
from shapes.arrow import arrow1

from .base import ModifierFunc, function_handle_path_type
from .registry import modifier


@modifier
def add_arrow(headsize: float = 3.0, flip: bool = False) -> ModifierFunc:
    """Path の端に矢印を付ける modifier を返す（結果は元の図形と矢印の合成ノード）。"""

    def func(c: Diagram) -> Diagram:
        points = c.require_path().points
        if len(points) < 2:
            raise ValueError("矢印を付けるには 2 点以上の Path が必要です")
        if flip:
            p0, p1 = points[1], points[0]
        else:
            p0, p1 = points[-2], points[-1]
        head = arrow1(p0, p1, headsize)
        return diagram_combine(c, head).clone_style_from(c)

    return function_handle_path_type(func)


def arrowhead_angle(d: Diagram) -> float:
    """矢じり polygon `[先端, 根元1, 根元2]` の向き（根元中点 → 先端）の角度。

    Raises
    ------
    ValueError
        ARROW_HEAD タグがない、または 3 点の Path でない場合。
    """
    if not d.contain_tag(TAG.ARROW_HEAD):
        raise ValueError("ARROW_HEAD タグの付いた Diagram ではありません")
    points = d.path.points if d.path is not None else []
    if len(points) != 3:
        raise ValueError(f"矢じりは 3 点の Path である必要があります: got {len(points)}")
    tip, base1, base2 = points
    base = base1.add(base2).scale(0.5)
    return tip.sub(base).angle()


@modifier
def arrowhead_replace(new_arrowhead: Diagram) -> ModifierFunc:
    """矢じりを `new_arrowhead` に差し替える modifier を返す。"""

    def func(d: Diagram) -> Diagram:
        def _replace(head: Diagram) -> Diagram:
            angle = arrowhead_angle(head)
            return new_arrowhead.copy().rotate(angle).position(head.origin)

        return d.apply_to_tagged_recursive(TAG.ARROW_HEAD, _replace)

    return func


__all__ = ["add_arrow", "arrowhead_replace", "arrowhead_angle"]
