"""
どこで: `layout.alignment`。
何を: Diagram 列の整列（先頭に揃える）と、隙間を指定した横/縦の並べ配置。
なぜ: 表・凡例・ラベル群など、複数図形の相対配置を `get_anchor` と `translate` だけで組むため。

規約:
- 入力リストは変更しない。各要素は `translate()` の戻り値（コピーオンライト）で置き換える。
- 整列の基準は常に先頭要素。空リストは空リストを返す。
- 未知の整列キーワードは ValueError。
"""

from __future__ import annotations

import logging
from typing import Sequence

from engine.core.anchor import Anchor
from engine.core.diagram import Diagram
from engine.core.vector import V2

logger = logging.getLogger(__name__)

_VERTICAL_ANCHORS = {
    "top": Anchor.TOP_LEFT,
    "center": Anchor.CENTER_LEFT,
    "bottom": Anchor.BOTTOM_LEFT,
}
_HORIZONTAL_ANCHORS = {
    "left": Anchor.TOP_LEFT,
    "center": Anchor.TOP_CENTER,
    "right": Anchor.TOP_RIGHT,
}


def _lookup(table: dict[str, Anchor], alignment: str, kind: str) -> Anchor:
    key = str(alignment).strip().lower()
    if key not in table:
        raise ValueError(f"未知の{kind}整列です: {alignment!r}（{'/'.join(table)} のいずれか）")
    return table[key]


def align_vertical(diagrams: Sequence[Diagram], alignment: str = "center") -> list[Diagram]:
    """y 方向に揃える（`top` / `center` / `bottom`）。x は変えない。"""
    anchor = _lookup(_VERTICAL_ANCHORS, alignment, "垂直")
    if not diagrams:
        return []
    target_y = diagrams[0].get_anchor(anchor).y
    return [d.translate(V2(0, target_y - d.get_anchor(anchor).y)) for d in diagrams]


def align_horizontal(diagrams: Sequence[Diagram], alignment: str = "center") -> list[Diagram]:
    """x 方向に揃える（`left` / `center` / `right`）。y は変えない。"""
    anchor = _lookup(_HORIZONTAL_ANCHORS, alignment, "水平")
    if not diagrams:
        return []
    target_x = diagrams[0].get_anchor(anchor).x
    return [d.translate(V2(target_x - d.get_anchor(anchor).x, 0)) for d in diagrams]


def distribute_horizontal(diagrams: Sequence[Diagram], space: float = 0.0) -> list[Diagram]:
    """左から右へ、直前の右端から `space` 空けて並べる。先頭は動かさない。"""
    if not diagrams:
        return []
    out = [diagrams[0]]
    for d in diagrams[1:]:
        prev_right = out[-1].get_anchor(Anchor.TOP_RIGHT).x
        this_left = d.get_anchor(Anchor.TOP_LEFT).x
        out.append(d.translate(V2(prev_right - this_left + space, 0)))
    logger.debug("distribute_horizontal: %d diagrams, space=%s", len(out), space)
    return out


def distribute_vertical(diagrams: Sequence[Diagram], space: float = 0.0) -> list[Diagram]:
    """上から下へ、直前の下端から `space` 空けて並べる。先頭は動かさない。"""
    if not diagrams:
        return []
    out = [diagrams[0]]
    for d in diagrams[1:]:
        prev_bottom = out[-1].get_anchor(Anchor.BOTTOM_LEFT).y
        this_top = d.get_anchor(Anchor.TOP_LEFT).y
        out.append(d.translate(V2(0, prev_bottom - this_top - space)))
    logger.debug("distribute_vertical: %d diagrams, space=%s", len(out), space)
    return out


def distribute_horizontal_and_align(
    diagrams: Sequence[Diagram], horizontal_space: float = 0.0, alignment: str = "center"
) -> list[Diagram]:
    return distribute_horizontal(align_vertical(diagrams, alignment), horizontal_space)


def distribute_vertical_and_align(
    diagrams: Sequence[Diagram], vertical_space: float = 0.0, alignment: str = "center"
) -> list[Diagram]:
    return distribute_vertical(align_horizontal(diagrams, alignment), vertical_space)


__all__ = [
    "align_vertical",
    "align_horizontal",
    "distribute_horizontal",
    "distribute_vertical",
    "distribute_horizontal_and_align",
    "distribute_vertical_and_align",
]
