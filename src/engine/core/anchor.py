"""
どこで: `engine.core.anchor`
何を: 9 方位のアンカー名 `Anchor` と、バウンディングボックス→アンカー点の写像。
なぜ: レイアウト系（整列・配置）が共通に使う基準点の定義を Diagram 本体から切り離すため。

座標系は y 上向き:
- top = max y / bottom = min y
- left = min x / right = max x
"""

from __future__ import annotations

from enum import Enum

from .vector import Vector2


class Anchor(str, Enum):
    TOP_LEFT = "top-left"
    TOP_CENTER = "top-center"
    TOP_RIGHT = "top-right"
    CENTER_LEFT = "center-left"
    CENTER_CENTER = "center-center"
    CENTER_RIGHT = "center-right"
    BOTTOM_LEFT = "bottom-left"
    BOTTOM_CENTER = "bottom-center"
    BOTTOM_RIGHT = "bottom-right"

    @property
    def vertical(self) -> str:
        return self.value.split("-")[0]

    @property
    def horizontal(self) -> str:
        return self.value.split("-")[1]


# text-anchor / dy（ベースラインからのずれ）への対応
_TEXT_ANCHOR_X = {"left": "start", "center": "middle", "right": "end"}
_TEXT_ANCHOR_DY = {"top": "0.75em", "center": "0.25em", "bottom": "-0.25em"}


def parse_anchor(value: Anchor | str) -> Anchor:
    """`Anchor` または `"top-left"` 形式の文字列を `Anchor` に正規化する。

    Raises
    ------
    ValueError
        未知のアンカー名。
    """
    if isinstance(value, Anchor):
        return value
    try:
        return Anchor(str(value).strip().lower())
    except ValueError:
        raise ValueError(f"未知のアンカーです: {value!r}") from None


def anchor_point(bbox: tuple[Vector2, Vector2], anchor: Anchor | str) -> Vector2:
    """`(min, max)` のバウンディングボックスからアンカー点を求める。"""
    a = parse_anchor(anchor)
    bmin, bmax = bbox
    xs = {"left": bmin.x, "center": (bmin.x + bmax.x) / 2, "right": bmax.x}
    ys = {"top": bmax.y, "center": (bmin.y + bmax.y) / 2, "bottom": bmin.y}
    return Vector2(xs[a.horizontal], ys[a.vertical])


def text_anchor_metadata(anchor: Anchor | str) -> tuple[str, str]:
    """テキストをアンカー位置で揃えるための `(text-anchor, dy)` を返す。"""
    a = parse_anchor(anchor)
    return _TEXT_ANCHOR_X[a.horizontal], _TEXT_ANCHOR_DY[a.vertical]


__all__ = ["Anchor", "parse_anchor", "anchor_point", "text_anchor_metadata"]
