"""
統合 Diagram 型（シーングラフ中核モジュール）

本モジュールは、ライブラリ全体で使用する唯一のシーン表現 `Diagram` を提供する。
図形ヘルパ（shapes）、加工（modifiers）、整列（layout）、外部レンダラはすべて
ここで定義する構築・変換・問い合わせ API の上に組み立てる。

データモデル（不変条件）:
- `type: DiagramType`: 判別子。葉（polygon/curve/text/image/multilinetext）か合成（diagram）。
- polygon/curve/image は `path: Path` を必ず持つ。text/multilinetext は `textdata`
  （multilinetext はさらに `multilinedata`）、image は `imgdata` を持つ。
- 合成ノードのみ `children` が意味を持つ（葉では常に空）。
- `origin: Vector2`: position/既定変換の基準点。幾何の内側とは限らない。
- `tags: list[str]`: 挿入順を保つ重複なし集合。
- 判別子と合わないアクセサ（`require_path()` 等）は例外。

変更規約（コピーオンライト）:
- 変更系メソッドは必ず `copy_if_not_mutable()` から始め、新しい（または同じ）参照を返す。
- 既定（`mutable=False`）では呼び出し元の参照は観測上一切変化しない。
- `mut()` で自身と子孫・Path を可変にするとその場での変更に切り替わる（性能向けの逃げ道）。
  この場合エイリアシングは呼び出し側の責任。`immut()` は完全に不変な深いコピーを返す。

直感図（合成と平坦化）:

    diagram                      diagram (flatten 後)
    ├── polygon A                ├── polygon A
    └── diagram                  ├── curve B
        ├── curve B              └── text C
        └── diagram
            └── text C

補足:
- 走査は素朴な再帰。再帰の深さは木の深さに等しく、極端に深い入れ子は `flatten()` で解消する。
- スレッド安全ではない。可変フラグのその場での変更を複数スレッドから行ってはならない。

使用例:
    from engine.core.diagram import polygon, diagram_combine
    sq = polygon([(0, 0), (1, 0), (1, 1), (0, 1)]).translate((2, 3))
    sq.get_anchor("bottom-left")  # -> V2(2, 3)
"""

from __future__ import annotations

import logging
import numbers
from enum import Enum
from typing import Callable, Iterable, Sequence

import numpy as np

from common import settings

from . import transform_utils as tu
from .anchor import Anchor, anchor_point, parse_anchor, text_anchor_metadata
from .path import Path
from .style import DiagramStyle, ImageData, MultilineData, TextData, TextSpan
from .tags import TAG
from .vector import V2, Vector2, to_vector2

logger = logging.getLogger(__name__)


class DiagramType(str, Enum):
    POLYGON = "polygon"
    CURVE = "curve"
    TEXT = "text"
    IMAGE = "image"
    MULTILINE_TEXT = "multilinetext"
    DIAGRAM = "diagram"


_PATH_TYPES = frozenset({DiagramType.POLYGON, DiagramType.CURVE, DiagramType.IMAGE})
_GEOMETRIC_TYPES = frozenset({DiagramType.POLYGON, DiagramType.CURVE})
_TEXT_TYPES = frozenset({DiagramType.TEXT, DiagramType.MULTILINE_TEXT})
_NON_TEXT_LEAVES = frozenset({DiagramType.POLYGON, DiagramType.CURVE, DiagramType.IMAGE})

VectorLike = Vector2 | Sequence[float]
DiagramFunc = Callable[["Diagram"], "Diagram"]


def _as_tag_list(tags: str | Iterable[str]) -> list[str]:
    if isinstance(tags, str):
        return [tags]
    return [str(t) for t in tags]


class Diagram:
    """シーングラフのノード（葉の幾何プリミティブ、または子を持つ合成ノード）。

    直接のコンストラクタ呼び出しは検証を行わない。葉は `make_leaf()`（および
    `polygon()` / `curve()` / `text()` などのファクトリ）、合成は `diagram_combine()`
    で生成すること。
    """

    __slots__ = (
        "type",
        "children",
        "path",
        "origin",
        "style",
        "textdata",
        "imgdata",
        "multilinedata",
        "tags",
        "mutable",
    )

    type: DiagramType
    children: list["Diagram"]
    path: Path | None
    origin: Vector2
    style: DiagramStyle
    textdata: TextData | None
    imgdata: ImageData | None
    multilinedata: MultilineData | None
    tags: list[str]
    mutable: bool

    def __init__(
        self,
        type_: DiagramType | str,
        *,
        children: Iterable["Diagram"] | None = None,
        path: Path | None = None,
        origin: VectorLike | None = None,
        style: DiagramStyle | None = None,
        textdata: TextData | None = None,
        imgdata: ImageData | None = None,
        multilinedata: MultilineData | None = None,
        tags: Iterable[str] = (),
    ) -> None:
        self.type = DiagramType(type_)
        self.children = list(children) if children is not None else []
        self.path = path
        self.origin = to_vector2(origin) if origin is not None else Vector2(0.0, 0.0)
        self.style = style.copy() if style is not None else DiagramStyle()
        self.textdata = textdata
        self.imgdata = imgdata
        self.multilinedata = multilinedata
        self.tags = []
        for tag in tags:
            if tag not in self.tags:
                self.tags.append(tag)
        self.mutable = False

    # ── 判別子つきアクセサ ───────────────────
    def require_path(self) -> Path:
        """葉の `Path` を返す。判別子が path を持たない型なら TypeError、欠落なら RuntimeError。"""
        if self.type not in _PATH_TYPES:
            raise TypeError(f"{self.type.value} は path を持ちません")
        if self.path is None:
            raise RuntimeError(f"不正な木: {self.type.value} ノードに path がありません")
        return self.path

    def require_textdata(self) -> TextData:
        if self.type not in _TEXT_TYPES:
            raise TypeError(f"{self.type.value} は textdata を持ちません")
        if self.textdata is None:
            raise RuntimeError(f"不正な木: {self.type.value} ノードに textdata がありません")
        return self.textdata

    @property
    def is_composite(self) -> bool:
        return self.type is DiagramType.DIAGRAM

    # ── コピー / 可変性 ─────────────────────
    def copy(self) -> "Diagram":
        """子・Path・属性レコードまで含めた完全な深いコピー（可変フラグは保持）。"""
        newd = Diagram.__new__(Diagram)
        newd.type = self.type
        newd.children = [c.copy() for c in self.children]
        newd.path = self.path.copy() if self.path is not None else None
        newd.origin = self.origin
        newd.style = self.style.copy()
        newd.textdata = self.textdata.copy() if self.textdata is not None else None
        newd.imgdata = self.imgdata.copy() if self.imgdata is not None else None
        newd.multilinedata = (
            self.multilinedata.copy() if self.multilinedata is not None else None
        )
        newd.tags = list(self.tags)
        newd.mutable = self.mutable
        return newd

    def copy_if_not_mutable(self) -> "Diagram":
        return self if self.mutable else self.copy()

    def mut(self) -> "Diagram":
        """自身・Path・全子孫を可変にする（その場で変更し、自身を返す）。"""
        self.mutable = True
        if self.path is not None:
            self.path.mutable = True
        for c in self.children:
            c.mut()
        return self

    def mut_parent_only(self) -> "Diagram":
        """自身と自身の Path だけを可変にする。子は不変のまま（変更時は子がコピーされる）。"""
        self.mutable = True
        if self.path is not None:
            self.path.mutable = True
        return self

    def immut(self) -> "Diagram":
        """完全に不変な深いコピーを返す。"""
        newd = self.copy()
        newd._freeze()
        return newd

    def _freeze(self) -> None:
        self.mutable = False
        if self.path is not None:
            self.path.mutable = False
        for c in self.children:
            c._freeze()

    # ── タグ ─────────────────────────────
    def append_tags(self, tags: str | Iterable[str]) -> "Diagram":
        newd = self.copy_if_not_mutable()
        for tag in _as_tag_list(tags):
            if tag not in newd.tags:
                newd.tags.append(tag)
        return newd

    def remove_tags(self, tags: str | Iterable[str]) -> "Diagram":
        removed = set(_as_tag_list(tags))
        newd = self.copy_if_not_mutable()
        newd.tags = [t for t in newd.tags if t not in removed]
        return newd

    def reset_tags(self) -> "Diagram":
        newd = self.copy_if_not_mutable()
        newd.tags = []
        return newd

    def contain_tag(self, tag: str) -> bool:
        return tag in self.tags

    def contain_all_tags(self, tags: str | Iterable[str]) -> bool:
        return all(t in self.tags for t in _as_tag_list(tags))

    def collect_tags(self) -> list[str]:
        """自身と全子孫のタグを先行順・重複なしで集める。"""
        out: list[str] = []
        for tag in self.tags:
            if tag not in out:
                out.append(tag)
        for c in self.children:
            for tag in c.collect_tags():
                if tag not in out:
                    out.append(tag)
        return out

    # ── 構造コンビネータ ───────────────────
    def flatten(self) -> "Diagram":
        """合成ノードだけを展開し、葉を先行順に 1 段の子リストへ並べ直す。"""
        newd = self.copy_if_not_mutable()
        flattened: list[Diagram] = []
        for c in newd.children:
            if c.type is DiagramType.DIAGRAM:
                flattened.extend(c.flatten().children)
            else:
                flattened.append(c)
        newd.children = flattened
        return newd

    def apply(self, func: DiagramFunc) -> "Diagram":
        """自身（のコピー）にだけ `func` を適用する。"""
        return func(self.copy_if_not_mutable())

    def apply_recursive(self, func: DiagramFunc) -> "Diagram":
        """自身→子孫の先行順で `func` を適用する。

        子は `func` 適用後のノードの `children` から辿る。`func` は他から参照されていない
        ノードを返すこと（本クラスの変更系メソッドの戻り値はこれを満たす）。
        """
        newd = func(self.copy_if_not_mutable())
        newd.children = [c.apply_recursive(func) for c in newd.children]
        return newd

    def apply_to_tagged_recursive(
        self, tags: str | Iterable[str], func: DiagramFunc
    ) -> "Diagram":
        """`contain_all_tags(tags)` を満たすノードにだけ `func` を適用（走査は全子孫）。"""
        tag_list = _as_tag_list(tags)
        newd = self.copy_if_not_mutable()
        if newd.contain_all_tags(tag_list):
            newd = func(newd)
        newd.children = [c.apply_to_tagged_recursive(tag_list, func) for c in newd.children]
        return newd

    def combine(self, *diagrams: "Diagram") -> "Diagram":
        return diagram_combine(self, *diagrams)

    def to_curve(self) -> "Diagram":
        newd = self.copy_if_not_mutable()
        if newd.type is DiagramType.POLYGON:
            newd.type = DiagramType.CURVE
        elif newd.type is DiagramType.DIAGRAM:
            newd.children = [c.to_curve() for c in newd.children]
        return newd

    def to_polygon(self) -> "Diagram":
        newd = self.copy_if_not_mutable()
        if newd.type is DiagramType.CURVE:
            newd.type = DiagramType.POLYGON
        elif newd.type is DiagramType.DIAGRAM:
            newd.children = [c.to_polygon() for c in newd.children]
        return newd

    def add_points(self, points: Iterable[VectorLike]) -> "Diagram":
        """葉なら自身の Path に点を追加。合成ノードでは「最後の子」にだけ追加する。"""
        newd = self.copy_if_not_mutable()
        if newd.type in _GEOMETRIC_TYPES:
            newd.path = newd.require_path().add_points([to_vector2(p) for p in points])
        elif newd.type is DiagramType.DIAGRAM:
            if not newd.children:
                raise ValueError("子を持たない合成ノードには点を追加できません")
            newd.children[-1] = newd.children[-1].add_points(points)
        else:
            raise TypeError(f"{newd.type.value} には点を追加できません")
        return newd

    # ── スタイル ──────────────────────────
    def _update_style(
        self, name: str, value: object, excluded: frozenset[DiagramType] = frozenset()
    ) -> "Diagram":
        newd = self.copy_if_not_mutable()
        if newd.type in excluded:
            return newd
        if newd.type is DiagramType.DIAGRAM:
            newd.children = [c._update_style(name, value, excluded) for c in newd.children]
        else:
            setattr(newd.style, name, value)
        return newd

    def fill(self, color: str) -> "Diagram":
        return self._update_style("fill", color, _TEXT_TYPES)

    def stroke(self, color: str) -> "Diagram":
        return self._update_style("stroke", color, _TEXT_TYPES)

    def opacity(self, opacity: float) -> "Diagram":
        return self._update_style("opacity", float(opacity))

    def strokewidth(self, width: float) -> "Diagram":
        return self._update_style("stroke_width", float(width), _TEXT_TYPES)

    def strokelinecap(self, linecap: str) -> "Diagram":
        return self._update_style("stroke_linecap", linecap, _TEXT_TYPES)

    def strokelinejoin(self, linejoin: str) -> "Diagram":
        return self._update_style("stroke_linejoin", linejoin, _TEXT_TYPES)

    def strokedasharray(self, dasharray: Iterable[float]) -> "Diagram":
        return self._update_style(
            "stroke_dasharray", tuple(float(v) for v in dasharray), _TEXT_TYPES
        )

    def vectoreffect(self, vectoreffect: str) -> "Diagram":
        return self._update_style("vector_effect", vectoreffect, _TEXT_TYPES)

    def textfill(self, color: str) -> "Diagram":
        return self._update_style("fill", color, _NON_TEXT_LEAVES)

    def textstroke(self, color: str) -> "Diagram":
        return self._update_style("stroke", color, _NON_TEXT_LEAVES)

    def textstrokewidth(self, width: float) -> "Diagram":
        return self._update_style("stroke_width", float(width), _NON_TEXT_LEAVES)

    def clone_style_from(self, other: "Diagram") -> "Diagram":
        """`other.style` を自身と全子孫へ複写する。"""
        style = other.style

        def _clone(d: Diagram) -> Diagram:
            d.style = style.copy()
            return d

        return self.apply_recursive(_clone)

    # ── テキスト属性 ───────────────────────
    def _update_textdata(self, name: str, value: object) -> "Diagram":
        newd = self.copy_if_not_mutable()
        if newd.type in _TEXT_TYPES:
            if newd.textdata is None:
                newd.textdata = TextData()
            setattr(newd.textdata, name, value)
        elif newd.type is DiagramType.DIAGRAM:
            newd.children = [c._update_textdata(name, value) for c in newd.children]
        return newd

    def fontfamily(self, fontfamily: str) -> "Diagram":
        return self._update_textdata("font_family", fontfamily)

    def fontstyle(self, fontstyle: str) -> "Diagram":
        return self._update_textdata("font_style", fontstyle)

    def fontsize(self, fontsize: float) -> "Diagram":
        return self._update_textdata("font_size", float(fontsize))

    def fontweight(self, fontweight: str | int) -> "Diagram":
        return self._update_textdata("font_weight", str(fontweight))

    def fontscale(self, fontscale: float | str) -> "Diagram":
        return self._update_textdata("font_scale", fontscale)

    def textanchor(self, textanchor: str) -> "Diagram":
        if textanchor not in ("start", "middle", "end"):
            raise ValueError(f"text-anchor は start/middle/end のいずれかです: {textanchor!r}")
        return self._update_textdata("text_anchor", textanchor)

    def textangle(self, angle: float) -> "Diagram":
        return self._update_textdata("angle", float(angle))

    def text_tovar(self) -> "Diagram":
        """テキストを「変数」として印付ける（TEXTVAR タグ）。"""
        newd = self.copy_if_not_mutable()
        if newd.type is DiagramType.TEXT:
            newd = newd.append_tags(TAG.TEXTVAR)
        elif newd.type is DiagramType.DIAGRAM:
            newd.children = [c.text_tovar() for c in newd.children]
        return newd

    def text_totext(self) -> "Diagram":
        newd = self.copy_if_not_mutable()
        if newd.type is DiagramType.TEXT:
            newd = newd.remove_tags(TAG.TEXTVAR)
        elif newd.type is DiagramType.DIAGRAM:
            newd.children = [c.text_totext() for c in newd.children]
        return newd

    def scaletext(self, scale: float) -> "Diagram":
        """font-size（text）/ scale-factor（multilinetext）を再帰的に `scale` 倍する。幾何は不変。"""
        default_size = settings.get().DEFAULT_FONT_SIZE

        def _scale(d: Diagram) -> Diagram:
            if d.type is DiagramType.TEXT:
                td = d.require_textdata()
                size = td.font_size if td.font_size is not None else default_size
                td.font_size = size * scale
            elif d.type is DiagramType.MULTILINE_TEXT:
                if d.multilinedata is None:
                    raise RuntimeError("不正な木: multilinetext ノードに multilinedata がありません")
                d.multilinedata.scale_factor *= scale
            return d

        return self.apply_recursive(_scale)

    # ── 幾何の問い合わせ ────────────────────
    def bounding_box(self) -> tuple[Vector2, Vector2]:
        """軸平行バウンディングボックス `(min, max)`。

        - 合成: 子の箱の成分ごとの min/max（子なしは自身の origin の大きさ 0 の箱）
        - polygon/curve/image: Path 頂点の min/max
        - text/multilinetext: `(origin, origin)`（寸法はレンダリング時の性質）
        """
        if self.type is DiagramType.DIAGRAM:
            if not self.children:
                return self.origin, self.origin
            boxes = np.array(
                [[b[0].x, b[0].y, b[1].x, b[1].y] for b in (c.bounding_box() for c in self.children)],
                dtype=np.float64,
            )
            xmin, ymin = boxes[:, 0:2].min(axis=0)
            xmax, ymax = boxes[:, 2:4].max(axis=0)
            return Vector2(float(xmin), float(ymin)), Vector2(float(xmax), float(ymax))
        if self.type in _PATH_TYPES:
            arr = self.require_path().as_array()
            if arr.shape[0] == 0:
                raise RuntimeError(f"不正な木: 空の path を持つ {self.type.value} ノード")
            xmin, ymin = arr.min(axis=0)
            xmax, ymax = arr.max(axis=0)
            return Vector2(float(xmin), float(ymin)), Vector2(float(xmax), float(ymax))
        if self.type in _TEXT_TYPES:
            return self.origin, self.origin
        raise RuntimeError(f"Unreachable: 未知の判別子 {self.type!r}")

    def get_anchor(self, anchor: Anchor | str) -> Vector2:
        return anchor_point(self.bounding_box(), anchor)

    def path_length(self) -> float:
        if self.type is DiagramType.DIAGRAM:
            return float(sum(c.path_length() for c in self.children))
        if self.type in _GEOMETRIC_TYPES:
            return self.require_path().length()
        raise TypeError(f"{self.type.value} の path 長は定義されていません")

    def parametric_point(self, t: float, segment_index: int | None = None) -> Vector2:
        """弧長比 `t` の点。

        合成ノードでは `[0, 1]` を子の `path_length()` に比例して分割し、`t` を含む最初の子へ
        局所比で委譲する。葉では `Path.parametric_point`（polygon は閉路）に委譲する。
        """
        if self.type is DiagramType.DIAGRAM:
            if t < 0 or t > 1:
                raise ValueError(f"t は [0, 1] の範囲である必要があります: {t}")
            lengths = np.array([c.path_length() for c in self.children], dtype=np.float64)
            total = float(lengths.sum())
            if total <= 0.0:
                raise ValueError("総 path 長が 0 の合成ノードではパラメトリック点を計算できません")
            cumulative_t = np.cumsum(lengths) / total
            cumulative_t[-1] = 1.0
            # 長さ 0 の子（empty() の目印など）は選ばない
            idx = int(np.flatnonzero((cumulative_t >= t) & (lengths > 0.0))[0])
            prev_t = 0.0 if idx == 0 else float(cumulative_t[idx - 1])
            span = float(cumulative_t[idx]) - prev_t
            local_t = 0.0 if span == 0.0 else (t - prev_t) / span
            return self.children[idx].parametric_point(local_t, segment_index)
        if self.type in _GEOMETRIC_TYPES:
            closed = self.type is DiagramType.POLYGON
            return self.require_path().parametric_point(t, closed, segment_index)
        raise TypeError(f"{self.type.value} のパラメトリック点は定義されていません")

    # ── 幾何変換（すべて transform に集約） ─────────
    def transform(self, f: tu.TransformFunc) -> "Diagram":
        """`f` を origin・Path の全頂点・全子孫へ適用する。"""
        newd = self.copy_if_not_mutable()
        newd.origin = f(newd.origin)
        if newd.path is not None:
            newd.path = newd.path.transform(f)
        newd.children = [c.transform(f) for c in newd.children]
        return newd

    def translate(self, v: VectorLike) -> "Diagram":
        return self.transform(tu.translate(to_vector2(v)))

    def rotate(self, angle: float, pivot: VectorLike | None = None) -> "Diagram":
        """`pivot`（既定は origin）まわりに `angle` ラジアン回転。"""
        p = self.origin if pivot is None else to_vector2(pivot)
        return self.transform(tu.rotate(float(angle), p))

    def scale(self, factor: float | VectorLike, origin: VectorLike | None = None) -> "Diagram":
        if isinstance(factor, numbers.Real):
            fv = Vector2(float(factor), float(factor))
        else:
            fv = to_vector2(factor)
        o = self.origin if origin is None else to_vector2(origin)
        return self.transform(tu.scale(fv, o))

    def skewX(self, angle: float, base: VectorLike | None = None) -> "Diagram":  # noqa: N802
        b = self.origin if base is None else to_vector2(base)
        return self.transform(tu.skew_x(float(angle), b.y))

    def skewY(self, angle: float, base: VectorLike | None = None) -> "Diagram":  # noqa: N802
        b = self.origin if base is None else to_vector2(base)
        return self.transform(tu.skew_y(float(angle), b.x))

    def reflect_over_point(self, p: VectorLike) -> "Diagram":
        return self.transform(tu.reflect_over_point(to_vector2(p)))

    def reflect_over_line(self, p1: VectorLike, p2: VectorLike) -> "Diagram":
        return self.transform(tu.reflect_over_line(to_vector2(p1), to_vector2(p2)))

    def reflect(self, p1: VectorLike | None = None, p2: VectorLike | None = None) -> "Diagram":
        """引数 0 個: origin で点対称 / 1 個: その点で点対称 / 2 個: 直線 p1-p2 で線対称。"""
        if p1 is None and p2 is None:
            return self.reflect_over_point(self.origin)
        if p1 is not None and p2 is None:
            return self.reflect_over_point(p1)
        if p1 is None and p2 is not None:
            return self.reflect_over_point(p2)
        return self.reflect_over_line(p1, p2)  # type: ignore[arg-type]

    def vflip(self, a: float | None = None) -> "Diagram":
        """水平線 `y = a`（既定は origin.y）で上下反転。"""
        y = self.origin.y if a is None else float(a)
        return self.reflect(V2(0, y), V2(1, y))

    def hflip(self, a: float | None = None) -> "Diagram":
        """垂直線 `x = a`（既定は origin.x）で左右反転。"""
        x = self.origin.x if a is None else float(a)
        return self.reflect(V2(x, 0), V2(x, 1))

    # ── origin / 配置 ──────────────────────
    def move_origin(self, pos: VectorLike | Anchor | str) -> "Diagram":
        """幾何は動かさず origin だけを点またはアンカー位置へ移す。"""
        newd = self.copy_if_not_mutable()
        if isinstance(pos, (Anchor, str)):
            newd.origin = newd.get_anchor(pos)
        else:
            newd.origin = to_vector2(pos)
        return newd

    def _move_origin_text_leaf(self, anchor: Anchor) -> "Diagram":
        text_anchor, dy = text_anchor_metadata(anchor)
        newd = self.copy_if_not_mutable()
        if newd.textdata is None:
            newd.textdata = TextData()
        newd.textdata.text_anchor = text_anchor
        newd.textdata.dy = dy
        return newd

    def move_origin_text(self, anchor: Anchor | str) -> "Diagram":
        """テキストの見た目上の基準を `anchor` に合わせる（text-anchor と dy を書き換える）。

        polygon/curve/image は何もしない。合成ノードは子へ再帰する。
        """
        a = parse_anchor(anchor)
        if self.type in _TEXT_TYPES:
            return self._move_origin_text_leaf(a)
        newd = self.copy_if_not_mutable()
        if newd.type is DiagramType.DIAGRAM:
            newd.children = [c.move_origin_text(a) for c in newd.children]
        return newd

    def position(self, v: VectorLike = (0.0, 0.0)) -> "Diagram":
        """origin が `v` に来るよう全体を平行移動する。"""
        dv = to_vector2(v).sub(self.origin)
        return self.translate(dv)

    def reverse_path(self) -> "Diagram":
        """自身の Path だけを逆順にする（子へは再帰しない）。"""
        newd = self.copy_if_not_mutable()
        if newd.path is not None:
            newd.path = newd.path.reverse()
        return newd

    # ── デバッグ表示 ──────────────────────
    def debug_bbox(self) -> "Diagram":
        """バウンディングボックスの破線矩形と origin の "+" 印。"""
        s = settings.get()
        bmin, bmax = self.bounding_box()
        rect = make_leaf(
            DiagramType.POLYGON,
            path=[bmin, V2(bmax.x, bmin.y), bmax, V2(bmin.x, bmax.y)],
            tags=[TAG.DEBUG_BBOX],
        )
        rect = rect.fill("none").stroke(s.DEBUG_BBOX_STROKE).strokedasharray([5, 5])
        origin_marker = text("+").position(self.origin)
        return diagram_combine(rect, origin_marker).append_tags(TAG.DEBUG)

    def debug(self, show_index: bool = True) -> "Diagram":
        """Path の破線表示・頂点番号・バウンディングボックスの診断オーバーレイ。

        頂点番号は、直前にラベルを付けた頂点との距離が
        `bbox 対角長 × DEBUG_LABEL_SPACING` 未満の頂点を省略する。
        """
        if self.type in (DiagramType.DIAGRAM, DiagramType.IMAGE):
            return self.debug_bbox()
        if self.type in _TEXT_TYPES:
            return empty(self.origin).combine(self.debug_bbox())

        s = settings.get()
        points = self.require_path().points
        outline = make_leaf(self.type, path=points, tags=[TAG.DEBUG])
        outline = outline.fill("none").stroke(s.DEBUG_PATH_STROKE).strokedasharray([5, 5])
        if not show_index:
            return outline.combine(self.debug_bbox())

        bmin, bmax = self.bounding_box()
        tolerance = bmax.sub(bmin).length() * s.DEBUG_LABEL_SPACING
        labels: list[Diagram] = []
        prev: Vector2 | None = None
        for i, p in enumerate(points):
            if prev is not None and p.sub(prev).length() < tolerance:
                continue
            labels.append(_debug_index_label(i, p))
            prev = p
        logger.debug("debug overlay: %d/%d vertices labelled", len(labels), len(points))
        return outline.combine(self.debug_bbox(), *labels)

    def __repr__(self) -> str:  # pragma: no cover - 表示用
        flag = "mut" if self.mutable else "immut"
        if self.type is DiagramType.DIAGRAM:
            return f"Diagram(diagram, children={len(self.children)}, {flag})"
        n = len(self.path.points) if self.path is not None else 0
        return f"Diagram({self.type.value}, N={n}, tags={self.tags}, {flag})"


def _debug_index_label(index: int, p: Vector2) -> Diagram:
    label = text(str(index)).position(p)
    background = label.textfill("white").textstroke("white").textstrokewidth(5)
    foreground = label.textfill("black")
    return diagram_combine(background, foreground).append_tags(TAG.DEBUG_INDEX)


# ── 構築 ───────────────────────────────────
def make_leaf(
    type_: DiagramType | str,
    *,
    path: Path | Iterable[VectorLike] | None = None,
    textdata: TextData | None = None,
    imgdata: ImageData | None = None,
    multilinedata: MultilineData | None = None,
    tags: Iterable[str] = (),
    origin: VectorLike | None = None,
) -> Diagram:
    """葉ノードを検証付きで生成する。

    - polygon/curve/image: `path` 必須（image は `imgdata` も必須）。text 系の属性は不可。
    - text: `textdata` 必須。multilinetext: `multilinedata` 必須。`path` は不可。
    - origin 省略時、path を持つ葉はバウンディングボックス中心、text 系は (0, 0)。

    Raises
    ------
    ValueError
        判別子と与えたデータが整合しない場合、または合成型を指定した場合。
    """
    dtype = DiagramType(type_)
    if dtype is DiagramType.DIAGRAM:
        raise ValueError("合成ノードは diagram_combine() で生成してください")

    if dtype in _PATH_TYPES:
        if path is None:
            raise ValueError(f"{dtype.value} には path が必要です")
        if textdata is not None or multilinedata is not None:
            raise ValueError(f"{dtype.value} は textdata/multilinedata を持てません")
        if dtype is DiagramType.IMAGE and imgdata is None:
            raise ValueError("image には imgdata が必要です")
        if dtype is not DiagramType.IMAGE and imgdata is not None:
            raise ValueError(f"{dtype.value} は imgdata を持てません")
        p = path.copy() if isinstance(path, Path) else Path(path)
        p.mutable = False
        if not p.points:
            raise ValueError(f"{dtype.value} の path は 1 点以上必要です")
        d = Diagram(
            dtype,
            path=p,
            imgdata=imgdata.copy() if imgdata is not None else None,
            tags=_as_tag_list(tags),
        )
        d.origin = to_vector2(origin) if origin is not None else d.get_anchor(Anchor.CENTER_CENTER)
        return d

    # text 系
    if path is not None or imgdata is not None:
        raise ValueError(f"{dtype.value} は path/imgdata を持てません")
    if dtype is DiagramType.TEXT and textdata is None:
        raise ValueError("text には textdata が必要です")
    if dtype is DiagramType.MULTILINE_TEXT and multilinedata is None:
        raise ValueError("multilinetext には multilinedata が必要です")
    return Diagram(
        dtype,
        textdata=textdata.copy() if textdata is not None else TextData(),
        multilinedata=multilinedata.copy() if multilinedata is not None else None,
        origin=origin,
        tags=_as_tag_list(tags),
    )


def polygon(points: Iterable[VectorLike]) -> Diagram:
    """閉じた折れ線（3 点以上）。"""
    pts = [to_vector2(p) for p in points]
    if len(pts) < 3:
        raise ValueError(f"polygon には 3 点以上が必要です: got {len(pts)}")
    return make_leaf(DiagramType.POLYGON, path=pts)


def curve(points: Iterable[VectorLike]) -> Diagram:
    """開いた折れ線。"""
    return make_leaf(DiagramType.CURVE, path=[to_vector2(p) for p in points])


def line(start: VectorLike, end: VectorLike) -> Diagram:
    return make_leaf(DiagramType.CURVE, path=[start, end], tags=[TAG.LINE])


def empty(v: VectorLike = (0.0, 0.0)) -> Diagram:
    """1 点だけの curve（配置の目印用）。"""
    return make_leaf(DiagramType.CURVE, path=[v], tags=[TAG.EMPTY])


def text(content: str) -> Diagram:
    return make_leaf(DiagramType.TEXT, textdata=TextData(text=str(content)))


def multiline(spans: Iterable[TextSpan | str | tuple]) -> Diagram:
    """装飾付き文字列区間の列から複数行テキストを生成する。"""
    return make_leaf(DiagramType.MULTILINE_TEXT, multilinedata=MultilineData.from_spans(spans))


def image(src: str, width: float, height: float) -> Diagram:
    """原点中心・幅 `width`・高さ `height` の画像枠（左下→右下→右上→左上）。"""
    w, h = float(width) / 2.0, float(height) / 2.0
    frame = [V2(-w, -h), V2(w, -h), V2(w, h), V2(-w, h)]
    return make_leaf(DiagramType.IMAGE, path=frame, imgdata=ImageData(src=str(src)))


def diagram_combine(*diagrams: Diagram | Sequence[Diagram]) -> Diagram:
    """複数の Diagram を子に持つ合成ノードを作る。

    - 子は入力順、各入力の `copy_if_not_mutable()`。
    - 結果は「すべての入力が可変」のときだけ可変（1 つでも不変なら不変）。
    - origin は先頭の入力の origin（幾何から再計算しない）。
    - 入力なしは子も持たない空の合成ノード（origin は (0, 0)）。
    - 単一のリスト/タプルを渡した場合はその要素を入力とみなす。
    """
    if len(diagrams) == 1 and isinstance(diagrams[0], (list, tuple)):
        items: list[Diagram] = list(diagrams[0])
    else:
        items = list(diagrams)  # type: ignore[arg-type]
    if not items:
        return Diagram(DiagramType.DIAGRAM)
    for d in items:
        if not isinstance(d, Diagram):
            raise TypeError(f"Diagram 以外は結合できません: {d!r}")
    all_mutable = all(d.mutable for d in items)
    children = [d.copy_if_not_mutable() for d in items]
    newd = Diagram(DiagramType.DIAGRAM, children=children, origin=children[0].origin)
    newd.mutable = all_mutable
    return newd


__all__ = [
    "DiagramType",
    "Diagram",
    "make_leaf",
    "polygon",
    "curve",
    "line",
    "empty",
    "text",
    "multiline",
    "image",
    "diagram_combine",
]
