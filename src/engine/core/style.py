"""
どこで: `engine.core.style`
何を: Diagram が持つ部分属性マップ（線/塗り・テキスト・画像・複数行テキスト）の型付きレコード。
なぜ: 属性集合は閉じて既知なので、動的キー辞書ではなく「各属性が Optional」の明示レコードにするため。

規約:
- 値 `None` は「未設定＝レンダラ既定値を継承」を意味する。
- `to_svg_dict()` は未設定を省いたハイフン区切りの SVG 属性名辞書を返す（外部レンダラ用）。
- レコードは可変 dataclass。共有を避けるため Diagram は常に `copy()` して保持する。
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Any, Iterable


def _svg_items(record: Any) -> dict[str, str]:
    out: dict[str, str] = {}
    for f in fields(record):
        value = getattr(record, f.name)
        if value is None:
            continue
        key = f.name.replace("_", "-")
        if isinstance(value, (list, tuple)):
            out[key] = ",".join(_fmt(v) for v in value)
        else:
            out[key] = _fmt(value)
    return out


def _fmt(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


@dataclass
class DiagramStyle:
    """線・塗りの属性（SVG presentation attributes に対応）。"""

    stroke: str | None = None
    fill: str | None = None
    opacity: float | None = None
    stroke_width: float | None = None
    stroke_linecap: str | None = None
    stroke_dasharray: tuple[float, ...] | None = None
    stroke_linejoin: str | None = None
    vector_effect: str | None = None

    def copy(self) -> "DiagramStyle":
        return replace(self)

    def updated(self, **changes: Any) -> "DiagramStyle":
        return replace(self, **changes)

    def merged_over(self, base: "DiagramStyle") -> "DiagramStyle":
        """`base` の上に自身の設定済み属性を重ねたレコード。"""
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        return replace(base, **{k: v for k, v in values.items() if v is not None})

    def to_svg_dict(self) -> dict[str, str]:
        return _svg_items(self)


@dataclass
class TextData:
    """テキスト属性。`dy` は `"0.25em"` のような CSS 長さ文字列。"""

    text: str | None = None
    font_family: str | None = None
    font_size: float | None = None
    font_weight: str | None = None
    font_style: str | None = None
    text_anchor: str | None = None
    dy: str | None = None
    angle: float | None = None
    font_scale: str | float | None = None

    def copy(self) -> "TextData":
        return replace(self)

    def updated(self, **changes: Any) -> "TextData":
        return replace(self, **changes)

    def merged_over(self, base: "TextData") -> "TextData":
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        return replace(base, **{k: v for k, v in values.items() if v is not None})

    def to_svg_dict(self) -> dict[str, str]:
        return _svg_items(self)


@dataclass
class ImageData:
    src: str = ""

    def copy(self) -> "ImageData":
        return replace(self)


@dataclass
class TextSpan:
    """複数行テキストの 1 区間（装飾付き文字列）。`text == "\\n"` は改行。"""

    text: str
    style: TextData = field(default_factory=TextData)

    def copy(self) -> "TextSpan":
        return TextSpan(self.text, self.style.copy())


@dataclass
class MultilineData:
    content: list[TextSpan] = field(default_factory=list)
    scale_factor: float = 1.0

    def copy(self) -> "MultilineData":
        return MultilineData([s.copy() for s in self.content], self.scale_factor)

    @classmethod
    def from_spans(cls, spans: Iterable[TextSpan | str | tuple]) -> "MultilineData":
        """`TextSpan` / 文字列 / `(text, TextData|dict)` の列から生成する。"""
        content: list[TextSpan] = []
        for span in spans:
            if isinstance(span, TextSpan):
                content.append(span.copy())
            elif isinstance(span, str):
                content.append(TextSpan(span))
            elif isinstance(span, tuple) and len(span) == 2:
                text, style = span
                if isinstance(style, dict):
                    style = TextData(**style)
                if not isinstance(style, TextData):
                    raise TypeError(f"span のスタイルは TextData か dict です: {style!r}")
                content.append(TextSpan(str(text), style.copy()))
            else:
                raise TypeError(f"不正な span です: {span!r}")
        return cls(content)


# レンダラ既定値（外部レンダラが未設定属性を補うときに使う）
DEFAULT_DIAGRAM_STYLE = DiagramStyle(
    stroke="black",
    fill="none",
    opacity=1.0,
    stroke_width=1.0,
    stroke_linecap="butt",
    stroke_dasharray=None,
    stroke_linejoin="miter",
    vector_effect="non-scaling-stroke",
)

DEFAULT_TEXT_DIAGRAM_STYLE = DiagramStyle(
    stroke="none",
    fill="black",
    opacity=1.0,
    stroke_width=0.0,
    vector_effect="non-scaling-stroke",
)

DEFAULT_TEXTDATA = TextData(
    text="",
    font_family="Latin Modern Math, sans-serif",
    font_size=18.0,
    font_weight="normal",
    font_style="normal",
    text_anchor="middle",
    dy="0.25em",
    angle=0.0,
    font_scale="auto",
)


__all__ = [
    "DiagramStyle",
    "TextData",
    "ImageData",
    "TextSpan",
    "MultilineData",
    "DEFAULT_DIAGRAM_STYLE",
    "DEFAULT_TEXT_DIAGRAM_STYLE",
    "DEFAULT_TEXTDATA",
]
