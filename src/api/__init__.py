"""
どこで: `api` 入口（高レベル公開 API）。
何を: 図形 `G`・modifier `M`・装飾子 `shape/modifier`・`Diagram` などのコア型と整列ヘルパを再輸出。
なぜ: 利用者が単一名前空間から図形生成→加工→配置まで完結できるようにするため。

Usage:
    from api import G, M, V2, diagram_combine, distribute_horizontal_and_align

    boxes = [G.square(1), G.circle(0.7), G.regular_polygon(5, 0.8)]
    row = diagram_combine(distribute_horizontal_and_align(boxes, 0.5))
    row = row.apply(M.round_corner(0.2)).fill("lightgray")
"""

# コア型・ファクトリ
from common.logging import setup_default_logging
from engine.core.anchor import Anchor
from engine.core.diagram import (
    Diagram,
    DiagramType,
    curve,
    diagram_combine,
    empty,
    image,
    line,
    multiline,
    polygon,
    text,
)
from engine.core.path import Path
from engine.core.style import DiagramStyle, TextData, TextSpan
from engine.core.tags import TAG
from engine.core.vector import V2, Vdir, Vector2
from layout import (
    align_horizontal,
    align_vertical,
    distribute_horizontal,
    distribute_horizontal_and_align,
    distribute_vertical,
    distribute_vertical_and_align,
)
from modifiers.registry import modifier as modifier  # 公開唯一経路（api.modifier）
from shapes import (
    circle_radius,
    circle_tangent_point_from_point,
    interpolate_cubic_spline,
    line_intersection,
    line_intersection_x,
    line_intersection_y,
    line_points,
    size,
)
from shapes.registry import shape as shape  # 公開唯一経路（api.shape）

from .modifiers import M, ModifiersAPI, Pipeline
from .shapes import G, ShapesAPI

__all__ = [
    # メインAPI
    "G",  # 図形ファクトリ
    "M",  # modifier ファクトリ
    "shape",  # ユーザー拡張用デコレータ
    "modifier",  # ユーザー拡張用デコレータ
    # コア
    "Diagram",
    "DiagramType",
    "Path",
    "Vector2",
    "V2",
    "Vdir",
    "Anchor",
    "TAG",
    "DiagramStyle",
    "TextData",
    "TextSpan",
    "polygon",
    "curve",
    "line",
    "empty",
    "text",
    "multiline",
    "image",
    "diagram_combine",
    # 配置
    "align_vertical",
    "align_horizontal",
    "distribute_horizontal",
    "distribute_vertical",
    "distribute_horizontal_and_align",
    "distribute_vertical_and_align",
    # 幾何クエリ
    "line_points",
    "line_intersection",
    "line_intersection_x",
    "line_intersection_y",
    "size",
    "circle_radius",
    "circle_tangent_point_from_point",
    "interpolate_cubic_spline",
    # アプリ側のロギング初期化
    "setup_default_logging",
    # クラス（高度な使用）
    "ShapesAPI",
    "ModifiersAPI",
    "Pipeline",
]

# バージョン情報
__version__ = "0.1.0"
