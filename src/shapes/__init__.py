"""
どこで: `shapes` パッケージ（関数登録）。
何を: ビルトイン shape を import 副作用で登録し、`api.G` から名前で解決できるようにする。
なぜ: 図形ヘルパの拡張点を一箇所に集約するため。
"""

# 関数版 shape 定義を import して登録（副作用）
from . import arrow as _register_arrow  # noqa: F401
from . import curves as _register_curves  # noqa: F401
from . import geometry as _register_geometry  # noqa: F401
from . import polygon as _register_polygon  # noqa: F401
from . import rectangle as _register_rectangle  # noqa: F401
from . import text as _register_text  # noqa: F401
from .curves import interpolate_cubic_spline
from .geometry import (
    circle_radius,
    circle_tangent_point_from_point,
    line_intersection,
    line_intersection_x,
    line_intersection_y,
    line_points,
    size,
)
from .registry import get_shape, is_shape_registered, list_shapes, shape  # re-export

__all__ = [
    "shape",
    "get_shape",
    "list_shapes",
    "is_shape_registered",
    # 幾何クエリ（Diagram を返さないので G には載らない）
    "line_points",
    "line_intersection",
    "line_intersection_x",
    "line_intersection_y",
    "size",
    "circle_radius",
    "circle_tangent_point_from_point",
    "interpolate_cubic_spline",
]
