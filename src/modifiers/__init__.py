"""
どこで: `modifiers` パッケージ（関数ベース）。
何を: `Diagram -> Diagram` 関数を返す modifier ファクトリを登録し、`api.M` から利用可能にする。
なぜ: 加工ステージの拡張点を一箇所に集約するため。

使用例:
    from modifiers import round_corner
    rounded = square(4).apply(round_corner(1.0))
"""

from .arrow import add_arrow, arrowhead_replace
from .base import ModifierFunc, function_handle_path_type
from .registry import get_modifier, is_modifier_registered, list_modifiers, modifier
from .resample import resample, slicepath, subdivide
from .round_corner import round_corner

__all__ = [
    "ModifierFunc",
    "function_handle_path_type",
    "modifier",
    "get_modifier",
    "list_modifiers",
    "is_modifier_registered",
    "resample",
    "subdivide",
    "slicepath",
    "round_corner",
    "add_arrow",
    "arrowhead_replace",
]
