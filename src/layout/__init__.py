"""
どこで: `layout` パッケージ。
何を: 複数 Diagram の整列・等間隔配置ヘルパを公開する。
なぜ: 配置ロジックを Diagram 本体から分離し、アンカー問い合わせの上に薄く載せるため。
"""

from .alignment import (
    align_horizontal,
    align_vertical,
    distribute_horizontal,
    distribute_horizontal_and_align,
    distribute_vertical,
    distribute_vertical_and_align,
)

__all__ = [
    "align_vertical",
    "align_horizontal",
    "distribute_horizontal",
    "distribute_vertical",
    "distribute_horizontal_and_align",
    "distribute_vertical_and_align",
]
