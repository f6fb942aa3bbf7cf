"""
どこで: `common` の型定義。
何を: 2D 座標を受け取る引数の軽量エイリアス。
なぜ: 依存の少ない場所に配置して循環と分散定義を避けるため。
"""

from typing import Sequence

NumberLike = float | int
PointLike = Sequence[NumberLike]


__all__ = ["NumberLike", "PointLike"]
