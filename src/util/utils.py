"""
どこで: `util.utils`
何を: 角度変換・等間隔数列・配列の繰り返しなど、図形生成で多用する数値ヘルパ。
なぜ: shapes/modifiers が同じ数列規約（端点の含む/含まない）を共有するため。
"""

from __future__ import annotations

from typing import Sequence, TypeVar

import numpy as np

T = TypeVar("T")


def from_degree(angle: float) -> float:
    """度数法 → ラジアン。"""
    return float(angle) * np.pi / 180.0


def to_degree(angle: float) -> float:
    """ラジアン → 度数法。"""
    return float(angle) * 180.0 / np.pi


def linspace(start: float, end: float, n: int = 100) -> list[float]:
    """`start` から `end` まで（両端含む）を `n` 等分した数列。"""
    if n <= 0:
        return []
    if n == 1:
        return [float(start)]
    return np.linspace(start, end, int(n)).tolist()


def linspace_exc(start: float, end: float, n: int = 100) -> list[float]:
    """`start` から `end` まで（`end` は含まない）を `n` 等分した数列。

    閉路（polygon）上の等間隔サンプルで、始点と終点の重複を避けるために使う。
    """
    if n <= 0:
        return []
    return np.linspace(start, end, int(n), endpoint=False).tolist()


def range_(start: float, end: float, step: float = 1) -> list[float]:
    """`[start, end)` を `step` 刻みで列挙する。

    `step == 0` や向きが逆の場合は空リスト。
    """
    if step == 0:
        return []
    n = int(np.ceil((end - start) / step))
    if n <= 0:
        return []
    values = start + step * np.arange(n)
    if isinstance(start, int) and isinstance(step, int):
        return [int(v) for v in values]
    return values.tolist()


def range_inc(start: float, end: float, step: float = 1) -> list[float]:
    """`[start, end]`（終端含む）を `step` 刻みで列挙する。"""
    if step == 0:
        return []
    n = int(np.floor((end - start) / step + 1e-9)) + 1
    if n <= 0:
        return []
    values = start + step * np.arange(n)
    if isinstance(start, int) and isinstance(step, int):
        return [int(v) for v in values]
    return values.tolist()


def array_repeat(arr: Sequence[T], length: int) -> list[T]:
    """`arr` を循環させて長さ `length` の配列を作る。

    例: `array_repeat([1, 2], 5) == [1, 2, 1, 2, 1]`
    """
    if length <= 0:
        return []
    if len(arr) == 0:
        raise ValueError("空の配列は繰り返せません")
    return [arr[i % len(arr)] for i in range(length)]


__all__ = [
    "from_degree",
    "to_degree",
    "linspace",
    "linspace_exc",
    "range_",
    "range_inc",
    "array_repeat",
]
