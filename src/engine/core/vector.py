"""
どこで: `engine.core.vector`
何を: 2D の点/ベクトルを表す不変値型 `Vector2` と生成ヘルパ `V2` / `Vdir`。
なぜ: Path/Diagram のすべての幾何演算の最小単位を、副作用のない値型として固定するため。

方針:
- `Vector2` は frozen dataclass。同一性は持たず、等価性は成分の構造比較。
- すべての演算は新しい値を返す（その場での変更なし）。
- `normalize()` はゼロベクトルに対して NaN 成分を返す（例外にしない）。呼び出し側でガードする。
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Iterator

from common.types import PointLike


@dataclass(frozen=True, slots=True)
class Vector2:
    """2D ベクトル（不変値）。"""

    x: float
    y: float

    def add(self, v: "Vector2") -> "Vector2":
        return Vector2(self.x + v.x, self.y + v.y)

    def sub(self, v: "Vector2") -> "Vector2":
        return Vector2(self.x - v.x, self.y - v.y)

    def scale(self, s: float) -> "Vector2":
        return Vector2(self.x * s, self.y * s)

    def mul(self, v: "Vector2") -> "Vector2":
        """成分ごとの積。"""
        return Vector2(self.x * v.x, self.y * v.y)

    def rotate(self, angle: float) -> "Vector2":
        """原点まわりに `angle`（ラジアン、反時計回り）回転。"""
        c, s = math.cos(angle), math.sin(angle)
        return Vector2(self.x * c - self.y * s, self.x * s + self.y * c)

    def dot(self, v: "Vector2") -> float:
        return self.x * v.x + self.y * v.y

    def cross(self, v: "Vector2") -> float:
        """2D 外積（z 成分）。"""
        return self.x * v.y - self.y * v.x

    def equals(self, v: "Vector2") -> bool:
        return self.x == v.x and self.y == v.y

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def length_sq(self) -> float:
        return self.x * self.x + self.y * self.y

    def angle(self) -> float:
        """`atan2(y, x)`。"""
        return math.atan2(self.y, self.x)

    def normalize(self) -> "Vector2":
        """単位ベクトル。ゼロベクトルでは `(nan, nan)`。"""
        length = self.length()
        if length == 0.0:
            return Vector2(math.nan, math.nan)
        return Vector2(self.x / length, self.y / length)

    def copy(self) -> "Vector2":
        return Vector2(self.x, self.y)

    def apply(self, f: Callable[["Vector2"], "Vector2"]) -> "Vector2":
        return f(self.copy())

    def reflect_over_point(self, q: "Vector2") -> "Vector2":
        """点 `q` に関する点対称（`q` まわりの π 回転）。"""
        return Vector2(2.0 * q.x - self.x, 2.0 * q.y - self.y)

    def reflect_over_line(self, p1: "Vector2", p2: "Vector2") -> "Vector2":
        """`p1`-`p2` を通る直線に関する線対称。

        法線は直線方向を 90° 回転して正規化したもの。`p1 == p2` は未定義（NaN）。
        """
        n = p2.sub(p1).rotate(math.pi / 2).normalize()
        d = n.dot(self.sub(p1))
        return self.sub(n.scale(2.0 * d))

    # 演算子糖衣
    def __add__(self, other: "Vector2") -> "Vector2":
        return self.add(other)

    def __sub__(self, other: "Vector2") -> "Vector2":
        return self.sub(other)

    def __mul__(self, s: float) -> "Vector2":
        return self.scale(s)

    __rmul__ = __mul__

    def __neg__(self) -> "Vector2":
        return Vector2(-self.x, -self.y)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def __repr__(self) -> str:  # pragma: no cover - 表示用
        return f"V2({self.x:g}, {self.y:g})"


def V2(x: float, y: float) -> Vector2:
    """`Vector2` 生成の短縮形。"""
    return Vector2(float(x), float(y))


def Vdir(angle: float) -> Vector2:
    """角度 `angle`（ラジアン）方向の単位ベクトル。"""
    return Vector2(math.cos(angle), math.sin(angle))


def to_vector2(value: Vector2 | PointLike) -> Vector2:
    """`Vector2` または長さ 2 の数値列を `Vector2` に正規化する。

    Raises
    ------
    TypeError
        2 成分の数値列として解釈できない場合。
    """
    if isinstance(value, Vector2):
        return value
    try:
        x, y = value  # type: ignore[misc]
        return Vector2(float(x), float(y))
    except (TypeError, ValueError) as exc:
        raise TypeError(f"2D 座標として解釈できません: {value!r}") from exc


__all__ = ["Vector2", "V2", "Vdir", "to_vector2"]
