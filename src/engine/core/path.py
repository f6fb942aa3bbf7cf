"""
どこで: `engine.core.path`
何を: 折れ線（開/閉）を表す `Path` と、その長さ・弧長パラメトリック点・変換。
なぜ: Diagram の葉ノードが持つ唯一の幾何データを、コピーオンライト規約付きで提供するため。

データモデル（不変条件）:
- `points: list[Vector2]`: 順序付き頂点列。空は生成途中の一時状態としてのみ許容。
- `mutable: bool`: その場での変更を許すかのフラグ。既定 False（全変換はコピーを返す）。
- 1 つの `Path` は常にちょうど 1 つの Diagram が所有する（共有しない）。

弧長パラメトリゼーション:
    points = [P0, P1, P2]（closed=True なら末尾に P0 を補う）
    区間長 L_i = |P_{i+1} - P_i|、累積比 c_i = (L_0 + ... + L_i) / ΣL
    t ∈ [0, 1] に対し c_i >= t となる最初の i を選び、区間内を線形補間する。
"""

from __future__ import annotations

from typing import Callable, Iterable

import numpy as np

from .vector import Vector2, to_vector2


class Path:
    """頂点列（ポリライン）。

    変換系メソッドはすべて `copy_if_not_mutable()` を経由する。`mutable=True` のときのみ
    自身をその場で書き換えて同じインスタンスを返す。
    """

    __slots__ = ("points", "mutable")

    points: list[Vector2]
    mutable: bool

    def __init__(self, points: Iterable[Vector2], mutable: bool = False) -> None:
        self.points = [to_vector2(p) for p in points]
        self.mutable = bool(mutable)

    # ── コピー ───────────────────
    def copy(self) -> "Path":
        """頂点列を複製した新しい Path（`mutable` フラグは引き継ぐ）。"""
        return Path(list(self.points), mutable=self.mutable)

    def copy_if_not_mutable(self) -> "Path":
        """コピーオンライトの関門: 可変なら自身、不変ならコピー。"""
        return self if self.mutable else self.copy()

    # ── 変換（コピーオンライト） ────────
    def reverse(self) -> "Path":
        newp = self.copy_if_not_mutable()
        newp.points = newp.points[::-1]
        return newp

    def add_points(self, points: Iterable[Vector2]) -> "Path":
        newp = self.copy_if_not_mutable()
        newp.points = newp.points + [to_vector2(p) for p in points]
        return newp

    def transform(self, f: Callable[[Vector2], Vector2]) -> "Path":
        newp = self.copy_if_not_mutable()
        newp.points = [f(p) for p in newp.points]
        return newp

    # ── 問い合わせ ─────────────────
    def as_array(self, closed: bool = False) -> np.ndarray:
        """頂点列を `(N, 2) float64` 配列で返す（`closed=True` なら始点を末尾に補う）。"""
        if not self.points:
            return np.empty((0, 2), dtype=np.float64)
        arr = np.array([(p.x, p.y) for p in self.points], dtype=np.float64)
        if closed:
            arr = np.vstack([arr, arr[:1]])
        return arr

    def segment_lengths(self, closed: bool = False) -> np.ndarray:
        """各区間の長さ（区間数 = 頂点数 - 1、closed なら +1）。"""
        arr = self.as_array(closed=closed)
        if arr.shape[0] < 2:
            return np.empty((0,), dtype=np.float64)
        d = np.diff(arr, axis=0)
        return np.hypot(d[:, 0], d[:, 1])

    def length(self) -> float:
        """連続頂点間のユークリッド距離の総和（開路として計測、2 点未満は 0）。"""
        return float(self.segment_lengths().sum())

    def parametric_point(
        self, t: float, closed: bool = False, segment_index: int | None = None
    ) -> Vector2:
        """弧長比 `t` に対応する点を返す。

        Parameters
        ----------
        t : float
            `segment_index` 未指定時は全体に対する弧長比（`[0, 1]`）。
            指定時はその区間内の局所比（範囲外も外挿として許容）。
        closed : bool, default False
            True なら末尾→始点の区間を加えた閉路として扱う。
        segment_index : int, optional
            局所比で評価する区間番号（`0 <= segment_index < 区間数`）。

        Raises
        ------
        ValueError
            `t` が範囲外（全体比のとき）、区間番号が範囲外、または区間が存在しない場合。
        """
        pts = self.as_array(closed=closed)
        n_segments = pts.shape[0] - 1
        if n_segments < 1:
            raise ValueError("区間を持たない Path ではパラメトリック点を計算できません")

        if segment_index is not None:
            if segment_index < 0 or segment_index > n_segments - 1:
                raise ValueError(
                    f"segment_index は 0..{n_segments - 1} の範囲である必要があります: {segment_index}"
                )
            start = pts[segment_index]
            end = pts[segment_index + 1]
            x, y = start + (end - start) * float(t)
            return Vector2(float(x), float(y))

        if t < 0 or t > 1:
            raise ValueError(f"t は [0, 1] の範囲である必要があります: {t}")

        lengths = self.segment_lengths(closed=closed)
        total = float(lengths.sum())
        if total == 0.0:
            # 全頂点が一致（長さ 0）
            return Vector2(float(pts[0, 0]), float(pts[0, 1]))

        cumulative_t = np.cumsum(lengths) / total
        # 丸め誤差で末尾が 1 を下回る場合に備える
        cumulative_t[-1] = 1.0
        idx = int(np.searchsorted(cumulative_t, t, side="left"))
        prev_t = 0.0 if idx == 0 else float(cumulative_t[idx - 1])
        span = float(cumulative_t[idx]) - prev_t
        local_t = 0.0 if span == 0.0 else (t - prev_t) / span
        return self.parametric_point(local_t, closed, idx)

    def __len__(self) -> int:
        return len(self.points)

    def __repr__(self) -> str:  # pragma: no cover - 表示用
        flag = "mut" if self.mutable else "immut"
        return f"Path(N={len(self.points)}, {flag})"


__all__ = ["Path"]
