"""
どこで: `modifiers.base`。
何を: 「Path を持つ葉にだけ効く関数」を「任意の Diagram に効く関数」へ持ち上げる共通処理。
なぜ: 各 modifier が合成ノードの再帰や text/image の素通しを個別に書かずに済むようにするため。

規約:
- 入力は `copy_if_not_mutable()` してから加工する（呼び出し元の参照は変化しない）。
- polygon/curve: 関数を直接適用。
- diagram: 子へ再帰（子の置き換えは新しいリストで行う）。
- text/multilinetext/image: 何もしない。
"""

from __future__ import annotations

from typing import Callable, Iterable

from engine.core.diagram import Diagram, DiagramType
from engine.core.path import Path
from engine.core.vector import Vector2

ModifierFunc = Callable[[Diagram], Diagram]

_SKIPPED = (DiagramType.TEXT, DiagramType.MULTILINE_TEXT, DiagramType.IMAGE)


def function_handle_path_type(func: ModifierFunc) -> ModifierFunc:
    """Path 用の関数を、合成ノードへ再帰し text/image を素通しする関数に変換する。"""

    def modified(d: Diagram) -> Diagram:
        if d.type in (DiagramType.POLYGON, DiagramType.CURVE):
            return func(d.copy_if_not_mutable())
        if d.type is DiagramType.DIAGRAM:
            newd = d.copy_if_not_mutable()
            newd.children = [modified(c) for c in newd.children]
            return newd
        if d.type in _SKIPPED:
            return d
        raise RuntimeError(f"Unreachable: 未知の判別子 {d.type!r}")

    return modified


def replace_points(d: Diagram, points: Iterable[Vector2]) -> Diagram:
    """`d`（加工用に複製済みであること）の Path を `points` で置き換える。"""
    d.path = Path(points, mutable=d.mutable)
    return d


__all__ = ["ModifierFunc", "function_handle_path_type", "replace_points"]
