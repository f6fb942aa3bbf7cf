"""共通フィクスチャ。

- 小さな Diagram 試料（葉・合成・入れ子）
- 不変性チェック用のスナップショット補助
- 設定の環境変数上書き後の復元
"""

from __future__ import annotations

from typing import Iterator

import numpy as np
import pytest

from common import settings
from engine.core.diagram import Diagram, curve, diagram_combine, polygon, text


@pytest.fixture(scope="session", autouse=True)
def np_seed() -> None:
    """NumPy の乱数を固定。"""
    np.random.seed(12345)


@pytest.fixture()
def unit_square() -> Diagram:
    return polygon([(0, 0), (1, 0), (1, 1), (0, 1)])


@pytest.fixture()
def open_curve() -> Diagram:
    return curve([(0, 0), (10, 0), (10, 10)])


@pytest.fixture()
def label() -> Diagram:
    return text("hello")


@pytest.fixture()
def nested() -> Diagram:
    """葉 5 枚を 3 段の入れ子で持つ合成ノード。

        diagram
        ├── polygon (tri)
        ├── diagram
        │   ├── curve
        │   └── diagram
        │       ├── text
        │       └── polygon (square)
        └── curve (line)
    """
    tri = polygon([(0, 0), (2, 0), (1, 2)])
    c = curve([(3, 3), (4, 5)])
    t = text("x")
    sq = polygon([(-1, -1), (0, -1), (0, 0), (-1, 0)])
    ln = curve([(5, 0), (6, 0)])
    inner = diagram_combine(t, sq)
    middle = diagram_combine(c, inner)
    return diagram_combine(tri, middle, ln)


def snapshot(d: Diagram) -> tuple:
    """観測可能な状態を比較可能なタプルに写す（不変性の検査用）。"""
    points = tuple(d.path.points) if d.path is not None else None
    return (
        d.type,
        points,
        d.origin,
        tuple(d.tags),
        d.style.copy(),
        d.textdata.copy() if d.textdata is not None else None,
        d.mutable,
        tuple(snapshot(c) for c in d.children),
    )


@pytest.fixture()
def reload_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """テスト後に環境変数を戻してから設定を読み直す。"""
    yield
    monkeypatch.undo()
    settings.reload_from_env()


@pytest.fixture()
def snap():
    """`snapshot` 関数そのもの（テストから呼び出す用）。"""
    return snapshot
