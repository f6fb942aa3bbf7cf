"""
resample / subdivide / slicepath modifier（頂点の再配置）

- resample: 弧長に沿って等間隔に `n` 点を取り直す（curve は両端を含み、polygon は始点を重複させない）。
- subdivide: 各区間を `n` 等分して頂点を増やす（形は変えない）。
- slicepath: 弧長比 `[t_start, t_end]` の区間だけを取り出して開いた curve にする。

Notes
-----
- いずれも `function_handle_path_type` 経由で合成ノードへ再帰し、text/image は素通しする。
- 区間を持たない（1 点だけの）Path は変更しない。
"""

from __future__ import annotations

import logging

import numpy as np

from common import settings
from engine.core.diagram import Diagram, DiagramType
from engine.core.vector import Vector2
from util.utils import linspace, linspace_exc

from .base import ModifierFunc, function_handle_path_type, replace_points
from .registry import modifier

logger = logging.getLogger(__name__)


def _has_segments(d: Diagram) -> bool:
    return len(d.require_path().points) >= 2


@modifier
def resample(n: int | None = None) -> ModifierFunc:
    """Path を `n` 点に取り直す modifier を返す。

    Parameters
    ----------
    n : int, optional
        出力点数。省略時は `settings.RESAMPLE_DEFAULT_N`。

    Returns
    -------
    ModifierFunc
        `Diagram -> Diagram`。
    """
    count = settings.get().RESAMPLE_DEFAULT_N if n is None else int(n)
    if count < 1:
        raise ValueError(f"resample の点数は 1 以上です: got {n}")

    def func(d: Diagram) -> Diagram:
        if not _has_segments(d):
            return d
        ts = linspace(0.0, 1.0, count) if d.type is DiagramType.CURVE else linspace_exc(0.0, 1.0, count)
        return replace_points(d, [d.parametric_point(t) for t in ts])

    return function_handle_path_type(func)


@modifier
def subdivide(n: int = 100) -> ModifierFunc:
    """各区間を `n` 等分する modifier を返す（polygon は閉じる区間も分割）。"""
    parts = int(n)
    if parts < 1:
        raise ValueError(f"subdivide の分割数は 1 以上です: got {n}")

    def func(d: Diagram) -> Diagram:
        if not _has_segments(d):
            return d
        closed = d.type is DiagramType.POLYGON
        pts = d.require_path().as_array(closed=closed)
        start, end = pts[:-1], pts[1:]
        # 各区間の始点を含み終点を含まない n 点
        frac = np.arange(parts, dtype=np.float64) / parts
        sub = start[:, None, :] + (end - start)[:, None, :] * frac[None, :, None]
        out = sub.reshape(-1, 2)
        if not closed:
            out = np.vstack([out, pts[-1:]])
        return replace_points(d, [Vector2(float(x), float(y)) for x, y in out])

    return function_handle_path_type(func)


@modifier
def slicepath(t_start: float, t_end: float, n: int = 100) -> ModifierFunc:
    """弧長比 `[t_start, t_end]` の部分を取り出す modifier を返す。

    `t_start > t_end` なら入れ替え、`[0, 1]` にクランプする。区間内は約 `n` 点で近似する。
    """
    t0, t1 = float(t_start), float(t_end)
    if t0 > t1:
        t0, t1 = t1, t0
        logger.debug("slicepath: t_start > t_end のため入れ替え (%s, %s)", t0, t1)
    t0, t1 = max(t0, 0.0), min(t1, 1.0)
    if t1 <= t0:
        raise ValueError(f"slicepath の区間が空です: [{t_start}, {t_end}]")
    n_total = int(np.floor(int(n) / (t1 - t0)))
    lo = int(np.floor(t0 * n_total))
    hi = int(np.floor(t1 * n_total)) + 1

    def func(d: Diagram) -> Diagram:
        if not _has_segments(d):
            return d
        resampled = resample(n_total)(d)
        newd = replace_points(resampled, resampled.require_path().points[lo:hi])
        # 閉路の一部は開いた曲線として扱う
        newd.type = DiagramType.CURVE
        return newd

    return function_handle_path_type(func)


__all__ = ["resample", "subdivide", "slicepath"]
