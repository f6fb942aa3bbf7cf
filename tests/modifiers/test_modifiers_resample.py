"""
どこで: tests（modifiers.resample / subdivide / slicepath / function_handle_path_type）。
何を: 出力点数・端点・閉路の扱い、合成ノードへの再帰、text の素通し、入力の不変性。
なぜ: 頂点の再配置は描画結果に直結し、点数や端点のずれが見た目の破綻になるため。
"""

from __future__ import annotations

import pytest

from engine.core.diagram import Diagram, DiagramType, curve, diagram_combine, empty, polygon, text
from engine.core.vector import V2
from modifiers import function_handle_path_type, resample, slicepath, subdivide


def test_resample_curve_keeps_endpoints(open_curve: Diagram) -> None:
    out = open_curve.apply(resample(5))
    pts = out.require_path().points
    assert len(pts) == 5
    assert pts[0] == V2(0, 0)
    assert pts[-1] == V2(10, 10)
    assert pts[2] == V2(10, 0)


def test_resample_polygon_does_not_repeat_start(unit_square: Diagram) -> None:
    pts = unit_square.apply(resample(8)).require_path().points
    assert len(pts) == 8
    assert pts[0] == V2(0, 0)
    assert pts[-1] != pts[0]


def test_resample_default_count_from_settings(open_curve: Diagram) -> None:
    assert len(open_curve.apply(resample()).require_path().points) == 100


def test_resample_recurses_and_skips_text(snap) -> None:
    d = diagram_combine(curve([(0, 0), (1, 0)]), text("a"), diagram_combine(curve([(0, 0), (0, 2)])))
    before = snap(d)
    out = d.apply(resample(3))
    assert len(out.children[0].require_path().points) == 3
    assert out.children[1].type is DiagramType.TEXT
    assert len(out.children[2].children[0].require_path().points) == 3
    assert snap(d) == before


def test_resample_leaves_single_point_path() -> None:
    e = empty((1, 1))
    assert e.apply(resample(4)).require_path().points == [V2(1, 1)]


def test_resample_rejects_non_positive() -> None:
    with pytest.raises(ValueError):
        resample(0)


def test_subdivide_curve() -> None:
    c = curve([(0, 0), (4, 0)])
    pts = c.apply(subdivide(4)).require_path().points
    assert pts == [V2(0, 0), V2(1, 0), V2(2, 0), V2(3, 0), V2(4, 0)]


def test_subdivide_polygon_splits_closing_edge() -> None:
    tri = polygon([(0, 0), (2, 0), (0, 2)])
    pts = tri.apply(subdivide(2)).require_path().points
    assert len(pts) == 6
    assert pts[-1] == V2(0, 1)


def test_slicepath_middle_of_line() -> None:
    c = curve([(0, 0), (10, 0)])
    out = c.apply(slicepath(0.2, 0.6, 10))
    pts = out.require_path().points
    assert pts[0].x == pytest.approx(2.0, abs=0.5)
    assert pts[-1].x == pytest.approx(6.0, abs=0.5)
    assert all(1.5 <= p.x <= 6.5 for p in pts)


def test_slicepath_swaps_and_clamps() -> None:
    c = curve([(0, 0), (10, 0)])
    a = c.apply(slicepath(0.8, -1.0, 20)).require_path().points
    assert a[0] == V2(0, 0)
    assert a[-1].x == pytest.approx(8.0, abs=0.6)


def test_slicepath_polygon_becomes_curve(unit_square: Diagram) -> None:
    out = unit_square.apply(slicepath(0.0, 0.5, 20))
    assert out.type is DiagramType.CURVE


def test_slicepath_empty_interval_raises() -> None:
    with pytest.raises(ValueError):
        slicepath(0.5, 0.5)


def test_function_handle_path_type_only_sees_path_leaves() -> None:
    seen: list[DiagramType] = []

    def record(d: Diagram) -> Diagram:
        seen.append(d.type)
        return d

    d = diagram_combine(polygon([(0, 0), (1, 0), (0, 1)]), text("a"), curve([(0, 0), (1, 1)]))
    function_handle_path_type(record)(d)
    assert seen == [DiagramType.POLYGON, DiagramType.CURVE]
