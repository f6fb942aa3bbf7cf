"""
どこで: tests（engine.core.diagram）。
何を: コピーオンライト・タグ・平坦化・バウンディングボックス/アンカー・変換・パラメトリック点。
なぜ: 図形/加工/配置のすべてが依存する Diagram の契約を固定するため。
"""

from __future__ import annotations

import math

import pytest

from engine.core.diagram import (
    Diagram,
    DiagramType,
    curve,
    diagram_combine,
    empty,
    image,
    line,
    make_leaf,
    multiline,
    polygon,
    text,
)
from engine.core.tags import TAG
from engine.core.vector import V2


def _approx_points(points, expected) -> None:
    assert len(points) == len(expected)
    for p, e in zip(points, expected):
        assert p.x == pytest.approx(e[0], abs=1e-9)
        assert p.y == pytest.approx(e[1], abs=1e-9)


# ── 構築 ───────────────────────────────────
def test_polygon_requires_three_points() -> None:
    with pytest.raises(ValueError):
        polygon([(0, 0), (1, 0)])


def test_leaf_origin_defaults_to_bbox_center(unit_square: Diagram) -> None:
    assert unit_square.type is DiagramType.POLYGON
    assert unit_square.origin == V2(0.5, 0.5)
    assert text("a").origin == V2(0, 0)


def test_make_leaf_validates_payload() -> None:
    with pytest.raises(ValueError):
        make_leaf(DiagramType.POLYGON)
    with pytest.raises(ValueError):
        make_leaf(DiagramType.TEXT)
    with pytest.raises(ValueError):
        make_leaf(DiagramType.IMAGE, path=[(0, 0), (1, 1)])
    with pytest.raises(ValueError):
        make_leaf(DiagramType.DIAGRAM)


def test_line_and_empty_are_tagged() -> None:
    assert line((0, 0), (1, 1)).contain_tag(TAG.LINE)
    e = empty((2, 3))
    assert e.contain_tag(TAG.EMPTY)
    assert e.require_path().points == [V2(2, 3)]


def test_image_frame_is_centered_rectangle() -> None:
    img = image("a.png", 4, 2)
    assert img.imgdata is not None and img.imgdata.src == "a.png"
    assert img.require_path().points == [V2(-2, -1), V2(2, -1), V2(2, 1), V2(-2, 1)]


def test_require_accessors_reject_wrong_type(unit_square: Diagram, label: Diagram) -> None:
    with pytest.raises(TypeError):
        label.require_path()
    with pytest.raises(TypeError):
        unit_square.require_textdata()


# ── 不変性 / 可変性 ────────────────────────
def test_transforms_do_not_modify_receiver(nested: Diagram, snap) -> None:
    before = snap(nested)
    nested.translate((1, 2))
    nested.rotate(1.0)
    nested.scale(3)
    nested.fill("red")
    nested.append_tags("x")
    nested.flatten()
    nested.fontsize(30)
    nested.reflect((0, 0), (1, 1))
    nested.move_origin("top-left")
    assert snap(nested) == before


def test_copy_is_deep(nested: Diagram, snap) -> None:
    c = nested.copy()
    assert snap(c) == snap(nested)
    assert c.children[0] is not nested.children[0]
    assert c.children[0].path is not nested.children[0].path


def test_mut_enables_in_place_changes(unit_square: Diagram) -> None:
    m = unit_square.mut()
    assert m is unit_square
    out = m.translate((1, 0))
    assert out is m
    assert m.origin == V2(1.5, 0.5)


def test_immut_returns_frozen_deep_copy(nested: Diagram) -> None:
    m = nested.copy().mut()
    frozen = m.immut()
    assert frozen is not m
    assert m.mutable is True
    assert frozen.mutable is False
    assert all(not c.mutable for c in frozen.flatten().children)
    moved = frozen.translate((1, 0))
    assert moved is not frozen


def test_mut_parent_only_copies_children_on_change() -> None:
    a = polygon([(0, 0), (1, 0), (0, 1)])
    d = diagram_combine(a).mut_parent_only()
    child_before = d.children[0]
    out = d.translate((5, 0))
    assert out is d
    assert d.children[0] is not child_before
    assert child_before.require_path().points[0] == V2(0, 0)


# ── タグ ──────────────────────────────────
def test_tags_are_ordered_set(unit_square: Diagram) -> None:
    d = unit_square.append_tags(["a", "b"]).append_tags("a").append_tags("c")
    assert d.tags == ["a", "b", "c"]
    assert d.contain_all_tags(["a", "c"])
    assert not d.contain_all_tags(["a", "z"])
    assert d.remove_tags("b").tags == ["a", "c"]
    assert d.reset_tags().tags == []
    assert unit_square.tags == []


def test_collect_tags_preorder_unique() -> None:
    a = polygon([(0, 0), (1, 0), (0, 1)]).append_tags(["x", "y"])
    b = curve([(0, 0), (1, 1)]).append_tags(["y", "z"])
    d = diagram_combine(a, b).append_tags("root")
    assert d.collect_tags() == ["root", "x", "y", "z"]


# ── 構造コンビネータ ───────────────────────
def test_flatten_preorder_leaves(nested: Diagram) -> None:
    flat = nested.flatten()
    assert flat.type is DiagramType.DIAGRAM
    types = [c.type for c in flat.children]
    assert types == [
        DiagramType.POLYGON,
        DiagramType.CURVE,
        DiagramType.TEXT,
        DiagramType.POLYGON,
        DiagramType.CURVE,
    ]
    assert all(c.type is not DiagramType.DIAGRAM for c in flat.children)
    # 葉に対しては何もしない
    leaf = polygon([(0, 0), (1, 0), (0, 1)])
    assert leaf.flatten().require_path().points == leaf.require_path().points


def test_apply_recursive_visits_every_node(nested: Diagram) -> None:
    visited: list[DiagramType] = []

    def record(d: Diagram) -> Diagram:
        visited.append(d.type)
        return d

    nested.apply_recursive(record)
    # 合成 3 + 葉 5（外側の合成を含め 8 ノード）
    assert len(visited) == 8
    assert visited[0] is DiagramType.DIAGRAM


def test_apply_to_tagged_recursive_only_touches_tagged() -> None:
    a = polygon([(0, 0), (1, 0), (0, 1)]).append_tags("hit")
    b = polygon([(0, 0), (2, 0), (0, 2)])
    d = diagram_combine(a, diagram_combine(b, a))
    out = d.apply_to_tagged_recursive("hit", lambda x: x.fill("red"))
    flat = out.flatten().children
    assert [c.style.fill for c in flat] == ["red", None, "red"]
    assert a.style.fill is None


def test_to_curve_and_back(nested: Diagram) -> None:
    curves = nested.to_curve().flatten().children
    assert DiagramType.POLYGON not in [c.type for c in curves]
    polys = nested.to_polygon().flatten().children
    assert DiagramType.CURVE not in [c.type for c in polys]


def test_add_points_on_composite_goes_to_last_child(nested: Diagram) -> None:
    out = nested.add_points([(9, 9)])
    assert out.children[-1].require_path().points[-1] == V2(9, 9)
    with pytest.raises(ValueError):
        diagram_combine().add_points([(0, 0)])
    with pytest.raises(TypeError):
        text("a").add_points([(0, 0)])


# ── スタイル / テキスト ─────────────────────
def test_geometric_style_skips_text(nested: Diagram) -> None:
    out = nested.fill("blue").strokewidth(2)
    for c in out.flatten().children:
        if c.type is DiagramType.TEXT:
            assert c.style.fill is None
        else:
            assert c.style.fill == "blue"
            assert c.style.stroke_width == 2.0


def test_text_style_only_on_text(nested: Diagram) -> None:
    out = nested.textfill("green")
    fills = {c.type: c.style.fill for c in out.flatten().children}
    assert fills[DiagramType.TEXT] == "green"
    assert fills[DiagramType.POLYGON] is None


def test_opacity_and_dasharray() -> None:
    d = curve([(0, 0), (1, 0)]).opacity(0.5).strokedasharray([2, 1])
    assert d.style.opacity == 0.5
    assert d.style.stroke_dasharray == (2.0, 1.0)


def test_clone_style_from_copies_to_all_descendants(nested: Diagram) -> None:
    src = polygon([(0, 0), (1, 0), (0, 1)]).stroke("red").strokewidth(3)
    out = nested.clone_style_from(src)
    for c in out.flatten().children:
        assert c.style == src.style
        assert c.style is not src.style


def test_textdata_setters_and_validation() -> None:
    t = text("a").fontsize(12).fontfamily("serif").fontweight(700).textanchor("start")
    td = t.require_textdata()
    assert (td.font_size, td.font_family, td.font_weight, td.text_anchor) == (
        12.0,
        "serif",
        "700",
        "start",
    )
    with pytest.raises(ValueError):
        t.textanchor("left")


def test_text_tovar_toggles_tag() -> None:
    v = text("x").text_tovar()
    assert v.contain_tag(TAG.TEXTVAR)
    assert not v.text_totext().contain_tag(TAG.TEXTVAR)


def test_scaletext_uses_default_font_size() -> None:
    t = text("a").scaletext(2)
    assert t.require_textdata().font_size == pytest.approx(36.0)
    m = multiline(["a", "\n", "b"]).scaletext(0.5)
    assert m.multilinedata is not None and m.multilinedata.scale_factor == 0.5


# ── 幾何の問い合わせ ────────────────────────
def test_bounding_box_and_anchors() -> None:
    sq = polygon([(0, 0), (2, 0), (2, 1), (0, 1)])
    assert sq.bounding_box() == (V2(0, 0), V2(2, 1))
    assert sq.get_anchor("top-right") == V2(2, 1)
    assert sq.get_anchor("bottom-left") == V2(0, 0)
    assert sq.get_anchor("center-center") == V2(1, 0.5)
    with pytest.raises(ValueError):
        sq.get_anchor("middle")


def test_composite_bbox_is_union(nested: Diagram) -> None:
    bmin, bmax = nested.bounding_box()
    assert bmin == V2(-1, -1)
    assert bmax == V2(6, 5)


def test_empty_composite_bbox_is_zero_box_at_origin() -> None:
    d = diagram_combine()
    assert d.bounding_box() == (V2(0, 0), V2(0, 0))


def test_text_bbox_is_origin_point() -> None:
    t = text("abc").position((3, 4))
    assert t.bounding_box() == (V2(3, 4), V2(3, 4))


def test_path_length_and_errors(open_curve: Diagram) -> None:
    assert open_curve.path_length() == pytest.approx(20.0)
    d = diagram_combine(open_curve, curve([(0, 0), (5, 0)]))
    assert d.path_length() == pytest.approx(25.0)
    with pytest.raises(TypeError):
        text("a").path_length()


def test_composite_parametric_point_partitions_by_length() -> None:
    a = curve([(0, 0), (10, 0)])
    b = curve([(0, 5), (30, 5)])
    d = diagram_combine(a, b)
    assert d.parametric_point(0.25) == V2(10, 0)
    p = d.parametric_point(0.5)
    assert p.x == pytest.approx(10.0)
    assert p.y == pytest.approx(5.0)
    with pytest.raises(ValueError):
        d.parametric_point(1.5)


def test_composite_parametric_point_zero_length_raises() -> None:
    d = diagram_combine(empty((0, 0)), empty((1, 1)))
    with pytest.raises(ValueError):
        d.parametric_point(0.5)


def test_composite_parametric_point_skips_zero_length_children() -> None:
    d = diagram_combine(empty((0, 0)), line((0, 0), (10, 0)))
    assert d.parametric_point(0.0) == V2(0, 0)
    assert d.parametric_point(1.0) == V2(10, 0)
    mid = diagram_combine(line((0, 0), (10, 0)), empty((5, 5)), line((10, 0), (20, 0)))
    assert mid.parametric_point(0.5) == V2(10, 0)
    tail = diagram_combine(line((0, 0), (10, 0)), empty((3, 3)))
    assert tail.parametric_point(1.0) == V2(10, 0)


def test_polygon_parametric_point_is_closed(unit_square: Diagram) -> None:
    p = unit_square.parametric_point(0.875)
    assert p.x == pytest.approx(0.0)
    assert p.y == pytest.approx(0.5)


# ── 変換 ─────────────────────────────────
def test_translate_moves_points_and_origin(unit_square: Diagram) -> None:
    d = unit_square.translate((2, 3))
    assert d.get_anchor("bottom-left") == V2(2, 3)
    assert d.origin == V2(2.5, 3.5)


def test_rotate_about_origin_by_default() -> None:
    sq = polygon([(0, 0), (2, 0), (2, 2), (0, 2)])
    r = sq.rotate(math.pi / 2)
    # 中心 (1,1) まわりの 90° 回転は同じ正方形
    _approx_points(r.require_path().points, [(2, 0), (2, 2), (0, 2), (0, 0)])


def test_scale_scalar_and_vector() -> None:
    sq = polygon([(0, 0), (2, 0), (2, 2), (0, 2)]).move_origin((0, 0))
    assert sq.scale(2).bounding_box() == (V2(0, 0), V2(4, 4))
    assert sq.scale((3, 1)).bounding_box() == (V2(0, 0), V2(6, 2))


def test_skew_keeps_base_line_fixed() -> None:
    sq = polygon([(0, 0), (1, 0), (1, 1), (0, 1)]).move_origin((0, 0))
    s = sq.skewX(math.pi / 4)
    pts = s.require_path().points
    assert pts[0] == V2(0, 0)
    assert pts[2].x == pytest.approx(0.0)
    assert pts[2].y == pytest.approx(1.0)


def test_reflect_variants(unit_square: Diagram) -> None:
    by_origin = unit_square.reflect()
    assert by_origin.bounding_box() == unit_square.bounding_box()
    by_point = unit_square.reflect((0, 0))
    assert by_point.bounding_box() == (V2(-1, -1), V2(0, 0))
    v = unit_square.vflip(0)
    bmin, bmax = v.bounding_box()
    assert (bmin.y, bmax.y) == (pytest.approx(-1.0), pytest.approx(0.0))
    h = unit_square.hflip(0)
    bmin, bmax = h.bounding_box()
    assert (bmin.x, bmax.x) == (pytest.approx(-1.0), pytest.approx(0.0))


def test_reflect_twice_is_identity(open_curve: Diagram) -> None:
    twice = open_curve.reflect_over_line((0, 1), (3, 7)).reflect_over_line((0, 1), (3, 7))
    _approx_points(
        twice.require_path().points, [(p.x, p.y) for p in open_curve.require_path().points]
    )


def test_position_and_move_origin(unit_square: Diagram) -> None:
    d = unit_square.move_origin("bottom-left").position((10, 10))
    assert d.origin == V2(10, 10)
    assert d.get_anchor("top-right") == V2(11, 11)
    # 引数なしは座標原点へ
    assert unit_square.position().origin == V2(0, 0)


def test_move_origin_text_sets_anchor_metadata() -> None:
    t = text("a").move_origin_text("top-left")
    td = t.require_textdata()
    assert (td.text_anchor, td.dy) == ("start", "0.75em")
    # 幾何要素には何もしない
    sq = polygon([(0, 0), (1, 0), (0, 1)])
    assert sq.move_origin_text("top-left").require_path().points == sq.require_path().points


def test_reverse_path_is_single_level() -> None:
    c = curve([(0, 0), (1, 0), (2, 0)])
    assert c.reverse_path().require_path().points[0] == V2(2, 0)
    d = diagram_combine(c)
    assert d.reverse_path().children[0].require_path().points[0] == V2(0, 0)


# ── デバッグ ──────────────────────────────
def test_debug_overlay_structure(unit_square: Diagram) -> None:
    dbg = unit_square.debug()
    assert dbg.type is DiagramType.DIAGRAM
    tags = dbg.collect_tags()
    assert TAG.DEBUG in tags
    assert TAG.DEBUG_BBOX in tags
    labels = [c for c in dbg.children if c.contain_tag(TAG.DEBUG_INDEX)]
    assert len(labels) == 4


def test_debug_skips_crowded_vertex_labels() -> None:
    c = curve([(0, 0), (0.001, 0), (10, 0), (10, 10)])
    labels = [ch for ch in c.debug().children if ch.contain_tag(TAG.DEBUG_INDEX)]
    assert len(labels) == 3


def test_debug_without_index(unit_square: Diagram) -> None:
    dbg = unit_square.debug(show_index=False)
    assert not any(c.contain_tag(TAG.DEBUG_INDEX) for c in dbg.children)


# ── 一連の利用例 ───────────────────────────
def test_end_to_end_build_transform_query() -> None:
    sq = polygon([(0, 0), (1, 0), (1, 1), (0, 1)]).fill("red")
    row = diagram_combine(sq, sq.translate((2, 0)), text("a").position((4, 0.5)))
    row = row.scale(2, origin=(0, 0)).append_tags("row")
    assert row.bounding_box() == (V2(0, 0), V2(8, 2))
    assert row.contain_tag("row")
    assert [c.style.fill for c in row.children[:2]] == ["red", "red"]
    assert row.children[2].origin == V2(8, 1)
    assert sq.bounding_box() == (V2(0, 0), V2(1, 1))
