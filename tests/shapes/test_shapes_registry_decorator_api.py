from __future__ import annotations

import pytest

from engine.core.diagram import Diagram, empty
from shapes.registry import (
    get_registry,
    get_shape,
    is_shape_registered,
    list_shapes,
    shape,
    unregister,
)


def test_builtin_shapes_are_registered() -> None:
    import shapes  # noqa: F401  (登録の副作用)

    names = list_shapes()
    for name in ("rectangle", "square", "circle", "arc", "arrow", "arrow1", "textvar"):
        assert name in names
    assert names == sorted(names)


def test_shape_decorator_supports_name_keyword() -> None:
    @shape(name="custom_test_shape")
    def custom_test_shape() -> Diagram:
        return empty()

    assert is_shape_registered("custom_test_shape")
    assert get_shape("custom-test-shape") is custom_test_shape
    unregister("custom_test_shape")
    assert not is_shape_registered("custom_test_shape")


def test_shape_decorator_supports_positional_name_and_bare_form() -> None:
    @shape("positional_named_shape")
    def _impl() -> Diagram:
        return empty()

    @shape
    def bare_shape() -> Diagram:
        return empty()

    assert is_shape_registered("positional_named_shape")
    assert is_shape_registered("bare_shape")
    unregister("positional_named_shape")
    unregister("bare_shape")


def test_shape_decorator_rejects_non_function_with_message() -> None:
    class NotFunc:  # noqa: N801 (テスト用の簡易クラス)
        pass

    deco = shape(name="bad")
    with pytest.raises(TypeError) as ei:
        deco(NotFunc)
    assert "got" in str(ei.value)


def test_get_registry_returns_copy() -> None:
    snap = get_registry()
    assert isinstance(snap, dict)
    snap["bogus"] = object()
    assert not is_shape_registered("bogus")


def test_unknown_shape_is_key_error() -> None:
    with pytest.raises(KeyError):
        get_shape("no_such_shape")


def test_registered_shape_must_return_diagram() -> None:
    @shape
    def not_a_diagram_shape():
        return [(0, 0), (1, 1)]

    try:
        with pytest.raises(TypeError) as ei:
            get_shape("not_a_diagram_shape")()
        assert "Diagram" in str(ei.value)
    finally:
        unregister("not_a_diagram_shape")


def test_registered_shape_keeps_name_and_arguments() -> None:
    @shape
    def offset_marker(x: float, y: float = 0.0) -> Diagram:
        """目印。"""
        return empty((x, y))

    try:
        assert offset_marker.__name__ == "offset_marker"
        assert offset_marker.__doc__ == "目印。"
        assert get_shape("offset_marker")(2, y=3).origin.y == 3
    finally:
        unregister("offset_marker")
