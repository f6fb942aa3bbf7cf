"""
どこで: tests（modifiers.registry）。
何を: `@modifier` の 4 つの書き方、ファクトリ戻り値と適用結果の型検査。
なぜ: `Diagram.apply()` に渡る関数が常に Diagram -> Diagram であることを保証するため。
"""

from __future__ import annotations

import pytest

from engine.core.diagram import Diagram, curve
from engine.core.vector import V2
from modifiers.registry import get_modifier, get_registry, is_modifier_registered, modifier, unregister


def test_modifier_decorator_forms() -> None:
    @modifier
    def shift_bare(dx: float = 1.0):
        return lambda d: d.translate((dx, 0))

    @modifier()
    def shift_call():
        return lambda d: d

    @modifier("ShiftPositional")
    def _positional():
        return lambda d: d

    @modifier(name="shift-keyword")
    def _keyword():
        return lambda d: d

    try:
        for name in ("shift_bare", "shift_call", "shift_positional", "shift_keyword"):
            assert is_modifier_registered(name)
        c = curve([(0, 0), (1, 0)])
        out = c.apply(get_modifier("shift-bare")(2.0))
        assert out.require_path().points[0] == V2(2, 0)
        assert shift_bare.__name__ == "shift_bare"
    finally:
        for name in ("shift_bare", "shift_call", "shift_positional", "shift_keyword"):
            unregister(name)


def test_factory_must_return_callable() -> None:
    @modifier
    def broken_factory():
        return 3

    try:
        with pytest.raises(TypeError):
            broken_factory()
    finally:
        unregister("broken_factory")


def test_modifier_function_must_return_diagram() -> None:
    @modifier
    def to_length():
        return lambda d: d.path_length()

    try:
        f = to_length()
        with pytest.raises(TypeError) as ei:
            curve([(0, 0), (3, 4)]).apply(f)
        assert "to_length" in str(ei.value)
    finally:
        unregister("to_length")


def test_non_function_is_rejected() -> None:
    with pytest.raises(TypeError):
        modifier(name="bad")(object())


def test_registry_snapshot_is_a_copy() -> None:
    snap = get_registry()
    snap["bogus"] = lambda: (lambda d: d)
    assert not is_modifier_registered("bogus")
    assert isinstance(curve([(0, 0), (1, 0)]).apply(get_modifier("resample")(4)), Diagram)
