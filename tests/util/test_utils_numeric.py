from __future__ import annotations

import math

import pytest

from util.utils import array_repeat, from_degree, linspace, linspace_exc, range_, range_inc, to_degree


def test_degree_conversion() -> None:
    assert from_degree(180) == pytest.approx(math.pi)
    assert to_degree(math.pi / 2) == pytest.approx(90.0)


def test_linspace_includes_both_ends() -> None:
    assert linspace(0, 1, 5) == pytest.approx([0.0, 0.25, 0.5, 0.75, 1.0])
    assert linspace(3, 9, 1) == [3.0]
    assert linspace(0, 1, 0) == []


def test_linspace_exc_drops_end() -> None:
    assert linspace_exc(0, 1, 4) == pytest.approx([0.0, 0.25, 0.5, 0.75])
    assert linspace_exc(0, 1, 0) == []


def test_range_helpers() -> None:
    assert range_(0, 5) == [0, 1, 2, 3, 4]
    assert range_(0, 1, 0.25) == pytest.approx([0.0, 0.25, 0.5, 0.75])
    assert range_(5, 0) == []
    assert range_(0, 5, 0) == []
    assert range_inc(0, 4, 2) == [0, 2, 4]
    assert range_inc(0, 1, 0.5) == pytest.approx([0.0, 0.5, 1.0])


def test_array_repeat_cycles() -> None:
    assert array_repeat([1, 2], 5) == [1, 2, 1, 2, 1]
    assert array_repeat([1], 0) == []
    with pytest.raises(ValueError):
        array_repeat([], 3)
