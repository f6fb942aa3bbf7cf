"""
どこで: `shapes` のレジストリ層。
何を: `@shape` で図形関数を登録する。登録されるのは戻り値が `Diagram` かを検査する包み関数。
なぜ: `api.G` から名前で解決した図形が、必ずそのまま変換・結合できる Diagram であるようにするため。
"""

from __future__ import annotations

import functools
from typing import Any, Callable, Mapping

from common.base_registry import BaseRegistry
from engine.core.diagram import Diagram

ShapeFn = Callable[..., Diagram]

_shape_registry = BaseRegistry(kind="shape")


def _checked_shape(fn: Callable[..., Any]) -> ShapeFn:
    @functools.wraps(fn)
    def _shape_fn(*args: Any, **kwargs: Any) -> Diagram:
        d = fn(*args, **kwargs)
        if not isinstance(d, Diagram):
            raise TypeError(f"shape '{fn.__name__}' は Diagram を返す必要があります: got {type(d).__name__}")
        return d

    return _shape_fn


def shape(arg: Any | None = None, /, name: str | None = None):
    """図形関数を登録するデコレータ（`@shape` / `@shape()` / `@shape("name")` / `@shape(name=...)`）。

    戻り値は登録された包み関数で、呼び出しごとに戻り値が Diagram であることを検査する。
    関数以外を渡すと TypeError。
    """
    return _shape_registry.decorator(arg, name, wrap=_checked_shape)


def get_shape(name: str) -> ShapeFn:
    """登録された図形関数を取得（未登録は KeyError）。"""
    return _shape_registry.get(name)


def list_shapes() -> list[str]:
    return sorted(_shape_registry.list_all())


def is_shape_registered(name: str) -> bool:
    return _shape_registry.is_registered(name)


def unregister(name: str) -> None:
    _shape_registry.unregister(name)


def get_registry() -> Mapping[str, ShapeFn]:
    """レジストリ辞書のコピー。"""
    return _shape_registry.registry


__all__ = [
    "shape",
    "get_shape",
    "list_shapes",
    "is_shape_registered",
    "unregister",
    "get_registry",
]
