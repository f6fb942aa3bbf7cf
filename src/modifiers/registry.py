"""
どこで: `modifiers` のレジストリ層。
何を: `@modifier` で modifier ファクトリを登録する。ファクトリの戻り値は `Diagram -> Diagram` として検査・包装される。
なぜ: `api.M` や `Diagram.apply()` に渡る関数が、常に Diagram を受けて Diagram を返すことを保証するため。
"""

from __future__ import annotations

import functools
from typing import Any, Callable, Mapping

from common.base_registry import BaseRegistry
from engine.core.diagram import Diagram

from .base import ModifierFunc

ModifierFactory = Callable[..., ModifierFunc]

_modifier_registry = BaseRegistry(kind="modifier")


def _checked_modifier_func(name: str, func: ModifierFunc) -> ModifierFunc:
    @functools.wraps(func)
    def _apply(d: Diagram) -> Diagram:
        out = func(d)
        if not isinstance(out, Diagram):
            raise TypeError(f"modifier '{name}' の関数は Diagram を返す必要があります: got {type(out).__name__}")
        return out

    return _apply


def _checked_factory(factory: Callable[..., Any]) -> ModifierFactory:
    @functools.wraps(factory)
    def _factory(*args: Any, **kwargs: Any) -> ModifierFunc:
        func = factory(*args, **kwargs)
        if not callable(func):
            raise TypeError(
                f"modifier '{factory.__name__}' は Diagram -> Diagram 関数を返す必要があります: got {type(func).__name__}"
            )
        return _checked_modifier_func(factory.__name__, func)

    return _factory


def modifier(arg: Any | None = None, /, name: str | None = None):
    """modifier ファクトリを登録するデコレータ（`@modifier` / `@modifier()` / `@modifier("name")` / `@modifier(name=...)`）。

    使用例:
        @modifier
        def shift(dx: float = 1.0):
            return lambda d: d.translate((dx, 0))

        d.apply(shift(2.0))
    """
    return _modifier_registry.decorator(arg, name, wrap=_checked_factory)


def get_modifier(name: str) -> ModifierFactory:
    """登録された modifier ファクトリを取得（未登録は KeyError）。"""
    return _modifier_registry.get(name)


def list_modifiers() -> list[str]:
    return sorted(_modifier_registry.list_all())


def is_modifier_registered(name: str) -> bool:
    return _modifier_registry.is_registered(name)


def unregister(name: str) -> None:
    _modifier_registry.unregister(name)


def get_registry() -> Mapping[str, ModifierFactory]:
    return _modifier_registry.registry


__all__ = [
    "modifier",
    "get_modifier",
    "list_modifiers",
    "is_modifier_registered",
    "unregister",
    "get_registry",
]
