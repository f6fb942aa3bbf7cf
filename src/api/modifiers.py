"""
どこで: `api.modifiers`（加工の高レベル API）。
何を: 登録済み modifier ファクトリを名前で解決する `M` と、複数 modifier を順に適用する `Pipeline`。
なぜ: 加工手順を「宣言 → まとめて適用」の形で組めるようにするため。

使い方:
    from api import G, M

    pipe = M.pipeline.round_corner(0.5).resample(80).build()
    d = pipe(G.square(4))          # d = G.square(4).apply(pipe) と同じ
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable

import modifiers  # noqa: F401  (登録目的の副作用)
from engine.core.diagram import Diagram
from modifiers.registry import get_modifier, is_modifier_registered
from modifiers.registry import list_modifiers as list_registered_modifiers

logger = logging.getLogger(__name__)

ModifierFunc = Callable[[Diagram], Diagram]


@dataclass(frozen=True)
class Pipeline:
    """modifier の直列適用（宣言済みステップ列）。"""

    steps: tuple[tuple[str, ModifierFunc], ...] = ()

    def __call__(self, d: Diagram) -> Diagram:
        out = d
        for name, func in self.steps:
            logger.debug("pipeline step: %s", name)
            out = out.apply(func)
        return out

    def __len__(self) -> int:
        return len(self.steps)


@dataclass
class PipelineBuilder:
    """チェーン可能な薄いビルダー（`.build()` で `Pipeline` を返す）。"""

    _steps: list[tuple[str, ModifierFunc]] = field(default_factory=list)

    def __getattr__(self, name: str) -> Callable[..., "PipelineBuilder"]:
        if name.startswith("_") or not is_modifier_registered(name):
            raise AttributeError(f"'{self.__class__.__name__}' object has no attribute '{name}'")

        def _add_step(*args: Any, **params: Any) -> "PipelineBuilder":
            self._steps.append((name, get_modifier(name)(*args, **params)))
            return self

        return _add_step

    def add(self, func: ModifierFunc, name: str | None = None) -> "PipelineBuilder":
        """未登録の `Diagram -> Diagram` 関数をステップとして追加する。"""
        self._steps.append((name or getattr(func, "__name__", "custom"), func))
        return self

    def build(self) -> Pipeline:
        return Pipeline(tuple(self._steps))


class ModifiersAPI:
    """modifier 名 → ファクトリの動的ディスパッチ（`M` の実体）。"""

    @property
    def pipeline(self) -> PipelineBuilder:
        return PipelineBuilder()

    def __getattr__(self, name: str) -> Callable[..., ModifierFunc]:
        if name.startswith("_") or not is_modifier_registered(name):
            raise AttributeError(f"'{self.__class__.__name__}' object has no attribute '{name}'")
        return get_modifier(name)

    def __dir__(self) -> list[str]:
        return sorted(set(super().__dir__()) | set(list_registered_modifiers()))

    @classmethod
    def list_modifiers(cls) -> list[str]:
        return list_registered_modifiers()


M = ModifiersAPI()

__all__ = ["M", "ModifiersAPI", "Pipeline", "PipelineBuilder"]
