"""
どこで: `api.shapes`（図形生成の高レベル API）。
何を: 登録済み shape 関数を名前で解決して `Diagram` を返す薄いファサード `G`。
なぜ: 利用者が `from api import G` だけで全図形ヘルパに届くようにするため。

Notes
-----
- 実体はレジストリ（`shapes.registry`）の関数を `fn(*args, **params)` で直接呼ぶだけ。
- 解決済みメソッドはインスタンス属性にキャッシュし、登録解除時は破棄する。
- 例外方針: 未登録名は `AttributeError`。生成器側の失敗は各シェイプが送出する。

Examples
--------
    from api import G

    c = G.circle(2).fill("lightblue")
    a = G.arrow1((0, 0), (3, 1))
"""

from __future__ import annotations

from typing import Any, Callable

# レジストリ登録の副作用を発火させるため、shapes パッケージを 1 度だけ import すれば十分
import shapes  # noqa: F401  (登録目的の副作用)
from engine.core.diagram import Diagram
from shapes.registry import get_shape, is_shape_registered
from shapes.registry import list_shapes as list_registered_shapes


class ShapesAPI:
    """形状名 → 生成関数の動的ディスパッチ（`G` の実体）。

    使い方:
        from api import G
        sq = G.square(2)
        hexagon = G.regular_polygon(6, 1.0)
    """

    def _build_shape_method(self, name: str) -> Callable[..., Diagram]:
        def _shape_method(*args: Any, **params: Any) -> Diagram:
            if not is_shape_registered(name):
                # 登録解除と整合を取るため、キャッシュ済みの属性を破棄して AttributeError を送出
                self.__dict__.pop(name, None)
                raise AttributeError(f"'{self.__class__.__name__}' has no attribute '{name}'")
            return get_shape(name)(*args, **params)

        _shape_method.__name__ = name
        _shape_method.__qualname__ = f"{self.__class__.__name__}.{name}"
        _shape_method.__doc__ = get_shape(name).__doc__
        return _shape_method

    def __getattr__(self, name: str) -> Callable[..., Diagram]:
        """レジストリに基づき `G.<name>` を遅延生成する。

        Raises
        ------
        AttributeError
            未登録名、またはアンダースコアで始まる名前を指定した場合。
        """
        if name.startswith("_") or not is_shape_registered(name):
            raise AttributeError(f"'{self.__class__.__name__}' object has no attribute '{name}'")

        method = self._build_shape_method(name)
        self.__dict__[name] = method
        return method

    def __dir__(self) -> list[str]:
        return sorted(set(super().__dir__()) | set(list_registered_shapes()))

    @classmethod
    def list_shapes(cls) -> list[str]:
        """利用可能な形状名の一覧を返す。"""
        return list_registered_shapes()


# シングルトンインスタンス
G = ShapesAPI()

__all__ = ["G", "ShapesAPI"]
