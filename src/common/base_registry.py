"""
共通レジストリ基底クラス
shapes/ と modifiers/ の両方で使用する名前付き関数レジストリ
"""

import inspect
import re
from typing import Any, Callable


class BaseRegistry:
    """名前 → 関数 のレジストリ。

    - 文字列キーは正規化されます（大文字小文字・キャメル→スネーク・ハイフンを吸収）。
    - デコレータは名前省略可。省略時は関数名から自動推論します。
    - `kind` はエラーメッセージ用の種別名（"shape" / "modifier" など）。
    """

    def __init__(self, kind: str = "entry"):
        self.kind = kind
        self._registry: dict[str, Any] = {}

    # === 内部ユーティリティ ===
    @staticmethod
    def _camel_to_snake(name: str) -> str:
        s1 = re.sub(r"(.)([A-Z][a-z]+)", r"\1_\2", name)
        s2 = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", s1)
        return s2.lower()

    @classmethod
    def _normalize_key(cls, name: str) -> str:
        """レジストリキーの正規化（例: "RoundCorner" / "round-corner" -> "round_corner"）。"""
        if not isinstance(name, str):
            raise TypeError("レジストリキーは str である必要があります")
        if not name:
            raise ValueError("レジストリキーは空であってはなりません")
        name = name.replace("-", "_")
        return cls._camel_to_snake(name) if any(c.isupper() for c in name) else name.lower()

    def register(self, name: str | None = None) -> Callable:
        """関数をレジストリに登録するデコレータ。"""

        def decorator(obj: Any) -> Any:
            key = self._normalize_key(name) if name else self._normalize_key(obj.__name__)
            if key in self._registry and self._registry[key] is not obj:
                raise ValueError(f"{self.kind} '{key}' は既に登録されています")
            self._registry[key] = obj
            return obj

        return decorator

    def decorator(
        self,
        arg: Any | None = None,
        name: str | None = None,
        wrap: Callable[[Callable], Callable] | None = None,
    ) -> Any:
        """`@deco` / `@deco()` / `@deco("name")` / `@deco(name=...)` の 4 形を受ける登録口。

        関数以外は TypeError。`wrap` を与えると、登録するのは `wrap(fn)` の戻り値になる
        （戻り値の型検査などを各レジストリ側で差し込むため）。
        """

        def _register_checked(obj: Any, resolved_name: str | None) -> Any:
            if not inspect.isfunction(obj):
                raise TypeError(f"@{self.kind} は関数のみ登録可能です: got {obj!r}")
            target = wrap(obj) if wrap is not None else obj
            return self.register(resolved_name or obj.__name__)(target)

        if inspect.isfunction(arg) and name is None:
            return _register_checked(arg, None)
        resolved = arg if isinstance(arg, str) and name is None else name
        return lambda obj: _register_checked(obj, resolved)

    def get(self, name: str) -> Any:
        """登録された関数を取得（未登録は KeyError）。"""
        key = self._normalize_key(name)
        if key not in self._registry:
            raise KeyError(f"{self.kind} '{name}' は登録されていません")
        return self._registry[key]

    def list_all(self) -> list[str]:
        """登録されているすべての名前を取得（未ソート）。"""
        return list(self._registry.keys())

    def is_registered(self, name: str) -> bool:
        return self._normalize_key(name) in self._registry

    def unregister(self, name: str) -> None:
        """レジストリから削除（名前が存在しない場合は無視）。"""
        self._registry.pop(self._normalize_key(name), None)

    def clear(self) -> None:
        self._registry.clear()

    @property
    def registry(self) -> dict[str, Any]:
        """レジストリのコピー（読み取り用）"""
        return self._registry.copy()
