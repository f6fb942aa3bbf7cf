"""
どこで: `common` パッケージ。
何を: shapes/modifiers 双方で使う軽量基盤（BaseRegistry・設定・環境変数・ロギング補助）。
なぜ: 上位層から再利用する共通基盤を分離し、依存の向きを単純化するため。
"""

from .base_registry import BaseRegistry

__all__ = [
    "BaseRegistry",
]
