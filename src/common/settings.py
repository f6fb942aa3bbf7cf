"""
どこで: `common.settings`
何を: ライブラリの調整値を型付きで一元管理し、`DGK_*` 環境変数から読み込む。
なぜ: 既定値と型を 1 箇所に固定し、テストからの上書き（monkeypatch + reload）を容易にするため。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .env import env_float, env_int, env_str

logger = logging.getLogger(__name__)


@dataclass
class _Settings:
    # Text
    DEFAULT_FONT_SIZE: float = 18.0

    # Debug overlays
    DEBUG_LABEL_SPACING: float = 0.1
    DEBUG_BBOX_STROKE: str = "gray"
    DEBUG_PATH_STROKE: str = "red"

    # Modifiers
    RESAMPLE_DEFAULT_N: int = 100
    ROUND_CORNER_COUNT: int = 40

    # Logging（setup_default_logging の既定レベル）
    LOG_LEVEL: str = "WARNING"


_settings = _Settings()


def reload_from_env() -> None:
    """環境変数から設定を再読込。

    - 数値は下限丸めを適用（件数は 2 以上、比率/サイズは 0 以上）。
    - 不正値は既定値へフォールバックする。
    """
    _settings.DEFAULT_FONT_SIZE = env_float("DGK_DEFAULT_FONT_SIZE", 18.0, min_value=0.0)

    _settings.DEBUG_LABEL_SPACING = env_float("DGK_DEBUG_LABEL_SPACING", 0.1, min_value=0.0)
    _settings.DEBUG_BBOX_STROKE = env_str("DGK_DEBUG_BBOX_STROKE", "gray")
    _settings.DEBUG_PATH_STROKE = env_str("DGK_DEBUG_PATH_STROKE", "red")

    _settings.RESAMPLE_DEFAULT_N = env_int("DGK_RESAMPLE_DEFAULT_N", 100, min_value=2) or 100
    _settings.ROUND_CORNER_COUNT = env_int("DGK_ROUND_CORNER_COUNT", 40, min_value=2) or 40
    _settings.LOG_LEVEL = env_str("DGK_LOG_LEVEL", "WARNING").upper()
    logger.debug("settings reloaded: %s", _settings)


def get() -> _Settings:
    """現在の設定スナップショットを返す。"""
    return _settings


# 初期ロード
reload_from_env()


__all__ = ["get", "reload_from_env", "_Settings"]
