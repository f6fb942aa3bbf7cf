"""
diagramkit 向けの軽量ロギングユーティリティ。

要点:
- ライブラリ側の各モジュールは `logging.getLogger(__name__)` でロガーを取得するだけで、設定はしない。
- アプリ/スクリプト側で設定が無い場合に、妥当な最小構成を 1 度だけ適用するヘルパーを提供する
  （`api.setup_default_logging` として公開）。
"""

from __future__ import annotations

import logging

from . import settings

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_default_logging(level: int | str | None = None) -> None:
    """最小限のロギング設定を 1 度だけ適用する。

    - `level` 省略時は `settings.LOG_LEVEL`（環境変数 `DGK_LOG_LEVEL`、既定 WARNING）
    - ルートロガーにハンドラが既にあれば何もしない（no-op）
    - 文字列レベルは大文字小文字を問わない（未知の名前は INFO）
    """
    if level is None:
        level = settings.get().LOG_LEVEL
    if isinstance(level, str):
        lvl = getattr(logging, level.upper(), logging.INFO)
        if not isinstance(lvl, int):
            lvl = logging.INFO
    else:
        lvl = int(level)

    root = logging.getLogger()
    if root.handlers:
        # Assume the app has configured logging
        return
    logging.basicConfig(level=lvl, format=_FORMAT)


__all__ = ["setup_default_logging"]
