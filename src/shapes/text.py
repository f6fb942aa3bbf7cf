"""
どこで: `shapes.text`。
何を: テキスト系の小さな図形ヘルパ（変数テキスト）。
なぜ: 本文テキストと「変数」として扱うテキスト（TEXTVAR タグ）を生成段階で区別するため。
"""

from __future__ import annotations

from engine.core.diagram import Diagram, text

from .registry import shape


@shape
def textvar(content: str) -> Diagram:
    """TEXTVAR タグ付きのテキスト（レンダラは斜体の数式変数として描く想定）。"""
    return text(content).text_tovar()
