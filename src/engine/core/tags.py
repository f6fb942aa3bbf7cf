"""
どこで: `engine.core.tags`
何を: 子を持つ図形の部分を識別するためのタグ名定数。
なぜ: `apply_to_tagged_recursive` などで部分木を選ぶ際の文字列を 1 箇所に固定するため。
"""


class TAG:
    EMPTY = "empty"
    LINE = "line"
    CIRCLE = "circle"
    TEXTVAR = "textvar"

    # arrow
    ARROW_LINE = "arrow_line"
    ARROW_HEAD = "arrow_head"

    # debug overlays
    DEBUG = "debug"
    DEBUG_BBOX = "debug_bbox"
    DEBUG_INDEX = "debug_index"


__all__ = ["TAG"]
