"""Text rendering of document maps."""

from docmap.render.tree import TreeRenderer, find_hubs, format_tokens

__all__ = [
    "TreeRenderer",
    "find_hubs",
    "format_tokens",
]
