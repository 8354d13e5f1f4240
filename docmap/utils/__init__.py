"""Utility modules for docmap."""

from docmap.utils.tokens import TokenCounter, count_tokens, estimate_tokens

__all__ = [
    "TokenCounter",
    "count_tokens",
    "estimate_tokens",
]
