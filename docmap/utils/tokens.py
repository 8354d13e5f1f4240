"""
Token counting utilities.

The default count is a coarse character estimate (four characters per
token). It is deterministic and needs no model files. Callers that want
counts from a real tokenizer can ask for a tiktoken encoding instead.
"""

from __future__ import annotations

import tiktoken

CHARS_PER_TOKEN = 4
CHAR_ENCODING = "chars"


def estimate_tokens(text: str) -> int:
    """Estimate tokens as ``len(text) // 4``."""
    return len(text) // CHARS_PER_TOKEN


class TokenCounter:
    """
    Count tokens with the character estimate or a tiktoken encoding.

    ``"chars"`` selects the character estimate. Anything else is looked up
    in ENCODING_MAP and handed to tiktoken.
    """

    ENCODING_MAP = {
        "cl100k_base": "cl100k_base",  # GPT-4, ChatGPT, text-embedding-ada-002
        "o200k_base": "o200k_base",  # GPT-4o
        "p50k_base": "p50k_base",
        "gpt-4": "cl100k_base",
        "gpt-4o": "o200k_base",
        "gpt-3.5-turbo": "cl100k_base",
    }

    def __init__(self, encoding: str = CHAR_ENCODING) -> None:
        """
        Initialize token counter.

        Args:
            encoding: ``"chars"``, an encoding name or a model name
        """
        self._encoding_name = (
            CHAR_ENCODING
            if encoding == CHAR_ENCODING
            else self.ENCODING_MAP.get(encoding, encoding)
        )
        self._encoder: tiktoken.Encoding | None = None
        if self._encoding_name != CHAR_ENCODING:
            self._encoder = tiktoken.get_encoding(self._encoding_name)

    @property
    def encoding_name(self) -> str:
        return self._encoding_name

    def count(self, text: str) -> int:
        """Count tokens in text."""
        if not text:
            return 0
        if self._encoder is None:
            return estimate_tokens(text)
        return len(self._encoder.encode(text))

    def count_many(self, texts: list[str]) -> list[int]:
        """Count tokens in multiple texts."""
        return [self.count(text) for text in texts]


_default_counter: TokenCounter | None = None


def count_tokens(text: str, encoding: str = CHAR_ENCODING) -> int:
    """
    Count tokens in text using a shared counter.

    The counter is rebuilt only when the encoding changes.
    """
    global _default_counter
    if _default_counter is None or _default_counter.encoding_name != encoding:
        _default_counter = TokenCounter(encoding)
    return _default_counter.count(text)
