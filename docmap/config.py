"""
Configuration for docmap.

Settings that shape loading and rendering. The structure derivation itself
has fixed rules and takes no settings beyond the token encoding.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from docmap.utils.tokens import CHAR_ENCODING


@dataclass
class DocmapConfig:
    """User-configurable settings."""

    token_encoding: str = CHAR_ENCODING
    expand_max_lines: int = 50
    summary_max_sections: int = 5
    summary_max_level: int = 2
    key_terms_max_width: int = 55
    title_max_width: int = 40
    include_hidden: bool = False
    color: bool | None = None  # None: colour when stdout is a TTY

    def to_dict(self) -> dict[str, Any]:
        return {
            "token_encoding": self.token_encoding,
            "expand_max_lines": self.expand_max_lines,
            "summary_max_sections": self.summary_max_sections,
            "summary_max_level": self.summary_max_level,
            "key_terms_max_width": self.key_terms_max_width,
            "title_max_width": self.title_max_width,
            "include_hidden": self.include_hidden,
            "color": self.color,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DocmapConfig:
        return cls(
            token_encoding=data.get("token_encoding", CHAR_ENCODING),
            expand_max_lines=data.get("expand_max_lines", 50),
            summary_max_sections=data.get("summary_max_sections", 5),
            summary_max_level=data.get("summary_max_level", 2),
            key_terms_max_width=data.get("key_terms_max_width", 55),
            title_max_width=data.get("title_max_width", 40),
            include_hidden=data.get("include_hidden", False),
            color=data.get("color"),
        )
