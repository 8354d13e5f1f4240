"""
Document model for docmap.

This module defines the data structures that describe the shape of a
document: the section tree, the cross-document references, and the
document that aggregates them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Reference:
    """A link from a document to another markdown file."""

    text: str
    target: str
    line: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "target": self.target,
            "line": self.line,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Reference:
        return cls(
            text=data["text"],
            target=data["target"],
            line=data["line"],
        )


@dataclass
class Section:
    """
    A heading and everything it owns.

    ``tokens`` holds the section's own estimate until the tree builder rolls
    it up, after which it is the size of the whole subtree. ``own_tokens``
    keeps the own-content estimate so both figures stay available.
    """

    level: int
    title: str
    content: str = ""
    tokens: int = 0
    own_tokens: int = 0
    key_terms: list[str] = field(default_factory=list)
    children: list[Section] = field(default_factory=list)
    parent: Section | None = field(default=None, repr=False, compare=False)
    line_start: int | None = None
    line_end: int | None = None

    def add_child(self, child: Section) -> None:
        """Attach a child section and point it back at this one."""
        child.parent = self
        self.children.append(child)

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @property
    def depth(self) -> int:
        """Depth of this section in its tree (root = 0)."""
        depth = 0
        current = self.parent
        while current:
            depth += 1
            current = current.parent
        return depth

    @property
    def hierarchy_path(self) -> str:
        """
        Titles from the root down to this section.

        Example: "Guide > Install > Linux"
        """
        parts = []
        current: Section | None = self
        while current:
            parts.insert(0, current.title)
            current = current.parent
        return " > ".join(parts)

    def get_all_descendants(self) -> list[Section]:
        """All descendants in pre-order."""
        descendants = []
        for child in self.children:
            descendants.append(child)
            descendants.extend(child.get_all_descendants())
        return descendants

    def to_dict(self, include_children: bool = True) -> dict[str, Any]:
        result = {
            "level": self.level,
            "title": self.title,
            "content": self.content,
            "tokens": self.tokens,
            "own_tokens": self.own_tokens,
            "key_terms": list(self.key_terms),
            "line_start": self.line_start,
            "line_end": self.line_end,
        }
        if include_children:
            result["children"] = [child.to_dict(True) for child in self.children]
        return result

    def __repr__(self) -> str:
        title_preview = self.title[:40]
        return (
            f"<Section '{title_preview}' level={self.level} "
            f"tokens={self.tokens} children={len(self.children)}>"
        )


@dataclass
class Document:
    """
    The structural map of one markdown or PDF document.

    Built once per parse call. ``total_tokens`` is the sum of every
    section's own-content estimate, so it equals the sum of the root
    sections' cumulative counts.
    """

    filename: str = ""
    total_tokens: int = 0
    sections: list[Section] = field(default_factory=list)
    references: list[Reference] = field(default_factory=list)

    def get_section(self, name: str) -> Section | None:
        """
        Find the first section whose title contains ``name``.

        Case-insensitive substring match, searched in pre-order. This is a
        first match, not a best match.
        """
        needle = name.lower()
        for section in self.get_all_sections():
            if needle in section.title.lower():
                return section
        return None

    def get_all_sections(self) -> list[Section]:
        """All sections as a flat list (pre-order)."""
        all_sections = []
        for section in self.sections:
            all_sections.append(section)
            all_sections.extend(section.get_all_descendants())
        return all_sections

    @property
    def section_count(self) -> int:
        return len(self.get_all_sections())

    def to_dict(self) -> dict[str, Any]:
        return {
            "filename": self.filename,
            "total_tokens": self.total_tokens,
            "sections": [section.to_dict() for section in self.sections],
            "references": [ref.to_dict() for ref in self.references],
        }

    def __repr__(self) -> str:
        return (
            f"<Document {self.filename or '?'} "
            f"sections={self.section_count} tokens={self.total_tokens}>"
        )
