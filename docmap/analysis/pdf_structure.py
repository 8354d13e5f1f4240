"""
PDF structure derivation.

Works on an already decoded PDF: an outline (bookmark) tree and a way to
read each page's plain text. Two strategies:

- Outline: bookmarks become sections; one aggregate token estimate over
  all page text is shared out across the tree.
- Page fallback: one level-1 section per page that has text.

Opening and decoding the PDF container is the loader's job
(see ``docmap.loaders.pdf``).
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from docmap.core.document import Document, Section
from docmap.hierarchy.builder import SectionTreeBuilder
from docmap.utils.tokens import TokenCounter

logger = logging.getLogger(__name__)

# Returns the page's text, None for a null page, or raises if unreadable
PageTextFn = Callable[[int], "str | None"]


@dataclass
class OutlineNode:
    """
    A node of a decoded PDF outline.

    The root is a container; its children are the top-level bookmarks.
    """

    title: str = ""
    children: list[OutlineNode] = field(default_factory=list)
    page: int | None = None


class PDFStructureDeriver:
    """
    Derive a section tree from a decoded PDF outline and its pages.

    Individual pages that fail to yield text are skipped, never fatal.
    """

    def __init__(self, counter: TokenCounter | None = None) -> None:
        self._counter = counter or TokenCounter()

    def derive(
        self,
        outline: OutlineNode,
        page_count: int,
        page_text: PageTextFn,
    ) -> Document:
        """
        Build a Document from an outline and per-page text.

        Args:
            outline: Decoded outline root (may have no children)
            page_count: Number of pages
            page_text: 1-based page text accessor

        Returns:
            Document with outline sections or page sections
        """
        if self.has_outline(outline):
            logger.debug("Using outline with %d top-level entries", len(outline.children))
            sections = self.sections_from_outline(outline)
            text = self._collect_text(page_count, page_text)
            self.distribute_tokens(sections, self._counter.count(text))
        else:
            logger.debug("No outline, falling back to %d pages", page_count)
            sections = self.sections_by_page(page_count, page_text)

        total_tokens = sum(
            section.own_tokens
            for root in sections
            for section in [root, *root.get_all_descendants()]
        )

        return Document(total_tokens=total_tokens, sections=sections)

    @staticmethod
    def has_outline(outline: OutlineNode) -> bool:
        """Check if the outline has at least one top-level entry."""
        return len(outline.children) > 0

    def sections_from_outline(self, outline: OutlineNode) -> list[Section]:
        """Convert the outline's top-level entries into section trees."""
        return [self._outline_to_section(node, 1) for node in outline.children]

    def _outline_to_section(self, node: OutlineNode, level: int) -> Section:
        section = Section(level=level, title=node.title.strip())
        for child in node.children:
            section.add_child(self._outline_to_section(child, level + 1))
        return section

    def distribute_tokens(self, roots: list[Section], total_tokens: int) -> None:
        """
        Share an aggregate token estimate across outline sections.

        Each root gets an equal share. A leaf keeps its whole allotment; a
        parent keeps ``allotment // (children + 1)`` and passes the same
        amount to each child. Cumulative counts are rolled up afterwards.
        Integer division means deep trees account for less than
        ``total_tokens``.
        """
        if not roots or total_tokens <= 0:
            return

        per_root = total_tokens // len(roots)
        for root in roots:
            self._assign_allotment(root, per_root)

        SectionTreeBuilder.rollup(roots)

    def _assign_allotment(self, section: Section, allotment: int) -> None:
        if not section.children:
            section.own_tokens = allotment
            section.tokens = allotment
            return

        share = allotment // (len(section.children) + 1)
        section.own_tokens = share
        section.tokens = share
        for child in section.children:
            self._assign_allotment(child, share)

    def sections_by_page(self, page_count: int, page_text: PageTextFn) -> list[Section]:
        """
        Create one level-1 section per page with text.

        When no page yields text, a single sentinel section records the page
        count so the document is never empty.
        """
        if page_count <= 0:
            return []

        sections = []
        for page_number in range(1, page_count + 1):
            text = self._read_page(page_number, page_text)
            if text is None:
                continue

            text = text.strip()
            if not text:
                continue

            tokens = self._counter.count(text)
            sections.append(
                Section(
                    level=1,
                    title=f"Page {page_number}",
                    content=text,
                    tokens=tokens,
                    own_tokens=tokens,
                    line_start=page_number,
                    line_end=page_number,
                )
            )

        if not sections:
            logger.info("No extractable text in %d pages", page_count)
            return [
                Section(
                    level=1,
                    title=f"({page_count} pages - no extractable text)",
                    line_start=1,
                    line_end=page_count,
                )
            ]

        return sections

    def _collect_text(self, page_count: int, page_text: PageTextFn) -> str:
        parts = []
        for page_number in range(1, page_count + 1):
            text = self._read_page(page_number, page_text)
            if text is not None:
                parts.append(text)
        return "".join(parts)

    @staticmethod
    def _read_page(page_number: int, page_text: PageTextFn) -> str | None:
        try:
            return page_text(page_number)
        except Exception as e:
            logger.debug("Skipping page %d: %s", page_number, e)
            return None


def parse_pdf(
    outline: OutlineNode,
    page_count: int,
    page_text: PageTextFn,
    counter: TokenCounter | None = None,
) -> Document:
    """Derive a Document from a decoded PDF outline and page text."""
    return PDFStructureDeriver(counter=counter).derive(outline, page_count, page_text)
