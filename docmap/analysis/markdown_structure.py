"""
Markdown structure extraction.

Scans markdown line by line for ATX headings and links to other markdown
files. The grammar is deliberately narrow:

- headings: one to six ``#`` at line start, whitespace, then the title
- references: ``[text](path.md)`` or ``[text](path.md#anchor)``

Setext headings and every other markdown construct are plain content.
Code fences are not tracked, so a ``#`` line inside a fence still opens a
section.
"""

from __future__ import annotations

import logging
import re

from docmap.core.document import Document, Reference, Section
from docmap.enrichment.key_terms import KeyTermExtractor
from docmap.hierarchy.builder import SectionTreeBuilder
from docmap.utils.tokens import TokenCounter

logger = logging.getLogger(__name__)

HEADING_PATTERN = re.compile(r"^(#{1,6})\s+(.+)$", re.ASCII)
LINK_PATTERN = re.compile(r"\[([^\]]+)\]\(([^)]+\.md(?:#[^)]*)?)\)")


class MarkdownStructureParser:
    """
    Derive a section tree and reference list from markdown text.

    Parsing never fails. Text without headings gives a document with no
    sections, but its references are still collected.
    """

    def __init__(
        self,
        counter: TokenCounter | None = None,
        extractor: KeyTermExtractor | None = None,
    ) -> None:
        self._counter = counter or TokenCounter()
        self._extractor = extractor or KeyTermExtractor()

    def parse(self, text: str) -> Document:
        """Parse markdown text into a Document."""
        flat_sections, references = self.scan(text)

        # Own estimates are summed before rollup rewrites ``tokens``
        total_tokens = sum(section.own_tokens for section in flat_sections)
        roots = SectionTreeBuilder.build_tree(flat_sections)

        logger.debug(
            "Parsed markdown: %d sections, %d references, ~%d tokens",
            len(flat_sections),
            len(references),
            total_tokens,
        )

        return Document(
            total_tokens=total_tokens,
            sections=roots,
            references=references,
        )

    def scan(self, text: str) -> tuple[list[Section], list[Reference]]:
        """
        Scan text into a flat, source-ordered section list.

        Each section carries its own-content estimate in both ``tokens``
        and ``own_tokens``; no children are attached.

        Returns (sections, references).
        """
        lines = text.split("\n")
        sections: list[Section] = []
        references: list[Reference] = []

        current: Section | None = None
        buffer: list[str] = []

        for line_number, line in enumerate(lines, start=1):
            references.extend(self._extract_references(line, line_number))

            match = HEADING_PATTERN.match(line)
            if match:
                if current is not None:
                    self._finalize(current, buffer, line_number - 1)

                current = Section(
                    level=len(match.group(1)),
                    title=match.group(2).strip(),
                    line_start=line_number,
                )
                sections.append(current)
                buffer = []
            elif current is not None:
                buffer.append(line)
                buffer.append("\n")

        if current is not None:
            self._finalize(current, buffer, len(lines))

        return sections, references

    def _finalize(self, section: Section, buffer: list[str], line_end: int) -> None:
        """Close a section: store content, estimate, terms and end line."""
        section.content = "".join(buffer).strip()
        section.own_tokens = self._counter.count(section.content)
        section.tokens = section.own_tokens
        section.key_terms = self._extractor.extract(section.content)
        section.line_end = line_end

    @staticmethod
    def _extract_references(line: str, line_number: int) -> list[Reference]:
        references = []
        for match in LINK_PATTERN.finditer(line):
            target = match.group(2).split("#", 1)[0]
            references.append(
                Reference(text=match.group(1), target=target, line=line_number)
            )
        return references


def parse_markdown(text: str, counter: TokenCounter | None = None) -> Document:
    """Parse markdown text into a Document."""
    return MarkdownStructureParser(counter=counter).parse(text)
