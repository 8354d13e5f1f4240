"""
Markdown document loader.

Reads a markdown file and derives its heading tree and references.
"""

from __future__ import annotations

from pathlib import Path
from typing import ClassVar

from docmap.analysis.markdown_structure import MarkdownStructureParser
from docmap.core.document import Document
from docmap.loaders.base import BaseLoader, LoaderError, LoaderRegistry


@LoaderRegistry.register
class MarkdownLoader(BaseLoader):
    """Load markdown documents."""

    SUPPORTED_EXTENSIONS: ClassVar[list[str]] = [".md"]
    LOADER_NAME: ClassVar[str] = "markdown"

    def load(self, path: Path) -> Document:
        """Read a markdown file and parse its structure."""
        try:
            content = path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise LoaderError(
                f"Failed to read markdown: {e}",
                source_path=path,
                details=str(e),
            ) from e

        return self.parse(content)

    def parse(self, content: str) -> Document:
        """Parse markdown text that is already in memory."""
        return MarkdownStructureParser(counter=self._counter).parse(content)
