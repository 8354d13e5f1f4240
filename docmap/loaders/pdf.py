"""
PDF document loader using PyMuPDF (fitz).

Uses PyMuPDF for:
- Document outline/TOC extraction
- Per-page plain text extraction

The decoded outline and page text are handed to the PDF structure
deriver, which chooses between the outline and the page fallback.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, ClassVar

import fitz  # PyMuPDF

from docmap.analysis.pdf_structure import OutlineNode, PDFStructureDeriver
from docmap.core.document import Document
from docmap.loaders.base import BaseLoader, LoaderError, LoaderRegistry

logger = logging.getLogger(__name__)


def outline_from_toc(toc: list[list[Any]]) -> OutlineNode:
    """
    Convert PyMuPDF's flat TOC into an outline tree.

    Each entry is ``[level, title, page, ...]``. An entry is attached to the
    nearest preceding entry with a lower level, or to the root.
    """
    root = OutlineNode()
    stack: list[tuple[int, OutlineNode]] = []

    for entry in toc:
        if len(entry) < 2:
            continue
        level = int(entry[0])
        page = int(entry[2]) if len(entry) > 2 and entry[2] is not None else None
        node = OutlineNode(title=str(entry[1]), page=page)

        while stack and stack[-1][0] >= level:
            stack.pop()

        parent = stack[-1][1] if stack else root
        parent.children.append(node)
        stack.append((level, node))

    return root


@LoaderRegistry.register
class PDFLoader(BaseLoader):
    """
    Load PDF documents using PyMuPDF.

    PDFs with bookmarks are mapped by their outline; PDFs without fall back
    to one section per page. A PDF that cannot be opened raises LoaderError;
    pages that fail to extract are skipped.
    """

    SUPPORTED_EXTENSIONS: ClassVar[list[str]] = [".pdf"]
    LOADER_NAME: ClassVar[str] = "pdf_pymupdf"

    def load(self, path: Path) -> Document:
        """Open a PDF file and derive its structure."""
        try:
            pdf = fitz.open(path)
        except Exception as e:
            raise LoaderError(
                f"Failed to open PDF: {e}",
                source_path=path,
                details=str(e),
            ) from e

        with pdf:
            return self._derive(pdf, path)

    def load_bytes(self, data: bytes, name: str = "document.pdf") -> Document:
        """Derive structure from PDF bytes held in memory."""
        try:
            pdf = fitz.open(stream=data, filetype="pdf")
        except Exception as e:
            raise LoaderError(
                f"Failed to open PDF: {e}",
                source_path=Path(name),
                details=str(e),
            ) from e

        with pdf:
            document = self._derive(pdf, Path(name))
        document.filename = name
        return document

    def _derive(self, pdf: fitz.Document, path: Path) -> Document:
        if pdf.needs_pass:
            raise LoaderError(
                "Failed to open PDF: document is encrypted",
                source_path=path,
            )

        try:
            toc = pdf.get_toc(simple=True)
        except Exception as e:
            logger.warning("TOC extraction error in %s: %s", path.name, e)
            toc = []

        outline = outline_from_toc(toc)
        page_count = pdf.page_count

        def page_text(page_number: int) -> str | None:
            return pdf.load_page(page_number - 1).get_text()

        deriver = PDFStructureDeriver(counter=self._counter)
        if deriver.has_outline(outline):
            logger.info("%s: using outline with %d entries", path.name, len(toc))
        else:
            logger.info("%s: no outline, mapping %d pages", path.name, page_count)

        return deriver.derive(outline, page_count, page_text)
