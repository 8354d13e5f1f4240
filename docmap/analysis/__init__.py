"""
Document structure analysis.

Derives section trees from markdown text and from decoded PDF outlines
and page text.
"""

from docmap.analysis.markdown_structure import MarkdownStructureParser, parse_markdown
from docmap.analysis.pdf_structure import OutlineNode, PDFStructureDeriver, parse_pdf

__all__ = [
    "MarkdownStructureParser",
    "OutlineNode",
    "PDFStructureDeriver",
    "parse_markdown",
    "parse_pdf",
]
