"""
docmap - instant documentation structure for LLMs and humans.

Maps markdown and PDF documents into heading trees with token estimates,
key terms and cross-document references.
"""

__version__ = "0.1.0"

from docmap.analysis import OutlineNode, parse_markdown, parse_pdf
from docmap.core.document import Document, Reference, Section

__all__ = [
    "Document",
    "OutlineNode",
    "Reference",
    "Section",
    "__version__",
    "parse_markdown",
    "parse_pdf",
]
