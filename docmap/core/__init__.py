"""Core data structures for docmap."""

from docmap.core.document import Document, Reference, Section

__all__ = [
    "Document",
    "Reference",
    "Section",
]
