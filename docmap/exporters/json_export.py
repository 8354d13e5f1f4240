"""
JSON exporter for docmap.

Serialises one or more document maps into a single JSON object suited to
machine consumers. Empty key term, child and reference lists are omitted
to keep the output compact.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from docmap.core.document import Document, Section


class JSONExporter:
    """
    Export document maps as JSON.

    Output shape::

        {
          "root": "/abs/path",
          "total_tokens": 1234,
          "total_docs": 2,
          "documents": [
            {"filename": ..., "tokens": ..., "sections": [...], "references": [...]}
          ]
        }
    """

    FILE_EXTENSION = ".json"

    def __init__(self, indent: int | None = None) -> None:
        self._indent = indent

    def to_dict(self, documents: list[Document], root: str) -> dict[str, Any]:
        """Build the export dictionary."""
        return {
            "root": root,
            "total_tokens": sum(doc.total_tokens for doc in documents),
            "total_docs": len(documents),
            "documents": [self.document_to_dict(doc) for doc in documents],
        }

    def to_json(self, documents: list[Document], root: str) -> str:
        """Serialise documents to a JSON string."""
        return json.dumps(
            self.to_dict(documents, root),
            indent=self._indent,
            ensure_ascii=False,
        )

    def export(self, documents: list[Document], root: str, path: Path) -> Path:
        """Write documents to a JSON file and return its path."""
        if path.suffix.lower() != self.FILE_EXTENSION:
            path = path.with_suffix(self.FILE_EXTENSION)

        with open(path, "w", encoding="utf-8") as f:
            f.write(self.to_json(documents, root))

        return path

    def document_to_dict(self, document: Document) -> dict[str, Any]:
        """Convert a document to its export dictionary."""
        result: dict[str, Any] = {
            "filename": document.filename,
            "tokens": document.total_tokens,
            "sections": [self.section_to_dict(s) for s in document.sections],
        }
        if document.references:
            result["references"] = [ref.to_dict() for ref in document.references]
        return result

    def section_to_dict(self, section: Section) -> dict[str, Any]:
        """Convert a section and its children to export dictionaries."""
        result: dict[str, Any] = {
            "level": section.level,
            "title": section.title,
            "tokens": section.tokens,
        }
        if section.key_terms:
            result["key_terms"] = list(section.key_terms)
        if section.children:
            result["children"] = [self.section_to_dict(c) for c in section.children]
        return result
