"""Exporters for docmap output."""

from docmap.exporters.json_export import JSONExporter

__all__ = [
    "JSONExporter",
]
