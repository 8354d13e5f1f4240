"""Enrichment of sections with extracted terms."""

from docmap.enrichment.key_terms import KeyTermExtractor, extract_key_terms

__all__ = [
    "KeyTermExtractor",
    "extract_key_terms",
]
