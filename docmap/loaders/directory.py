"""
Directory loading.

Walks a directory tree and loads every markdown and PDF file in it.
"""

from __future__ import annotations

import logging
from pathlib import Path

from docmap.config import DocmapConfig
from docmap.core.document import Document
from docmap.loaders.base import LoaderError, LoaderRegistry

logger = logging.getLogger(__name__)

DOCUMENT_EXTENSIONS = (".md", ".pdf")


def iter_document_paths(root: Path, include_hidden: bool = False) -> list[Path]:
    """
    List markdown and PDF files under ``root`` in sorted order.

    Hidden files (names starting with ".") are skipped unless
    ``include_hidden`` is set. Hidden directories are still walked.
    """
    paths = []
    for path in sorted(root.rglob("*")):
        if not path.is_file():
            continue
        if not path.name.lower().endswith(DOCUMENT_EXTENSIONS):
            continue
        if not include_hidden and path.name.startswith("."):
            continue
        paths.append(path)
    return paths


def load_directory(root: Path, config: DocmapConfig | None = None) -> list[Document]:
    """
    Load every document under ``root``.

    Each document's filename is its POSIX path relative to ``root``. Files
    that fail to load are skipped with a warning.
    """
    config = config or DocmapConfig()
    documents = []

    for path in iter_document_paths(root, include_hidden=config.include_hidden):
        loader = LoaderRegistry.get_loader(path, config)
        if loader is None:
            continue

        try:
            document = loader.load_document(path)
        except LoaderError as e:
            logger.warning("Skipping %s: %s", path, e)
            continue

        document.filename = path.relative_to(root).as_posix()
        documents.append(document)

    logger.info("Loaded %d documents from %s", len(documents), root)
    return documents
