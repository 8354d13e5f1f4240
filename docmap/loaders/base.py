"""
Base loader class and registry for document loaders.

All document loaders inherit from BaseLoader and register themselves
with the LoaderRegistry for automatic format detection.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, ClassVar

from docmap.config import DocmapConfig
from docmap.core.document import Document
from docmap.utils.tokens import TokenCounter

logger = logging.getLogger(__name__)


class LoaderError(Exception):
    """Base exception for loader errors."""

    def __init__(self, message: str, source_path: Path | None = None, details: str | None = None):
        self.source_path = source_path
        self.details = details
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": str(self),
            "source_path": str(self.source_path) if self.source_path else None,
            "details": self.details,
        }


class BaseLoader(ABC):
    """
    Abstract base class for document loaders.

    Each loader is responsible for:
    1. Detecting if it can handle a file type
    2. Reading the file and handing its content to the structure analysis
    """

    # Subclasses should define these
    SUPPORTED_EXTENSIONS: ClassVar[list[str]] = []
    LOADER_NAME: ClassVar[str] = "base"

    def __init__(self, config: DocmapConfig | None = None) -> None:
        self._config = config or DocmapConfig()
        self._counter = TokenCounter(self._config.token_encoding)

    @classmethod
    def can_load(cls, path: Path) -> bool:
        """Check if this loader can handle the given file."""
        return path.suffix.lower() in cls.SUPPORTED_EXTENSIONS

    @abstractmethod
    def load(self, path: Path) -> Document:
        """
        Load a document and derive its structure.

        Args:
            path: Path to the document file

        Returns:
            Document without a filename

        Raises:
            LoaderError: If loading fails
        """
        pass

    def load_document(self, path: Path) -> Document:
        """
        Load a document and label it with the file name.

        Validates the path before delegating to load().
        """
        if not path.exists():
            raise LoaderError(f"File not found: {path}", source_path=path)

        if not self.can_load(path):
            raise LoaderError(
                f"Unsupported file type: {path.suffix}",
                source_path=path,
                details=f"Supported types: {', '.join(self.SUPPORTED_EXTENSIONS)}",
            )

        document = self.load(path)
        document.filename = path.name

        logger.info(
            "Loaded %s with %s loader: %d sections, ~%d tokens",
            path.name,
            self.LOADER_NAME,
            document.section_count,
            document.total_tokens,
        )
        return document


class LoaderRegistry:
    """
    Registry of available document loaders.

    Use this to automatically select the appropriate loader for a file.
    """

    _loaders: ClassVar[list[type[BaseLoader]]] = []

    @classmethod
    def register(cls, loader_class: type[BaseLoader]) -> type[BaseLoader]:
        """
        Register a loader class. Can be used as a decorator.

        @LoaderRegistry.register
        class MyLoader(BaseLoader):
            ...
        """
        if loader_class not in cls._loaders:
            cls._loaders.append(loader_class)
        return loader_class

    @classmethod
    def get_loader(cls, path: Path, config: DocmapConfig | None = None) -> BaseLoader | None:
        """Get an appropriate loader for the given file path."""
        for loader_class in cls._loaders:
            if loader_class.can_load(path):
                return loader_class(config)
        return None

    @classmethod
    def supported_extensions(cls) -> list[str]:
        """Get all supported file extensions."""
        extensions = []
        for loader_class in cls._loaders:
            extensions.extend(loader_class.SUPPORTED_EXTENSIONS)
        return sorted(set(extensions))

    @classmethod
    def load_document(cls, path: Path, config: DocmapConfig | None = None) -> Document:
        """
        Load a document using the appropriate loader.

        Raises:
            LoaderError: If no loader is available or loading fails
        """
        loader = cls.get_loader(path, config)
        if loader is None:
            supported = ", ".join(cls.supported_extensions())
            raise LoaderError(
                f"No loader available for file type: {path.suffix}",
                source_path=path,
                details=f"Supported types: {supported}",
            )
        return loader.load_document(path)
