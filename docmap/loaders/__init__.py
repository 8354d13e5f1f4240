"""Document loaders for docmap."""

from docmap.loaders.base import BaseLoader, LoaderError, LoaderRegistry
from docmap.loaders.directory import load_directory
from docmap.loaders.markdown import MarkdownLoader
from docmap.loaders.pdf import PDFLoader, outline_from_toc

__all__ = [
    "BaseLoader",
    "LoaderError",
    "LoaderRegistry",
    "MarkdownLoader",
    "PDFLoader",
    "load_directory",
    "outline_from_toc",
]
