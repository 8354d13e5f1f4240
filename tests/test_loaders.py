"""
Tests for docmap document loaders.
"""

import logging
from pathlib import Path

import fitz
import pytest

from docmap.config import DocmapConfig
from docmap.loaders import LoaderRegistry, load_directory
from docmap.loaders.base import LoaderError
from docmap.loaders.markdown import MarkdownLoader
from docmap.loaders.pdf import PDFLoader, outline_from_toc


class TestLoaderRegistry:
    """Tests for LoaderRegistry."""

    def test_supported_extensions(self):
        extensions = LoaderRegistry.supported_extensions()
        assert ".md" in extensions
        assert ".pdf" in extensions

    def test_get_loader_for_markdown(self):
        assert isinstance(LoaderRegistry.get_loader(Path("README.md")), MarkdownLoader)

    def test_get_loader_case_insensitive(self):
        assert isinstance(LoaderRegistry.get_loader(Path("REPORT.PDF")), PDFLoader)

    def test_get_loader_for_unknown(self):
        assert LoaderRegistry.get_loader(Path("notes.txt")) is None

    def test_load_document_unknown_type(self, temp_dir):
        path = temp_dir / "notes.txt"
        path.write_text("hello")
        with pytest.raises(LoaderError, match="No loader available"):
            LoaderRegistry.load_document(path)


class TestMarkdownLoader:
    """Tests for MarkdownLoader."""

    def test_load_document(self, temp_dir, sample_markdown_content):
        path = temp_dir / "guide.md"
        path.write_text(sample_markdown_content, encoding="utf-8")

        doc = MarkdownLoader().load_document(path)

        assert doc.filename == "guide.md"
        assert doc.sections[0].title == "Document Title"
        assert [r.target for r in doc.references] == ["guide.md", "README.md"]

    def test_missing_file(self, temp_dir):
        with pytest.raises(LoaderError, match="File not found"):
            MarkdownLoader().load_document(temp_dir / "missing.md")

    def test_wrong_extension(self, temp_dir):
        path = temp_dir / "notes.txt"
        path.write_text("# A")
        with pytest.raises(LoaderError, match="Unsupported file type"):
            MarkdownLoader().load_document(path)

    def test_invalid_utf8_replaced(self, temp_dir):
        path = temp_dir / "bytes.md"
        path.write_bytes(b"# Title \xff\n\nbody\n")
        doc = MarkdownLoader().load_document(path)
        assert doc.sections[0].title.startswith("Title")


class TestOutlineFromToc:
    """Tests for converting PyMuPDF's flat TOC into a tree."""

    def test_empty(self):
        assert outline_from_toc([]).children == []

    def test_nesting(self):
        toc = [
            [1, "Intro", 1],
            [2, "Background", 1],
            [2, "Scope", 2],
            [1, "Method", 3],
        ]
        root = outline_from_toc(toc)
        assert [n.title for n in root.children] == ["Intro", "Method"]
        assert [n.title for n in root.children[0].children] == ["Background", "Scope"]
        assert root.children[1].page == 3

    def test_level_jump_attaches_to_nearest_shallower(self):
        root = outline_from_toc([[1, "A", 1], [3, "C", 1], [2, "B", 1]])
        a = root.children[0]
        assert [n.title for n in a.children] == ["C", "B"]


class TestPDFLoader:
    """Tests for PDFLoader using generated PDFs."""

    def test_page_fallback(self, make_pdf):
        path = make_pdf(["Hello", "", "World"])
        doc = PDFLoader().load_document(path)

        assert doc.filename == "doc.pdf"
        assert [s.title for s in doc.sections] == ["Page 1", "Page 3"]
        assert doc.sections[0].content == "Hello"

    def test_blank_pdf_sentinel(self, make_pdf):
        doc = PDFLoader().load_document(make_pdf(["", ""]))
        assert [s.title for s in doc.sections] == ["(2 pages - no extractable text)"]

    def test_outline(self, make_pdf):
        path = make_pdf(
            ["\n".join(["Chapter one text"] * 5), "\n".join(["Chapter two text"] * 5)],
            toc=[[1, "One", 1], [2, "One point one", 1], [1, "Two", 2]],
        )
        doc = PDFLoader().load_document(path)

        assert [s.title for s in doc.sections] == ["One", "Two"]
        assert doc.sections[0].children[0].title == "One point one"
        assert doc.total_tokens > 0
        assert doc.total_tokens == sum(s.tokens for s in doc.sections)

    def test_invalid_pdf(self, temp_dir):
        path = temp_dir / "broken.pdf"
        path.write_text("not a valid PDF content")
        with pytest.raises(LoaderError, match="Failed to open PDF") as exc_info:
            PDFLoader().load_document(path)
        assert exc_info.value.__cause__ is not None

    def test_missing_pdf(self, temp_dir):
        with pytest.raises(LoaderError):
            PDFLoader().load_document(temp_dir / "nonexistent.pdf")

    def test_load_bytes(self, make_pdf):
        data = make_pdf(["Hello"]).read_bytes()
        doc = PDFLoader().load_bytes(data, name="upload.pdf")
        assert doc.filename == "upload.pdf"
        assert doc.sections[0].title == "Page 1"

    def test_load_bytes_invalid(self):
        with pytest.raises(LoaderError):
            PDFLoader().load_bytes(b"garbage", name="bad.pdf")

    def test_toc_failure_falls_back_to_pages(self, make_pdf, monkeypatch, caplog):
        def broken_toc(self, simple=True):
            raise RuntimeError("bad outline")

        path = make_pdf(["Hello"], toc=[[1, "One", 1]])
        monkeypatch.setattr(fitz.Document, "get_toc", broken_toc)

        with caplog.at_level(logging.WARNING, logger="docmap.loaders.pdf"):
            doc = PDFLoader().load_document(path)

        assert [s.title for s in doc.sections] == ["Page 1"]
        assert "TOC extraction error" in caplog.text
        assert "bad outline" in caplog.text


class TestLoadDirectory:
    """Tests for directory loading."""

    def test_loads_markdown_and_pdf(self, temp_dir, make_pdf):
        (temp_dir / "docs").mkdir()
        (temp_dir / "README.md").write_text("# Readme\nSee [guide](docs/guide.md)\n")
        (temp_dir / "docs" / "guide.md").write_text("# Guide\n")
        (temp_dir / "notes.txt").write_text("# ignored")
        make_pdf(["Hello"], name="report.pdf")

        docs = load_directory(temp_dir)

        assert [d.filename for d in docs] == ["README.md", "docs/guide.md", "report.pdf"]

    def test_hidden_files_skipped(self, temp_dir):
        (temp_dir / ".hidden.md").write_text("# Hidden\n")
        (temp_dir / "shown.md").write_text("# Shown\n")

        assert [d.filename for d in load_directory(temp_dir)] == ["shown.md"]

        config = DocmapConfig(include_hidden=True)
        assert len(load_directory(temp_dir, config)) == 2

    def test_broken_pdf_skipped(self, temp_dir):
        (temp_dir / "broken.pdf").write_text("not a pdf")
        (temp_dir / "ok.md").write_text("# Ok\n")
        assert [d.filename for d in load_directory(temp_dir)] == ["ok.md"]

    def test_uppercase_extension(self, temp_dir):
        (temp_dir / "UPPER.MD").write_text("# Upper\n")
        assert [d.filename for d in load_directory(temp_dir)] == ["UPPER.MD"]

    def test_empty_directory(self, temp_dir):
        assert load_directory(temp_dir) == []
