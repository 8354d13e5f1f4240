"""
Pytest configuration and fixtures for docmap tests.
"""

import tempfile
from pathlib import Path

import fitz
import pytest


@pytest.fixture
def temp_dir() -> Path:
    """Create a temporary directory for file operations."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_markdown_content() -> str:
    """Sample Markdown content for testing."""
    return """# Document Title

This is an introduction paragraph with some text.

## Section One

Content for section one with **bold term** and `code`.

### Subsection 1.1

More detailed content in the subsection.
See [the guide](guide.md#install) for details.

## Section Two

Another section with different content.

```python
def hello():
    print("Hello, World!")
```

## Conclusion

Final thoughts on the topic. Back to [readme](README.md).
"""


@pytest.fixture
def scenario_markdown() -> str:
    """Small document with two subsections and one reference."""
    return """# Title

## Section One

Content with **bold term** and `code`.

## Section Two

See [link](other.md).
"""


@pytest.fixture
def make_pdf(temp_dir: Path):
    """
    Factory writing a PDF with the given page texts and optional TOC.

    Usage: make_pdf(["Hello", "", "World"], toc=[[1, "Intro", 1]])
    """

    def _make(pages: list[str], toc: list[list] | None = None, name: str = "doc.pdf") -> Path:
        pdf = fitz.open()
        for text in pages:
            page = pdf.new_page()
            if text:
                page.insert_text((72, 72), text)
        if toc:
            pdf.set_toc(toc)
        path = temp_dir / name
        pdf.save(str(path))
        pdf.close()
        return path

    return _make
