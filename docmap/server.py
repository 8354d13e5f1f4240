"""FastAPI server for docmap.

Exposes document mapping over HTTP. Endpoints are registered on an
``APIRouter`` so a host application can mount them under its own prefix.

The standalone ``app`` object includes the router directly::

    uvicorn docmap.server:app --reload --port 8420
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from fastapi import APIRouter, FastAPI, File, HTTPException, UploadFile
from pydantic import BaseModel

from docmap import __version__
from docmap.exporters.json_export import JSONExporter
from docmap.loaders import LoaderError, MarkdownLoader, PDFLoader

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")

app = FastAPI(
    title="docmap API",
    description="Document structure maps for LLMs and humans",
    version=__version__,
)

_exporter = JSONExporter()


# ============================================================================
# Pydantic Models for API
# ============================================================================


class MarkdownRequest(BaseModel):
    """Request model for mapping markdown text."""

    text: str
    filename: str = ""


class SectionRequest(BaseModel):
    """Request model for looking up a section in markdown text."""

    text: str
    name: str


# ============================================================================
# Endpoints
# ============================================================================


@router.get("/health")
async def health_check() -> dict[str, Any]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


@router.post("/map/markdown")
async def map_markdown(request: MarkdownRequest) -> dict[str, Any]:
    """Map markdown text sent in the request body."""
    document = MarkdownLoader().parse(request.text)
    document.filename = request.filename
    return _exporter.document_to_dict(document)


@router.post("/map/section")
async def map_section(request: SectionRequest) -> dict[str, Any]:
    """Find a section by name and return it with its content."""
    document = MarkdownLoader().parse(request.text)
    section = document.get_section(request.name)
    if section is None:
        raise HTTPException(status_code=404, detail=f"Section '{request.name}' not found")
    return section.to_dict()


@router.post("/map/upload")
async def map_upload(file: UploadFile = File(...)) -> dict[str, Any]:
    """Map an uploaded markdown or PDF file."""
    filename = file.filename or "document"
    suffix = Path(filename).suffix.lower()
    data = await file.read()

    if suffix == ".md":
        document = MarkdownLoader().parse(data.decode("utf-8", errors="replace"))
        document.filename = filename
    elif suffix == ".pdf":
        try:
            document = PDFLoader().load_bytes(data, name=filename)
        except LoaderError as e:
            logger.warning("Rejected upload %s: %s", filename, e)
            raise HTTPException(status_code=422, detail=e.to_dict()) from e
    else:
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported file type: {suffix or filename}",
        )

    return _exporter.document_to_dict(document)


app.include_router(router)


def run_server(host: str = "127.0.0.1", port: int = 8420) -> None:
    """Start the docmap server via uvicorn.

    Args:
        host: Bind address. Defaults to localhost.
        port: Port number. Defaults to 8420.
    """
    import uvicorn

    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )
    run_server()
