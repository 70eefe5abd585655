"""FastAPI application exposing the docscout query operations over HTTP."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from docscout.config import AppConfig
from docscout.errors import DocumentNotFound, SearchFailed
from docscout.index.search import DocsService

LOGGER = logging.getLogger(__name__)

app = FastAPI(title="docscout", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=["*"],
)

_config: AppConfig | None = None
_service: DocsService | None = None


class RenderedText(BaseModel):
    text: str


def configure(config: AppConfig | None) -> None:
    """Use ``config`` for the service created on the next request."""
    global _config, _service
    _config = config
    _service = None


def get_service() -> DocsService:
    global _service
    if _service is None:
        _service = DocsService(_config or AppConfig())
    return _service


async def _run(operation) -> RenderedText:
    try:
        return RenderedText(text=await operation)
    except DocumentNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except SearchFailed as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc


@app.on_event("startup")
async def startup_event() -> None:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")
    get_service().start()


@app.get("/search", response_model=RenderedText)
async def search_docs(
    query: str, section: Optional[str] = None, version: Optional[str] = None
) -> RenderedText:
    query = query.strip()
    if not query:
        raise HTTPException(status_code=400, detail="Empty query")
    return await _run(get_service().search(query, section, version))


@app.get("/content", response_model=RenderedText)
async def get_content(path: str) -> RenderedText:
    return await _run(get_service().get_content(path))


@app.get("/doc", response_model=RenderedText)
async def get_by_path(path: Optional[str] = None, version: Optional[str] = None) -> RenderedText:
    return await _run(get_service().get_by_path(path, version))


@app.get("/sections", response_model=RenderedText)
async def list_sections(section: Optional[str] = None, version: Optional[str] = None) -> RenderedText:
    return await _run(get_service().list_sections(section, version))


@app.get("/api-reference", response_model=RenderedText)
async def get_api_reference(module: str, version: Optional[str] = None) -> RenderedText:
    return await _run(get_service().get_api_reference(module, version))


@app.get("/quickstart", response_model=RenderedText)
async def get_quick_start(platform: Optional[str] = None) -> RenderedText:
    return await _run(get_service().get_quick_start(platform))
