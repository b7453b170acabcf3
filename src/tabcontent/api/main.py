"""FastAPI application for previewing tab content normalization."""

from typing import Any, Optional

from fastapi import FastAPI
from pydantic import BaseModel

from tabcontent import __version__
from tabcontent.models import (
    TAB_LABELS,
    RawTabContent,
    ResolvedContent,
    SidebarItem,
)
from tabcontent.parsers import normalize
from tabcontent.resolver import resolve
from tabcontent.selection import ActiveSelection


app = FastAPI(
    title="Tabcontent API",
    description="Preview how department tab content is normalized and resolved",
    version=__version__,
)


class NormalizeRequest(BaseModel):
    """Raw sidebar entries of one tab."""

    sidebar_items: Any = None
    tab_type: str = "overview"
    include_overview: bool = True


class ResolveRequest(BaseModel):
    """A full tab content record plus the active selection."""

    tab_content: dict[str, Any]
    selection: Optional[str] = None  # Item id; omitted means Overview
    include_overview: bool = True


class ResolveResponse(BaseModel):
    """Normalized sidebar and the payload shown for the selection."""

    items: list[SidebarItem]
    content: ResolvedContent


@app.get("/")
def root() -> dict:
    """Root endpoint with API info."""
    return {
        "name": "Tabcontent API",
        "version": __version__,
        "description": "Tab content normalization preview",
        "docs_url": "/docs",
    }


@app.get("/health")
def health_check() -> dict:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/tab-types")
def list_tab_types() -> dict:
    """List tab types with labels, mirroring the departments API."""
    return {
        "types": [t.value for t in TAB_LABELS],
        "labels": {t.value: label for t, label in TAB_LABELS.items()},
        "embedded_overview": [t.value for t in TAB_LABELS if t.embeds_overview],
    }


@app.post("/normalize", response_model=list[SidebarItem])
def normalize_items(request: NormalizeRequest) -> list[SidebarItem]:
    """Normalize raw sidebar entries."""
    return normalize(request.sidebar_items, request.include_overview, request.tab_type)


@app.post("/resolve", response_model=ResolveResponse)
def resolve_content(request: ResolveRequest) -> ResolveResponse:
    """Normalize a tab content record and resolve the selected payload."""
    content = RawTabContent.from_payload(request.tab_content)
    items = normalize(content.sidebar_items, request.include_overview, content.tab_type)
    resolved = resolve(ActiveSelection.for_item(request.selection), items, content)
    return ResolveResponse(items=items, content=resolved)
