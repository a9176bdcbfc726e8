"""FastAPI entrypoint for document/outline/transition endpoints."""

from __future__ import annotations

import os
import threading
from dataclasses import asdict
from typing import Any

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field, model_validator

from apidoc_viewer.config import LoggingConfig, ViewerConfig
from apidoc_viewer.document.parser import FetchingSchema
from apidoc_viewer.obs.logging import configure_logging
from apidoc_viewer.viewer.host import DocumentViewer


class DocumentRequest(BaseModel):
    """New document input: raw text, a structured object, or a URL to fetch."""

    content: str | None = None
    document: dict[str, Any] | None = None
    url: str | None = None
    request_headers: dict[str, str] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _exactly_one_source(self) -> "DocumentRequest":
        provided = [value for value in (self.content, self.document, self.url) if value is not None]
        if len(provided) != 1:
            raise ValueError("provide exactly one of content, document or url")
        return self

    def to_input(self) -> Any:
        if self.url is not None:
            options = {"headers": self.request_headers} if self.request_headers else {}
            return FetchingSchema(url=self.url, request_options=options)
        if self.document is not None:
            return self.document
        return self.content


configure_logging(
    LoggingConfig(
        level=os.getenv("APIDOC_VIEWER_LOG_LEVEL", "info").lower(),
        format=os.getenv("APIDOC_VIEWER_LOG_FORMAT", "console").lower(),
    )
)

app = FastAPI(title="API Document Viewer", version="0.1.0")

_viewer = DocumentViewer(ViewerConfig())
# FastAPI runs sync endpoints on a thread pool; transitions must not interleave.
_lock = threading.Lock()


@app.get("/health")
def health() -> dict[str, Any]:
    return {
        "status": "ok",
        "tracker_status": _viewer.tracker.status.value,
        "transition_count": len(_viewer.transition_store.list_recent(limit=1000)),
    }


@app.put("/document")
def put_document(request: DocumentRequest) -> dict[str, Any]:
    with _lock:
        transition, record = _viewer.update(request.to_input())
    return {
        "trace_id": record.trace_id,
        "transition": transition.kind.value,
        "status": _viewer.tracker.status.value,
        "changes": [section.to_dict() for section in transition.changes],
        "navigated_to": transition.navigated_to,
        "navigation_succeeded": transition.navigation_succeeded,
        "warnings": [event.kind.value for event in transition.warnings],
        "error": asdict(transition.error) if transition.error else None,
    }


@app.get("/document")
def get_document() -> dict[str, Any]:
    current = _viewer.tracker.current
    if current is None:
        raise HTTPException(status_code=404, detail="No document loaded")
    return current.json()


@app.get("/outline")
def outline() -> dict[str, Any]:
    rendered = _viewer.outline()
    return {
        "items": [
            {
                "element_id": entry.element_id,
                "section_type": entry.section_type.value,
                "title": entry.title,
            }
            for entry in rendered.entries
        ],
        "in_view": _viewer.viewport.in_view,
        "error": asdict(rendered.error) if rendered.error else None,
    }


@app.get("/config")
def config() -> dict[str, Any]:
    return _viewer.config.model_dump()


@app.get("/transitions")
def transitions(limit: int = 20) -> dict[str, Any]:
    records = [asdict(record) for record in _viewer.transition_store.list_recent(limit=limit)]
    return {"items": records}


@app.get("/transitions/{trace_id}")
def transition_detail(trace_id: str) -> dict[str, Any]:
    try:
        record = _viewer.transition_store.get(trace_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return asdict(record)


@app.get("/metrics")
def metrics() -> dict[str, Any]:
    return _viewer.transition_store.summary()
