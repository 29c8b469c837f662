"""Request dependencies shared by the routers."""

from __future__ import annotations

from pathlib import Path

from fastapi import Request

from javadoc2anki.anki_connect import AnkiConnectClient
from javadoc2anki.status_store import FileStatusStore


def get_store(request: Request) -> FileStatusStore:
    return request.app.state.store


def get_anki(request: Request) -> AnkiConnectClient:
    return request.app.state.anki


def get_project_root(request: Request) -> Path:
    return request.app.state.project_root


def resolve_path(project_root: Path, path: str) -> Path:
    """Resolve a request path against the project root."""
    candidate = Path(path).expanduser()
    if not candidate.is_absolute():
        candidate = project_root / candidate
    return candidate.resolve()
