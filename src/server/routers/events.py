"""File system event endpoints for the API."""

from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends

from javadoc2anki.anki_connect import AnkiConnectClient
from javadoc2anki.events import (
    handle_contents_changed,
    handle_file_deleted,
    handle_file_moved,
    handle_file_renamed,
)
from javadoc2anki.schemas import FileStatus
from javadoc2anki.status_store import FileStatusStore
from server.dependencies import get_anki, get_project_root, get_store, resolve_path
from server.models import EventResponse, FileEvent, FileMoveEvent

router = APIRouter(prefix="/api/events")


@router.post("/deleted", response_model=EventResponse)
async def file_deleted(
    event: FileEvent,
    project_root: Path = Depends(get_project_root),
    anki: AnkiConnectClient = Depends(get_anki),
    store: FileStatusStore = Depends(get_store),
) -> EventResponse:
    """Delete the note of a removed file and forget its status."""
    path = resolve_path(project_root, event.path)
    deleted = await handle_file_deleted(path, anki=anki, store=store)
    return EventResponse(path=str(path), status=store.get_status(path), anki_updated=deleted)


@router.post("/moved", response_model=EventResponse)
async def file_moved(
    event: FileMoveEvent,
    project_root: Path = Depends(get_project_root),
    anki: AnkiConnectClient = Depends(get_anki),
    store: FileStatusStore = Depends(get_store),
) -> EventResponse:
    """Move a file's note to the deck and tags of its new directory."""
    old_path = resolve_path(project_root, event.old_path)
    new_path = resolve_path(project_root, event.new_path)
    updated = await handle_file_moved(old_path, new_path, project_root=project_root, anki=anki, store=store)
    return EventResponse(path=str(new_path), status=store.get_status(new_path), anki_updated=updated)


@router.post("/renamed", response_model=EventResponse)
async def file_renamed(
    event: FileMoveEvent,
    project_root: Path = Depends(get_project_root),
    anki: AnkiConnectClient = Depends(get_anki),
    store: FileStatusStore = Depends(get_store),
) -> EventResponse:
    """Retitle a file's note after a rename."""
    old_path = resolve_path(project_root, event.old_path)
    new_path = resolve_path(project_root, event.new_path)
    updated = await handle_file_renamed(old_path, new_path, anki=anki, store=store)
    return EventResponse(path=str(new_path), status=store.get_status(new_path), anki_updated=updated)


@router.post("/changed", response_model=EventResponse)
async def contents_changed(
    event: FileEvent,
    project_root: Path = Depends(get_project_root),
    store: FileStatusStore = Depends(get_store),
) -> EventResponse:
    """Flag a synced file as modified."""
    path = resolve_path(project_root, event.path)
    file_status: FileStatus = handle_contents_changed(path, store=store)
    return EventResponse(path=str(path), status=file_status)
