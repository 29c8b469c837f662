"""Sync and status endpoints for the API."""

from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from javadoc2anki.anki_connect import AnkiConnectClient
from javadoc2anki.events import status_label
from javadoc2anki.exceptions import AnkiConnectUnavailableError
from javadoc2anki.schemas import SyncReport
from javadoc2anki.status_store import FileStatusStore
from javadoc2anki.sync import SyncOptions, sync_files
from javadoc2anki.utils.logging_config import get_logger
from server.dependencies import get_anki, get_project_root, get_store, resolve_path
from server.models import ErrorResponse, StatusResponse, SyncRequest

logger = get_logger(__name__)

router = APIRouter()


@router.post(
    "/api/sync",
    response_model=SyncReport,
    responses={status.HTTP_503_SERVICE_UNAVAILABLE: {"model": ErrorResponse}},
)
async def api_sync(
    sync_request: SyncRequest,
    project_root: Path = Depends(get_project_root),
    anki: AnkiConnectClient = Depends(get_anki),
    store: FileStatusStore = Depends(get_store),
) -> SyncReport | JSONResponse:
    """Sync the selected files to Anki.

    **Each file is converted to Markdown and becomes one note.** The deck is
    derived from the file's directory and the tags from its path. A file that
    fails is reported with status ``ERROR``; the remaining files are still synced.

    **Parameters**

    - **sync_request** (`SyncRequest`): files to sync

    **Returns**

    - **SyncReport**: one result per synced or failed file
    - **JSONResponse**: **503** if AnkiConnect is not reachable

    """
    paths = [resolve_path(project_root, item) for item in sync_request.paths]
    logger.info("Sync requested", extra={"files": len(paths)})
    try:
        return await sync_files(paths, options=SyncOptions(project_root=project_root), anki=anki, store=store)
    except AnkiConnectUnavailableError as exc:
        logger.warning("Sync aborted", extra={"error": str(exc)})
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=ErrorResponse(error=str(exc)).model_dump(),
        )


@router.get("/api/status", response_model=StatusResponse)
async def api_status(
    path: str,
    project_root: Path = Depends(get_project_root),
    store: FileStatusStore = Depends(get_store),
) -> StatusResponse:
    """Return the sync status of one file.

    **Query Parameters**
    - **path** (`str`): file path, absolute or relative to the project root

    **Returns**
    - **StatusResponse**: status, decoration label and note id
    """
    resolved = resolve_path(project_root, path)
    file_status = store.get_status(resolved)
    return StatusResponse(
        path=str(resolved),
        status=file_status,
        label=status_label(file_status),
        note_id=store.get_note_id(resolved),
    )
