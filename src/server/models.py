"""Pydantic request and response models for the API."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from javadoc2anki.schemas import FileStatus
from server.server_config import MAX_SOURCE_SIZE


class ExtractRequest(BaseModel):
    """Request model for the /api/extract endpoint.

    Attributes
    ----------
    source : str
        Java source text of one compilation unit.

    """

    source: str = Field(..., max_length=MAX_SOURCE_SIZE, description="Java source text")


class ExtractResponse(BaseModel):
    """Success response model for the /api/extract endpoint.

    Attributes
    ----------
    markdown : str
        Markdown rendered from the documentation comments.

    """

    markdown: str = Field(..., description="Extracted Markdown")


class SyncRequest(BaseModel):
    """Request model for the /api/sync endpoint.

    Attributes
    ----------
    paths : list[str]
        Files to sync, absolute or relative to the project root.

    """

    paths: list[str] = Field(..., min_length=1, description="Files to sync")

    @field_validator("paths")
    @classmethod
    def strip_paths(cls, v: list[str]) -> list[str]:
        """Drop blank entries and surrounding whitespace."""
        paths = [item.strip() for item in v if item.strip()]
        if not paths:
            err = "paths cannot be empty"
            raise ValueError(err)
        return paths


class StatusResponse(BaseModel):
    """Response model for the /api/status endpoint.

    Attributes
    ----------
    path : str
        The resolved file path.
    status : FileStatus
        Current sync status.
    label : str | None
        Decoration suffix such as ``[Synced]``; None for files never synced.
    note_id : int | None
        Anki note id, when the file has one.

    """

    path: str
    status: FileStatus
    label: str | None = None
    note_id: int | None = None


class FileEvent(BaseModel):
    """Body of the deleted and changed event endpoints."""

    path: str = Field(..., min_length=1)


class FileMoveEvent(BaseModel):
    """Body of the moved and renamed event endpoints."""

    old_path: str = Field(..., min_length=1)
    new_path: str = Field(..., min_length=1)


class EventResponse(BaseModel):
    """Response model for the event endpoints.

    Attributes
    ----------
    path : str
        File the event applied to (the new path for moves and renames).
    status : FileStatus
        Status recorded after handling the event.
    anki_updated : bool
        Whether the matching Anki note was changed.

    """

    path: str
    status: FileStatus
    anki_updated: bool = False


class ErrorResponse(BaseModel):
    """Error response model.

    Attributes
    ----------
    error : str
        Error message describing what went wrong.

    """

    error: str = Field(..., description="Error message")
