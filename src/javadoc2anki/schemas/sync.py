"""Sync state and result models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class FileStatus(str, Enum):
    """Sync state of one source file."""

    NOT_SYNCED = "NOT_SYNCED"
    SYNCED = "SYNCED"
    MODIFIED_AFTER_SYNC = "MODIFIED_AFTER_SYNC"
    ERROR = "ERROR"


class NoteRequest(BaseModel):
    """A flashcard to create or update in Anki.

    Attributes:
        deck_name: Target deck, ``::`` separated for sub-decks.
        front: Card front, the source file stem.
        back: Markdown extracted from the source file.
        tags: Tags derived from the file location.
        source_path: Path of the source file the card was built from.
    """

    deck_name: str
    front: str
    back: str
    tags: list[str] = Field(default_factory=list)
    source_path: str


class FileSyncResult(BaseModel):
    """Outcome of syncing one file."""

    path: str
    status: FileStatus
    note_id: int | None = None
    error: str | None = None


class SyncReport(BaseModel):
    """Outcome of one sync run."""

    results: list[FileSyncResult] = Field(default_factory=list)

    @property
    def synced_count(self) -> int:
        return sum(1 for result in self.results if result.status is FileStatus.SYNCED)

    @property
    def error_count(self) -> int:
        return sum(1 for result in self.results if result.status is FileStatus.ERROR)
