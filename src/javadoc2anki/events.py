"""Keep Anki notes and sync status in step with file system changes."""

from __future__ import annotations

import logging
from pathlib import Path

from javadoc2anki.anki_connect import AnkiConnectClient
from javadoc2anki.config import JAVADOC2ANKI_SOURCE_EXTENSIONS
from javadoc2anki.exceptions import AnkiConnectError
from javadoc2anki.file_utils import deck_name_for, is_source_file, tags_for
from javadoc2anki.schemas import FileStatus
from javadoc2anki.status_store import FileStatusStore

logger = logging.getLogger(__name__)

_STATUS_LABELS = {
    FileStatus.SYNCED: "[Synced]",
    FileStatus.MODIFIED_AFTER_SYNC: "[Modified]",
    FileStatus.ERROR: "[Error]",
}


def status_label(status: FileStatus) -> str | None:
    """Suffix shown next to a file name for ``status``; None when not synced."""
    return _STATUS_LABELS.get(status)


async def handle_file_deleted(
    path: Path,
    *,
    anki: AnkiConnectClient,
    store: FileStatusStore,
    extensions: tuple[str, ...] = JAVADOC2ANKI_SOURCE_EXTENSIONS,
) -> bool:
    """Delete the note of a removed file and forget the file.

    The record is dropped even when Anki cannot be reached.

    Returns:
        True if a note was deleted from Anki.
    """
    if not is_source_file(path, extensions):
        return False
    note_id = store.get_note_id(path)
    if note_id is None:
        return False

    logger.info("File deleted: %s", path)
    deleted = False
    if await anki.is_available():
        try:
            await anki.delete_note(note_id)
            deleted = True
            logger.info("Deleted Anki note %s for %s", note_id, path)
        except AnkiConnectError as exc:
            logger.warning("Failed to delete Anki note %s for %s: %s", note_id, path, exc)

    store.remove(path)
    return deleted


async def handle_file_moved(
    old_path: Path,
    new_path: Path,
    *,
    project_root: Path,
    anki: AnkiConnectClient,
    store: FileStatusStore,
    extensions: tuple[str, ...] = JAVADOC2ANKI_SOURCE_EXTENSIONS,
) -> bool:
    """Move a file's note to the deck and tags of its new directory.

    Returns:
        True if the note was updated in Anki.
    """
    if not is_source_file(new_path, extensions):
        return False
    note_id = store.get_note_id(old_path)
    if note_id is None:
        return False

    logger.info("File moved from %s to %s", old_path, new_path)
    updated = False
    if await anki.is_available():
        try:
            await anki.update_note_deck_and_tags(
                note_id, deck_name_for(new_path, project_root), tags_for(new_path, project_root)
            )
            updated = True
            logger.info("Updated Anki note deck and tags for %s", new_path)
        except (AnkiConnectError, ValueError) as exc:
            logger.warning("Failed to update Anki note deck and tags for %s: %s", new_path, exc)

    store.move(old_path, new_path)
    return updated


async def handle_file_renamed(
    old_path: Path,
    new_path: Path,
    *,
    anki: AnkiConnectClient,
    store: FileStatusStore,
    extensions: tuple[str, ...] = JAVADOC2ANKI_SOURCE_EXTENSIONS,
) -> bool:
    """Retitle a file's note after the file is renamed.

    Returns:
        True if the note front was updated in Anki.
    """
    if not is_source_file(new_path, extensions):
        return False
    note_id = store.get_note_id(old_path)
    if note_id is None:
        return False

    logger.info("File renamed from %s to %s", old_path.name, new_path.name)
    updated = False
    if await anki.is_available():
        try:
            await anki.update_note_fields(note_id, front=new_path.stem)
            updated = True
            logger.info("Updated Anki note %s front to %s", note_id, new_path.stem)
        except AnkiConnectError as exc:
            logger.warning("Failed to update Anki note %s front to %s: %s", note_id, new_path.stem, exc)

    store.move(old_path, new_path)
    return updated


def handle_contents_changed(
    path: Path,
    *,
    store: FileStatusStore,
    extensions: tuple[str, ...] = JAVADOC2ANKI_SOURCE_EXTENSIONS,
) -> FileStatus:
    """Flag a synced file as modified after its contents change."""
    if not is_source_file(path, extensions):
        return FileStatus.NOT_SYNCED
    status = store.get_status(path)
    if status is FileStatus.SYNCED:
        store.set_status(path, FileStatus.MODIFIED_AFTER_SYNC)
        logger.info("File marked as modified after sync: %s", path)
        return FileStatus.MODIFIED_AFTER_SYNC
    return status
