"""Sync pipeline for Java source -> Markdown -> Anki notes."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable

from javadoc2anki.anki_connect import AnkiConnectClient
from javadoc2anki.config import JAVADOC2ANKI_SOURCE_EXTENSIONS
from javadoc2anki.exceptions import (
    AnkiConnectUnavailableError,
    Javadoc2AnkiError,
    NotAChildError,
    StatusStoreError,
)
from javadoc2anki.file_utils import deck_name_for, is_source_file, read_bytes_async, tags_for
from javadoc2anki.java_parser import parse_java_source
from javadoc2anki.markdown import convert_source_to_markdown
from javadoc2anki.schemas import FileStatus, FileSyncResult, NoteRequest, SyncReport, SyntaxTree
from javadoc2anki.status_store import FileStatusStore

logger = logging.getLogger(__name__)


@dataclass
class SyncOptions:
    """Options for a sync run.

    Attributes:
        project_root: Directory that deck names and tags are derived from.
        source_extensions: File suffixes that are synced; other files are skipped.
        check_availability: If True, abort before touching any file when
            AnkiConnect does not answer.
    """

    project_root: Path
    source_extensions: tuple[str, ...] = field(default=JAVADOC2ANKI_SOURCE_EXTENSIONS)
    check_availability: bool = True


async def sync_files(
    paths: Iterable[Path],
    *,
    options: SyncOptions,
    anki: AnkiConnectClient,
    store: FileStatusStore,
    parse: Callable[[str | bytes], SyntaxTree] = parse_java_source,
) -> SyncReport:
    """Extract each selected file to Markdown and create or update its Anki note.

    A file that fails is marked ``ERROR`` and the run moves on to the next
    one. Files that are not source files are skipped and do not appear in the
    report.

    Args:
        paths: Files selected for syncing.
        options: Project root and filters.
        anki: AnkiConnect client.
        store: Sync status store.
        parse: Parse capability used for every file.

    Returns:
        One result per synced or failed file.

    Raises:
        AnkiConnectUnavailableError: If AnkiConnect does not answer and
            ``options.check_availability`` is set.
    """
    if options.check_availability and not await anki.is_available():
        raise AnkiConnectUnavailableError(
            "AnkiConnect is not available. Make sure Anki is running with the AnkiConnect add-on installed."
        )

    report = SyncReport()
    for path in paths:
        if not is_source_file(path, options.source_extensions):
            logger.debug("Skipping %s: not a source file", path)
            continue
        report.results.append(
            await sync_file(path, project_root=options.project_root, anki=anki, store=store, parse=parse)
        )

    logger.info("Sync completed: %d synced, %d errors", report.synced_count, report.error_count)
    return report


async def sync_file(
    path: Path,
    *,
    project_root: Path,
    anki: AnkiConnectClient,
    store: FileStatusStore,
    parse: Callable[[str | bytes], SyntaxTree] = parse_java_source,
) -> FileSyncResult:
    """Sync one source file and record the outcome in ``store``."""
    try:
        request = await build_note_request(path, project_root=project_root, parse=parse)
        note_id = await _push_note(request, anki=anki, store=store)
        store.mark_synced(path, note_id)
    except NotAChildError as exc:
        logger.exception("Inconsistent syntax tree for %s", path)
        return _failed(path, store, exc)
    except (Javadoc2AnkiError, OSError, ValueError) as exc:
        logger.warning("Failed to sync %s: %s", path, exc)
        return _failed(path, store, exc)

    return FileSyncResult(path=str(path), status=FileStatus.SYNCED, note_id=note_id)


async def build_note_request(
    path: Path,
    *,
    project_root: Path,
    parse: Callable[[str | bytes], SyntaxTree] = parse_java_source,
) -> NoteRequest:
    """Read ``path`` and build the note it should become.

    Raises:
        ValueError: If the file is outside ``project_root`` or has no
            documentation comments.
        SourceSyntaxError, HeadingDepthExceededError, NotAChildError: From
            extraction.
    """
    source = await read_bytes_async(path)
    # Parsing and walking are CPU bound; keep them off the event loop.
    markdown = await asyncio.to_thread(convert_source_to_markdown, source, parse=parse)
    if not markdown:
        raise ValueError(f"No documentation comments found in {path}")

    return NoteRequest(
        deck_name=deck_name_for(path, project_root),
        front=path.stem,
        back=markdown,
        tags=tags_for(path, project_root),
        source_path=str(path),
    )


async def _push_note(request: NoteRequest, *, anki: AnkiConnectClient, store: FileStatusStore) -> int:
    note_id = store.get_note_id(request.source_path)
    if note_id is not None and await anki.note_exists(note_id):
        await anki.update_note_fields(note_id, front=request.front, back=request.back)
        await anki.update_note_deck_and_tags(note_id, request.deck_name, request.tags)
        logger.info("Updated note %s for %s", note_id, request.source_path)
        return note_id
    return await anki.add_note(request)


def _failed(path: Path, store: FileStatusStore, exc: Exception) -> FileSyncResult:
    try:
        store.set_status(path, FileStatus.ERROR)
    except StatusStoreError as store_exc:
        logger.warning("Failed to record error status for %s: %s", path, store_exc)
    return FileSyncResult(path=str(path), status=FileStatus.ERROR, error=str(exc))
