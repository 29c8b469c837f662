"""javadoc2anki: turn Javadoc comments into Anki flashcards."""

from javadoc2anki.anki_connect import AnkiConnectClient
from javadoc2anki.exceptions import (
    AnkiConnectError,
    AnkiConnectUnavailableError,
    ExtractionError,
    HeadingDepthExceededError,
    Javadoc2AnkiError,
    NotAChildError,
    ParseError,
    SourceSyntaxError,
    StatusStoreError,
)
from javadoc2anki.java_parser import parse_java_source
from javadoc2anki.markdown import convert_source_to_markdown, extract_markdown
from javadoc2anki.schemas import FileStatus, SyncReport, SyntaxTree
from javadoc2anki.status_store import FileStatusStore
from javadoc2anki.sync import SyncOptions, sync_files

__all__ = [
    "AnkiConnectClient",
    "AnkiConnectError",
    "AnkiConnectUnavailableError",
    "ExtractionError",
    "FileStatus",
    "FileStatusStore",
    "HeadingDepthExceededError",
    "Javadoc2AnkiError",
    "NotAChildError",
    "ParseError",
    "SourceSyntaxError",
    "StatusStoreError",
    "SyncOptions",
    "SyncReport",
    "SyntaxTree",
    "convert_source_to_markdown",
    "extract_markdown",
    "parse_java_source",
    "sync_files",
]
