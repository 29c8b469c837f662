"""Shared schemas for javadoc2anki."""

from javadoc2anki.schemas.sync import FileStatus, FileSyncResult, NoteRequest, SyncReport
from javadoc2anki.schemas.syntax import CommentStyle, NodeKind, Position, SyntaxNode, SyntaxTree

__all__ = [
    "CommentStyle",
    "FileStatus",
    "FileSyncResult",
    "NodeKind",
    "NoteRequest",
    "Position",
    "SyncReport",
    "SyntaxNode",
    "SyntaxTree",
]
