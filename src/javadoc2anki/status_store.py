"""Persistent sync status of source files."""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

from javadoc2anki.exceptions import StatusStoreError
from javadoc2anki.schemas import FileStatus

logger = logging.getLogger(__name__)

_CREATE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS file_status (
    file_path TEXT PRIMARY KEY,
    status TEXT NOT NULL,
    anki_note_id INTEGER,
    last_modified TIMESTAMP DEFAULT CURRENT_TIMESTAMP
)
"""


class FileStatusStore:
    """sqlite-backed map of file path -> (status, Anki note id).

    Statuses are cached in memory when the store opens; every write goes to
    the database first and then to the cache.
    """

    def __init__(self, db_path: Path | str) -> None:
        self.db_path = Path(db_path)
        self._cache: dict[str, FileStatus] = {}
        try:
            if str(self.db_path) != ":memory:":
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
            self._connection = sqlite3.connect(str(self.db_path), check_same_thread=False)
            with self._connection:
                self._connection.execute(_CREATE_TABLE_SQL)
            rows = self._connection.execute("SELECT file_path, status FROM file_status").fetchall()
        except (OSError, sqlite3.Error) as exc:
            raise StatusStoreError(f"Failed to open status database {self.db_path}: {exc}") from exc

        for file_path, status in rows:
            self._cache[file_path] = FileStatus(status)
        logger.info("Status database opened at %s (%d files)", self.db_path, len(self._cache))

    def __enter__(self) -> FileStatusStore:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._connection.close()

    def get_status(self, path: Path | str) -> FileStatus:
        return self._cache.get(_key(path), FileStatus.NOT_SYNCED)

    def set_status(self, path: Path | str, status: FileStatus) -> None:
        key = _key(path)
        self._execute(
            """
            INSERT INTO file_status (file_path, status, last_modified)
            VALUES (?, ?, CURRENT_TIMESTAMP)
            ON CONFLICT(file_path) DO UPDATE SET
                status = excluded.status,
                last_modified = CURRENT_TIMESTAMP
            """,
            (key, status.value),
        )
        self._cache[key] = status

    def get_note_id(self, path: Path | str) -> int | None:
        row = self._execute(
            "SELECT anki_note_id FROM file_status WHERE file_path = ?", (_key(path),)
        ).fetchone()
        return row[0] if row else None

    def mark_synced(self, path: Path | str, note_id: int) -> None:
        key = _key(path)
        self._execute(
            """
            INSERT INTO file_status (file_path, status, anki_note_id, last_modified)
            VALUES (?, ?, ?, CURRENT_TIMESTAMP)
            ON CONFLICT(file_path) DO UPDATE SET
                status = excluded.status,
                anki_note_id = excluded.anki_note_id,
                last_modified = CURRENT_TIMESTAMP
            """,
            (key, FileStatus.SYNCED.value, note_id),
        )
        self._cache[key] = FileStatus.SYNCED

    def remove(self, path: Path | str) -> None:
        key = _key(path)
        self._execute("DELETE FROM file_status WHERE file_path = ?", (key,))
        self._cache.pop(key, None)

    def move(self, old_path: Path | str, new_path: Path | str) -> None:
        """Re-key the record of ``old_path`` to ``new_path``, replacing any record there."""
        old_key, new_key = _key(old_path), _key(new_path)
        if old_key == new_key or old_key not in self._cache:
            return
        try:
            with self._connection:
                self._connection.execute("DELETE FROM file_status WHERE file_path = ?", (new_key,))
                self._connection.execute(
                    "UPDATE file_status SET file_path = ?, last_modified = CURRENT_TIMESTAMP WHERE file_path = ?",
                    (new_key, old_key),
                )
        except sqlite3.Error as exc:
            raise StatusStoreError(f"Failed to move status of {old_key} to {new_key}: {exc}") from exc
        self._cache[new_key] = self._cache.pop(old_key)

    def paths(self) -> list[str]:
        return sorted(self._cache)

    def _execute(self, sql: str, params: tuple[object, ...]) -> sqlite3.Cursor:
        try:
            with self._connection:
                return self._connection.execute(sql, params)
        except sqlite3.Error as exc:
            raise StatusStoreError(f"Status database error: {exc}") from exc


def _key(path: Path | str) -> str:
    return Path(path).as_posix()
