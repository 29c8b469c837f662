"""Tests for the sqlite status store."""

from __future__ import annotations

from pathlib import Path

import pytest

from javadoc2anki.exceptions import StatusStoreError
from javadoc2anki.schemas import FileStatus
from javadoc2anki.status_store import FileStatusStore


class TestFileStatusStore:
    """Tests for FileStatusStore."""

    def test_unknown_file_is_not_synced(self, store: FileStatusStore) -> None:
        assert store.get_status("/p/A.java") is FileStatus.NOT_SYNCED
        assert store.get_note_id("/p/A.java") is None

    def test_mark_synced_records_note_id(self, store: FileStatusStore) -> None:
        store.mark_synced(Path("/p/A.java"), 1234)

        assert store.get_status("/p/A.java") is FileStatus.SYNCED
        assert store.get_note_id("/p/A.java") == 1234

    def test_set_status_keeps_note_id(self, store: FileStatusStore) -> None:
        store.mark_synced("/p/A.java", 1234)
        store.set_status("/p/A.java", FileStatus.MODIFIED_AFTER_SYNC)

        assert store.get_status("/p/A.java") is FileStatus.MODIFIED_AFTER_SYNC
        assert store.get_note_id("/p/A.java") == 1234

    def test_set_status_without_note(self, store: FileStatusStore) -> None:
        store.set_status("/p/A.java", FileStatus.ERROR)

        assert store.get_status("/p/A.java") is FileStatus.ERROR
        assert store.get_note_id("/p/A.java") is None

    def test_remove(self, store: FileStatusStore) -> None:
        store.mark_synced("/p/A.java", 1)
        store.remove("/p/A.java")

        assert store.get_status("/p/A.java") is FileStatus.NOT_SYNCED
        assert store.paths() == []

    def test_move_rekeys_record(self, store: FileStatusStore) -> None:
        store.mark_synced("/p/A.java", 7)
        store.set_status("/p/A.java", FileStatus.MODIFIED_AFTER_SYNC)

        store.move("/p/A.java", "/p/sub/A.java")

        assert store.paths() == ["/p/sub/A.java"]
        assert store.get_status("/p/sub/A.java") is FileStatus.MODIFIED_AFTER_SYNC
        assert store.get_note_id("/p/sub/A.java") == 7

    def test_move_replaces_existing_target(self, store: FileStatusStore) -> None:
        store.mark_synced("/p/A.java", 7)
        store.mark_synced("/p/B.java", 8)

        store.move("/p/A.java", "/p/B.java")

        assert store.paths() == ["/p/B.java"]
        assert store.get_note_id("/p/B.java") == 7

    def test_move_unknown_file_is_noop(self, store: FileStatusStore) -> None:
        store.move("/p/A.java", "/p/B.java")

        assert store.paths() == []

    def test_statuses_survive_reopen(self, tmp_path: Path) -> None:
        db_path = tmp_path / "nested" / "status.db"
        with FileStatusStore(db_path) as first:
            first.mark_synced("/p/A.java", 42)
            first.set_status("/p/B.java", FileStatus.ERROR)

        with FileStatusStore(db_path) as second:
            assert second.get_status("/p/A.java") is FileStatus.SYNCED
            assert second.get_note_id("/p/A.java") == 42
            assert second.get_status("/p/B.java") is FileStatus.ERROR
            assert second.paths() == ["/p/A.java", "/p/B.java"]

    def test_in_memory_database(self) -> None:
        with FileStatusStore(":memory:") as memory_store:
            memory_store.mark_synced("/p/A.java", 1)
            assert memory_store.get_status("/p/A.java") is FileStatus.SYNCED

    def test_unopenable_database_raises(self, tmp_path: Path) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")

        with pytest.raises(StatusStoreError, match="Failed to open"):
            FileStatusStore(blocker / "status.db")

    def test_closed_store_raises(self, tmp_path: Path) -> None:
        closed = FileStatusStore(tmp_path / "status.db")
        closed.close()

        with pytest.raises(StatusStoreError):
            closed.set_status("/p/A.java", FileStatus.ERROR)
