"""Tests for the command line interface."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from javadoc2anki.cli import main
from javadoc2anki.schemas import FileStatus
from javadoc2anki.status_store import FileStatusStore

DOCUMENTED = "/** Counts things. */\nclass Counter {}\n"


class TestExtract:
    def test_prints_markdown(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        source = tmp_path / "Counter.java"
        source.write_text(DOCUMENTED, encoding="utf-8")

        assert main(["extract", str(source)]) == 0
        assert capsys.readouterr().out == "# Counter\nCounts things.\n"

    def test_writes_output_file(self, tmp_path: Path) -> None:
        source = tmp_path / "Counter.java"
        source.write_text(DOCUMENTED, encoding="utf-8")
        output = tmp_path / "Counter.md"

        assert main(["extract", str(source), "-o", str(output)]) == 0
        assert output.read_text(encoding="utf-8") == "# Counter\nCounts things.\n"

    def test_malformed_source_fails(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        source = tmp_path / "Broken.java"
        source.write_text("class Broken {", encoding="utf-8")

        assert main(["extract", str(source)]) == 1
        assert "Malformed Java source" in capsys.readouterr().err


class TestStatus:
    def test_lists_tracked_files(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        db_path = tmp_path / "status.db"
        with FileStatusStore(db_path) as store:
            store.mark_synced("/p/A.java", 1)
            store.set_status("/p/B.java", FileStatus.ERROR)

        assert main(["status", "--project-root", str(tmp_path), "--db", str(db_path)]) == 0
        assert capsys.readouterr().out.splitlines() == [
            "SYNCED               /p/A.java [Synced]",
            "ERROR                /p/B.java [Error]",
        ]


class TestSync:
    def test_reports_results(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        source = tmp_path / "Counter.java"
        source.write_text(DOCUMENTED, encoding="utf-8")

        with patch("javadoc2anki.cli.AnkiConnectClient") as mock_client_class:
            anki = AsyncMock()
            anki.is_available = AsyncMock(return_value=True)
            anki.add_note = AsyncMock(return_value=9)
            anki.__aenter__ = AsyncMock(return_value=anki)
            anki.__aexit__ = AsyncMock(return_value=None)
            mock_client_class.return_value = anki

            exit_code = main(["sync", str(source), "--project-root", str(tmp_path)])

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "SYNCED" in out
        assert "Successfully synced: 1. Errors: 0" in out
        with FileStatusStore(tmp_path / ".javadoc2anki" / "status.db") as store:
            assert store.get_note_id(source.resolve()) == 9

    def test_unavailable_anki_fails(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        with patch("javadoc2anki.cli.AnkiConnectClient") as mock_client_class:
            anki = AsyncMock()
            anki.is_available = AsyncMock(return_value=False)
            anki.__aenter__ = AsyncMock(return_value=anki)
            anki.__aexit__ = AsyncMock(return_value=None)
            mock_client_class.return_value = anki

            assert main(["sync", str(tmp_path / "A.java"), "--project-root", str(tmp_path)]) == 1

        assert "AnkiConnect is not available" in capsys.readouterr().err
