"""Test setup for javadoc2anki."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from javadoc2anki.status_store import FileStatusStore  # noqa: E402


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for pytest.

    This allows running integration tests selectively:
        pytest -m integration       # run only integration tests
        pytest -m "not integration" # skip integration tests
    """
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests (need a running Anki with AnkiConnect)",
    )


@pytest.fixture
def store(tmp_path: Path):
    """A status store backed by a database in a temporary directory."""
    with FileStatusStore(tmp_path / "status.db") as status_store:
        yield status_store


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Empty project directory for source files."""
    root = tmp_path / "project"
    root.mkdir()
    return root
