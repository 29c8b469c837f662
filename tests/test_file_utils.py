"""Tests for file utilities."""

from __future__ import annotations

from pathlib import Path

import pytest

from javadoc2anki.file_utils import (
    DEFAULT_DECK,
    deck_name_for,
    is_source_file,
    read_bytes_async,
    tags_for,
)


class TestIsSourceFile:
    """Tests for is_source_file."""

    def test_java_file(self, tmp_path: Path) -> None:
        assert is_source_file(tmp_path / "Foo.java", (".java",))

    def test_extension_is_case_insensitive(self, tmp_path: Path) -> None:
        assert is_source_file(tmp_path / "Foo.JAVA", (".java",))

    def test_other_extension(self, tmp_path: Path) -> None:
        assert not is_source_file(tmp_path / "Foo.kt", (".java",))

    def test_missing_file_is_recognised(self, tmp_path: Path) -> None:
        """Deleted files still count."""
        assert is_source_file(tmp_path / "gone" / "Foo.java", (".java",))

    def test_directory_is_not_a_source_file(self, tmp_path: Path) -> None:
        directory = tmp_path / "weird.java"
        directory.mkdir()

        assert not is_source_file(directory, (".java",))


class TestDeckNameFor:
    """Tests for deck_name_for."""

    def test_nested_directories_joined(self, tmp_path: Path) -> None:
        path = tmp_path / "src" / "com" / "acme" / "Foo.java"

        assert deck_name_for(path, tmp_path) == "src::com::acme"

    def test_file_at_root_uses_default_deck(self, tmp_path: Path) -> None:
        assert deck_name_for(tmp_path / "Foo.java", tmp_path) == DEFAULT_DECK

    def test_outside_root_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError):
            deck_name_for(Path("/elsewhere/Foo.java"), tmp_path / "project")


class TestTagsFor:
    """Tests for tags_for."""

    def test_directories_then_stem(self, tmp_path: Path) -> None:
        path = tmp_path / "src" / "util" / "Strings.java"

        assert tags_for(path, tmp_path) == ["src", "util", "Strings"]

    def test_spaces_become_underscores(self, tmp_path: Path) -> None:
        path = tmp_path / "my notes" / "Big Thing.java"

        assert tags_for(path, tmp_path) == ["my_notes", "Big_Thing"]

    def test_root_file_has_only_stem(self, tmp_path: Path) -> None:
        assert tags_for(tmp_path / "Main.java", tmp_path) == ["Main"]


class TestReadBytesAsync:
    """Tests for read_bytes_async."""

    @pytest.mark.asyncio
    async def test_reads_file(self, tmp_path: Path) -> None:
        path = tmp_path / "A.java"
        path.write_bytes(b"class A {}")

        assert await read_bytes_async(path) == b"class A {}"

    @pytest.mark.asyncio
    async def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            await read_bytes_async(tmp_path / "missing.java")
