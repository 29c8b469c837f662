"""File utilities: source file checks, deck and tag naming, async reads."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Iterable

from javadoc2anki.config import JAVADOC2ANKI_SOURCE_EXTENSIONS

DEFAULT_DECK = "Default"


def is_source_file(path: Path, extensions: Iterable[str] = JAVADOC2ANKI_SOURCE_EXTENSIONS) -> bool:
    """Check if ``path`` names a source file handled by the extractor.

    Directories never qualify. The file does not have to exist, so deleted
    files can still be recognised.
    """
    if path.is_dir():
        return False
    return path.suffix.lower() in {ext.lower() for ext in extensions}


def deck_name_for(path: Path, project_root: Path) -> str:
    """Get the Anki deck for a source file from its directory.

    The directory relative to the project root becomes an Anki deck path,
    e.g. ``src/main/java/com/acme/Foo.java`` -> ``src::main::java::com::acme``.
    Files directly under the project root go to the ``Default`` deck.

    Args:
        path: Path to the source file.
        project_root: Root directory of the project.

    Returns:
        The deck name.
    """
    relative = path.parent.relative_to(project_root)
    if not relative.parts:
        return DEFAULT_DECK
    return "::".join(relative.parts)


def tags_for(path: Path, project_root: Path) -> list[str]:
    """Get Anki tags for a source file: one per directory, plus the file stem.

    Anki tags cannot contain spaces; they are replaced with underscores.

    Args:
        path: Path to the source file.
        project_root: Root directory of the project.

    Returns:
        The tags, outermost directory first.
    """
    relative = path.relative_to(project_root)
    tags = [*relative.parent.parts, path.stem]
    return [tag.replace(" ", "_") for tag in tags]


async def read_bytes_async(path: Path) -> bytes:
    """Read a file asynchronously using a thread pool.

    Args:
        path: Path to the file to read.

    Returns:
        The file contents.
    """
    return await asyncio.to_thread(path.read_bytes)
