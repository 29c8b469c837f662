"""Server configuration."""

from __future__ import annotations

import os
from pathlib import Path

# Maximum accepted size of source text posted to /api/extract.
MAX_SOURCE_SIZE: int = int(os.getenv("JAVADOC2ANKI_MAX_SOURCE_SIZE", str(2_000_000)))

PROJECT_ROOT: Path = Path(os.getenv("JAVADOC2ANKI_PROJECT_ROOT", ".")).expanduser().resolve()
