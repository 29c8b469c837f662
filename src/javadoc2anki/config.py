"""Local configuration for javadoc2anki."""

from __future__ import annotations

import os
from pathlib import Path


DEFAULT_ANKI_CONNECT_URL = "http://localhost:8765"
DEFAULT_ANKI_CONNECT_VERSION = 6
DEFAULT_REQUEST_TIMEOUT_S = 10.0
DEFAULT_REQUEST_MAX_RETRIES = 2
DEFAULT_REQUEST_BACKOFF_S = 0.5
DEFAULT_USER_AGENT = "javadoc2anki/0.1"
DEFAULT_NOTE_MODEL = "Markdown Basic"
DEFAULT_NOTE_TAG = "Javadoc2Anki"
DEFAULT_STATUS_DB_PATH = ".javadoc2anki/status.db"
DEFAULT_SOURCE_EXTENSIONS = ".java"
DEFAULT_LOG_LEVEL = "INFO"

# Markdown has six heading levels.
MAX_HEADING_LEVEL = 6

JAVADOC2ANKI_ANKI_CONNECT_URL = os.getenv("JAVADOC2ANKI_ANKI_CONNECT_URL", DEFAULT_ANKI_CONNECT_URL)
JAVADOC2ANKI_ANKI_CONNECT_VERSION = int(
    os.getenv("JAVADOC2ANKI_ANKI_CONNECT_VERSION", str(DEFAULT_ANKI_CONNECT_VERSION))
)
JAVADOC2ANKI_REQUEST_TIMEOUT_S = float(os.getenv("JAVADOC2ANKI_REQUEST_TIMEOUT_S", str(DEFAULT_REQUEST_TIMEOUT_S)))
JAVADOC2ANKI_REQUEST_MAX_RETRIES = int(
    os.getenv("JAVADOC2ANKI_REQUEST_MAX_RETRIES", str(DEFAULT_REQUEST_MAX_RETRIES))
)
JAVADOC2ANKI_REQUEST_BACKOFF_S = float(os.getenv("JAVADOC2ANKI_REQUEST_BACKOFF_S", str(DEFAULT_REQUEST_BACKOFF_S)))
JAVADOC2ANKI_USER_AGENT = os.getenv("JAVADOC2ANKI_USER_AGENT", DEFAULT_USER_AGENT)
JAVADOC2ANKI_NOTE_MODEL = os.getenv("JAVADOC2ANKI_NOTE_MODEL", DEFAULT_NOTE_MODEL)
JAVADOC2ANKI_NOTE_TAG = os.getenv("JAVADOC2ANKI_NOTE_TAG", DEFAULT_NOTE_TAG)

# Relative paths are resolved against the project root by the callers.
JAVADOC2ANKI_STATUS_DB_PATH = Path(os.getenv("JAVADOC2ANKI_STATUS_DB_PATH", DEFAULT_STATUS_DB_PATH)).expanduser()
JAVADOC2ANKI_SOURCE_EXTENSIONS = tuple(
    ext.strip().lower()
    for ext in os.getenv("JAVADOC2ANKI_SOURCE_EXTENSIONS", DEFAULT_SOURCE_EXTENSIONS).split(",")
    if ext.strip()
)
JAVADOC2ANKI_LOG_LEVEL = os.getenv("JAVADOC2ANKI_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
