"""HTTP API for javadoc2anki."""
