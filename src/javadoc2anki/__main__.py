"""Entry point for ``python -m javadoc2anki``."""

import sys

from javadoc2anki.cli import main

sys.exit(main())
