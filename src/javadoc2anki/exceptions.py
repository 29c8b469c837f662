"""Custom exceptions for javadoc2anki."""


class Javadoc2AnkiError(Exception):
    """Base exception for javadoc2anki operations."""


class ParseError(Javadoc2AnkiError):
    """Error during source parsing."""


class SourceSyntaxError(ParseError):
    """Source text is not well-formed Java."""


class ExtractionError(Javadoc2AnkiError):
    """Error while turning a syntax tree into Markdown."""


class HeadingDepthExceededError(ExtractionError):
    """Declarations are nested deeper than Markdown headings allow."""


class NotAChildError(ExtractionError):
    """A node could not be found among its parent's children."""


class AnkiConnectError(Javadoc2AnkiError):
    """Error while talking to AnkiConnect."""


class AnkiConnectUnavailableError(AnkiConnectError):
    """AnkiConnect did not answer."""


class StatusStoreError(Javadoc2AnkiError):
    """Error reading or writing the sync status database."""
