class ExtractionError(Exception):
    """Base exception for all per-file extraction failures."""


class UnsupportedFormatError(ExtractionError):
    """Raised when a file does not belong to any supported category."""


class DecodeError(ExtractionError):
    """Raised when text or spreadsheet content cannot be decoded or parsed."""


class RasterizationError(ExtractionError):
    """Raised when a paginated source cannot be rendered to page images."""


class RecognitionError(ExtractionError):
    """Raised when the OCR engine fails on a page image."""


class EmptyContentError(ExtractionError):
    """Raised when a document yields no text from any of its sources."""
