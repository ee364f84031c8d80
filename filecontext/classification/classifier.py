"""MIME type and extension based file classification.

The declared MIME type is checked first. Spreadsheets and plain text also
match on the file extension because upload clients frequently send a generic
(``application/octet-stream``) or empty MIME type for them.
"""

from pathlib import PurePath

from filecontext.classification.category import FileCategory
from filecontext.pipeline.models import InputFile

IMAGE_MIME_TYPES = frozenset({
    "image/jpeg",
    "image/jpg",
    "image/png",
    "image/gif",
    "image/webp",
    "image/bmp",
    "image/svg+xml",
})

OCR_DOCUMENT_MIME_TYPES = frozenset({
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "application/vnd.ms-powerpoint",
    "application/vnd.openxmlformats-officedocument.presentationml.presentation",
})

SPREADSHEET_MIME_TYPES = frozenset({
    "application/vnd.ms-excel",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "application/vnd.ms-excel.sheet.macroenabled.12",
})
SPREADSHEET_EXTENSIONS = frozenset({".xlsx", ".xls", ".xlsm"})

PLAIN_TEXT_MIME_TYPES = frozenset({
    "text/plain",
    "text/csv",
    "text/rtf",
    "application/rtf",
    "text/markdown",
    "text/x-markdown",
})
PLAIN_TEXT_EXTENSIONS = frozenset({".txt", ".csv", ".rtf", ".md", ".markdown"})


def file_extension(name: str) -> str:
    """Return the lowercased extension including the dot, or '' if none."""
    return PurePath(name).suffix.lower()


def normalize_mime_type(mime_type: str) -> str:
    """Lowercase and drop parameters such as ``; charset=utf-8``."""
    return mime_type.split(";", 1)[0].strip().lower()


def classify(file: InputFile) -> FileCategory:
    """Assign exactly one FileCategory to a file. Total and deterministic."""
    return classify_by(file.mime_type, file.name)


def classify_by(mime_type: str, name: str) -> FileCategory:
    mime = normalize_mime_type(mime_type)
    ext = file_extension(name)

    if mime in IMAGE_MIME_TYPES:
        return FileCategory.IMAGE
    if mime in OCR_DOCUMENT_MIME_TYPES:
        return FileCategory.OCR_DOCUMENT
    if mime in SPREADSHEET_MIME_TYPES or ext in SPREADSHEET_EXTENSIONS:
        return FileCategory.SPREADSHEET
    if mime in PLAIN_TEXT_MIME_TYPES or ext in PLAIN_TEXT_EXTENSIONS:
        return FileCategory.PLAIN_TEXT
    return FileCategory.UNSUPPORTED
