from enum import Enum


class FileCategory(str, Enum):
    """Extraction strategy assigned to an uploaded file."""

    IMAGE = "image"
    OCR_DOCUMENT = "ocr_document"
    PLAIN_TEXT = "plain_text"
    SPREADSHEET = "spreadsheet"
    UNSUPPORTED = "unsupported"
