"""Selects the images an OCR document is recognized from."""

import io
import re
import zipfile
from pathlib import PurePosixPath

from filecontext.classification.classifier import file_extension, normalize_mime_type
from filecontext.pipeline.models import InputFile

PDF_MIME_TYPE = "application/pdf"

_OOXML_MEDIA_DIRS = ("word/media/", "ppt/media/")
_RASTER_SUFFIXES = frozenset({".png", ".jpg", ".jpeg", ".gif", ".bmp", ".tif", ".tiff", ".webp"})
_DIGITS_RE = re.compile(r"(\d+)")


def is_paginated(file: InputFile) -> bool:
    """True for sources that must be rasterized page by page (PDF)."""
    return normalize_mime_type(file.mime_type) == PDF_MIME_TYPE or file_extension(file.name) == ".pdf"


def _media_order(name: str) -> list[str | int]:
    # image2.png sorts before image10.png
    return [int(part) if part.isdigit() else part for part in _DIGITS_RE.split(name)]


def embedded_images(raw: bytes) -> list[bytes] | None:
    """Return the raster media embedded in a .docx/.pptx, image1 first.

    Returns None when ``raw`` is not an OOXML container, so the caller can
    fall back to recognizing the source itself.
    """
    if not zipfile.is_zipfile(io.BytesIO(raw)):
        return None
    with zipfile.ZipFile(io.BytesIO(raw)) as archive:
        names = [
            info.filename
            for info in archive.infolist()
            if info.filename.startswith(_OOXML_MEDIA_DIRS)
            and PurePosixPath(info.filename).suffix.lower() in _RASTER_SUFFIXES
        ]
        return [archive.read(name) for name in sorted(names, key=_media_order)]
