"""Text layer of OOXML office documents (.docx via python-docx, .pptx via python-pptx)."""

import io

import docx
import pptx

from filecontext.classification.classifier import file_extension, normalize_mime_type
from filecontext.extraction.base import BaseExtractor
from filecontext.extraction.exceptions import DecodeError
from filecontext.pipeline.models import InputFile

DOCX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
PPTX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.presentationml.presentation"


def office_kind(file: InputFile) -> str | None:
    """Return "docx" or "pptx" for OOXML office documents, None otherwise."""
    mime = normalize_mime_type(file.mime_type)
    ext = file_extension(file.name)
    if mime == DOCX_MIME_TYPE or ext == ".docx":
        return "docx"
    if mime == PPTX_MIME_TYPE or ext == ".pptx":
        return "pptx"
    return None


class OfficeTextExtractor(BaseExtractor):
    """Reads the text a .docx or .pptx carries, without OCR.

    Word documents yield their paragraphs followed by their tables (one row
    per line, cells tab separated). Presentations yield one block per slide.
    Any other file yields an empty string.
    """

    def extract(self, file: InputFile) -> str:
        kind = office_kind(file)
        if kind is None:
            return ""
        raw = file.read_bytes()
        try:
            if kind == "docx":
                return self._docx_text(raw)
            return self._pptx_text(raw)
        except Exception as exc:
            raise DecodeError(f"Could not read {kind} document {file.name}: {exc}") from exc

    @staticmethod
    def _docx_text(raw: bytes) -> str:
        document = docx.Document(io.BytesIO(raw))
        lines = [paragraph.text.strip() for paragraph in document.paragraphs]
        for table in document.tables:
            for row in table.rows:
                lines.append("\t".join(cell.text.strip() for cell in row.cells))
        return "\n".join(line for line in lines if line.strip())

    @staticmethod
    def _pptx_text(raw: bytes) -> str:
        presentation = pptx.Presentation(io.BytesIO(raw))
        slides: list[str] = []
        for slide in presentation.slides:
            texts = [
                shape.text_frame.text.strip()
                for shape in slide.shapes
                if shape.has_text_frame and shape.text_frame.text.strip()
            ]
            if texts:
                slides.append("\n".join(texts))
        return "\n\n".join(slides)
