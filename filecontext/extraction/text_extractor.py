import re
from typing import ClassVar

from filecontext.classification.classifier import file_extension, normalize_mime_type
from filecontext.extraction.base import BaseExtractor
from filecontext.extraction.exceptions import DecodeError
from filecontext.pipeline.models import InputFile


class TextExtractor(BaseExtractor):
    """Decodes plain-text uploads (txt, csv, markdown, rtf) as UTF-8."""

    _RTF_MIME_TYPES: ClassVar[frozenset[str]] = frozenset({"application/rtf", "text/rtf"})

    _RTF_CONTROL_WORD_RE: ClassVar[re.Pattern[str]] = re.compile(r"\\[a-z]+-?\d*\s?")
    _WHITESPACE_RE: ClassVar[re.Pattern[str]] = re.compile(r"\s+")

    def extract(self, file: InputFile) -> str:
        raw = file.read_bytes()
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecodeError(f"{file.name} is not valid UTF-8 text: {exc}") from exc

        if self._is_rtf(file):
            return self._strip_rtf(text)
        return text.strip()

    def _is_rtf(self, file: InputFile) -> bool:
        return (
            normalize_mime_type(file.mime_type) in self._RTF_MIME_TYPES
            or file_extension(file.name) == ".rtf"
        )

    @classmethod
    def _strip_rtf(cls, text: str) -> str:
        # Basic control-code removal, not a full RTF parser.
        text = cls._RTF_CONTROL_WORD_RE.sub("", text)
        text = text.replace("{", "").replace("}", "")
        text = text.replace("\\\\", "\\").replace("\\'", "'")
        return cls._WHITESPACE_RE.sub(" ", text).strip()
