import io

import pytesseract
from PIL import Image

from filecontext.extraction.exceptions import RecognitionError
from filecontext.ocr.engine_base import BaseOcrEngine, EngineProgress


class TesseractOcrEngine(BaseOcrEngine):
    """Runs the Tesseract binary through pytesseract."""

    STATUS = "recognizing text"

    def __init__(self, language: str = "eng", tesseract_cmd: str = "") -> None:
        self._language = language
        if tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd

    def recognize(self, image_bytes: bytes, on_progress: EngineProgress | None = None) -> str:
        # Tesseract reports no incremental progress; emit the start and end.
        if on_progress is not None:
            on_progress(self.STATUS, 0.0)
        try:
            with Image.open(io.BytesIO(image_bytes)) as image:
                text = pytesseract.image_to_string(image, lang=self._language)
        except RecognitionError:
            raise
        except Exception as exc:
            raise RecognitionError(f"tesseract recognition failed: {exc}") from exc
        if on_progress is not None:
            on_progress(self.STATUS, 1.0)
        return str(text)
