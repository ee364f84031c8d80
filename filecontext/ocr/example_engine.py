"""Example OCR engine adapter.

Use this module as a reference when implementing new OCR engines.
Implement BaseOcrEngine and register the engine in OcrEngineFactory.
"""

from filecontext.ocr.engine_base import BaseOcrEngine, EngineProgress


class ExampleOcrEngine(BaseOcrEngine):
    """Returns fixed text for every image.

    No binary or model required. Useful for local development and tests.
    """

    DEFAULT_TEXT = "Example recognized text"

    def __init__(self, text: str = DEFAULT_TEXT) -> None:
        self._text = text

    def recognize(self, image_bytes: bytes, on_progress: EngineProgress | None = None) -> str:
        _ = image_bytes
        if on_progress is not None:
            on_progress("recognizing text", 1.0)
        return self._text
