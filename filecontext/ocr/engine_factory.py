from filecontext.config.settings import Settings
from filecontext.ocr.engine_base import BaseOcrEngine
from filecontext.ocr.example_engine import ExampleOcrEngine
from filecontext.ocr.tesseract_engine import TesseractOcrEngine


class OcrEngineFactory:
    """Creates the configured OCR engine."""

    ENGINES = ("tesseract", "example")

    @classmethod
    def create(cls, settings: Settings) -> BaseOcrEngine:
        engine = settings.ocr_engine.lower()
        if engine == "tesseract":
            return TesseractOcrEngine(
                language=settings.ocr_language,
                tesseract_cmd=settings.tesseract_cmd,
            )
        if engine == "example":
            return ExampleOcrEngine()
        raise ValueError(f"Unknown OCR engine '{engine}'. Choose from: {list(cls.ENGINES)}")
