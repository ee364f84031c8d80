"""Two-stage OCR sub-pipeline: optional rasterization, then recognition.

Office documents (.docx, .pptx) also contribute their own text layer, which
comes first, followed by the recognized text of their embedded images.

Progress for one file is reported on a 0-100 scale:

- 5: recognition setup
- 10: office text layer read (office documents only)
- 10-40: PDF pages rendered (paginated sources only)
- 40-99: recognition, each page owning an equal slice of the band
- 100 is left to the caller once the file is complete
"""

import zipfile
from collections.abc import Callable

from filecontext.extraction.base import BaseExtractor
from filecontext.extraction.exceptions import DecodeError, EmptyContentError
from filecontext.extraction.office_extractor import OfficeTextExtractor, office_kind
from filecontext.logging.logger import Log
from filecontext.ocr.engine_base import BaseOcrEngine
from filecontext.ocr.image_sources import embedded_images, is_paginated
from filecontext.ocr.rasterizer_base import BaseRasterizer
from filecontext.pipeline.models import InputFile

StageReporter = Callable[[str, float], None]

PAGE_BREAK = "\n\n--- Page Break ---\n\n"

RASTER_START = 10.0
RASTER_END = 40.0
RECOGNITION_START = 40.0
RECOGNITION_END = 99.0


def _noop(stage: str, percent: float) -> None:
    _ = stage, percent


def join_pages(page_texts: list[str]) -> str:
    """Trim each page and join the non-empty ones with a page-break marker."""
    return PAGE_BREAK.join(text.strip() for text in page_texts if text.strip())


def recognition_percent(page_index: int, page_count: int, fraction: float) -> float:
    """Map a page's engine progress onto the 40-99 recognition band."""
    band = RECOGNITION_END - RECOGNITION_START
    base = (page_index / page_count) * band
    within_page = fraction * (band / page_count)
    return min(RECOGNITION_END, RECOGNITION_START + base + within_page)


class OcrExtractor(BaseExtractor):
    """Extracts text from scanned or paginated documents via OCR."""

    def __init__(
        self,
        rasterizer: BaseRasterizer,
        engine: BaseOcrEngine,
        render_scale: float = 2.0,
        office_text: BaseExtractor | None = None,
    ) -> None:
        self._rasterizer = rasterizer
        self._engine = engine
        self._render_scale = render_scale
        self._office_text = office_text or OfficeTextExtractor()

    def extract(self, file: InputFile, on_progress: StageReporter | None = None) -> str:
        report = on_progress or _noop
        report("Starting OCR analysis", 5)

        is_office = office_kind(file) is not None
        sections: list[str] = []
        if is_office:
            sections.append(self._office_text.extract(file))
            report("Document text read, scanning embedded images", RASTER_START)

        images = self._collect_images(file, report)
        sections.extend(self._recognize_all(file.name, images, report))
        text = join_pages(sections)

        if is_office and not text:
            raise EmptyContentError(
                f"No text found in {file.name}: the document has no text and no readable images"
            )
        Log.info(
            f"OCR extracted {len(text)} chars from {len(images)} page(s) of {file.name}"
        )
        return text

    def _collect_images(self, file: InputFile, report: StageReporter) -> list[bytes]:
        raw = file.read_bytes()
        if is_paginated(file):
            return self._rasterize(raw, report)

        try:
            media = embedded_images(raw)
        except (zipfile.BadZipFile, KeyError) as exc:
            raise DecodeError(f"Could not read document container {file.name}: {exc}") from exc
        if media is None:
            return [raw]
        Log.debug(f"Found {len(media)} embedded image(s) in {file.name}")
        return media

    def _rasterize(self, raw: bytes, report: StageReporter) -> list[bytes]:
        report("Converting PDF to images", RASTER_START)

        def on_page(done: int, total: int) -> None:
            span = RASTER_END - RASTER_START
            report("Converting PDF to images", RASTER_START + (done / total) * span)

        images = self._rasterizer.rasterize(raw, self._render_scale, on_page)
        Log.debug(f"Rasterized {len(images)} page(s) at scale {self._render_scale}")
        report("PDF converted, starting OCR", RASTER_END)
        return images

    def _recognize_all(
        self,
        file_name: str,
        images: list[bytes],
        report: StageReporter,
    ) -> list[str]:
        page_count = len(images)
        page_texts: list[str] = []
        for index, image in enumerate(images):
            suffix = f" (page {index + 1}/{page_count})" if page_count > 1 else ""
            report(f"OCR processing{suffix}", recognition_percent(index, page_count, 0.0))

            text = self._engine.recognize(
                image, self._page_reporter(report, index, page_count, suffix)
            )
            if not text.strip():
                Log.debug(f"Page {index + 1} of {file_name} returned no text")
            page_texts.append(text)
        return page_texts

    @staticmethod
    def _page_reporter(
        report: StageReporter,
        index: int,
        page_count: int,
        suffix: str,
    ) -> Callable[[str, float], None]:
        def on_engine_progress(status: str, fraction: float) -> None:
            report(f"{status}{suffix}", recognition_percent(index, page_count, fraction))

        return on_engine_progress
