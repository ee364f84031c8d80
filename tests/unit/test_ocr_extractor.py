from unittest.mock import MagicMock

import pytest

from filecontext.extraction.base import BaseExtractor
from filecontext.extraction.exceptions import EmptyContentError, RasterizationError, RecognitionError
from filecontext.extraction.office_extractor import DOCX_MIME_TYPE
from filecontext.ocr.engine_base import BaseOcrEngine, EngineProgress
from filecontext.ocr.ocr_extractor import (
    PAGE_BREAK,
    OcrExtractor,
    join_pages,
    recognition_percent,
)
from filecontext.ocr.rasterizer_base import BaseRasterizer, PageCallback
from filecontext.pipeline.models import InputFile


class _FakeRasterizer(BaseRasterizer):
    def __init__(self, page_count: int) -> None:
        self.page_count = page_count
        self.calls: list[float] = []

    def rasterize(
        self,
        pdf_bytes: bytes,
        scale: float,
        on_page: PageCallback | None = None,
    ) -> list[bytes]:
        self.calls.append(scale)
        pages = []
        for index in range(1, self.page_count + 1):
            pages.append(f"page-{index}".encode())
            if on_page is not None:
                on_page(index, self.page_count)
        return pages


class _ScriptedEngine(BaseOcrEngine):
    """Returns scripted text per image and reports halfway progress."""

    def __init__(self, texts: dict[bytes, str]) -> None:
        self._texts = texts
        self.seen: list[bytes] = []

    def recognize(self, image_bytes: bytes, on_progress: EngineProgress | None = None) -> str:
        self.seen.append(image_bytes)
        if on_progress is not None:
            on_progress("recognizing text", 0.5)
        return self._texts[image_bytes]


def _pdf(name: str = "scan.pdf") -> InputFile:
    return InputFile.from_bytes(name, "application/pdf", b"%PDF-fake")


def _make_extractor(texts: list[str]) -> tuple[OcrExtractor, _FakeRasterizer, _ScriptedEngine]:
    rasterizer = _FakeRasterizer(len(texts))
    engine = _ScriptedEngine({f"page-{i}".encode(): text for i, text in enumerate(texts, start=1)})
    return OcrExtractor(rasterizer, engine, render_scale=2.0), rasterizer, engine


class TestPageJoining:
    def test_empty_page_contributes_nothing(self) -> None:
        extractor, _rasterizer, _engine = _make_extractor(["Hello", "", "World"])
        assert extractor.extract(_pdf()) == "Hello\n\n--- Page Break ---\n\nWorld"

    def test_pages_are_trimmed(self) -> None:
        extractor, _rasterizer, _engine = _make_extractor(["  one \n", "\n two"])
        assert extractor.extract(_pdf()) == f"one{PAGE_BREAK}two"

    def test_all_blank_pages_give_empty_text(self) -> None:
        extractor, _rasterizer, _engine = _make_extractor(["  ", "\n"])
        assert extractor.extract(_pdf()) == ""

    def test_join_pages_helper(self) -> None:
        assert join_pages(["a", " ", "b", ""]) == f"a{PAGE_BREAK}b"


class TestRasterization:
    def test_uses_render_scale(self) -> None:
        extractor, rasterizer, _engine = _make_extractor(["x"])
        extractor.extract(_pdf())
        assert rasterizer.calls == [2.0]

    def test_every_page_is_recognized_in_order(self) -> None:
        extractor, _rasterizer, engine = _make_extractor(["a", "b", "c"])
        extractor.extract(_pdf())
        assert engine.seen == [b"page-1", b"page-2", b"page-3"]

    def test_rasterization_error_propagates(self) -> None:
        rasterizer = MagicMock(spec=BaseRasterizer)
        rasterizer.rasterize.side_effect = RasterizationError("corrupt")
        extractor = OcrExtractor(rasterizer, MagicMock(spec=BaseOcrEngine))
        with pytest.raises(RasterizationError, match="corrupt"):
            extractor.extract(_pdf())

    def test_recognition_error_propagates(self) -> None:
        engine = MagicMock(spec=BaseOcrEngine)
        engine.recognize.side_effect = RecognitionError("engine down")
        extractor = OcrExtractor(_FakeRasterizer(1), engine)
        with pytest.raises(RecognitionError, match="engine down"):
            extractor.extract(_pdf())


class TestNonPaginatedSources:
    def test_docx_text_comes_before_embedded_image_text(self, docx_with_images_bytes: bytes) -> None:
        rasterizer = MagicMock(spec=BaseRasterizer)
        engine = MagicMock(spec=BaseOcrEngine)
        engine.recognize.side_effect = ["first", "second"]
        file = InputFile.from_bytes("letter.docx", DOCX_MIME_TYPE, docx_with_images_bytes)

        text = OcrExtractor(rasterizer, engine).extract(file)

        assert text == f"Quarterly summary{PAGE_BREAK}first{PAGE_BREAK}second"
        rasterizer.rasterize.assert_not_called()
        images = [call.args[0] for call in engine.recognize.call_args_list]
        assert len(images) == 2
        assert images[0] != images[1]
        assert all(image.startswith(b"\x89PNG") for image in images)

    def test_text_only_docx_keeps_its_text(self, text_only_docx_bytes: bytes) -> None:
        engine = MagicMock(spec=BaseOcrEngine)
        file = InputFile.from_bytes("report.docx", DOCX_MIME_TYPE, text_only_docx_bytes)

        text = OcrExtractor(MagicMock(spec=BaseRasterizer), engine).extract(file)

        assert text == "Quarterly revenue rose 12%\nRegion\tNorth"
        engine.recognize.assert_not_called()

    def test_document_without_text_or_images_raises(self, blank_docx_bytes: bytes) -> None:
        file = InputFile.from_bytes("blank.docx", DOCX_MIME_TYPE, blank_docx_bytes)
        extractor = OcrExtractor(MagicMock(spec=BaseRasterizer), MagicMock(spec=BaseOcrEngine))

        with pytest.raises(EmptyContentError, match="blank.docx"):
            extractor.extract(file)

    def test_blank_image_text_does_not_hide_document_text(self, docx_with_images_bytes: bytes) -> None:
        engine = MagicMock(spec=BaseOcrEngine)
        engine.recognize.return_value = "  "
        file = InputFile.from_bytes("letter.docx", DOCX_MIME_TYPE, docx_with_images_bytes)

        text = OcrExtractor(MagicMock(spec=BaseRasterizer), engine).extract(file)

        assert text == "Quarterly summary"

    def test_office_text_reader_is_injectable(self, docx_with_images_bytes: bytes) -> None:
        office_text = MagicMock(spec=BaseExtractor)
        office_text.extract.return_value = "from reader"
        engine = MagicMock(spec=BaseOcrEngine)
        engine.recognize.return_value = ""
        file = InputFile.from_bytes("letter.docx", DOCX_MIME_TYPE, docx_with_images_bytes)

        text = OcrExtractor(MagicMock(spec=BaseRasterizer), engine, office_text=office_text).extract(file)

        assert text == "from reader"
        office_text.extract.assert_called_once_with(file)

    def test_unknown_container_is_recognized_as_single_source(self) -> None:
        engine = MagicMock(spec=BaseOcrEngine)
        engine.recognize.return_value = "legacy text"
        file = InputFile.from_bytes("old.doc", "application/msword", b"\xd0\xcf\x11\xe0legacy")

        text = OcrExtractor(MagicMock(spec=BaseRasterizer), engine).extract(file)

        assert text == "legacy text"
        assert engine.recognize.call_args.args[0] == b"\xd0\xcf\x11\xe0legacy"

    def test_legacy_document_with_no_text_is_not_an_error(self) -> None:
        engine = MagicMock(spec=BaseOcrEngine)
        engine.recognize.return_value = ""
        file = InputFile.from_bytes("old.doc", "application/msword", b"\xd0\xcf\x11\xe0legacy")

        assert OcrExtractor(MagicMock(spec=BaseRasterizer), engine).extract(file) == ""


class TestProgress:
    def test_pdf_progress_bands(self) -> None:
        extractor, _rasterizer, _engine = _make_extractor(["a", "b"])
        events: list[tuple[str, float]] = []

        extractor.extract(_pdf(), lambda stage, percent: events.append((stage, percent)))

        assert events[0] == ("Starting OCR analysis", 5)
        raster = [p for s, p in events if s == "Converting PDF to images"]
        assert raster == [10.0, 25.0, 40.0]
        assert ("PDF converted, starting OCR", 40.0) in events
        assert ("OCR processing (page 1/2)", 40.0) in events
        assert ("recognizing text (page 1/2)", pytest.approx(54.75)) in events
        assert ("OCR processing (page 2/2)", 69.5) in events
        assert all(p <= 99 for _s, p in events)
        assert [p for _s, p in events] == sorted(p for _s, p in events)

    def test_single_page_has_no_page_suffix(self) -> None:
        extractor, _rasterizer, _engine = _make_extractor(["a"])
        stages: list[str] = []
        extractor.extract(_pdf(), lambda stage, _percent: stages.append(stage))
        assert "OCR processing" in stages

    def test_recognition_percent_is_capped(self) -> None:
        assert recognition_percent(0, 1, 0.0) == 40.0
        assert recognition_percent(0, 1, 1.0) == 99.0
        assert recognition_percent(2, 3, 1.0) == 99.0
        assert recognition_percent(1, 2, 0.0) == pytest.approx(69.5)
