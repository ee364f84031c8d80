"""Per-file extraction dispatch with failure isolation.

Every file goes Pending -> Dispatched -> (Extracting | Passthrough) ->
(Completed | Failed). A failure inside one file's extraction is captured into
that file's ProcessedFile and never reaches the batch caller.
"""

import time
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import Generic, TypeVar

from filecontext.classification.category import FileCategory
from filecontext.classification.classifier import classify
from filecontext.config.settings import Settings
from filecontext.extraction.base import BaseExtractor
from filecontext.extraction.exceptions import ExtractionError, UnsupportedFormatError
from filecontext.extraction.office_extractor import OfficeTextExtractor
from filecontext.extraction.spreadsheet_extractor import SpreadsheetExtractor
from filecontext.extraction.text_extractor import TextExtractor
from filecontext.logging.logger import Log
from filecontext.ocr.engine_factory import OcrEngineFactory
from filecontext.ocr.ocr_extractor import OcrExtractor
from filecontext.ocr.rasterizer_factory import RasterizerFactory
from filecontext.pipeline import labels
from filecontext.pipeline.models import ConsumerCapabilities, InputFile, ProcessedFile
from filecontext.pipeline.progress import FileProgressReporter, ProgressObserver

T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Result of one isolated unit of work: a value or the exception raised."""

    value: T | None = None
    error: Exception | None = None


def run_isolated(work: Callable[[], T]) -> Outcome[T]:
    """Run ``work`` and capture any Exception instead of propagating it."""
    try:
        return Outcome(value=work())
    except Exception as exc:
        return Outcome(error=exc)


@dataclass(frozen=True)
class _Extraction:
    display_content: str
    prompt_content: str
    extracted_text: str | None
    completion_stage: str
    native_processing: bool = False


class ExtractionPipeline:
    """Classifies each file and dispatches it to the matching extractor."""

    _PROMPT_KINDS: dict[FileCategory, str] = {
        FileCategory.OCR_DOCUMENT: "📄 Document",
        FileCategory.PLAIN_TEXT: "📝 Text",
        FileCategory.SPREADSHEET: "📊 Spreadsheet",
    }

    def __init__(
        self,
        ocr_extractor: OcrExtractor,
        text_extractor: BaseExtractor,
        spreadsheet_extractor: BaseExtractor,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ocr_extractor = ocr_extractor
        self._extractors: dict[FileCategory, BaseExtractor] = {
            FileCategory.PLAIN_TEXT: text_extractor,
            FileCategory.SPREADSHEET: spreadsheet_extractor,
        }
        self._clock = clock

    def process_batch(
        self,
        files: Iterable[InputFile],
        capabilities: ConsumerCapabilities,
        on_progress: ProgressObserver | None = None,
    ) -> list[ProcessedFile]:
        """Process every file in order. Never raises; one record per input file."""
        batch = list(files)
        Log.info(f"Processing batch of {len(batch)} file(s)")
        results = list(self.iter_batch(batch, capabilities, on_progress))
        failed = sum(1 for result in results if result.error is not None)
        Log.info(f"Batch complete: {len(results) - failed} succeeded, {failed} failed")
        return results

    def iter_batch(
        self,
        files: Iterable[InputFile],
        capabilities: ConsumerCapabilities,
        on_progress: ProgressObserver | None = None,
    ) -> Iterator[ProcessedFile]:
        """Yield each file's record as soon as it is processed.

        Stopping iteration stops the batch; records already yielded are final.
        """
        for file in files:
            yield self.process_file(file, capabilities, on_progress)

    def process_file(
        self,
        file: InputFile,
        capabilities: ConsumerCapabilities,
        on_progress: ProgressObserver | None = None,
    ) -> ProcessedFile:
        started_at = self._clock()
        reporter = FileProgressReporter(file.name, on_progress, self._clock, started_at)
        category = classify(file)
        Log.info(f"Processing {file.name} ({file.mime_type or 'unknown type'}) as {category.value}")

        reporter.report(
            "Preparing for OCR processing"
            if category is FileCategory.OCR_DOCUMENT
            else "Processing file",
            1,
        )
        outcome = run_isolated(lambda: self._dispatch(file, category, capabilities, reporter))

        extraction = outcome.value
        if extraction is None:
            error = outcome.error or ExtractionError(f"No extraction result for {file.name}")
            record = self._failure_record(file, category, error, reporter)
            reporter.report("Error", 100)
            return record

        reporter.report(extraction.completion_stage, 100)
        return ProcessedFile(
            name=file.name,
            mime_type=file.mime_type,
            size_bytes=file.size_bytes,
            category=category,
            display_content=extraction.display_content,
            prompt_content=extraction.prompt_content,
            processing_millis=reporter.elapsed_millis(),
            extracted_text=extraction.extracted_text,
            native_processing=extraction.native_processing,
        )

    def _dispatch(
        self,
        file: InputFile,
        category: FileCategory,
        capabilities: ConsumerCapabilities,
        reporter: FileProgressReporter,
    ) -> _Extraction:
        if category is FileCategory.UNSUPPORTED:
            raise UnsupportedFormatError(f"Unsupported file type: {file.mime_type}")

        if category is FileCategory.IMAGE:
            # Consumers accept images natively; never OCR them here.
            label = labels.image_label(file.name, file.size_bytes)
            return _Extraction(label, label, None, "Complete (Image)")

        if category is FileCategory.OCR_DOCUMENT:
            if capabilities.supports_native_documents:
                Log.info(f"Skipping OCR for {file.name}: consumer reads documents natively")
                label = labels.native_document_label(file.name, file.size_bytes)
                return _Extraction(label, label, None, "Complete (Native)", native_processing=True)
            text = self._ocr_extractor.extract(file, reporter.report)
            display = labels.document_label(file.name, file.size_bytes)
        else:
            text = self._extractors[category].extract(file)
            display = (
                labels.text_label(file.name, file.size_bytes)
                if category is FileCategory.PLAIN_TEXT
                else labels.spreadsheet_label(file.name, file.size_bytes)
            )

        prompt = (
            labels.content_prompt(self._PROMPT_KINDS[category], file.name, text)
            if text
            else display
        )
        Log.info(f"Extracted {len(text)} chars from {file.name}")
        return _Extraction(display, prompt, text, "Complete")

    @staticmethod
    def _failure_record(
        file: InputFile,
        category: FileCategory,
        exc: Exception,
        reporter: FileProgressReporter,
    ) -> ProcessedFile:
        message = str(exc) or type(exc).__name__
        if isinstance(exc, UnsupportedFormatError):
            Log.warning(f"Skipping {file.name}: {message}")
            label = labels.unsupported_label(file.name, file.mime_type)
        else:
            Log.exception(f"Failed to process {file.name}: {message}", exc)
            label = labels.error_label(file.name, message)
        return ProcessedFile(
            name=file.name,
            mime_type=file.mime_type,
            size_bytes=file.size_bytes,
            category=category,
            display_content=label,
            prompt_content=label,
            processing_millis=reporter.elapsed_millis(),
            error=message,
        )


def build_pipeline(settings: Settings, clock: Callable[[], float] = time.monotonic) -> ExtractionPipeline:
    """Build an ExtractionPipeline with the configured rasterizer and OCR engine.

    Heavy engines are created here once and shared by every file.
    """
    ocr_extractor = OcrExtractor(
        rasterizer=RasterizerFactory.create(settings),
        engine=OcrEngineFactory.create(settings),
        render_scale=settings.render_scale,
        office_text=OfficeTextExtractor(),
    )
    return ExtractionPipeline(
        ocr_extractor=ocr_extractor,
        text_extractor=TextExtractor(),
        spreadsheet_extractor=SpreadsheetExtractor(),
        clock=clock,
    )
