import mimetypes
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from filecontext.classification.category import FileCategory


@dataclass(frozen=True)
class InputFile:
    """One uploaded file. Read-only to the pipeline."""

    name: str
    mime_type: str
    size_bytes: int
    source: Callable[[], bytes] = field(repr=False, compare=False)

    def read_bytes(self) -> bytes:
        return self.source()

    @classmethod
    def from_bytes(cls, name: str, mime_type: str, data: bytes) -> "InputFile":
        return cls(name=name, mime_type=mime_type, size_bytes=len(data), source=lambda: data)

    @classmethod
    def from_path(cls, path: Path, mime_type: str | None = None) -> "InputFile":
        """Build an InputFile backed by a file on disk; bytes are read lazily."""
        if mime_type is None:
            guessed, _ = mimetypes.guess_type(path.name)
            mime_type = guessed or ""
        return cls(
            name=path.name,
            mime_type=mime_type,
            size_bytes=path.stat().st_size,
            source=path.read_bytes,
        )


@dataclass(frozen=True)
class ConsumerCapabilities:
    """What the downstream AI consumer can ingest without local extraction."""

    supports_native_documents: bool


@dataclass(frozen=True)
class ExtractionProgress:
    """A single progress event for one file."""

    stage: str
    percent: int
    elapsed_millis: int


@dataclass(frozen=True)
class ProcessedFile:
    """Pipeline output for one input file.

    display_content only ever holds metadata (name, size, status);
    prompt_content carries the extracted body when extraction succeeded.
    """

    name: str
    mime_type: str
    size_bytes: int
    category: FileCategory
    display_content: str
    prompt_content: str
    processing_millis: int
    extracted_text: str | None = None
    error: str | None = None
    native_processing: bool = False

    @property
    def succeeded(self) -> bool:
        return self.error is None
