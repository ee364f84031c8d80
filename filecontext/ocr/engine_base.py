from abc import ABC, abstractmethod
from collections.abc import Callable

EngineProgress = Callable[[str, float], None]


class BaseOcrEngine(ABC):
    """Contract for optical character recognition adapters."""

    @abstractmethod
    def recognize(self, image_bytes: bytes, on_progress: EngineProgress | None = None) -> str:
        """Recognize the text in a single raster image.

        Args:
            image_bytes: Encoded image (PNG, JPEG, ...).
            on_progress: Called as ``on_progress(status, fraction)`` with the
                         engine's own progress, ``fraction`` in ``0.0..1.0``.

        Returns:
            The raw recognized text (not trimmed).

        Raises:
            RecognitionError: if recognition fails for any reason.
        """
