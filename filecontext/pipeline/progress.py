from collections.abc import Callable
from typing import Protocol

from filecontext.logging.logger import Log
from filecontext.pipeline.models import ExtractionProgress


class ProgressObserver(Protocol):
    """Receives best-effort progress hints while a file is processed."""

    def __call__(self, file_name: str, progress: ExtractionProgress) -> None: ...


class FileProgressReporter:
    """Turns stage/percent pairs into ExtractionProgress events for one file.

    Percentages are rounded and never decrease. Observer failures are logged
    and dropped so they cannot change the extraction result.
    """

    def __init__(
        self,
        file_name: str,
        observer: ProgressObserver | None,
        clock: Callable[[], float],
        started_at: float,
    ) -> None:
        self._file_name = file_name
        self._observer = observer
        self._clock = clock
        self._started_at = started_at
        self._last_percent = 0

    def elapsed_millis(self) -> int:
        return int((self._clock() - self._started_at) * 1000)

    def report(self, stage: str, percent: float) -> None:
        bounded = max(self._last_percent, min(100, round(percent)))
        self._last_percent = bounded
        event = ExtractionProgress(
            stage=stage,
            percent=bounded,
            elapsed_millis=self.elapsed_millis(),
        )
        Log.debug(f"{self._file_name}: {stage} ({bounded}%)")
        if self._observer is None:
            return
        try:
            self._observer(self._file_name, event)
        except Exception as exc:
            Log.warning(f"Progress observer failed for {self._file_name}: {exc}")
