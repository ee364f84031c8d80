import logging
import sys
from typing import TextIO


class Log:
    """Process-wide logging facade for the ingestion pipeline.

    pdfplumber (through pdfminer) and Pillow log per page and per image
    below WARNING, which buries per-file progress. ``configure`` keeps those
    libraries at WARNING or above whatever the package level is.
    """

    _logger: logging.Logger = logging.getLogger("filecontext")
    _FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    THIRD_PARTY_LOGGERS = ("pdfminer", "PIL", "pytesseract")

    @classmethod
    def configure(cls, log_level: str, stream: TextIO | None = None) -> None:
        """Set the level and attach a single stream handler (stdout by default)."""
        level = logging.getLevelName(log_level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level '{log_level}'")
        cls._logger.setLevel(level)
        for name in cls.THIRD_PARTY_LOGGERS:
            logging.getLogger(name).setLevel(max(level, logging.WARNING))
        if not cls._logger.handlers:
            handler = logging.StreamHandler(stream or sys.stdout)
            handler.setFormatter(logging.Formatter(cls._FORMAT))
            cls._logger.addHandler(handler)

    @classmethod
    def info(cls, message: str, **kwargs: object) -> None:
        cls._logger.info(message, extra=kwargs)

    @classmethod
    def error(cls, message: str, **kwargs: object) -> None:
        cls._logger.error(message, extra=kwargs)

    @classmethod
    def exception(cls, message: str, exc: BaseException | None = None, **kwargs: object) -> None:
        """Log an error with a traceback (of ``exc``, or of the active exception)."""
        cls._logger.error(message, exc_info=exc if exc is not None else True, extra=kwargs)

    @classmethod
    def warning(cls, message: str, **kwargs: object) -> None:
        cls._logger.warning(message, extra=kwargs)

    @classmethod
    def debug(cls, message: str, **kwargs: object) -> None:
        cls._logger.debug(message, extra=kwargs)
