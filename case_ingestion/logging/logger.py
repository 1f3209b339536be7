import logging
import sys
from typing import ClassVar

# Libraries that log every HTTP request or every PDF object at INFO/DEBUG.
NOISY_LOGGERS: tuple[str, ...] = ("httpx", "httpcore", "openai", "pdfminer", "psycopg.pool")


class Log:
    """Process-wide logger for the ingestion worker.

    Messages name the document as ``case/filename`` so that interleaved output
    from a concurrent batch can still be followed per document.
    """

    _logger: ClassVar[logging.Logger] = logging.getLogger("case_ingestion")
    _handler: ClassVar[logging.Handler | None] = None

    @classmethod
    def configure(cls, log_level: str, third_party_level: str = "WARNING") -> None:
        """Attach a stdout handler and set levels for our logger and noisy libraries."""
        cls._logger.setLevel(log_level.upper())
        cls._logger.propagate = False
        if cls._handler is None:
            cls._handler = logging.StreamHandler(sys.stdout)
            cls._handler.setFormatter(
                logging.Formatter("%(asctime)s [%(levelname)s] [%(threadName)s] %(message)s")
            )
            cls._logger.addHandler(cls._handler)
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(third_party_level.upper())

    @classmethod
    def info(cls, message: str) -> None:
        cls._logger.info(message)

    @classmethod
    def warning(cls, message: str) -> None:
        cls._logger.warning(message)

    @classmethod
    def error(cls, message: str) -> None:
        cls._logger.error(message)

    @classmethod
    def exception(cls, message: str, exc: BaseException) -> None:
        """Log at ERROR with the traceback of *exc*, including its ``__cause__`` chain."""
        cls._logger.error(message, exc_info=(type(exc), exc, exc.__traceback__))

    @classmethod
    def debug(cls, message: str) -> None:
        cls._logger.debug(message)
