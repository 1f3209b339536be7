class ProcessingError(Exception):
    """The single failure mode of IngestionOrchestrator.process_document.

    The original exception is kept on ``cause`` and chained as __cause__.
    """

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class PersistenceError(Exception):
    """Raised when a document record cannot be written to or read from the database."""


class DocumentNotFoundError(PersistenceError):
    """Raised when a document cannot be found in the database."""
