from abc import ABC, abstractmethod

from case_ingestion.anonymization.models import AnonymizationResult


class BaseAnonymizer(ABC):
    """Contract for all anonymization adapters.

    Implementations must be deterministic and total: the same input always
    yields the same output, and the only permitted failure is
    AnonymizationError, which the pipeline treats as fatal.
    """

    @abstractmethod
    def anonymize(
        self,
        text: str,
        sensitive_words: list[str] | None = None,
    ) -> AnonymizationResult:
        """Replace PII in text with labeled placeholders.

        Args:
            text: Extracted document text.
            sensitive_words: Optional case-specific words or phrases (client
                             names, trading names) matched exactly after
                             accent and case folding.

        Raises:
            AnonymizationError: on any failure.
        """
