from dataclasses import dataclass, field


@dataclass(frozen=True)
class Artifact:
    """Single PII replacement record."""

    type: str  # e.g. "PERSON", "EMAIL", "NINO", "UTR"
    original: str
    replacement: str  # placeholder in the anonymized text, e.g. "[PERSON_1]"


@dataclass
class AnonymizationResult:
    """Output of the anonymizer step."""

    anonymized_text: str
    artifacts: list[Artifact] = field(default_factory=list)

