from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class StageOutcome(Generic[T]):
    """Result of an optional stage: a value, or the reason it is absent."""

    value: T | None = None
    absent_reason: str | None = None

    def __post_init__(self) -> None:
        if (self.value is None) == (self.absent_reason is None):
            raise ValueError("StageOutcome needs exactly one of value or absent_reason")

    @property
    def present(self) -> bool:
        return self.value is not None

    @classmethod
    def ok(cls, value: T) -> "StageOutcome[T]":
        return cls(value=value)

    @classmethod
    def absent(cls, reason: str) -> "StageOutcome[T]":
        return cls(absent_reason=reason)


# Absence reasons shared by the analysis and embedding stages.
SKIPPED_NOT_MEANINGFUL = "skipped: text not meaningful"
