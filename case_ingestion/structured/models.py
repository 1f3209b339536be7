from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass(frozen=True)
class StructuredFields:
    """Facts pulled from anonymized text, each list in order of first appearance."""

    dates: list[str] = field(default_factory=list)
    amounts: list[str] = field(default_factory=list)
    references: list[str] = field(default_factory=list)
    events: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, list[str]]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StructuredFields":
        return cls(
            dates=[str(v) for v in data.get("dates") or []],
            amounts=[str(v) for v in data.get("amounts") or []],
            references=[str(v) for v in data.get("references") or []],
            events=[str(v) for v in data.get("events") or []],
        )
