"""Deterministic extraction of dates, amounts, references and events.

Runs on anonymized text, so anonymization placeholders ("[UTR_1]") are never
reported as references.
"""

import re
from typing import ClassVar

from case_ingestion.structured.models import StructuredFields

_MONTHS = (
    r"(?:January|February|March|April|May|June|July|August|September|October|"
    r"November|December|Jan|Feb|Mar|Apr|Jun|Jul|Aug|Sept|Sep|Oct|Nov|Dec)"
)


def _ordered_unique(found: list[tuple[int, str]]) -> list[str]:
    seen: set[str] = set()
    values: list[str] = []
    for _, value in sorted(found, key=lambda item: item[0]):
        key = value.lower()
        if key not in seen:
            seen.add(key)
            values.append(value)
    return values


class StructuredFieldExtractor:
    """Pure text -> StructuredFields transform."""

    _DATE_PATTERNS: ClassVar[list[re.Pattern[str]]] = [
        re.compile(rf"\b(?:\d{{1,2}}(?:st|nd|rd|th)?\s+)?{_MONTHS}\.?,?\s+(?:19|20)\d{{2}}\b"),
        re.compile(r"\b\d{1,2}/\d{1,2}/(?:\d{4}|\d{2})\b"),
        re.compile(r"\b(?:19|20)\d{2}-\d{2}-\d{2}\b"),
    ]
    _AMOUNT_PATTERNS: ClassVar[list[re.Pattern[str]]] = [
        re.compile(r"£\s?\d{1,3}(?:,\d{3})*(?:\.\d{1,2})?(?:\s?(?:k|m|bn|million|billion)\b)?"),
        re.compile(r"\b\d{1,3}(?:,\d{3})*(?:\.\d{2})?\s?(?:GBP|pounds)\b", re.IGNORECASE),
    ]
    _REFERENCE_PATTERNS: ClassVar[list[re.Pattern[str]]] = [
        # Office references such as BT/2024/12345 or SAEEU01/129274
        re.compile(r"\b[A-Z]{1,6}\d{0,4}(?:/[A-Z0-9]+)+\b"),
        # Tax years such as 2023/24 or 2023-24
        re.compile(r"\b(?:19|20)\d{2}[/-]\d{2}\b(?![/-]\d)"),
        # Forms and reliefs such as SEIS3, SA100, P60, CT600
        re.compile(r"\b(?:SEIS|EIS|SA|CT|VAT|CIS|P)\d{1,3}[A-Z]?\b"),
        # Complaints Resolution Guidance citations
        re.compile(r"\bCRG\d{4}\b"),
        # Labelled references
        re.compile(
            r"\b(?:[Rr]eference|[Rr]ef|[Oo]ur [Rr]ef|[Yy]our [Rr]ef|[Cc]ase)"
            r"(?:\s+(?:[Nn]umber|[Nn]o\.?))?[:.]?\s*"
            r"(?P<value>(?=[A-Z\-]*\d)[A-Z0-9][A-Z0-9\-]{5,})\b"
        ),
    ]
    _EVENT_KEYWORDS: ClassVar[re.Pattern[str]] = re.compile(
        r"\b(?:submitted|received|sent|requested|requires|escalated|delay(?:ed)?|"
        r"apologi[sz]e|complain(?:t|ed)?|penalt(?:y|ies)|repayment|responded|"
        r"rejected|approved|chased|cancelled|issued|refused|upheld|overdue)\b",
        re.IGNORECASE,
    )
    _SENTENCE_SPLIT: ClassVar[re.Pattern[str]] = re.compile(r"(?<=[.!?])\s+|\n+")
    _MAX_EVENT_CHARS: ClassVar[int] = 200

    def extract(self, text: str) -> StructuredFields:
        return StructuredFields(
            dates=self._find(text, self._DATE_PATTERNS),
            amounts=self._find(text, self._AMOUNT_PATTERNS),
            references=self._find(text, self._REFERENCE_PATTERNS),
            events=self._events(text),
        )

    @staticmethod
    def _find(text: str, patterns: list[re.Pattern[str]]) -> list[str]:
        found: list[tuple[int, str]] = []
        for pattern in patterns:
            group = "value" if "value" in pattern.groupindex else 0
            for match in pattern.finditer(text):
                value = " ".join(match.group(group).split())
                if not StructuredFieldExtractor._is_placeholder(text, match.start(group)):
                    found.append((match.start(group), value))
        return _ordered_unique(found)

    @staticmethod
    def _is_placeholder(text: str, index: int) -> bool:
        return index > 0 and text[index - 1] == "["

    def _events(self, text: str) -> list[str]:
        found: list[tuple[int, str]] = []
        offset = 0
        for sentence in self._SENTENCE_SPLIT.split(text):
            offset = text.find(sentence, offset)
            cleaned = " ".join(sentence.split())
            if cleaned and not cleaned.startswith("[") and self._EVENT_KEYWORDS.search(cleaned):
                found.append((offset, cleaned[: self._MAX_EVENT_CHARS]))
        return _ordered_unique(found)
