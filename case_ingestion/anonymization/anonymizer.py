"""Deterministic PII anonymizer for UK tax correspondence.

Processing flow:
1. NFC-normalize the text.
2. Detect PII with regex rules (emails, phone numbers, National Insurance
   numbers, UTRs, postcodes, sort codes, titled personal names).
3. Detect case-specific sensitive words on an ICU-folded copy of the text
   (Any-Latin; Latin-ASCII; Lower) so "Zoë" matches "zoe", then map the hits
   back to original offsets.
4. Resolve overlaps (earliest start wins, then the longest span).
5. Replace each span with a placeholder that is stable per (type, value).

HMRC reference numbers, dates and amounts are left intact: they are the
facts the downstream stages extract.
"""

import re
import unicodedata
from typing import ClassVar

import icu  # type: ignore[import-untyped]

from case_ingestion.anonymization.base import BaseAnonymizer
from case_ingestion.anonymization.exceptions import AnonymizationError
from case_ingestion.anonymization.models import AnonymizationResult, Artifact
from case_ingestion.logging.logger import Log

_Span = tuple[int, int, str]


class Anonymizer(BaseAnonymizer):
    """Regex and dictionary based anonymizer. No AI, no guessing."""

    _FOLD_TRANSFORM: ClassVar[str] = "Any-Latin; Latin-ASCII; Lower"

    # Order matters only for overlap ties: earlier rules win on equal spans.
    _RULES: ClassVar[list[tuple[str, re.Pattern[str]]]] = [
        ("EMAIL", re.compile(r"[\w.\-+]+@[\w\-]+(?:\.[\w\-]+)*\.[A-Za-z]{2,}")),
        (
            "NINO",
            re.compile(
                r"\b(?!BG|GB|KN|NK|NT|TN|ZZ)[A-CEGHJ-PR-TW-Z][A-CEGHJ-NPR-TW-Z]"
                r"\s?\d{2}\s?\d{2}\s?\d{2}\s?[A-D]\b"
            ),
        ),
        ("UTR", re.compile(r"(?<![\d/])\d{5}\s?\d{5}(?![\d/])")),
        (
            "PHONE",
            re.compile(
                r"(?<![\w/])(?:\+44\s?\(?0?\)?\s?|0)"
                r"\d{2,4}[\s-]?\d{3,4}[\s-]?\d{3,4}(?![\w/])"
            ),
        ),
        ("SORT_CODE", re.compile(r"(?<![\d/-])\d{2}-\d{2}-\d{2}(?![\d/-])")),
        ("POSTCODE", re.compile(r"\b[A-Z]{1,2}\d[A-Z\d]?\s?\d[A-Z]{2}\b")),
        (
            "PERSON",
            re.compile(
                r"\b(?:Mr|Mrs|Ms|Miss|Mx|Dr)\.?\s+"
                r"(?P<value>[A-Z][a-z'\-]+(?:\s+[A-Z][a-z'\-]+){0,2})"
            ),
        ),
    ]

    def __init__(self) -> None:
        self._folder: icu.Transliterator = icu.Transliterator.createInstance(
            self._FOLD_TRANSFORM
        )

    def anonymize(
        self,
        text: str,
        sensitive_words: list[str] | None = None,
    ) -> AnonymizationResult:
        try:
            return self._run(text, sensitive_words or [])
        except AnonymizationError:
            raise
        except Exception as exc:
            raise AnonymizationError(f"Anonymization failed: {exc}") from exc

    def _run(self, text: str, sensitive_words: list[str]) -> AnonymizationResult:
        if not text:
            return AnonymizationResult(anonymized_text="")

        normalized = unicodedata.normalize("NFC", text)
        spans = self._detect_patterns(normalized)
        spans.extend(self._detect_sensitive_words(normalized, sensitive_words))
        if not spans:
            return AnonymizationResult(anonymized_text=normalized)

        result = self._replace(normalized, self._resolve_overlaps(spans))
        Log.info(f"Anonymized: {len(result.artifacts)} PII entities replaced")
        return result

    def _detect_patterns(self, text: str) -> list[_Span]:
        spans: list[_Span] = []
        for entity_type, pattern in self._RULES:
            for match in pattern.finditer(text):
                group = "value" if "value" in pattern.groupindex else 0
                spans.append((match.start(group), match.end(group), entity_type))
        return spans

    def _detect_sensitive_words(self, text: str, words: list[str]) -> list[_Span]:
        phrases = {self._fold(w).strip() for w in words}
        phrases.discard("")
        if not phrases:
            return []

        folded, origin = self._fold_with_origin(text)
        spans: list[_Span] = []
        for phrase in sorted(phrases):
            pattern = re.compile(rf"(?<!\w){re.escape(phrase)}(?!\w)")
            for match in pattern.finditer(folded):
                start = origin[match.start()]
                end = origin[match.end() - 1] + 1
                spans.append((start, end, "PERSON"))
        return spans

    def _fold(self, value: str) -> str:
        return str(self._folder.transliterate(unicodedata.normalize("NFC", value)))

    def _fold_with_origin(self, text: str) -> tuple[str, list[int]]:
        """Fold *text* one character at a time, recording each output char's source index."""
        parts: list[str] = []
        origin: list[int] = []
        for index, char in enumerate(text):
            folded = self._fold(char)
            parts.append(folded)
            origin.extend([index] * len(folded))
        return "".join(parts), origin

    @staticmethod
    def _resolve_overlaps(spans: list[_Span]) -> list[_Span]:
        ordered = sorted(spans, key=lambda s: (s[0], -(s[1] - s[0])))
        kept: list[_Span] = []
        for span in ordered:
            if kept and span[0] < kept[-1][1]:
                continue
            kept.append(span)
        return kept

    @staticmethod
    def _replace(text: str, spans: list[_Span]) -> AnonymizationResult:
        """Same (type, value) pair, compared case-insensitively, gets the same placeholder."""
        counters: dict[str, int] = {}
        placeholders: dict[tuple[str, str], str] = {}
        artifacts: list[Artifact] = []
        pieces: list[str] = []
        cursor = 0

        for start, end, entity_type in spans:
            original = text[start:end]
            key = (entity_type, " ".join(original.lower().split()))
            if key not in placeholders:
                counters[entity_type] = counters.get(entity_type, 0) + 1
                placeholders[key] = f"[{entity_type}_{counters[entity_type]}]"
            placeholder = placeholders[key]
            pieces.append(text[cursor:start])
            pieces.append(placeholder)
            cursor = end
            artifacts.append(Artifact(type=entity_type, original=original, replacement=placeholder))

        pieces.append(text[cursor:])
        return AnonymizationResult(anonymized_text="".join(pieces), artifacts=artifacts)
