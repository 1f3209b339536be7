from case_ingestion.extraction.adapter import ExtractionAdapter
from case_ingestion.extraction.models import (
    PLACEHOLDER_MARKERS,
    DocumentFormat,
    ExtractedText,
    ExtractionMethod,
)

__all__ = [
    "PLACEHOLDER_MARKERS",
    "DocumentFormat",
    "ExtractedText",
    "ExtractionAdapter",
    "ExtractionMethod",
]
