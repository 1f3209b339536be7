from case_ingestion.extraction.models import PLACEHOLDER_MARKERS

MEANINGFUL_TEXT_MIN_CHARS = 50


def is_meaningful_text(text: str, min_chars: int = MEANINGFUL_TEXT_MIN_CHARS) -> bool:
    """True when text is long enough and carries no extraction placeholder.

    Gates the deep-analysis and embedding stages.
    """
    if len(text) <= min_chars:
        return False
    return not any(marker in text for marker in PLACEHOLDER_MARKERS)
