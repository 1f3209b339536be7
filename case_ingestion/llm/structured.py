import json
import re

from case_ingestion.llm.exceptions import MalformedResponseError

_FENCED_RE = re.compile(
    r"```(?:json)?[ \t]*\n?(?P<body>.*?)\n?[ \t]*```",
    re.DOTALL | re.IGNORECASE,
)


def strip_code_fence(raw: str) -> str:
    """Return the body of the first markdown fence (``` or ```json), else the stripped reply.

    Models often put a line of prose before or after the fenced block.
    """
    cleaned = raw.strip()
    match = _FENCED_RE.search(cleaned)
    if match is None:
        return cleaned
    return match.group("body").strip()


def parse_json_response(raw: str) -> dict[str, object]:
    """Parse a model reply expected to hold a single JSON object.

    Raises:
        MalformedResponseError: if the reply is not valid JSON or not an object.
            The raw reply is kept on the exception for diagnostics.
    """
    cleaned = strip_code_fence(raw)
    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise MalformedResponseError(f"Invalid JSON response: {exc}", raw_text=raw) from exc

    if not isinstance(parsed, dict):
        raise MalformedResponseError("JSON response must be an object", raw_text=raw)
    return parsed
