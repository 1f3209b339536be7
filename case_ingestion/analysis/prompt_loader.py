from pathlib import Path

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


class PromptLoadError(Exception):
    """Raised when a bundled prompt or schema file cannot be read."""


def load_prompt(name: str, prompt_dir: Path | None = None) -> str:
    """Load a prompt template or JSON schema shipped with the analysis package.

    Args:
        name: File name inside the prompt directory, e.g.
              "document_analysis_system.txt".
        prompt_dir: Directory to read from. Defaults to the bundled prompts/.

    Raises:
        PromptLoadError: if the file cannot be read.
    """
    path = (prompt_dir or _DEFAULT_PROMPT_DIR) / name
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise PromptLoadError(f"Failed to load prompt {name}: {exc}") from exc
