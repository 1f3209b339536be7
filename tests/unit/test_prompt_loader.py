import json
from pathlib import Path

import pytest

from case_ingestion.analysis.prompt_loader import PromptLoadError, load_prompt


class TestLoadPrompt:
    def test_loads_bundled_system_prompt(self) -> None:
        prompt = load_prompt("document_analysis_system.txt")
        assert "{json_schema}" in prompt

    def test_loads_bundled_user_prompt(self) -> None:
        prompt = load_prompt("document_analysis_user.txt")
        assert "{document_type}" in prompt
        assert "{document_text}" in prompt

    def test_bundled_schema_is_valid_json(self) -> None:
        schema = json.loads(load_prompt("document_analysis_schema.json"))
        assert schema["type"] == "object"
        assert schema["additionalProperties"] is False
        assert set(schema["required"]) == set(schema["properties"])

    def test_reads_from_custom_directory(self, tmp_path: Path) -> None:
        (tmp_path / "custom.txt").write_text("hello", encoding="utf-8")
        assert load_prompt("custom.txt", tmp_path) == "hello"

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(PromptLoadError, match="missing.txt"):
            load_prompt("missing.txt", tmp_path)
