import pytest
from pydantic import ValidationError

from case_ingestion.config.settings import Settings


class TestSettingsDefaults:
    def test_default_app_env(self) -> None:
        s = Settings()
        assert s.app_env == "dev"

    def test_default_db_port(self) -> None:
        s = Settings()
        assert s.db_port == 5432

    def test_default_pdf_engine(self) -> None:
        s = Settings()
        assert s.pdf_engine == "pdfplumber"

    def test_default_llm_provider(self) -> None:
        s = Settings()
        assert s.llm_provider == "openrouter"

    def test_default_ocr_temperature_is_low(self) -> None:
        s = Settings()
        assert s.ocr_temperature == 0.1

    def test_default_meaningful_text_threshold(self) -> None:
        s = Settings()
        assert s.meaningful_text_min_chars == 50

    def test_default_concurrency_ceiling(self) -> None:
        s = Settings()
        assert s.max_concurrent_documents == 4


class TestSettingsFromEnv:
    def test_loads_app_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APP_ENV", "production")
        s = Settings()
        assert s.app_env == "production"

    def test_loads_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        s = Settings()
        assert s.log_level == "DEBUG"

    def test_loads_db_host(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DB_HOST", "db.example.com")
        s = Settings()
        assert s.db_host == "db.example.com"

    def test_loads_llm_api_key(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LLM_API_KEY", "sk-or-test")
        s = Settings()
        assert s.llm_api_key == "sk-or-test"

    def test_loads_ocr_timeout(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OCR_TIMEOUT_SECONDS", "15")
        s = Settings()
        assert s.ocr_timeout_seconds == 15

    def test_ignores_stage_override_variables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MODEL_EMBEDDINGS", "costEfficient")
        s = Settings()
        assert not hasattr(s, "model_embeddings")


class TestSettingsValidation:
    def test_invalid_db_port_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DB_PORT", "not_a_number")
        with pytest.raises(ValidationError):
            Settings()

    def test_invalid_concurrency_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MAX_CONCURRENT_DOCUMENTS", "abc")
        with pytest.raises(ValidationError):
            Settings()
