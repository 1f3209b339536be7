from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables.

    Per-stage model overrides are not fields here: ModelRegistry reads them
    from the environment on every lookup, e.g. MODEL_DOCUMENT_EXTRACTION or
    MODEL_EMBEDDINGS (the underscore-free MODEL_DOCUMENTEXTRACTION also works).
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"
    third_party_log_level: str = "WARNING"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "lightpoint"
    db_username: str = "lightpoint"
    db_password: str = "secret"
    db_pool_min_size: int = 1
    db_pool_max_size: int = 10

    pdf_engine: str = "pdfplumber"

    llm_provider: str = "openrouter"
    llm_api_key: str = ""
    llm_base_url: str = ""
    llm_timeout_seconds: int = 60
    llm_app_referer: str = "https://lightpoint.app"
    llm_app_title: str = "Lightpoint HMRC Complaint System"

    ocr_timeout_seconds: int = 90
    ocr_temperature: float = 0.1
    ocr_max_tokens: int = 4000

    analysis_temperature: float = 0.2
    analysis_max_tokens: int = 2000
    analysis_max_input_chars: int = 150_000

    meaningful_text_min_chars: int = 50

    files_root: str = "/app/files"
    max_concurrent_documents: int = 4
