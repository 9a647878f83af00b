from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    rate_limit_max_requests: int = 10
    rate_limit_window_seconds: int = 60
    rate_limit_sweep_interval_seconds: int = 300

    max_upload_bytes: int = 10 * 1024 * 1024
    max_files_per_request: int = 1

    pdf_engine: str = "pdfplumber"

    ocr_max_concurrent: int = 2
    ocr_timeout_seconds: int = 60
    ocr_language: str = "eng"

    max_names: int = 50
