"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # LLM
    gemini_api_key: str | None = None
    gemini_model: str = "gemini-3-pro-preview"
    temperature: float = 0.3
    search_grounding: bool = True
    # None waits for the call to settle
    llm_request_timeout_seconds: float | None = None

    # Server (run.py)
    server_host: str = "0.0.0.0"
    server_port: int = 8000
    server_reload: bool = False

    # Logging
    log_level: str = "INFO"

    # PDF export (millimetres, landscape)
    pdf_page_width_mm: float = 297
    pdf_page_height_mm: float = 167
    pdf_background_color: str = "#fdfbf7"


settings = Settings()
