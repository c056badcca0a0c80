"""Application config from environment."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    API_KEY: str = "Your API key here"
    ENV: str | None = None
    LOG_LEVEL: str = "INFO"
    # Google Generative Language API, used for remote transcription
    GEMINI_API_KEY: str = ""
    GEMINI_MODEL: str = "gemini-2.5-flash"
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta"
    # Request timeout for one transcription round trip; the step itself imposes none
    GEMINI_TIMEOUT_SECONDS: float = 120.0
    # Shown when a failed transcription carries no message of its own
    TRANSCRIPTION_FALLBACK_ERROR: str = "Transcription failed"
    # Leave unset to keep spans in-process only
    OTEL_EXPORTER_OTLP_ENDPOINT: str | None = None


settings = Settings()
