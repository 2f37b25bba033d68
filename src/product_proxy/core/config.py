from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Upstream mock API
    MOCK_API_BASE_URL: str = "https://api.restful-api.dev"
    UPSTREAM_TIMEOUT_SECONDS: float = 10.0
    # Treat every get-one failure (including outages) as "not found"
    UPSTREAM_GET_ERRORS_AS_NOT_FOUND: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"

    # Application
    DEBUG: bool = False
    CORS_ORIGINS: List[str] = ["*"]


settings = Settings()
