from __future__ import annotations

from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from social_api.services.config import (
    DEFAULT_BASE_URL,
    DEFAULT_LANGUAGE,
    DEFAULT_TIMEOUT_MS,
    TweetServiceConfig,
)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8-sig",
        case_sensitive=False,
        extra="ignore",
    )

    APP_ENV: str = "local"
    LOG_LEVEL: str = "INFO"

    SYNDICATION_BASE_URL: str = DEFAULT_BASE_URL
    SYNDICATION_LANGUAGE: str = DEFAULT_LANGUAGE
    API_TIMEOUT_MS: int = Field(default=DEFAULT_TIMEOUT_MS, gt=0)

    CACHE_BACKEND: Literal["firebase", "memory", "none"] = "firebase"
    CACHE_TIMEOUT_MS: int = Field(default=3000, gt=0)
    CACHE_TTL_SECONDS: int = Field(default=21600, gt=0)
    CACHE_ROOT_PATH: str = "social-api"
    # Cache-Control max-age for rendered responses
    CACHE_MAX_AGE: int = Field(default=3600, ge=0)

    FIREBASE_DATABASE_URL: Optional[str] = None
    FIREBASE_AUTH_TOKEN: Optional[str] = None

    RATE_LIMIT_WINDOW_MS: int = Field(default=60_000, gt=0)
    RATE_LIMIT_MAX_REQUESTS: int = Field(default=100, gt=0)

    CORS_ALLOWED_ORIGINS: list[str] = Field(default_factory=lambda: ["*"])

    def tweet_service_config(self) -> TweetServiceConfig:
        return TweetServiceConfig(
            timeout_ms=self.API_TIMEOUT_MS,
            language=self.SYNDICATION_LANGUAGE,
            base_url=self.SYNDICATION_BASE_URL.rstrip("/"),
        )

    @property
    def firebase_configured(self) -> bool:
        return bool(self.FIREBASE_DATABASE_URL and self.FIREBASE_AUTH_TOKEN)


settings = Settings()
