"""Application configuration helpers."""
from __future__ import annotations

from enum import Enum
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PipelineVariant(str, Enum):
    """Controls which narrative fields and sub-scores the extraction call requests."""

    BASIC = "basic"
    STANDARD = "standard"
    EXTENDED = "extended"


class Settings(BaseSettings):
    """Centralized application settings sourced from environment variables."""

    app_env: str = Field(default="local", alias="APP_ENV")
    openai_api_key: str = Field(alias="OPENAI_API_KEY")
    openai_model: str = Field(default="gpt-4.1-mini", alias="OPENAI_MODEL")
    openai_temperature: float = Field(default=0.1, ge=0.0, le=2.0, alias="OPENAI_TEMPERATURE")
    openai_timeout_seconds: float = Field(default=60.0, gt=0, alias="OPENAI_TIMEOUT_SECONDS")
    pipeline_variant: PipelineVariant = Field(default=PipelineVariant.STANDARD, alias="PIPELINE_VARIANT")
    max_resume_chars: int = Field(default=20000, gt=0, alias="MAX_RESUME_CHARS")
    max_upload_bytes: int = Field(default=10 * 1024 * 1024, gt=0, alias="MAX_UPLOAD_BYTES")
    cors_origins: list[str] = Field(default_factory=list, alias="CORS_ORIGINS")
    serpapi_api_key: Optional[str] = Field(default=None, alias="SERPAPI_API_KEY")
    redis_url: Optional[str] = Field(default=None, alias="REDIS_URL")
    company_review_ttl_seconds: int = Field(default=86400, ge=0, alias="COMPANY_REVIEW_TTL_SECONDS")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
        frozen=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance to avoid repeated parsing."""
    return Settings()
