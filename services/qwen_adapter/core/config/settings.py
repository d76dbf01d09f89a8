"""Qwen adapter configuration using Pydantic Settings.

Environment variables are loaded from .env file or system environment.
"""

import os
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from services.qwen_adapter.core.config.constants import (
    DEFAULT_MAX_RETRIES,
    DEFAULT_QWEN_BASE_URL,
    DEFAULT_QWEN_MODEL,
    DEFAULT_TIMEOUT_SECONDS,
)

_REPO_ROOT = Path(__file__).resolve().parents[4]
_DEFAULT_ENV_FILE = _REPO_ROOT / ".env"
_LOAD_ENV_FILE = os.getenv("QWEN_ADAPTER_LOAD_ENV_FILE", "true").lower() not in {"0", "false", "no", "off"}
_ENV_FILE = str(_DEFAULT_ENV_FILE) if _LOAD_ENV_FILE else None


class QwenSettings(BaseSettings):
    """Qwen provider settings.

    Environment variables are prefixed with QWEN_ (e.g., QWEN_API_KEY).
    """

    model_config = SettingsConfigDict(
        env_prefix="QWEN_",
        env_file=_ENV_FILE,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: str | None = Field(default=None, description="DashScope API key")
    model: str = Field(default=DEFAULT_QWEN_MODEL, description="Default Qwen model name")
    base_url: str = Field(default=DEFAULT_QWEN_BASE_URL, description="OpenAI-compatible endpoint base URL")
    region: str | None = Field(default=None, description="Alibaba Cloud region")
    timeout_seconds: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0, description="HTTP timeout")


class RetrySettings(BaseSettings):
    """Retry settings for opening provider connections.

    Environment variables are prefixed with QWEN_RETRY_ (e.g., QWEN_RETRY_MAX_RETRIES).
    """

    model_config = SettingsConfigDict(
        env_prefix="QWEN_RETRY_",
        env_file=_ENV_FILE,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    max_retries: int = Field(default=DEFAULT_MAX_RETRIES, ge=1, description="Attempts to open a connection")
    initial_delay_seconds: float = Field(default=1.0, ge=0, description="Delay before the first retry")
    max_delay_seconds: float = Field(default=30.0, ge=0, description="Backoff delay cap")


class NextSpeakerSettings(BaseSettings):
    """Phrase lists for the next-speaker heuristic.

    Environment variables are prefixed with NEXT_SPEAKER_; list values are JSON
    (e.g., NEXT_SPEAKER_CONTINUE_INDICATORS='["Let me", "Next, I will"]').
    """

    model_config = SettingsConfigDict(
        env_prefix="NEXT_SPEAKER_",
        env_file=_ENV_FILE,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    continue_indicators: list[str] = Field(
        default_factory=lambda: [
            "Next, I will",
            "Now I'll",
            "Moving on to",
            "Let me",
            "I'll now",
            "I will now",
            "Continuing",
            "Processing",
        ],
        description="Phrases that mean the model intends to keep going",
    )
    terminal_punctuation: str = Field(
        default=".!?。！？",
        description="Characters that end a complete model message",
    )


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "qwen-adapter"
    cli_version: str = Field(default="0.1.0", description="Version reported in the User-Agent header")

    # Qwen Configuration (nested settings)
    qwen: QwenSettings = Field(default_factory=QwenSettings)

    # Retry Configuration (nested settings)
    retry: RetrySettings = Field(default_factory=RetrySettings)

    # Next-speaker heuristic (nested settings)
    next_speaker: NextSpeakerSettings = Field(default_factory=NextSpeakerSettings)

    @property
    def user_agent(self) -> str:
        """User-Agent header sent with every provider request."""
        return f"{self.app_name}/{self.cli_version}"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
