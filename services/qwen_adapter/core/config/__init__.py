"""Configuration module for the Qwen adapter."""

from services.qwen_adapter.core.config.constants import ProviderID
from services.qwen_adapter.core.config.models import (
    GEMINI_MODELS,
    QWEN_MODELS,
    get_model_provider,
    is_gemini_model,
    is_qwen_model,
)
from services.qwen_adapter.core.config.settings import (
    NextSpeakerSettings,
    QwenSettings,
    RetrySettings,
    Settings,
    get_settings,
)

__all__ = [
    # Settings
    "Settings",
    "QwenSettings",
    "RetrySettings",
    "NextSpeakerSettings",
    "get_settings",
    # Model catalog
    "ProviderID",
    "QWEN_MODELS",
    "GEMINI_MODELS",
    "is_qwen_model",
    "is_gemini_model",
    "get_model_provider",
]
