"""Factory for choosing the content generator behind the agent.

Only the Qwen path is adapted here. The Google login, Gemini API key,
Vertex AI and Cloud Shell paths are served natively by the agent and need
no translation, so asking this factory for them is a configuration error.
"""

from dataclasses import dataclass
from enum import Enum

import structlog

from services.qwen_adapter.core.config.constants import DEFAULT_GEMINI_MODEL, DEFAULT_QWEN_MODEL
from services.qwen_adapter.core.config.models import is_qwen_model
from services.qwen_adapter.core.config.settings import Settings, get_settings
from services.qwen_adapter.core.llm.base import ContentGenerator
from services.qwen_adapter.core.llm.exceptions import ConfigurationError
from services.qwen_adapter.core.llm.qwen_client import QwenContentGenerator

logger = structlog.get_logger(__name__)


class AuthType(str, Enum):
    """How the agent authenticates with its model provider."""

    LOGIN_WITH_GOOGLE = "oauth-personal"
    USE_GEMINI = "gemini-api-key"
    USE_VERTEX_AI = "vertex-ai"
    CLOUD_SHELL = "cloud-shell"
    USE_QWEN_API = "qwen-api-key"


@dataclass
class ContentGeneratorConfig:
    """Resolved provider configuration for one agent session."""

    model: str
    auth_type: AuthType | None = None
    api_key: str | None = None
    base_url: str | None = None
    region: str | None = None


def create_content_generator_config(
    model: str | None,
    auth_type: AuthType | None,
    settings: Settings | None = None,
) -> ContentGeneratorConfig:
    """Resolve the model and credentials for an auth type.

    Args:
        model: Explicit model name, or None for the auth type's default.
        auth_type: Selected authentication method.
        settings: Application settings. Uses get_settings() if not provided.

    Returns:
        ContentGeneratorConfig; Qwen credentials are filled in only for the
        Qwen auth type and only when a key is configured.
    """
    settings = settings or get_settings()
    default_model = DEFAULT_QWEN_MODEL if auth_type == AuthType.USE_QWEN_API else DEFAULT_GEMINI_MODEL
    config = ContentGeneratorConfig(model=model or default_model, auth_type=auth_type)

    if auth_type == AuthType.USE_QWEN_API and settings.qwen.api_key:
        config.api_key = settings.qwen.api_key
        config.base_url = settings.qwen.base_url
        config.region = settings.qwen.region

    return config


def create_content_generator(
    config: ContentGeneratorConfig,
    settings: Settings | None = None,
) -> ContentGenerator:
    """Create the adapted content generator for a configuration.

    Args:
        config: Resolved configuration.
        settings: Application settings. Uses get_settings() if not provided.

    Returns:
        A QwenContentGenerator.

    Raises:
        ConfigurationError: If the configuration selects a native provider path.
        MissingAPIKeyError: If the Qwen path is selected without an API key.
    """
    use_qwen = config.auth_type == AuthType.USE_QWEN_API or (
        config.auth_type is None and is_qwen_model(config.model) and bool(config.api_key)
    )
    if not use_qwen:
        raise ConfigurationError(
            f"Unsupported authType for the Qwen adapter: {config.auth_type}",
            details={"auth_type": str(config.auth_type), "model": config.model},
        )

    logger.info("creating_content_generator", provider="qwen", model=config.model)
    return QwenContentGenerator(api_key=config.api_key, base_url=config.base_url, settings=settings)
