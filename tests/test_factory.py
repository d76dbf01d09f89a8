"""Tests for the content generator factory."""

import pytest

from services.qwen_adapter.core.config.settings import QwenSettings, Settings
from services.qwen_adapter.core.llm.exceptions import ConfigurationError, MissingAPIKeyError
from services.qwen_adapter.core.llm.factory import (
    AuthType,
    ContentGeneratorConfig,
    create_content_generator,
    create_content_generator_config,
)
from services.qwen_adapter.core.llm.qwen_client import QwenContentGenerator


class TestCreateContentGeneratorConfig:
    """Tests for configuration resolution."""

    def test_qwen_auth_with_key(self, settings_with_key):
        """Test the Qwen auth type picks up key and endpoint from settings."""
        config = create_content_generator_config(None, AuthType.USE_QWEN_API, settings_with_key)

        assert config.model == "qwen-max"
        assert config.api_key == "sk-test-key"
        assert config.base_url == settings_with_key.qwen.base_url

    def test_qwen_auth_without_key(self):
        """Test no credentials are filled in when no key is configured."""
        config = create_content_generator_config(
            "qwen-plus", AuthType.USE_QWEN_API, Settings(qwen=QwenSettings(api_key=None))
        )

        assert config.model == "qwen-plus"
        assert config.api_key is None

    def test_native_auth_default_model(self, settings_with_key):
        """Test native auth types default to a Gemini model and get no Qwen key."""
        config = create_content_generator_config(None, AuthType.USE_GEMINI, settings_with_key)

        assert config.model == "gemini-2.5-pro"
        assert config.api_key is None


class TestCreateContentGenerator:
    """Tests for generator creation."""

    def test_qwen_auth(self, settings_with_key):
        """Test the Qwen auth type creates a QwenContentGenerator."""
        config = ContentGeneratorConfig(model="qwen-plus", auth_type=AuthType.USE_QWEN_API, api_key="sk-x")

        generator = create_content_generator(config, settings_with_key)

        assert isinstance(generator, QwenContentGenerator)
        assert generator._api_key == "sk-x"

    def test_qwen_model_with_key_and_no_auth_type(self, settings_with_key):
        """Test a Qwen model name plus key selects Qwen without an auth type."""
        config = ContentGeneratorConfig(model="qwen-turbo", api_key="sk-x")

        assert isinstance(create_content_generator(config, settings_with_key), QwenContentGenerator)

    def test_qwen_auth_without_key(self):
        """Test the Qwen auth type without any key fails fast."""
        config = ContentGeneratorConfig(model="qwen-plus", auth_type=AuthType.USE_QWEN_API)

        with pytest.raises(MissingAPIKeyError):
            create_content_generator(config, Settings(qwen=QwenSettings(api_key=None)))

    @pytest.mark.parametrize(
        "auth_type",
        [AuthType.LOGIN_WITH_GOOGLE, AuthType.USE_GEMINI, AuthType.USE_VERTEX_AI, AuthType.CLOUD_SHELL],
    )
    def test_native_auth_types_rejected(self, auth_type, settings_with_key):
        """Test auth types served natively are configuration errors here."""
        config = ContentGeneratorConfig(model="gemini-2.5-pro", auth_type=auth_type)

        with pytest.raises(ConfigurationError, match="Unsupported authType"):
            create_content_generator(config, settings_with_key)

    def test_auth_type_values(self):
        """Test auth type wire values."""
        assert AuthType("qwen-api-key") is AuthType.USE_QWEN_API
        assert AuthType.LOGIN_WITH_GOOGLE.value == "oauth-personal"
