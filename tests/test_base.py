"""Tests for the content generator base class."""

from typing import Any

import pytest

from services.qwen_adapter.core.llm.base import ContentGenerator
from services.qwen_adapter.core.llm.credentials import APIKeyCredentialProvider


class _StubGenerator(ContentGenerator):
    async def generate(self, request):
        raise NotImplementedError

    def generate_stream(self, request):
        raise NotImplementedError

    async def count_tokens(self, request):
        raise NotImplementedError

    async def embed_content(self, request):
        raise NotImplementedError

    async def close(self):
        pass


class TestClientTemplate:
    """Tests for the lazy client initialization template."""

    def test_template_order_and_caching(self):
        """Test credentials and endpoint feed client creation once."""
        created: list[tuple[dict[str, Any], str]] = []

        class Generator(_StubGenerator):
            def _get_credential_provider(self):
                return APIKeyCredentialProvider("sk-test")

            def _get_endpoint(self):
                return "https://example.test/v1"

            def _create_client_instance(self, credentials, endpoint):
                created.append((credentials, endpoint))
                return object()

        generator = Generator()
        client = generator.client

        assert generator.client is client
        assert created == [({"api_key": "sk-test"}, "https://example.test/v1")]

    def test_missing_credential_provider(self):
        """Test the template requires a credential provider."""
        with pytest.raises(NotImplementedError, match="_get_credential_provider"):
            _ = _StubGenerator().client

    def test_abstract_methods_required(self):
        """Test the base class cannot be instantiated."""
        with pytest.raises(TypeError):
            ContentGenerator()
