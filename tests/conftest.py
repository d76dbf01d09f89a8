"""Pytest configuration and fixtures.

Generator tests never touch the network: they inject FakeTransport (see
tests/helpers.py), which replays scripted SSE payloads and records every
request body it receives.
"""

import os

import pytest

# Set test environment before importing settings
os.environ.setdefault("QWEN_ADAPTER_LOAD_ENV_FILE", "false")


# =============================================================================
# Sample Data
# =============================================================================


@pytest.fixture
def sample_messages():
    """Sample conversation for testing."""
    from shared.protocol.content_models import Content

    return [
        Content.from_text("system", "You are a helpful assistant."),
        Content.from_text("user", "What's the weather in NYC?"),
    ]


@pytest.fixture
def sample_tools():
    """Sample tool declarations for testing."""
    from shared.protocol.content_models import ToolDeclaration

    return [
        ToolDeclaration(
            name="get_weather",
            description="Get the current weather for a location",
            parameters={
                "type": "object",
                "properties": {
                    "location": {"type": "string", "description": "City name"},
                },
                "required": ["location"],
            },
        ),
    ]


@pytest.fixture
def sample_request(sample_messages, sample_tools):
    """Sample generation request with tools."""
    from shared.protocol.content_models import GenerateRequest

    return GenerateRequest(model="qwen-plus", messages=sample_messages, tools=sample_tools)


@pytest.fixture
def settings_with_key():
    """Settings with a test API key and fast retries."""
    from services.qwen_adapter.core.config.settings import QwenSettings, RetrySettings, Settings

    return Settings(
        qwen=QwenSettings(api_key="sk-test-key"),
        retry=RetrySettings(max_retries=2, initial_delay_seconds=0.0, max_delay_seconds=0.0),
    )
