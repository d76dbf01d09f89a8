"""Protocol adapter between the agent's content format and Qwen's OpenAI-compatible API."""

from services.qwen_adapter.core.llm.argument_repair import repair_arguments, repair_json
from services.qwen_adapter.core.llm.base import ContentGenerator
from services.qwen_adapter.core.llm.exceptions import (
    ConfigurationError,
    MalformedChunkError,
    MissingAPIKeyError,
    QwenAdapterError,
    TransportError,
    TransportTimeoutError,
    UnsupportedCapabilityError,
)
from services.qwen_adapter.core.llm.factory import (
    AuthType,
    ContentGeneratorConfig,
    create_content_generator,
    create_content_generator_config,
)
from services.qwen_adapter.core.llm.qwen_client import QwenContentGenerator
from services.qwen_adapter.core.llm.request_translator import to_wire_request
from services.qwen_adapter.core.llm.response_translator import from_wire_response
from services.qwen_adapter.core.llm.retry import RetryConfig, calculate_delay, is_retryable_error, with_retry
from services.qwen_adapter.core.llm.stream_accumulator import PendingToolCall, StreamAccumulator
from services.qwen_adapter.core.llm.transport import HttpTransport, Transport

__all__ = [
    # Base
    "ContentGenerator",
    "QwenContentGenerator",
    # Translation
    "to_wire_request",
    "from_wire_response",
    "StreamAccumulator",
    "PendingToolCall",
    "repair_arguments",
    "repair_json",
    # Transport
    "Transport",
    "HttpTransport",
    # Factory
    "AuthType",
    "ContentGeneratorConfig",
    "create_content_generator",
    "create_content_generator_config",
    # Errors
    "QwenAdapterError",
    "ConfigurationError",
    "MissingAPIKeyError",
    "TransportError",
    "TransportTimeoutError",
    "MalformedChunkError",
    "UnsupportedCapabilityError",
    # Retry
    "RetryConfig",
    "calculate_delay",
    "is_retryable_error",
    "with_retry",
]
