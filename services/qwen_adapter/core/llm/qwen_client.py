"""Qwen content generator: the agent-facing side of the protocol adapter.

Non-streaming: request translation -> transport POST -> response translation.
Streaming: request translation -> transport SSE stream -> one fresh
StreamAccumulator per call, fed every decoded event in arrival order; its
emissions are forwarded in the order produced.
"""

import asyncio
from collections.abc import AsyncGenerator
from contextlib import aclosing
from typing import Any

import structlog

from services.qwen_adapter.core.config.constants import CHAT_COMPLETIONS_PATH, LOG_PREVIEW_CHARS
from services.qwen_adapter.core.config.settings import Settings, get_settings
from services.qwen_adapter.core.llm.base import ContentGenerator
from services.qwen_adapter.core.llm.credentials import APIKeyCredentialProvider, CredentialProvider
from services.qwen_adapter.core.llm.exceptions import MalformedChunkError, UnsupportedCapabilityError
from services.qwen_adapter.core.llm.request_translator import to_wire_request
from services.qwen_adapter.core.llm.response_translator import from_wire_response
from services.qwen_adapter.core.llm.retry import RetryConfig
from services.qwen_adapter.core.llm.sse import DONE, decode_event
from services.qwen_adapter.core.llm.stream_accumulator import StreamAccumulator
from services.qwen_adapter.core.llm.transport import HttpTransport, Transport
from shared.protocol.content_models import CountTokensResponse, GenerateRequest, GenerateResponse
from shared.validators.id_generators import generate_correlation_id

logger = structlog.get_logger(__name__)


class QwenContentGenerator(ContentGenerator):
    """Content generator backed by Qwen's OpenAI-compatible API."""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        settings: Settings | None = None,
        transport: Transport | None = None,
    ):
        """Initialize the generator.

        Args:
            api_key: DashScope API key. Defaults to settings.qwen.api_key.
            base_url: Endpoint base URL. Defaults to settings.qwen.base_url.
            settings: Application settings. Uses get_settings() if not provided.
            transport: Pre-built transport (tests, custom networking).

        Raises:
            MissingAPIKeyError: If no transport is given and no API key is configured.
        """
        self._settings = settings or get_settings()
        self._api_key = api_key or self._settings.qwen.api_key
        self._base_url = base_url or self._settings.qwen.base_url
        self._client_instance: Transport | None = transport
        if transport is None:
            # Fail at construction rather than on the first request.
            self._get_credential_provider()

    def _get_endpoint(self) -> str:
        return self._base_url

    def _get_credential_provider(self) -> CredentialProvider:
        return APIKeyCredentialProvider(self._api_key, provider="qwen", key_name="QWEN_API_KEY")

    def _create_client_instance(self, credentials: dict[str, Any], endpoint: str) -> HttpTransport:
        transport = HttpTransport(
            base_url=endpoint,
            api_key=credentials["api_key"],
            provider="qwen",
            timeout_seconds=self._settings.qwen.timeout_seconds,
            user_agent=self._settings.user_agent,
            retry_config=RetryConfig.from_settings(self._settings.retry),
        )
        logger.info("qwen_transport_initialized", base_url=endpoint)
        return transport

    async def generate(self, request: GenerateRequest) -> GenerateResponse:
        """Generate a complete response from Qwen."""
        body = to_wire_request(request, stream=False)
        logger.debug(
            "qwen_generate",
            model=request.model,
            messages=len(body["messages"]),
            tools=len(body.get("tools") or []),
        )
        payload = await self.client.post_json(CHAT_COMPLETIONS_PATH, body)
        return from_wire_response(payload, model_name=request.model)

    async def generate_stream(self, request: GenerateRequest) -> AsyncGenerator[GenerateResponse, None]:
        """Generate a streaming response from Qwen."""
        body = to_wire_request(request, stream=True)
        correlation_id = generate_correlation_id()
        log = logger.bind(correlation_id=correlation_id, model=request.model)
        accumulator = StreamAccumulator(model_name=request.model, correlation_id=correlation_id)

        log.debug("qwen_generate_stream", messages=len(body["messages"]), tools=len(body.get("tools") or []))
        try:
            async with aclosing(self.client.stream_events(CHAT_COMPLETIONS_PATH, body)) as events:
                async for payload in events:
                    if payload == DONE:
                        break
                    try:
                        chunk = decode_event(payload)
                    except MalformedChunkError as e:
                        log.warning(
                            "malformed_chunk_skipped",
                            reason=e.details.get("reason"),
                            payload=payload[:LOG_PREVIEW_CHARS],
                        )
                        continue
                    for response in accumulator.feed(chunk):
                        yield response
        except (Exception, asyncio.CancelledError) as e:
            log.warning("qwen_stream_failed", error=str(e)[:LOG_PREVIEW_CHARS], error_type=type(e).__name__)
            for response in accumulator.abort():
                yield response
            raise

        for response in accumulator.finish():
            yield response

    async def count_tokens(self, request: GenerateRequest) -> CountTokensResponse:
        """Count tokens for a request.

        The compatible-mode endpoint has no token counting API; real usage is
        reported on each generate response instead.
        """
        logger.debug("qwen_count_tokens_unavailable", model=request.model)
        return CountTokensResponse(total_tokens=0, cached_content_token_count=0)

    async def embed_content(self, request: Any) -> Any:
        """Qwen's compatible mode offers no embeddings through this adapter."""
        raise UnsupportedCapabilityError(
            capability="embedding",
            provider="qwen",
            hint="Please use a different provider for embedding functionality.",
        )

    async def close(self) -> None:
        """Close the transport."""
        if self._client_instance is not None:
            await self._client_instance.close()
            self._client_instance = None
            logger.info("qwen_transport_closed")
