"""HTTP transport to the OpenAI-compatible endpoint.

The adapter only depends on the ``Transport`` protocol; ``HttpTransport``
is the httpx-backed implementation used in production. Network and HTTP
failures surface as ``TransportError``. Opening a request is retried with
backoff; an opened stream is never resumed.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Any, Protocol

import httpx
import structlog

from services.qwen_adapter.core.config.constants import DEFAULT_TIMEOUT_SECONDS, LOG_PREVIEW_CHARS
from services.qwen_adapter.core.llm.exceptions import TransportError, TransportTimeoutError
from services.qwen_adapter.core.llm.retry import DEFAULT_RETRY_CONFIG, RetryConfig, with_retry
from services.qwen_adapter.core.llm.sse import iter_sse_payloads

logger = structlog.get_logger(__name__)


class Transport(Protocol):
    """Capability that carries requests to the provider."""

    async def post_json(self, path: str, body: dict[str, Any]) -> dict[str, Any]:
        """POST a JSON body and return the decoded JSON response."""
        ...

    def stream_events(self, path: str, body: dict[str, Any]) -> AsyncGenerator[str, None]:
        """POST a JSON body and yield the SSE data payloads of the response."""
        ...

    async def close(self) -> None:
        """Release network resources."""
        ...


class HttpTransport:
    """Transport implementation backed by httpx.AsyncClient."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        provider: str = "qwen",
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        user_agent: str | None = None,
        extra_headers: dict[str, str] | None = None,
        retry_config: RetryConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._provider = provider
        self._timeout_seconds = timeout_seconds
        self._user_agent = user_agent
        self._extra_headers = extra_headers or {}
        self._retry_config = retry_config or DEFAULT_RETRY_CONFIG
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout_seconds)

    def _headers(self, stream: bool) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._api_key}",
            "X-DashScope-SSE": "enable" if stream else "disable",
        }
        if stream:
            headers["Accept"] = "text/event-stream"
        if self._user_agent:
            headers["User-Agent"] = self._user_agent
        headers.update(self._extra_headers)
        return headers

    def _status_error(self, response: httpx.Response, detail: str) -> TransportError:
        error = TransportError(
            provider=self._provider,
            message=f"({response.status_code}) {detail[:500]}",
            status_code=response.status_code,
        )
        retry_after = response.headers.get("Retry-After")
        if retry_after:
            error.details["retry_after"] = retry_after
        return error

    def _network_error(self, error: httpx.HTTPError) -> TransportError:
        if isinstance(error, httpx.TimeoutException):
            return TransportTimeoutError(self._provider, self._timeout_seconds)
        return TransportError(
            provider=self._provider,
            message=f"{type(error).__name__}: {error}",
            retryable=isinstance(error, httpx.TransportError),
        )

    async def post_json(self, path: str, body: dict[str, Any]) -> dict[str, Any]:
        url = f"{self._base_url}{path}"

        @with_retry(self._retry_config, operation="post_json")
        async def _post() -> httpx.Response:
            try:
                response = await self._client.post(url, json=body, headers=self._headers(stream=False))
            except httpx.HTTPError as e:
                raise self._network_error(e) from e
            if response.is_error:
                raise self._status_error(response, response.text)
            return response

        response = await _post()
        try:
            data = response.json()
        except ValueError as e:
            raise TransportError(
                provider=self._provider,
                message=f"response is not JSON: {response.text[:LOG_PREVIEW_CHARS]}",
                status_code=response.status_code,
            ) from e

        if not isinstance(data, dict):
            raise TransportError(self._provider, "response is not a JSON object", response.status_code)
        if data.get("code") and str(data["code"]) != "200":
            raise TransportError(
                provider=self._provider,
                message=str(data.get("message") or "Unknown error"),
                status_code=response.status_code,
            )
        return data

    async def stream_events(self, path: str, body: dict[str, Any]) -> AsyncGenerator[str, None]:
        url = f"{self._base_url}{path}"
        request = self._client.build_request("POST", url, json=body, headers=self._headers(stream=True))

        @with_retry(self._retry_config, operation="open_stream")
        async def _open() -> httpx.Response:
            try:
                response = await self._client.send(request, stream=True)
            except httpx.HTTPError as e:
                raise self._network_error(e) from e
            if response.is_error:
                detail = (await response.aread()).decode("utf-8", errors="replace")
                await response.aclose()
                raise self._status_error(response, detail)
            return response

        response = await _open()
        logger.debug("stream_opened", provider=self._provider, status_code=response.status_code)
        try:
            async for payload in iter_sse_payloads(response.aiter_lines()):
                yield payload
        except httpx.HTTPError as e:
            raise self._network_error(e) from e
        finally:
            await response.aclose()

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()
