"""Custom exception hierarchy for the Qwen adapter.

Only TransportError and UnsupportedCapabilityError cross the adapter's
boundary during generation. MalformedChunkError is raised by the SSE
decoder and absorbed by the streaming loop; argument parse failures never
raise at all.
"""

from typing import Any

from shared.protocol.common import ErrorCode, ErrorInfo


class QwenAdapterError(Exception):
    """Base exception for all adapter errors."""

    def __init__(
        self,
        message: str,
        code: str = ErrorCode.ADAPTER_ERROR.value,
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.retryable = retryable

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return ErrorInfo(
            code=self.code,
            message=self.message,
            retryable=self.retryable,
            details=self.details,
        ).model_dump()


class ConfigurationError(QwenAdapterError):
    """Error in adapter configuration."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            code=ErrorCode.CONFIGURATION_ERROR.value,
            details=details,
            retryable=False,
        )


class MissingAPIKeyError(ConfigurationError):
    """Required API key is missing."""

    def __init__(self, provider: str, key_name: str):
        super().__init__(
            message=f"No API key configured for {provider}; set {key_name}",
            details={"provider": provider, "key_name": key_name},
        )
        self.code = ErrorCode.MISSING_API_KEY.value
        self.provider = provider
        self.key_name = key_name


class TransportError(QwenAdapterError):
    """Network or HTTP failure talking to the provider."""

    def __init__(
        self,
        provider: str,
        message: str,
        status_code: int | None = None,
        retryable: bool = False,
    ):
        super().__init__(
            message=f"{provider} API error: {message}",
            code=ErrorCode.TRANSPORT_ERROR.value,
            details={"provider": provider, "status_code": status_code},
            retryable=retryable,
        )
        self.provider = provider
        self.status_code = status_code


class TransportTimeoutError(TransportError):
    """Provider request timed out."""

    def __init__(self, provider: str, timeout_seconds: float):
        super().__init__(
            provider=provider,
            message=f"request timed out after {timeout_seconds}s",
            retryable=True,
        )
        self.code = ErrorCode.TRANSPORT_TIMEOUT.value
        self.details["timeout_seconds"] = timeout_seconds
        self.timeout_seconds = timeout_seconds


class MalformedChunkError(QwenAdapterError):
    """A streamed data payload is not a JSON object."""

    def __init__(self, payload: str, reason: str):
        super().__init__(
            message=f"Malformed stream chunk: {reason}",
            code=ErrorCode.MALFORMED_CHUNK.value,
            details={"payload_length": len(payload), "reason": reason},
            retryable=False,
        )
        self.payload = payload


class UnsupportedCapabilityError(QwenAdapterError):
    """The provider does not offer the requested capability."""

    def __init__(self, capability: str, provider: str, hint: str | None = None):
        message = f"{capability} is not supported by {provider}"
        if hint:
            message = f"{message}. {hint}"
        super().__init__(
            message=message,
            code=ErrorCode.UNSUPPORTED_CAPABILITY.value,
            details={"capability": capability, "provider": provider},
            retryable=False,
        )
        self.capability = capability
        self.provider = provider
