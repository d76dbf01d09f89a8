"""Credentials for the provider transport.

DashScope's compatible mode authenticates with a bearer API key; the
``CredentialProvider`` protocol keeps the generator independent of where
that key comes from.
"""

from __future__ import annotations

from typing import Any, Protocol

from services.qwen_adapter.core.llm.exceptions import MissingAPIKeyError


class CredentialProvider(Protocol):
    """Source of transport credentials, e.g. ``{"api_key": ...}``."""

    def get_credentials(self) -> dict[str, Any]: ...


class APIKeyCredentialProvider:
    """Static API key, validated at construction.

    Args:
        api_key: Bearer key; empty or None is rejected.
        provider: Provider name reported in the error.
        key_name: Environment variable the user should set.

    Raises:
        MissingAPIKeyError: If ``api_key`` is empty.
    """

    def __init__(self, api_key: str | None, provider: str = "qwen", key_name: str = "QWEN_API_KEY") -> None:
        if not api_key:
            raise MissingAPIKeyError(provider, key_name)
        self._api_key = api_key

    def get_credentials(self) -> dict[str, Any]:
        # Fresh dict per call.
        return {"api_key": self._api_key}
