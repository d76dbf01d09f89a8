"""Content generator interface.

The agent talks to every model provider through ``ContentGenerator``:
generate, generate-stream, token counting and embeddings. Generators that
own a network transport build it lazily, on first use of ``client``, from
three hooks: credentials, endpoint, then the transport itself.
"""

from abc import ABC, abstractmethod
from collections.abc import AsyncGenerator
from typing import TYPE_CHECKING, Any

from shared.protocol.content_models import CountTokensResponse, GenerateRequest, GenerateResponse

if TYPE_CHECKING:
    from services.qwen_adapter.core.llm.credentials import CredentialProvider


class ContentGenerator(ABC):
    """Abstract base class for content generators.

    Subclasses that want lazy transport construction override
    ``_get_credential_provider``, ``_get_endpoint`` and
    ``_create_client_instance``; a transport injected up front (tests,
    custom networking) is stored in ``_client_instance`` and bypasses the
    hooks entirely.
    """

    _client_instance: Any = None

    def _get_endpoint(self) -> str:
        """Base URL the transport should talk to."""
        return ""

    def _get_credential_provider(self) -> "CredentialProvider | None":
        """Credential source for the transport; None opts out of lazy construction."""
        return None

    def _create_client_instance(self, credentials: dict[str, Any], endpoint: str) -> Any:
        """Build the transport from resolved credentials and endpoint."""
        raise NotImplementedError(f"{type(self).__name__} does not build its own transport")

    def _initialize_client(self) -> Any:
        credential_provider = self._get_credential_provider()
        if credential_provider is None:
            raise NotImplementedError(
                f"{type(self).__name__} has no transport: inject one or implement _get_credential_provider()"
            )
        credentials = credential_provider.get_credentials()
        return self._create_client_instance(credentials, self._get_endpoint())

    @property
    def client(self) -> Any:
        """The transport, built on first access."""
        if self._client_instance is None:
            self._client_instance = self._initialize_client()
        return self._client_instance

    @abstractmethod
    async def generate(self, request: GenerateRequest) -> GenerateResponse:
        """Generate a complete response for ``request``."""
        ...

    @abstractmethod
    def generate_stream(self, request: GenerateRequest) -> AsyncGenerator[GenerateResponse, None]:
        """Stream a response for ``request``.

        Yields text fragments as they arrive, and at most one response
        carrying the turn's function calls.
        """
        ...

    @abstractmethod
    async def count_tokens(self, request: GenerateRequest) -> CountTokensResponse:
        """Count the tokens of a request."""
        ...

    @abstractmethod
    async def embed_content(self, request: Any) -> Any:
        """Embed content."""
        ...

    @abstractmethod
    async def close(self) -> None:
        """Release the transport."""
        ...
