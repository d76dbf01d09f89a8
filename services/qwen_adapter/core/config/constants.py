"""Application constants and configuration defaults for the Qwen adapter.

This module centralizes all hardcoded values for the adapter.
"""

from enum import Enum
from typing import Final

# =============================================================================
# Provider Identification
# =============================================================================


class ProviderID(str, Enum):
    """Enumeration of model providers the agent can be pointed at.

    Using str as base allows direct comparison with strings and serialization.
    """

    QWEN = "qwen"
    GEMINI = "gemini"
    UNKNOWN = "unknown"


# =============================================================================
# Endpoint Configuration
# =============================================================================

#: DashScope OpenAI-compatible endpoint
DEFAULT_QWEN_BASE_URL: Final[str] = "https://dashscope.aliyuncs.com/compatible-mode/v1"

#: Path of the chat completions resource, relative to the base URL
CHAT_COMPLETIONS_PATH: Final[str] = "/chat/completions"

#: Timeout for API calls (seconds)
DEFAULT_TIMEOUT_SECONDS: Final[float] = 120.0

# =============================================================================
# Models
# =============================================================================

DEFAULT_QWEN_MODEL: Final[str] = "qwen-max"
DEFAULT_GEMINI_MODEL: Final[str] = "gemini-2.5-pro"
DEFAULT_GEMINI_FLASH_MODEL: Final[str] = "gemini-2.5-flash"

# =============================================================================
# Retry Configuration (connection opening only)
# =============================================================================

#: HTTP status codes that should trigger a retry
#: 429 = Rate Limited, 5xx = Server Errors
RETRYABLE_STATUS_CODES: Final[frozenset[int]] = frozenset({429, 500, 502, 503, 504})

#: Default maximum number of attempts to open a connection
DEFAULT_MAX_RETRIES: Final[int] = 3

# =============================================================================
# Wire Protocol
# =============================================================================

#: SSE payload that terminates a streaming response
SSE_DONE_SENTINEL: Final[str] = "[DONE]"

#: Prefix of SSE data lines
SSE_DATA_PREFIX: Final[str] = "data:"

#: Key under which unparseable tool arguments are handed to the agent
RAW_ARGUMENTS_KEY: Final[str] = "_raw_arguments"

#: Finish reason used when the provider does not report one
DEFAULT_FINISH_REASON: Final[str] = "stop"

#: Maximum characters of a payload echoed into log events
LOG_PREVIEW_CHARS: Final[int] = 200
