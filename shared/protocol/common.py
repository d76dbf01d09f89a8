"""Common protocol types shared by the adapter and its callers."""

from enum import Enum
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field

# Accept any non-empty identifier: provider ids (call_...), synthesized
# slot ids (<name>-slot-<n>) and ulid-suffixed ids (<name>-<ulid>).
FunctionCallId = Annotated[str, Field(min_length=1)]


class Usage(BaseModel):
    """Token usage metrics."""

    model_config = ConfigDict(extra="forbid")

    input_tokens: Annotated[int, Field(ge=0)]
    output_tokens: Annotated[int, Field(ge=0)]
    total_tokens: Annotated[int, Field(ge=0)] | None = None
    model_name: Annotated[str, Field(min_length=1)]


class ErrorCode(str, Enum):
    """Predefined error codes."""

    ADAPTER_ERROR = "ADAPTER_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    MISSING_API_KEY = "MISSING_API_KEY"
    TRANSPORT_ERROR = "TRANSPORT_ERROR"
    TRANSPORT_TIMEOUT = "TRANSPORT_TIMEOUT"
    MALFORMED_CHUNK = "MALFORMED_CHUNK"
    UNSUPPORTED_CAPABILITY = "UNSUPPORTED_CAPABILITY"


class ErrorInfo(BaseModel):
    """Error information structure."""

    model_config = ConfigDict(extra="forbid")

    code: str  # Can be ErrorCode or custom pattern ^[A-Z0-9_]+$
    message: Annotated[str, Field(min_length=1)]
    retryable: bool | None = None
    details: dict[str, Any] | None = None
