"""Shared protocol definitions."""

from shared.protocol.common import (
    ErrorCode,
    ErrorInfo,
    FunctionCallId,
    Usage,
)
from shared.protocol.content_models import (
    Content,
    CountTokensResponse,
    FunctionCall,
    FunctionCallPart,
    FunctionResponse,
    FunctionResponsePart,
    GenerateRequest,
    GenerateResponse,
    GenerationConfig,
    Part,
    TextPart,
    ToolDeclaration,
)

__all__ = [
    # Common types
    "FunctionCallId",
    "Usage",
    "ErrorCode",
    "ErrorInfo",
    # Content models
    "Content",
    "Part",
    "TextPart",
    "FunctionCall",
    "FunctionCallPart",
    "FunctionResponse",
    "FunctionResponsePart",
    "ToolDeclaration",
    "GenerationConfig",
    "GenerateRequest",
    "GenerateResponse",
    "CountTokensResponse",
]
