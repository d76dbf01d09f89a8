"""Generic content models spoken by the agent.

The agent describes conversations as ``Content`` objects made of tagged
parts (text, function calls, function responses). The adapter translates
these to and from the OpenAI-compatible wire format.
"""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from shared.protocol.common import FunctionCallId, Usage

Role = Literal["system", "user", "assistant", "model"]


class FunctionCall(BaseModel):
    """A finalized tool invocation handed to the agent's tool loop."""

    model_config = ConfigDict(extra="forbid")

    id: FunctionCallId
    name: Annotated[str, Field(min_length=1)]
    args: dict[str, Any] = Field(default_factory=dict)


class FunctionResponse(BaseModel):
    """Result of a tool execution, fed back on the next turn."""

    model_config = ConfigDict(extra="forbid")

    id: str | None = None
    name: str | None = None
    result: Any = None


class TextPart(BaseModel):
    """Plain text part."""

    model_config = ConfigDict(extra="forbid")

    type: Literal["text"] = "text"
    text: str


class FunctionCallPart(BaseModel):
    """Part carrying a function call requested by the model."""

    model_config = ConfigDict(extra="forbid")

    type: Literal["function_call"] = "function_call"
    function_call: FunctionCall


class FunctionResponsePart(BaseModel):
    """Part carrying the result of a previously requested function call."""

    model_config = ConfigDict(extra="forbid")

    type: Literal["function_response"] = "function_response"
    function_response: FunctionResponse


Part = Annotated[TextPart | FunctionCallPart | FunctionResponsePart, Field(discriminator="type")]


class Content(BaseModel):
    """One conversational message in the generic format."""

    model_config = ConfigDict(extra="forbid")

    role: Role
    parts: list[Part] = Field(default_factory=list)

    @classmethod
    def from_text(cls, role: Role, text: str) -> "Content":
        """Build a single-part text message."""
        return cls(role=role, parts=[TextPart(text=text)])

    def is_function_response(self) -> bool:
        """True when every part is a function response."""
        return bool(self.parts) and all(isinstance(p, FunctionResponsePart) for p in self.parts)


class ToolDeclaration(BaseModel):
    """A tool the model may call."""

    model_config = ConfigDict(extra="forbid")

    name: Annotated[str, Field(min_length=1)]
    description: str = ""
    parameters: dict[str, Any] | None = None  # JSON Schema


class GenerationConfig(BaseModel):
    """Sampling parameters. Unset values are not sent."""

    model_config = ConfigDict(extra="forbid")

    temperature: float | None = None
    top_p: float | None = None
    max_tokens: Annotated[int, Field(ge=1)] | None = None
    stop_sequences: list[str] | None = None


class GenerateRequest(BaseModel):
    """A generation request in the generic format."""

    model_config = ConfigDict(extra="forbid")

    model: Annotated[str, Field(min_length=1)]
    messages: list[Content]
    tools: list[ToolDeclaration] | None = None
    generation_config: GenerationConfig = Field(default_factory=GenerationConfig)
    json_mode: bool = False
    json_schema: dict[str, Any] | None = None
    enable_thinking: bool | None = None  # None: caller did not supply it


class GenerateResponse(BaseModel):
    """A complete response, or one streamed fragment of a response."""

    model_config = ConfigDict(extra="forbid")

    parts: list[Part] = Field(default_factory=list)
    function_calls: list[FunctionCall] = Field(default_factory=list)
    finish_reason: str | None = None
    usage: Usage | None = None

    @property
    def text(self) -> str:
        """Concatenated text of all text parts."""
        return "".join(p.text for p in self.parts if isinstance(p, TextPart))


class CountTokensResponse(BaseModel):
    """Token count for a request."""

    model_config = ConfigDict(extra="forbid")

    total_tokens: Annotated[int, Field(ge=0)] = 0
    cached_content_token_count: Annotated[int, Field(ge=0)] = 0
