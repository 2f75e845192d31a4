"""Pydantic v2 schemas for the AI Router.

Defines the data structures shared by every AI provider:
- Message: Chat message with role and content
- ModelInfo: Available model metadata
- AIRequest: Unified completion request
- AIResponse: Unified completion response
- TokenUsage: Token consumption tracking
- ProviderError / ParseError: failures of the provider call or of its output
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel


class Message(BaseModel):
    """A single chat message.

    Attributes:
        role: The role of the message sender (system, user, or assistant).
        content: The text content of the message.
    """

    role: Literal["system", "user", "assistant"]
    content: str


class ModelInfo(BaseModel):
    """Metadata about an available AI model.

    Attributes:
        id: Unique model identifier used in API calls (e.g., "gpt-4o-mini").
        name: Human-readable display name.
        provider: Provider name (e.g., "openai", "anthropic").
        max_tokens: Maximum context window size in tokens.
    """

    id: str
    name: str
    provider: str
    max_tokens: int


class TokenUsage(BaseModel):
    prompt_tokens: int
    completion_tokens: int
    total_tokens: int


class AIRequest(BaseModel):
    """Unified request schema for a single completion.

    Attributes:
        messages: List of chat messages forming the prompt.
        model: Model identifier. None means the router's default.
        temperature: Sampling temperature (0.0 = deterministic, 1.0 = creative).
        max_tokens: Maximum tokens to generate in the response.
    """

    messages: list[Message]
    model: str | None = None
    temperature: float = 0.7
    max_tokens: int = 1024


class AIResponse(BaseModel):
    """Unified response schema from AI providers."""

    content: str
    model: str
    provider: str
    usage: TokenUsage | None = None
    finish_reason: str = "stop"


class ProviderError(Exception):
    """Raised when an AI provider request fails.

    Attributes:
        provider: The provider that raised the error.
        message: Human-readable error description.
        status_code: Optional HTTP status code from the provider.
    """

    def __init__(
        self,
        provider: str,
        message: str,
        status_code: int | None = None,
    ) -> None:
        self.provider = provider
        self.message = message
        self.status_code = status_code
        super().__init__(f"[{provider}] {message}" + (f" (HTTP {status_code})" if status_code else ""))


class ParseError(ValueError):
    """Raised when model output does not have the expected structure.

    Attributes:
        raw: The text returned by the model (kept for logging).
    """

    def __init__(self, message: str, raw: str = "") -> None:
        self.raw = raw
        super().__init__(message)
