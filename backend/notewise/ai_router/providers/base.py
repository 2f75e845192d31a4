"""Abstract base class for all AI providers.

Each provider (OpenAI, Anthropic) implements this interface to plug
into the :class:`~notewise.ai_router.router.AIRouter`.

Usage:
    class OpenAIProvider(AIProvider):
        async def chat(self, messages, model, **kwargs) -> AIResponse:
            ...
        def available_models(self) -> list[ModelInfo]:
            ...
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from notewise.ai_router.schemas import AIResponse, Message, ModelInfo


class AIProvider(ABC):
    """Interface every AI provider implements."""

    name: str

    @abstractmethod
    async def chat(
        self,
        messages: list[Message],
        model: str,
        **kwargs: Any,
    ) -> AIResponse:
        """Send a chat request and return a complete response.

        Args:
            messages: The prompt as a list of Messages.
            model: The model identifier to use.
            **kwargs: Additional provider-specific parameters
                      (e.g., temperature, max_tokens).

        Returns:
            AIResponse with the generated content and metadata.

        Raises:
            ProviderError: If the provider request fails.
        """
        ...

    @abstractmethod
    def available_models(self) -> list[ModelInfo]:
        """Return the list of models available from this provider."""
        ...
