"""Anthropic (Claude) AI provider.

Integrates with the Anthropic Messages API via the official ``anthropic``
Python SDK.
"""

from __future__ import annotations

from typing import Any

import anthropic

from notewise.ai_router.providers.base import AIProvider
from notewise.ai_router.schemas import AIResponse, Message, ModelInfo, ProviderError, TokenUsage

# Anthropic requires max_tokens on every request
_DEFAULT_MAX_TOKENS = 1024


class AnthropicProvider(AIProvider):
    """AI provider backed by Anthropic's Claude models.

    Args:
        api_key: Anthropic API key.

    Raises:
        ProviderError: If the API key is empty.
    """

    name = "anthropic"

    def __init__(self, api_key: str) -> None:
        if not api_key:
            raise ProviderError(provider="anthropic", message="API key is required.")
        self._client = anthropic.AsyncAnthropic(api_key=api_key)

    @staticmethod
    def _separate_system_messages(
        messages: list[Message],
    ) -> tuple[str | anthropic.NotGiven, list[dict[str, str]]]:
        """Split system messages off; Anthropic takes them as a top-level parameter."""
        system_parts: list[str] = []
        api_messages: list[dict[str, str]] = []

        for msg in messages:
            if msg.role == "system":
                system_parts.append(msg.content)
            else:
                api_messages.append({"role": msg.role, "content": msg.content})

        system_text: str | anthropic.NotGiven = (
            "\n\n".join(system_parts) if system_parts else anthropic.NOT_GIVEN
        )
        return system_text, api_messages

    async def chat(
        self,
        messages: list[Message],
        model: str,
        **kwargs: Any,
    ) -> AIResponse:
        """Send a chat request and return a complete response.

        Raises:
            ProviderError: On any Anthropic API error.
        """
        system_text, api_messages = self._separate_system_messages(messages)
        max_tokens = kwargs.pop("max_tokens", _DEFAULT_MAX_TOKENS)

        try:
            response = await self._client.messages.create(
                model=model,
                messages=api_messages,
                system=system_text,
                max_tokens=max_tokens,
                **kwargs,
            )
        except anthropic.APIStatusError as exc:
            raise ProviderError(
                provider="anthropic",
                message=str(exc.message),
                status_code=exc.response.status_code,
            ) from exc
        except anthropic.APIError as exc:
            raise ProviderError(
                provider="anthropic",
                message=str(exc.message),
            ) from exc

        text = "".join(block.text for block in response.content if getattr(block, "type", "") == "text")
        usage = TokenUsage(
            prompt_tokens=response.usage.input_tokens,
            completion_tokens=response.usage.output_tokens,
            total_tokens=response.usage.input_tokens + response.usage.output_tokens,
        )

        return AIResponse(
            content=text,
            model=response.model,
            provider="anthropic",
            usage=usage,
            finish_reason=response.stop_reason or "stop",
        )

    def available_models(self) -> list[ModelInfo]:
        """Return the list of supported Claude models."""
        return [
            ModelInfo(
                id="claude-3-5-haiku-latest",
                name="Claude 3.5 Haiku",
                provider="anthropic",
                max_tokens=200_000,
            ),
            ModelInfo(
                id="claude-sonnet-4-0",
                name="Claude Sonnet 4",
                provider="anthropic",
                max_tokens=200_000,
            ),
        ]
