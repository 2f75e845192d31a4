"""AI provider implementations."""

from notewise.ai_router.providers.anthropic import AnthropicProvider
from notewise.ai_router.providers.openai import OpenAIProvider

__all__ = ["AnthropicProvider", "OpenAIProvider"]
