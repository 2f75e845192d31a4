"""AI Router - unified interface for routing requests to AI providers.

The router is built from an explicit :class:`~notewise.config.Settings`
value: every provider whose API key is configured is registered, and the
first registered provider serves requests that do not name a model.

Usage:
    router = AIRouter.from_settings(get_settings())
    response = await router.chat(AIRequest(messages=[...], model="gpt-4o-mini"))
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from notewise.ai_router.providers.anthropic import AnthropicProvider
from notewise.ai_router.providers.base import AIProvider
from notewise.ai_router.providers.openai import OpenAIProvider
from notewise.ai_router.schemas import (
    AIRequest,
    AIResponse,
    ModelInfo,
    ProviderError,
)
from notewise.config import Settings

logger = logging.getLogger(__name__)

# (settings attribute holding the key, provider name, factory)
_PROVIDER_REGISTRY: list[tuple[str, str, Callable[[str], AIProvider]]] = [
    ("OPENAI_API_KEY", "openai", OpenAIProvider),
    ("ANTHROPIC_API_KEY", "anthropic", AnthropicProvider),
]


class AIRouter:
    """Manages AI providers behind one interface.

    Attributes:
        _providers: Internal dict mapping provider names to AIProvider instances.
        _default_model: Model used when a request does not name one.
    """

    def __init__(
        self,
        providers: dict[str, AIProvider] | None = None,
        *,
        default_model: str | None = None,
    ) -> None:
        self._providers: dict[str, AIProvider] = dict(providers or {})
        self._default_model = default_model

    @classmethod
    def from_settings(cls, settings: Settings) -> AIRouter:
        """Build a router with every provider whose API key is configured.

        A provider whose construction fails is logged and skipped.
        """
        providers: dict[str, AIProvider] = {}
        for attr, name, factory in _PROVIDER_REGISTRY:
            api_key = getattr(settings, attr, "")
            if not api_key:
                continue
            try:
                providers[name] = factory(api_key)
                logger.info("Configured AI provider: %s", name)
            except Exception:
                logger.warning(
                    "Failed to initialize provider %s (key present but init failed)",
                    name,
                    exc_info=True,
                )
        if not providers:
            logger.warning("No AI provider configured; AI endpoints will fail")
        return cls(providers, default_model=settings.AI_DEFAULT_MODEL)

    # ------------------------------------------------------------------
    # Provider management
    # ------------------------------------------------------------------

    def register_provider(self, name: str, provider: AIProvider) -> None:
        """Register (or replace) a provider under ``name``."""
        self._providers[name] = provider

    def get_provider(self, provider_name: str) -> AIProvider:
        """Retrieve a registered provider by name.

        Raises:
            ProviderError: If no provider is registered under that name.
        """
        if provider_name not in self._providers:
            raise ProviderError(
                provider=provider_name,
                message=f"Provider '{provider_name}' is not registered. "
                f"Available: {', '.join(self._providers) or 'none'}",
            )
        return self._providers[provider_name]

    def available_providers(self) -> list[str]:
        return list(self._providers.keys())

    def all_models(self) -> list[ModelInfo]:
        models: list[ModelInfo] = []
        for provider in self._providers.values():
            models.extend(provider.available_models())
        return models

    def resolve_model(self, model: str | None = None) -> tuple[str, AIProvider]:
        """Find the provider that serves a given model.

        Args:
            model: Model identifier.  When *None*, the configured default
                model is used, or else the first provider's first model.

        Returns:
            A tuple of (model_id, provider_instance).

        Raises:
            ProviderError: If no providers are registered or the model
                cannot be found in any provider.
        """
        if not self._providers:
            raise ProviderError(
                provider="router",
                message="No AI providers are registered. "
                "Set OPENAI_API_KEY or ANTHROPIC_API_KEY.",
            )

        model = model or self._default_model
        if model is None:
            first_provider_name = next(iter(self._providers))
            first_provider = self._providers[first_provider_name]
            models = first_provider.available_models()
            if not models:
                raise ProviderError(
                    provider=first_provider_name,
                    message="Provider has no available models.",
                )
            return models[0].id, first_provider

        for provider in self._providers.values():
            for model_info in provider.available_models():
                if model_info.id == model:
                    return model, provider

        available_ids = [m.id for m in self.all_models()]
        raise ProviderError(
            provider="router",
            message=f"Model '{model}' not found. Available models: "
            f"{', '.join(available_ids) or 'none'}",
        )

    async def chat(self, request: AIRequest) -> AIResponse:
        """Send a completion request to the provider serving ``request.model``.

        Raises:
            ProviderError: If the model or provider cannot be resolved,
                or the underlying provider call fails.
        """
        model_name, provider = self.resolve_model(request.model)

        kwargs: dict[str, Any] = {
            "temperature": request.temperature,
            "max_tokens": request.max_tokens,
        }
        logger.debug("AI request: model=%s, messages=%d", model_name, len(request.messages))

        return await provider.chat(
            messages=request.messages,
            model=model_name,
            **kwargs,
        )
