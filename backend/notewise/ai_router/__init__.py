"""AI Router - unified interface over the configured completion providers."""

from notewise.ai_router.router import AIRouter

__all__ = ["AIRouter"]
