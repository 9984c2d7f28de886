"""External moderation providers."""

from content_moderation.providers.base import ModerationProvider, ModerationProviderError, ProviderResult

__all__ = ["ModerationProvider", "ModerationProviderError", "ProviderResult"]
