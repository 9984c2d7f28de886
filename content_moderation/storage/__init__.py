"""Media persistence."""

from content_moderation.storage.repository import InMemoryMediaRepository, MediaRepository

__all__ = ["InMemoryMediaRepository", "MediaRepository"]
