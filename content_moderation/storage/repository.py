"""Persistence interface for media records."""

import copy
from abc import ABC, abstractmethod
from dataclasses import fields
from typing import Any, Optional

from content_moderation.moderation.schema import MediaItem

MEDIA_FIELDS = frozenset(f.name for f in fields(MediaItem))


class MediaRepository(ABC):
    """
    Abstract store for media items.

    Writes to a single record are not serialized here; implementations
    must do so if concurrent processing of one item matters.
    """

    @abstractmethod
    async def load(self, media_id: str) -> Optional[MediaItem]:
        """Return the item or None if it does not exist."""
        raise NotImplementedError

    @abstractmethod
    async def save(self, item: MediaItem) -> MediaItem:
        """Persist the full item and return the stored version."""
        raise NotImplementedError

    @abstractmethod
    async def update(self, media_id: str, **changes: Any) -> Optional[MediaItem]:
        """Set individual fields. Returns None if the item does not exist."""
        raise NotImplementedError


class InMemoryMediaRepository(MediaRepository):
    """
    Dict-backed repository.

    Stores copies so callers never share objects with the store.
    """

    def __init__(self, items: Optional[list[MediaItem]] = None):
        self._items: dict[str, MediaItem] = {}
        for item in items or []:
            self._items[item.id] = copy.deepcopy(item)

    async def load(self, media_id: str) -> Optional[MediaItem]:
        item = self._items.get(media_id)
        return copy.deepcopy(item) if item is not None else None

    async def save(self, item: MediaItem) -> MediaItem:
        self._items[item.id] = copy.deepcopy(item)
        return copy.deepcopy(item)

    async def update(self, media_id: str, **changes: Any) -> Optional[MediaItem]:
        unknown = set(changes) - MEDIA_FIELDS
        if unknown:
            raise ValueError(f"Unknown media fields: {sorted(unknown)}")

        item = self._items.get(media_id)
        if item is None:
            return None
        for name, value in changes.items():
            setattr(item, name, value)
        return copy.deepcopy(item)

    def __len__(self) -> int:
        return len(self._items)
