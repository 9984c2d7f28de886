"""Shared fixtures."""

import pytest
from fakes import FailingProvider, StaticProvider, aws_entry

from content_moderation.moderation.schema import MediaItem
from content_moderation.providers.base import ModerationProviderError
from content_moderation.storage.repository import InMemoryMediaRepository


@pytest.fixture
def nudity_provider():
    return StaticProvider(entries=[aws_entry(("Explicit Nudity", 95))])


@pytest.fixture
def unreachable_provider():
    return FailingProvider(ModerationProviderError("connection refused"))


@pytest.fixture
def broken_provider():
    return FailingProvider(RuntimeError("unexpected payload"))


@pytest.fixture
def video_item():
    return MediaItem(
        id="vid-1",
        title="Zombie Graveyard Horror Nightmare",
        description="",
        filepath="uploads/videos/zombie.mp4",
        resource_type="video",
    )


@pytest.fixture
def photo_item():
    return MediaItem(
        id="img-1",
        title="Sunset over the lake",
        description="Golden hour",
        filepath="uploads/photos/sunset.jpg",
        resource_type="image",
    )


@pytest.fixture
def repository(video_item, photo_item):
    return InMemoryMediaRepository([video_item, photo_item])
