"""Legacy random processing mode."""

import asyncio
import random

import pytest
from fakes import RecordingRepository

from content_moderation.moderation.schema import (
    ContentRating,
    MediaItem,
    ProcessingStatus,
    SensitivityStatus,
)
from content_moderation.processing.simulated import SimulatedMediaProcessor


class FixedRandom(random.Random):
    def __init__(self, value):
        super().__init__(0)
        self.value = value

    def random(self):
        return self.value


@pytest.fixture
def repo():
    return RecordingRepository([
        MediaItem(id="v1", title="Clip", filepath="uploads/clip.mp4"),
        MediaItem(id="v2", title="Clip with duration", filepath="uploads/clip2.mp4", duration=42),
    ])


def run(processor, media_id):
    return asyncio.run(processor.process(media_id))


def test_low_draw_is_safe(repo):
    processor = SimulatedMediaProcessor(repo, rng=FixedRandom(0.1), step_delay=0)

    result = run(processor, "v1")

    assert result.success is True
    assert result.item.sensitivity_status == SensitivityStatus.SAFE
    assert result.item.content_rating == ContentRating.PUBLIC
    assert result.item.processing_status == ProcessingStatus.COMPLETED


def test_high_draw_is_flagged(repo):
    processor = SimulatedMediaProcessor(repo, rng=FixedRandom(0.95), step_delay=0)

    result = run(processor, "v1")

    assert result.item.sensitivity_status == SensitivityStatus.FLAGGED
    assert result.item.content_rating == ContentRating.ADULT


def test_progress_steps(repo):
    processor = SimulatedMediaProcessor(repo, rng=random.Random(7), total_steps=4, step_delay=0)

    run(processor, "v1")

    assert repo.progress_log == [0, 25, 50, 75, 100, 100]


def test_duration_only_filled_when_missing(repo):
    processor = SimulatedMediaProcessor(repo, rng=random.Random(3), step_delay=0)

    filled = run(processor, "v1").item
    kept = run(processor, "v2").item

    assert 30 <= filled.duration <= 599
    assert kept.duration == 42


def test_missing_item(repo):
    processor = SimulatedMediaProcessor(repo, step_delay=0)
    assert run(processor, "nope").success is False


def test_failure_marks_item_failed():
    repo = RecordingRepository([MediaItem(id="v1", title="Clip", filepath="x.mp4")], fail_on_save=3)
    processor = SimulatedMediaProcessor(repo, step_delay=0)

    result = run(processor, "v1")

    assert result.success is False
    assert asyncio.run(repo.load("v1")).processing_status == ProcessingStatus.FAILED


def test_invalid_arguments():
    with pytest.raises(ValueError):
        SimulatedMediaProcessor(RecordingRepository(), total_steps=0)
    with pytest.raises(ValueError):
        SimulatedMediaProcessor(RecordingRepository(), safe_probability=1.5)
