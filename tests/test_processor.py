"""Staged processing and persistence write-back."""

import asyncio

import pytest
from fakes import RecordingRepository

from content_moderation.moderation.moderator import ContentModerator
from content_moderation.moderation.schema import (
    ContentRating,
    MediaItem,
    ProcessingStatus,
    SensitivityStatus,
)
from content_moderation.processing.processor import (
    PHOTO_STAGES,
    VIDEO_STAGES,
    MediaProcessor,
)


class SleepRecorder:
    def __init__(self):
        self.calls = []

    async def __call__(self, seconds):
        self.calls.append(seconds)


@pytest.fixture
def moderator():
    return ContentModerator(use_color_analysis=False)


def make_processor(repository, moderator, **kwargs):
    kwargs.setdefault("stage_delay", 0)
    return MediaProcessor(repository, moderator=moderator, **kwargs)


def test_stage_progress_is_increasing():
    for stages in (VIDEO_STAGES, PHOTO_STAGES):
        progress = [stage.progress for stage in stages]
        assert progress == sorted(progress)
        assert progress[-1] == 100
        assert sum(stage.runs_moderation for stage in stages) == 1


def test_video_is_processed_and_rated(repository, moderator):
    processor = make_processor(repository, moderator)

    result = asyncio.run(processor.process("vid-1"))

    assert result.success is True
    stored = asyncio.run(repository.load("vid-1"))
    assert stored.processing_status == ProcessingStatus.COMPLETED
    assert stored.processing_progress == 100
    assert stored.content_rating == ContentRating.ADULT
    assert stored.sensitivity_status == SensitivityStatus.HORROR
    assert stored.moderation_analysis["horror"]["detected"] is True
    assert stored.moderation_analysis["analysis_method"] == "comprehensive"
    assert result.moderation.reason == "Horror/scary content detected"


def test_photo_is_processed_as_public(repository, moderator):
    processor = make_processor(repository, moderator)

    result = asyncio.run(processor.process("img-1"))

    assert result.success is True
    assert result.item.content_rating == ContentRating.PUBLIC
    assert result.item.sensitivity_status == SensitivityStatus.SAFE


@pytest.mark.parametrize(
    "media_id, expected",
    [
        ("vid-1", [0, 20, 40, 80, 100]),
        ("img-1", [0, 25, 75, 100]),
    ],
)
def test_progress_writes_are_monotonic(video_item, photo_item, moderator, media_id, expected):
    repository = RecordingRepository([video_item, photo_item])
    processor = make_processor(repository, moderator)

    asyncio.run(processor.process(media_id))

    assert repository.progress_log == expected


def test_stage_delays_use_injected_sleep(repository, moderator):
    sleep = SleepRecorder()
    processor = MediaProcessor(repository, moderator=moderator, stage_delay=0.8, sleep=sleep)

    asyncio.run(processor.process("vid-1"))
    assert sleep.calls == [0.8, 0.8, 0.8]

    sleep.calls.clear()
    asyncio.run(processor.process("img-1"))
    assert sleep.calls == [0.8, 0.8]


def test_zero_delay_never_sleeps(repository, moderator):
    sleep = SleepRecorder()
    processor = MediaProcessor(repository, moderator=moderator, stage_delay=0, sleep=sleep)

    asyncio.run(processor.process("vid-1"))

    assert sleep.calls == []


def test_missing_item(repository, moderator):
    processor = make_processor(repository, moderator)

    result = asyncio.run(processor.process("does-not-exist"))

    assert result.success is False
    assert result.error == "Media item not found"


def test_save_failure_marks_item_failed(video_item, moderator):
    # Fail on the final write, after moderation ran
    repository = RecordingRepository([video_item], fail_on_save=5)
    processor = make_processor(repository, moderator)

    result = asyncio.run(processor.process("vid-1"))

    assert result.success is False
    assert "database unavailable" in result.error
    assert result.moderation is not None

    stored = asyncio.run(repository.load("vid-1"))
    assert stored.processing_status == ProcessingStatus.FAILED
    assert stored.processing_progress == 0
    assert stored.content_rating == ContentRating.PENDING
    assert stored.sensitivity_status == SensitivityStatus.PENDING


def test_failed_compensating_write_is_not_raised(video_item, moderator):
    repository = RecordingRepository([video_item], fail_on_save=2, fail_on_update=True)
    processor = make_processor(repository, moderator)

    result = asyncio.run(processor.process("vid-1"))

    assert result.success is False
    stored = asyncio.run(repository.load("vid-1"))
    assert stored.processing_status == ProcessingStatus.PROCESSING


def test_pending_rating_is_never_published(repository, moderator, monkeypatch):
    from content_moderation.moderation import moderator as moderator_module

    def explode(analysis, thresholds):
        raise RuntimeError("boom")

    monkeypatch.setattr(moderator_module, "determine_content_rating", explode)
    processor = make_processor(repository, moderator)

    result = asyncio.run(processor.process("img-1"))

    assert result.success is False
    stored = asyncio.run(repository.load("img-1"))
    assert stored.processing_status == ProcessingStatus.FAILED
    assert stored.content_rating == ContentRating.PENDING


def test_schedule_runs_in_background(repository, moderator):
    processor = make_processor(repository, moderator)

    async def go():
        task = processor.schedule("img-1")
        return await task

    result = asyncio.run(go())

    assert result.success is True


def test_concurrent_items_are_independent(moderator):
    items = [
        MediaItem(id=f"m{i}", title=title, filepath=f"uploads/{i}.mp4")
        for i, title in enumerate(["Sunset over the lake", "nsfw content", "Gun fight attack blood"])
    ]
    repository = RecordingRepository(items)
    processor = MediaProcessor(repository, moderator=moderator, stage_delay=0.01)

    async def go():
        return await asyncio.gather(*(processor.process(item.id) for item in items))

    results = asyncio.run(go())

    statuses = [r.item.sensitivity_status for r in results]
    assert statuses == [SensitivityStatus.SAFE, SensitivityStatus.ADULT, SensitivityStatus.VIOLENCE]
