"""
Background processing of uploaded media.

Runs a media item through named stages, each with a progress percentage,
and writes the moderation outcome back through the repository:

    Video: prepare (20) -> extract frames (40) -> moderate (80) -> finalize (100)
    Photo: prepare (25) -> moderate (75) -> finalize (100)

Pauses between stages are cooperative (asyncio.sleep) and configurable,
so tests can run the whole pipeline with zero delay.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from content_moderation.config import config
from content_moderation.moderation.moderator import ContentModerator, get_default_moderator
from content_moderation.moderation.schema import (
    ContentRating,
    MediaItem,
    ModerationResult,
    ProcessingStatus,
    SensitivityStatus,
)
from content_moderation.reporting import summary_lines
from content_moderation.storage.repository import MediaRepository

logger = logging.getLogger(__name__)

SleepFunc = Callable[[float], Awaitable[None]]


class ProcessingError(Exception):
    """Raised when a media item cannot be processed to completion."""


@dataclass(frozen=True)
class ProcessingStage:
    """A named step of the pipeline and the progress reached after it."""

    name: str
    progress: int
    description: str
    runs_moderation: bool = False


VIDEO_STAGES = (
    ProcessingStage("prepare", 20, "Preparing video for analysis"),
    ProcessingStage("extract_frames", 40, "Extracting video frames for analysis"),
    ProcessingStage("moderate", 80, "Running content moderation", runs_moderation=True),
    ProcessingStage("finalize", 100, "Finalizing moderation results"),
)

PHOTO_STAGES = (
    ProcessingStage("prepare", 25, "Preparing image for analysis"),
    ProcessingStage("moderate", 75, "Running content moderation", runs_moderation=True),
    ProcessingStage("finalize", 100, "Finalizing moderation results"),
)


@dataclass
class ProcessingResult:
    """
    Outcome of processing one media item.

    Attributes:
        media_id: Item that was processed
        success: Whether the item reached the completed state
        item: Stored item after the final write (success only)
        moderation: Classification output, if moderation ran
        error: Error message if processing failed
    """

    media_id: str
    success: bool
    item: Optional[MediaItem] = None
    moderation: Optional[ModerationResult] = None
    error: Optional[str] = None


class MediaProcessor:
    """
    Drives a stored media item from pending to a terminal state.
    """

    def __init__(
        self,
        repository: MediaRepository,
        moderator: Optional[ContentModerator] = None,
        stage_delay: Optional[float] = None,
        sleep: Optional[SleepFunc] = None,
    ):
        """
        Initialize media processor.

        Args:
            repository: Media persistence
            moderator: Content classifier (defaults to the shared moderator)
            stage_delay: Seconds to pause before each progress write
                         (defaults to config, per resource type)
            sleep: Awaitable pause function (defaults to asyncio.sleep)
        """
        self.repository = repository
        self.moderator = moderator or get_default_moderator()
        self.stage_delay = stage_delay
        self._sleep = sleep or asyncio.sleep

    @staticmethod
    def stages_for(resource_type: str) -> tuple[ProcessingStage, ...]:
        return PHOTO_STAGES if resource_type == "image" else VIDEO_STAGES

    def _delay_for(self, resource_type: str) -> float:
        if self.stage_delay is not None:
            return self.stage_delay
        return config.PHOTO_STAGE_DELAY if resource_type == "image" else config.VIDEO_STAGE_DELAY

    async def _advance(self, item: MediaItem, progress: int) -> MediaItem:
        """Pause, then persist the new progress value."""
        delay = self._delay_for(item.resource_type)
        if delay > 0:
            await self._sleep(delay)
        item.processing_progress = progress
        return await self.repository.save(item)

    async def _mark_failed(self, media_id: str) -> None:
        """Best-effort compensating write. Failures are only logged."""
        try:
            await self.repository.update(
                media_id,
                processing_status=ProcessingStatus.FAILED,
                processing_progress=0,
                content_rating=ContentRating.PENDING,
                sensitivity_status=SensitivityStatus.PENDING,
            )
        except Exception:
            logger.exception("Error updating failure status for media %s", media_id)

    async def process(self, media_id: str) -> ProcessingResult:
        """
        Process one media item.

        Args:
            media_id: Repository id of the item

        Returns:
            ProcessingResult; success=False carries the error message
        """
        moderation: Optional[ModerationResult] = None

        try:
            item = await self.repository.load(media_id)

            if item is None:
                logger.error("Media not found for processing: %s", media_id)
                return ProcessingResult(media_id=media_id, success=False, error="Media item not found")

            logger.info("Starting %s processing: %s", item.resource_type, item.title)

            item.processing_status = ProcessingStatus.PROCESSING
            item.processing_progress = 0
            item = await self.repository.save(item)

            for stage in self.stages_for(item.resource_type):
                logger.info("Stage '%s': %s", stage.name, stage.description)

                if stage.runs_moderation:
                    moderation = await self.moderator.classify(
                        item.title,
                        item.description,
                        item.filepath,
                        item.resource_type,
                    )

                if stage.progress < 100:
                    item = await self._advance(item, stage.progress)

            if moderation is None:
                raise ProcessingError("Pipeline finished without a moderation stage")

            if moderation.content_rating == ContentRating.PENDING:
                raise ProcessingError(f"Moderation did not produce a rating: {moderation.reason}")

            item.moderation_analysis = moderation.analysis.to_dict()
            item.content_rating = moderation.content_rating
            item.sensitivity_status = moderation.sensitivity_status
            item.processing_status = ProcessingStatus.COMPLETED
            item.processing_progress = 100
            item = await self.repository.save(item)

            for line in summary_lines(item.title, moderation):
                logger.info(line)

            return ProcessingResult(media_id=media_id, success=True, item=item, moderation=moderation)

        except Exception as e:
            logger.exception("Error processing media %s", media_id)
            await self._mark_failed(media_id)
            return ProcessingResult(media_id=media_id, success=False, moderation=moderation, error=str(e))

    def schedule(self, media_id: str) -> "asyncio.Task[ProcessingResult]":
        """
        Start processing in the background of the running event loop.

        Intended to be called by the upload handler right after the item
        is created in the pending state.
        """
        return asyncio.create_task(self.process(media_id), name=f"process-media-{media_id}")
