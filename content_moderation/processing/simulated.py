"""
Legacy simulated processing.

Kept for demos and load testing only: it assigns 'safe' or 'flagged' by
a random draw and never looks at the content. MediaProcessor is the real
pipeline; nothing selects this mode by default.
"""

import asyncio
import logging
import random
from typing import Optional

from content_moderation.moderation.schema import ContentRating, ProcessingStatus, SensitivityStatus
from content_moderation.processing.processor import ProcessingResult, SleepFunc
from content_moderation.storage.repository import MediaRepository

logger = logging.getLogger(__name__)


class SimulatedMediaProcessor:
    """
    Random safe/flagged assignment with evenly spaced progress steps.

    Args:
        repository: Media persistence
        rng: Random source (pass a seeded random.Random for reproducibility)
        total_steps: Number of progress updates
        step_delay: Seconds between progress updates
        safe_probability: Chance of a 'safe' verdict
        sleep: Awaitable pause function (defaults to asyncio.sleep)
    """

    def __init__(
        self,
        repository: MediaRepository,
        rng: Optional[random.Random] = None,
        total_steps: int = 10,
        step_delay: float = 1.0,
        safe_probability: float = 0.7,
        sleep: Optional[SleepFunc] = None,
    ):
        if total_steps < 1:
            raise ValueError("total_steps must be at least 1")
        if not 0.0 <= safe_probability <= 1.0:
            raise ValueError("safe_probability must be between 0 and 1")

        self.repository = repository
        self.rng = rng or random.Random()
        self.total_steps = total_steps
        self.step_delay = step_delay
        self.safe_probability = safe_probability
        self._sleep = sleep or asyncio.sleep

    async def process(self, media_id: str) -> ProcessingResult:
        try:
            item = await self.repository.load(media_id)

            if item is None:
                logger.error("Media not found for simulated processing: %s", media_id)
                return ProcessingResult(media_id=media_id, success=False, error="Media item not found")

            item.processing_status = ProcessingStatus.PROCESSING
            item.processing_progress = 0
            item = await self.repository.save(item)

            for step in range(1, self.total_steps + 1):
                if self.step_delay > 0:
                    await self._sleep(self.step_delay)
                item.processing_progress = step / self.total_steps * 100
                item = await self.repository.save(item)

            is_safe = self.rng.random() < self.safe_probability
            item.sensitivity_status = SensitivityStatus.SAFE if is_safe else SensitivityStatus.FLAGGED
            item.content_rating = ContentRating.PUBLIC if is_safe else ContentRating.ADULT
            item.processing_status = ProcessingStatus.COMPLETED
            item.processing_progress = 100

            # Duration in seconds, only when the uploader did not supply one
            if not item.duration:
                item.duration = self.rng.randint(30, 599)

            item = await self.repository.save(item)

            logger.info(
                "Simulated processing completed: %s - %s", item.title, item.sensitivity_status.value
            )

            return ProcessingResult(media_id=media_id, success=True, item=item)

        except Exception as e:
            logger.exception("Error in simulated processing of media %s", media_id)
            try:
                await self.repository.update(
                    media_id,
                    processing_status=ProcessingStatus.FAILED,
                    processing_progress=0,
                )
            except Exception:
                logger.exception("Error updating failure status for media %s", media_id)
            return ProcessingResult(media_id=media_id, success=False, error=str(e))
