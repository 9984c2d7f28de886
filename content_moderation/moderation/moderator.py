"""
Content moderation orchestration.

Combines, in order:
1. Keyword analysis of title and description
2. Provider moderation labels (when the file lives on the provider)
3. Pattern-based fallback scoring (only when nothing serious was found)

and turns the resulting Analysis into a content rating.
"""

import logging
from typing import Optional

from content_moderation.config import config
from content_moderation.moderation.keywords import DEFAULT_CLASSIFIER_CONFIG, ClassifierConfig
from content_moderation.moderation.merge import detections_from_entries, merge_max_confidence
from content_moderation.moderation.rating import RatingThresholds, determine_content_rating
from content_moderation.moderation.schema import (
    ANALYSIS_FALLBACK,
    Analysis,
    Category,
    ContentRating,
    ModerationResult,
    SensitivityStatus,
)
from content_moderation.moderation.text_analyzer import TextAnalyzer
from content_moderation.providers.base import ModerationProvider, ModerationProviderError, ProviderResult
from content_moderation.utils.media_utils import extract_public_id

logger = logging.getLogger(__name__)

# Categories the provider can speak for (never horror)
PROVIDER_CATEGORIES = (
    Category.NUDITY,
    Category.VIOLENCE,
    Category.GORE,
    Category.DRUGS,
    Category.WEAPONS,
)

# Pattern fallback only runs when none of these were detected
PRIMARY_CATEGORIES = (
    Category.NUDITY,
    Category.HORROR,
    Category.VIOLENCE,
    Category.GORE,
)


class ContentModerator:
    """
    Rule-based content classifier for uploaded media.

    Stateless between calls, so one instance can serve concurrent
    classifications.
    """

    def __init__(
        self,
        provider: Optional[ModerationProvider] = None,
        classifier_config: Optional[ClassifierConfig] = None,
        rating_thresholds: Optional[RatingThresholds] = None,
        use_color_analysis: Optional[bool] = None,
    ):
        """
        Initialize content moderator.

        Args:
            provider: External moderation provider (None = text analysis only)
            classifier_config: Keyword tables and thresholds
            rating_thresholds: Confidence thresholds for the rating rules
            use_color_analysis: Score horror from provider colours (defaults to config)
        """
        self.provider = provider
        self.classifier_config = classifier_config or DEFAULT_CLASSIFIER_CONFIG
        self.rating_thresholds = rating_thresholds or RatingThresholds()
        self.use_color_analysis = (
            config.USE_COLOR_ANALYSIS if use_color_analysis is None else use_color_analysis
        )
        self.text_analyzer = TextAnalyzer(self.classifier_config)

    async def _fetch_provider_result(
        self,
        resource_id: str,
        resource_type: str,
    ) -> Optional[ProviderResult]:
        """Ask the provider for labels. Provider failures are logged and swallowed."""
        try:
            result = await self.provider.fetch(resource_id, resource_type)
        except ModerationProviderError as e:
            logger.warning("%s analysis unavailable for %s: %s", self.provider.name, resource_id, e)
            return None
        except Exception:
            # Classification must go on with the text-based analysis
            logger.exception("%s analysis crashed for %s", self.provider.name, resource_id)
            return None

        if not result.success:
            logger.warning("%s analysis failed for %s: %s", self.provider.name, resource_id, result.error)
            return None

        return result

    async def analyze(
        self,
        title: str,
        description: Optional[str] = "",
        filepath: Optional[str] = None,
        resource_type: str = "image",
    ) -> Analysis:
        """
        Build the per-category analysis for one media item.

        Never raises. If an unexpected error interrupts the pipeline the
        partially built analysis is returned with analysis_method set to
        "fallback".

        Args:
            title: Media title
            description: Media description (may be empty)
            filepath: Stored file path or provider URL
            resource_type: 'image' or 'video'

        Returns:
            Analysis covering all six categories
        """
        analysis = Analysis()

        try:
            # === Step 1: Keyword analysis ===
            text = self.text_analyzer.analyze_text(title, description)

            # === Step 2: Seed with detected keyword results ===
            if text.horror.detected:
                analysis[Category.HORROR] = text.horror
            if text.violence.detected:
                analysis[Category.VIOLENCE] = text.violence
            if text.adult.detected:
                analysis[Category.NUDITY] = text.adult

            # === Step 3: Provider labels ===
            resource_id = extract_public_id(filepath)
            if self.provider is not None and resource_id:
                provider_result = await self._fetch_provider_result(resource_id, resource_type)

                if provider_result is not None:
                    provider_detections = detections_from_entries(
                        provider_result.entries, self.classifier_config
                    )
                    replaced = merge_max_confidence(analysis, provider_detections, PROVIDER_CATEGORIES)
                    if replaced:
                        logger.debug("Provider raised %s", ", ".join(c.value for c in replaced))

                    if self.use_color_analysis and provider_result.colors:
                        color_horror = self.text_analyzer.analyze_colors_for_horror(provider_result.colors)
                        merge_max_confidence(analysis, {Category.HORROR: color_horror})

            # === Step 4: Pattern fallback ===
            if not any(analysis.is_detected(c) for c in PRIMARY_CATEGORIES):
                pattern_detections = self.text_analyzer.analyze_patterns(title, description)
                merge_max_confidence(analysis, pattern_detections)

        except Exception:
            logger.exception("Comprehensive analysis failed for '%s'", title)
            analysis.analysis_method = ANALYSIS_FALLBACK

        return analysis

    async def classify(
        self,
        title: str,
        description: Optional[str] = "",
        filepath: Optional[str] = None,
        resource_type: str = "image",
    ) -> ModerationResult:
        """
        Classify a media item and decide its content rating.

        Never raises. In the unlikely case that the rating itself cannot be
        computed the result keeps the pending rating so callers do not
        publish the item.

        Args:
            title: Media title
            description: Media description (may be empty)
            filepath: Stored file path or provider URL
            resource_type: 'image' or 'video'

        Returns:
            ModerationResult with analysis, rating, status and reason
        """
        logger.info("Starting content moderation for: %s", title)

        analysis = await self.analyze(title, description, filepath, resource_type)

        try:
            decision = determine_content_rating(analysis, self.rating_thresholds)
        except Exception:
            logger.exception("Rating decision failed for '%s'", title)
            analysis.analysis_method = ANALYSIS_FALLBACK
            return ModerationResult(
                analysis=analysis,
                content_rating=ContentRating.PENDING,
                sensitivity_status=SensitivityStatus.PENDING,
                reason="Rating could not be determined",
            )

        result = ModerationResult.from_decision(analysis, decision)

        logger.info(
            "Moderation result: %s (%s) - %s",
            result.content_rating.value,
            result.sensitivity_status.value,
            result.reason,
        )

        return result


_default_moderator: Optional[ContentModerator] = None


def get_default_moderator() -> ContentModerator:
    """
    Shared moderator built from config.

    Uses the Cloudinary provider when credentials are configured.
    """
    global _default_moderator

    if _default_moderator is None:
        provider = None
        if config.has_cloudinary_credentials():
            from content_moderation.providers.cloudinary import CloudinaryModerationProvider
            provider = CloudinaryModerationProvider()
        _default_moderator = ContentModerator(provider=provider)

    return _default_moderator


async def classify(
    title: str,
    description: Optional[str] = "",
    filepath: Optional[str] = None,
    resource_type: str = "image",
) -> ModerationResult:
    """Classify with the default moderator. See ContentModerator.classify."""
    return await get_default_moderator().classify(title, description, filepath, resource_type)
