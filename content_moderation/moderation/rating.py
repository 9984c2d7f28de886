"""
Content rating decision.

Ordered rule list, first match wins:
1. Nudity or gore detected          -> 18+ / adult
2. Horror detected (conf >= 0.5)    -> 18+ / horror
3. Violence detected (conf >= 0.6)  -> 18+ / violence
4. Drugs or weapons (conf >= 0.7)   -> 18+ / flagged
5. Otherwise                        -> public / safe

Confidence is re-checked on top of the detected flag because provider
detections may carry inconsistent flag/confidence pairs.
"""

from dataclasses import dataclass

from content_moderation.moderation.schema import (
    Analysis,
    Category,
    ContentRating,
    RatingDecision,
    SensitivityStatus,
)


@dataclass(frozen=True)
class RatingThresholds:
    """Minimum confidence per rule."""

    horror_min_confidence: float = 0.5
    violence_min_confidence: float = 0.6
    drugs_weapons_min_confidence: float = 0.7


def determine_content_rating(
    analysis: Analysis,
    thresholds: RatingThresholds = RatingThresholds(),
) -> RatingDecision:
    """
    Decide the final rating for an analysis.

    Pure function: no side effects, no randomness.

    Args:
        analysis: Complete per-category analysis
        thresholds: Rule confidence thresholds

    Returns:
        RatingDecision
    """
    nudity = analysis[Category.NUDITY]
    gore = analysis[Category.GORE]
    horror = analysis[Category.HORROR]
    violence = analysis[Category.VIOLENCE]
    drugs = analysis[Category.DRUGS]
    weapons = analysis[Category.WEAPONS]

    if nudity.detected or gore.detected:
        return RatingDecision(
            content_rating=ContentRating.ADULT,
            sensitivity_status=SensitivityStatus.ADULT,
            reason="Adult/NSFW content detected" if nudity.detected else "Gore content detected",
        )

    if horror.detected and horror.confidence >= thresholds.horror_min_confidence:
        return RatingDecision(
            content_rating=ContentRating.ADULT,
            sensitivity_status=SensitivityStatus.HORROR,
            reason="Horror/scary content detected",
        )

    if violence.detected and violence.confidence >= thresholds.violence_min_confidence:
        return RatingDecision(
            content_rating=ContentRating.ADULT,
            sensitivity_status=SensitivityStatus.VIOLENCE,
            reason="Violent content detected",
        )

    if drugs.detected or weapons.detected:
        # Low-confidence drug/weapon hits stay public
        min_conf = thresholds.drugs_weapons_min_confidence
        if drugs.confidence >= min_conf or weapons.confidence >= min_conf:
            return RatingDecision(
                content_rating=ContentRating.ADULT,
                sensitivity_status=SensitivityStatus.FLAGGED,
                reason="Drug or weapon content detected",
            )

    return RatingDecision(
        content_rating=ContentRating.PUBLIC,
        sensitivity_status=SensitivityStatus.SAFE,
        reason="No sensitive content detected",
    )
