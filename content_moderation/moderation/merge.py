"""
Merging of provider labels and secondary detections into an Analysis.

Merge policy: per category, the Detection with the strictly higher
confidence replaces the existing one wholesale.
"""

from typing import Iterable, Mapping, Optional

from content_moderation.moderation.keywords import DEFAULT_CLASSIFIER_CONFIG, ClassifierConfig
from content_moderation.moderation.schema import Analysis, Category, Detection
from content_moderation.providers.base import ModerationEntry


def categories_for_label(name: str, classifier_config: Optional[ClassifierConfig] = None) -> list[Category]:
    """
    Map a provider label name to the categories it evidences.

    Examples:
        >>> categories_for_label("Explicit Nudity")
        [<Category.NUDITY: 'nudity'>]
        >>> categories_for_label("Graphic Violence Or Gore")
        [<Category.VIOLENCE: 'violence'>, <Category.GORE: 'gore'>]
    """
    classifier_config = classifier_config or DEFAULT_CLASSIFIER_CONFIG
    name_lower = (name or "").lower()

    return [
        category
        for category, substrings in classifier_config.provider_label_rules
        if any(s in name_lower for s in substrings)
    ]


def detections_from_entries(
    entries: Iterable[ModerationEntry],
    classifier_config: Optional[ClassifierConfig] = None,
) -> dict[Category, Detection]:
    """
    Build per-category Detections from provider moderation entries.

    Only trusted provider kinds are read. Confidence is rescaled from
    0-100 to 0-1 and the highest label per category wins.

    Args:
        entries: Moderation entries from a provider
        classifier_config: Tables and thresholds

    Returns:
        Dict of Category -> Detection for categories with at least one label
    """
    classifier_config = classifier_config or DEFAULT_CLASSIFIER_CONFIG
    thresholds = classifier_config.thresholds
    results: dict[Category, Detection] = {}

    for entry in entries:
        if entry.kind not in classifier_config.trusted_provider_kinds:
            continue

        for label in entry.labels:
            confidence = max(0.0, min(label.confidence / 100, 1.0))

            for category in categories_for_label(label.name, classifier_config):
                current = results.get(category)
                if current is not None and confidence <= current.confidence:
                    continue

                results[category] = Detection(
                    detected=confidence >= thresholds.for_category(category),
                    confidence=confidence,
                    matched_keywords=[label.name],
                    source="provider",
                )

    return results


def merge_max_confidence(
    analysis: Analysis,
    detections: Mapping[Category, Detection],
    categories: Optional[Iterable[Category]] = None,
) -> list[Category]:
    """
    Merge detections into analysis, keeping the higher confidence per category.

    Never lowers any category's confidence.

    Args:
        analysis: Analysis to update in place
        detections: Candidate detections
        categories: Restrict merging to these categories (default: all given)

    Returns:
        Categories whose Detection was replaced
    """
    allowed = set(categories) if categories is not None else None
    replaced = []

    for category, detection in detections.items():
        if allowed is not None and category not in allowed:
            continue

        if detection.confidence > analysis[category].confidence:
            analysis[category] = detection
            replaced.append(category)

    return replaced
