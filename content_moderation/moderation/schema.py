"""Data schemas for detections, analyses, ratings and media records."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional


class Category(Enum):
    """Sensitivity categories."""

    NUDITY = "nudity"
    VIOLENCE = "violence"
    HORROR = "horror"
    GORE = "gore"
    DRUGS = "drugs"
    WEAPONS = "weapons"


class ContentRating(Enum):
    """Public-facing content rating."""

    PENDING = "pending"
    PUBLIC = "public"
    ADULT = "18+"


class SensitivityStatus(Enum):
    """Why an item received its rating."""

    PENDING = "pending"
    SAFE = "safe"
    FLAGGED = "flagged"
    ADULT = "adult"
    HORROR = "horror"
    VIOLENCE = "violence"


class ProcessingStatus(Enum):
    """Lifecycle of a media item's background processing."""

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


ANALYSIS_COMPREHENSIVE = "comprehensive"
ANALYSIS_FALLBACK = "fallback"


@dataclass
class Detection:
    """Detection result for one category."""

    detected: bool = False
    confidence: float = 0.0  # 0.0-1.0
    matched_keywords: list[str] = field(default_factory=list)
    source: str = "none"  # none, text, pattern, provider, color

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "detected": self.detected,
            "confidence": self.confidence,
        }
        if self.matched_keywords:
            data["matched_keywords"] = list(self.matched_keywords)
        return data


def _empty_detections() -> dict[Category, Detection]:
    return {category: Detection() for category in Category}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Analysis:
    """
    Per-category detections for one media item at one point in time.

    All six categories are always present. Merging replaces whole
    Detection objects, never individual fields.
    """

    detections: dict[Category, Detection] = field(default_factory=_empty_detections)
    analyzed_at: datetime = field(default_factory=_utcnow)
    analysis_method: str = ANALYSIS_COMPREHENSIVE

    def __getitem__(self, category: Category) -> Detection:
        return self.detections[category]

    def __setitem__(self, category: Category, detection: Detection) -> None:
        self.detections[category] = detection

    def is_detected(self, category: Category) -> bool:
        return self.detections[category].detected

    def confidence(self, category: Category) -> float:
        return self.detections[category].confidence

    def to_dict(self) -> dict[str, Any]:
        """Document stored as the media item's moderation_analysis field."""
        data: dict[str, Any] = {
            category.value: self.detections[category].to_dict() for category in Category
        }
        data["analyzed_at"] = self.analyzed_at.isoformat()
        data["analysis_method"] = self.analysis_method
        return data


@dataclass(frozen=True)
class RatingDecision:
    """Final rating derived from an Analysis."""

    content_rating: ContentRating
    sensitivity_status: SensitivityStatus
    reason: str


@dataclass
class ModerationResult:
    """Output of a classification request."""

    analysis: Analysis
    content_rating: ContentRating
    sensitivity_status: SensitivityStatus
    reason: str

    @classmethod
    def from_decision(cls, analysis: Analysis, decision: RatingDecision) -> "ModerationResult":
        return cls(
            analysis=analysis,
            content_rating=decision.content_rating,
            sensitivity_status=decision.sensitivity_status,
            reason=decision.reason,
        )


@dataclass
class MediaItem:
    """
    Uploaded photo or video as stored by the persistence layer.

    The moderation core only computes the rating fields; storage is owned
    by the repository.
    """

    id: str
    title: str
    filepath: str
    description: str = ""
    resource_type: str = "video"  # image or video

    processing_status: ProcessingStatus = ProcessingStatus.PENDING
    processing_progress: float = 0.0  # 0-100

    content_rating: ContentRating = ContentRating.PENDING
    sensitivity_status: SensitivityStatus = SensitivityStatus.PENDING
    moderation_analysis: Optional[dict[str, Any]] = None

    duration: int = 0  # seconds, videos only
