"""Rule-based content moderation for uploaded photos and videos."""

from content_moderation.moderation import ContentModerator, classify, determine_content_rating

__version__ = "0.1.0"

__all__ = ["ContentModerator", "classify", "determine_content_rating"]
