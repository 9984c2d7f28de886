"""Content classification: keyword scoring, provider merge and rating."""

from content_moderation.moderation.moderator import ContentModerator, classify
from content_moderation.moderation.rating import determine_content_rating

__all__ = ["ContentModerator", "classify", "determine_content_rating"]
