"""Helpers for media file paths and provider asset identifiers."""

import re
from typing import Optional
from urllib.parse import urlparse

# Cloudinary delivery URLs carry a version segment before the public ID:
# https://res.cloudinary.com/<cloud>/video/upload/v1712345678/folder/name.mp4
VERSIONED_PATH_PATTERN = re.compile(r"/v\d+/(.+?)(?:\.[a-z0-9]+)?$", re.IGNORECASE)

RESOURCE_TYPES = ("image", "video")


def is_cloudinary_url(filepath: Optional[str]) -> bool:
    """
    Check whether a stored file path points at Cloudinary.

    Examples:
        >>> is_cloudinary_url("https://res.cloudinary.com/demo/image/upload/v1/a.jpg")
        True
        >>> is_cloudinary_url("uploads/video.mp4")
        False
    """
    return bool(filepath) and "cloudinary" in filepath.lower()


def extract_public_id(filepath: Optional[str]) -> Optional[str]:
    """
    Extract the Cloudinary public ID from a delivery URL.

    Args:
        filepath: Stored file path or URL

    Returns:
        Public ID (folder path included, extension stripped) or None

    Examples:
        >>> extract_public_id("https://res.cloudinary.com/demo/video/upload/v1712/video-platform/clip.mp4")
        'video-platform/clip'
        >>> extract_public_id("uploads/clip.mp4") is None
        True
    """
    if not is_cloudinary_url(filepath):
        return None

    filepath = filepath.strip()

    # Query strings and fragments are not part of the public ID
    if "://" in filepath:
        path = urlparse(filepath).path
    else:
        path = filepath.split("?", 1)[0]

    match = VERSIONED_PATH_PATTERN.search(path)
    if not match:
        return None

    return match.group(1)


def normalize_resource_type(resource_type: Optional[str], default: str = "image") -> str:
    """
    Normalize a resource type to 'image' or 'video'.

    Accepts MIME types as well ("video/mp4" -> "video").
    """
    if not resource_type:
        return default

    value = resource_type.strip().lower().split("/", 1)[0]
    return value if value in RESOURCE_TYPES else default
