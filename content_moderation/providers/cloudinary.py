"""
Cloudinary moderation provider.

Reads the moderation results Cloudinary attaches to an uploaded asset
(AWS Rekognition for images, Google Video Intelligence for videos) through
the Admin API resource endpoint.
"""

import logging
from typing import Any, Optional
from urllib.parse import quote

import httpx

from content_moderation.config import config
from content_moderation.providers.base import (
    ModerationEntry,
    ModerationLabel,
    ModerationProviderError,
    ProviderResult,
    RemoteProvider,
)
from content_moderation.utils.media_utils import normalize_resource_type

logger = logging.getLogger(__name__)


class CloudinaryModerationProvider(RemoteProvider):
    """
    Provider backed by the Cloudinary Admin API.
    """

    def __init__(
        self,
        cloud_name: Optional[str] = None,
        api_key: Optional[str] = None,
        api_secret: Optional[str] = None,
        api_url: Optional[str] = None,
        rate_limit: Optional[float] = None,
        timeout: Optional[int] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize Cloudinary provider.

        Args:
            cloud_name: Cloudinary cloud name (defaults to config)
            api_key: Admin API key (defaults to config)
            api_secret: Admin API secret (defaults to config)
            api_url: Admin API base URL (defaults to config)
            rate_limit: Requests per second (defaults to config)
            timeout: HTTP request timeout in seconds (defaults to config)
            client: Pre-built async client, mainly for tests
        """
        self.cloud_name = cloud_name or config.CLOUDINARY_CLOUD_NAME
        self.api_key = api_key or config.CLOUDINARY_API_KEY
        self.api_secret = api_secret or config.CLOUDINARY_API_SECRET
        self.api_url = (api_url or config.CLOUDINARY_API_URL).rstrip("/")
        self.timeout = timeout or config.HTTP_TIMEOUT

        super().__init__(name="Cloudinary", rate_limit=rate_limit or config.PROVIDER_RATE_LIMIT)
        self._client = client

    @property
    def is_configured(self) -> bool:
        return bool(self.cloud_name and self.api_key and self.api_secret)

    def _resource_url(self, public_id: str, resource_type: str) -> str:
        return (
            f"{self.api_url}/{self.cloud_name}/resources/"
            f"{resource_type}/upload/{quote(public_id, safe='/')}"
        )

    async def fetch(self, resource_id: str, resource_type: str = "image") -> ProviderResult:
        """
        Fetch moderation results for an uploaded asset.

        Args:
            resource_id: Cloudinary public ID
            resource_type: 'image' or 'video'

        Returns:
            ProviderResult with moderation entries and dominant colours

        Raises:
            ModerationProviderError: On missing credentials, HTTP, decode or
                payload shape errors
        """
        if not self.is_configured:
            raise ModerationProviderError("Cloudinary credentials are not configured")

        await self._apply_rate_limit()

        url = self._resource_url(resource_id, normalize_resource_type(resource_type))
        params = {
            "colors": "true",
            "faces": "true",
            "quality_analysis": "true",
            "image_metadata": "true",
        }

        try:
            if self._client is not None:
                response = await self._client.get(
                    url, params=params, auth=(self.api_key, self.api_secret)
                )
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.get(
                        url, params=params, auth=(self.api_key, self.api_secret)
                    )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            raise ModerationProviderError(
                f"Cloudinary returned {e.response.status_code} for {resource_id}"
            ) from e
        except httpx.RequestError as e:
            raise ModerationProviderError(f"Cloudinary request failed: {e}") from e
        except ValueError as e:
            raise ModerationProviderError(f"Invalid JSON from Cloudinary: {e}") from e

        if not isinstance(payload, dict):
            raise ModerationProviderError(
                f"Unexpected Cloudinary payload for {resource_id}: {type(payload).__name__}"
            )

        moderation = payload.get("moderation")
        entries = self._parse_moderation(moderation if isinstance(moderation, list) else [])
        colors = self._parse_colors(payload.get("colors") or [])

        logger.debug(
            "Cloudinary returned %d moderation entries for %s", len(entries), resource_id
        )

        return ProviderResult(
            resource_id=resource_id,
            success=True,
            entries=entries,
            colors=colors,
        )

    def _parse_moderation(self, moderation: list[dict[str, Any]]) -> list[ModerationEntry]:
        """
        Convert Cloudinary's moderation array into ModerationEntry objects.

        Example item:
            {"kind": "aws_rek", "status": "approved",
             "response": {"moderation_labels": [{"name": "Explicit Nudity", "confidence": 97.1}]}}
        """
        entries = []

        for item in moderation:
            if not isinstance(item, dict):
                continue

            response = item.get("response")
            if not isinstance(response, dict):
                response = {}
            labels = []
            for raw in response.get("moderation_labels") or []:
                try:
                    labels.append(
                        ModerationLabel(
                            name=str(raw.get("name") or ""),
                            confidence=float(raw.get("confidence") or 0),
                            parent_name=raw.get("parent_name") or None,
                        )
                    )
                except (TypeError, ValueError, AttributeError):
                    continue  # Skip malformed label

            entries.append(
                ModerationEntry(
                    kind=str(item.get("kind") or ""),
                    labels=labels,
                    status=item.get("status"),
                )
            )

        return entries

    def _parse_colors(self, colors: list) -> list[tuple[str, float]]:
        """Convert [["#112233", 12.5], ...] into typed pairs."""
        parsed = []
        for entry in colors:
            try:
                parsed.append((str(entry[0]), float(entry[1])))
            except (TypeError, ValueError, IndexError):
                continue
        return parsed
