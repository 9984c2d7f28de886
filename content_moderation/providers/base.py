"""Base classes for external content moderation providers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional


class ModerationProviderError(Exception):
    """Raised when a moderation provider cannot be reached or answers badly."""


@dataclass
class ModerationLabel:
    """A single moderation label (confidence on a 0-100 scale)."""

    name: str
    confidence: float
    parent_name: Optional[str] = None


@dataclass
class ModerationEntry:
    """Labels produced by one moderation engine (aws_rek, etc.)."""

    kind: str
    labels: list[ModerationLabel] = field(default_factory=list)
    status: Optional[str] = None


@dataclass
class ProviderResult:
    """
    Standard result object returned by providers.

    Attributes:
        resource_id: Provider-side identifier of the asset
        success: Whether the lookup succeeded
        entries: Moderation entries attached to the asset
        colors: Dominant colours as (hex, weight) pairs, if returned
        error: Error message if the lookup failed
    """

    resource_id: str
    success: bool
    entries: list[ModerationEntry] = field(default_factory=list)
    colors: list[tuple[str, float]] = field(default_factory=list)
    error: Optional[str] = None


class ModerationProvider(ABC):
    """
    Abstract base class for moderation providers.

    Implementations look up an uploaded asset and return the moderation
    labels the provider attached to it.
    """

    def __init__(self, name: str):
        """
        Initialize the provider.

        Args:
            name: Human-readable name for this provider
        """
        self.name = name

    @abstractmethod
    async def fetch(self, resource_id: str, resource_type: str = "image") -> ProviderResult:
        """
        Fetch moderation labels for an asset.

        Args:
            resource_id: Provider-side asset identifier
            resource_type: 'image' or 'video'

        Returns:
            ProviderResult with moderation entries

        Raises:
            ModerationProviderError: If the provider call fails
        """
        raise NotImplementedError(f"{self.name} must implement fetch()")

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.name}')"


class RemoteProvider(ModerationProvider):
    """
    Base class for providers reached over the network.

    Applies an optional async rate limit before each request.
    """

    def __init__(self, name: str, rate_limit: Optional[float] = None):
        """
        Initialize remote provider.

        Args:
            name: Human-readable name
            rate_limit: Requests per second (None = no limit)
        """
        super().__init__(name)
        self.rate_limit = rate_limit
        self._rate_limiter = None

        if rate_limit:
            from content_moderation.utils.rate_limiter import TokenBucketRateLimiter
            self._rate_limiter = TokenBucketRateLimiter(rate_limit)

    async def _apply_rate_limit(self) -> None:
        """Wait for a rate limit token before making a request."""
        if self._rate_limiter:
            await self._rate_limiter.acquire()
