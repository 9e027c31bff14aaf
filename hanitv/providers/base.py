"""Abstract base class for catalog providers."""

from abc import ABC, abstractmethod

from hanitv.models import DetailRecord, EpisodeRef, SearchResult, StreamResolution


class Provider(ABC):
    """Base class for all catalog providers.

    Operations never raise: each one returns its own fallback value on failure.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name for display."""
        ...

    @abstractmethod
    async def search(self, keyword: str) -> list[SearchResult]:
        """Search for content. Empty list on failure."""
        ...

    @abstractmethod
    async def fetch_details(self, url: str) -> list[DetailRecord]:
        """Fetch the descriptive record for an item URL. Sentinel record on failure."""
        ...

    @abstractmethod
    async def fetch_episodes(self, url: str) -> list[EpisodeRef]:
        """List episodes for an item URL. Empty list on failure."""
        ...

    @abstractmethod
    async def fetch_stream(self, url: str) -> StreamResolution:
        """Resolve a playable stream for an item URL. Null fields on failure."""
        ...
