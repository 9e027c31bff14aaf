"""Data models for hanitv - the shapes handed to the front end."""

from dataclasses import dataclass, asdict
from typing import Optional


@dataclass
class SearchResult:
    """Search result summary."""
    title: Optional[str]
    image: Optional[str]
    href: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class DetailRecord:
    """Descriptive record for a single video."""
    description: str
    aliases: str  # comma-joined titles
    airdate: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class EpisodeRef:
    """Episode reference. Videos are single-episode, so number is always 1."""
    href: str
    number: int = 1

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class Subtitle:
    """Subtitle track."""
    url: str
    lang: str
    name: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class StreamResolution:
    """Resolved stream URL with optional subtitles."""
    stream: Optional[str] = None
    subtitles: Optional[list[Subtitle]] = None

    def to_dict(self) -> dict:
        return {
            "stream": self.stream,
            "subtitles": [s.to_dict() for s in self.subtitles] if self.subtitles else None,
        }


# Fallback values returned when an operation fails.
DETAILS_ERROR = DetailRecord(
    description="Error loading description",
    aliases="Duration: Unknown",
    airdate="Aired: Unknown",
)
