"""hanime.tv provider - search, details, episodes and stream sources."""

import logging
import re
from datetime import datetime, timezone
from typing import Any
from urllib.parse import quote

import httpx

from hanitv.config import Config, get_config
from hanitv.errors import HanimeError, InvalidInput, UpstreamShapeMismatch, UpstreamUnavailable
from hanitv.models import (
    DETAILS_ERROR, DetailRecord, EpisodeRef,
    SearchResult, StreamResolution, Subtitle
)
from hanitv.providers.base import Provider

logger = logging.getLogger(__name__)

VIDEO_ID_RE = re.compile(r"/videos/(\d+)")

# Same unreserved set as JavaScript's encodeURIComponent
_KEYWORD_SAFE = "-_.!~*'()"

# Preference order for stream sources: HLS first, then MP4
STREAM_SUFFIXES = (".m3u8", ".mp4")

SUBTITLE_LANG = "en"


def extract_video_id(url: str) -> str:
    """Pull the numeric video id out of an item URL like https://hanime.tv/videos/12345."""
    match = VIDEO_ID_RE.search(url) if isinstance(url, str) else None
    if not match:
        raise InvalidInput(f"Invalid video URL: {url!r}")
    return match.group(1)


def format_airdate(value: Any) -> str:
    """Format an upload timestamp as a short calendar date (M/D/YYYY)."""
    if not value:
        return "Unknown"

    try:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            parsed = datetime.fromtimestamp(value, tz=timezone.utc)
        else:
            parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except (ValueError, OverflowError, OSError):
        logger.debug("Unparseable upload date: %r", value)
        return "Unknown"

    return f"{parsed.month}/{parsed.day}/{parsed.year}"


def join_aliases(video: dict) -> str:
    """Join primary, original and alternate titles, skipping blanks."""
    alt_titles = video.get("alt_titles") or []
    if not isinstance(alt_titles, list):
        raise UpstreamShapeMismatch("alt_titles is not a list")

    candidates = [video.get("title"), video.get("original_title"), *alt_titles]
    return ", ".join(c for c in candidates if isinstance(c, str) and c.strip())


def pick_stream_url(sources: list) -> str | None:
    """Return the first HLS source URL, else the first MP4 one."""
    for suffix in STREAM_SUFFIXES:
        for src in sources:
            url = src.get("url") if isinstance(src, dict) else None
            if isinstance(url, str) and url.endswith(suffix):
                return url
    return None


def english_subtitles(subtitles: Any) -> list[Subtitle]:
    """Keep only subtitles whose lang is exactly 'en'."""
    if subtitles is None:
        return []
    if not isinstance(subtitles, list):
        raise UpstreamShapeMismatch("subtitles is not a list")

    return [
        Subtitle(url=sub.get("url"), lang=sub["lang"], name=sub.get("name") or "English")
        for sub in subtitles
        if isinstance(sub, dict) and sub.get("lang") == SUBTITLE_LANG
    ]


class HanimeProvider(Provider):
    """hanime.tv catalog provider."""

    def __init__(self, config: Config | None = None):
        self._config = config

    @property
    def name(self) -> str:
        return "Hanime"

    @property
    def config(self) -> Config:
        return self._config or get_config()

    def _client(self) -> httpx.AsyncClient:
        kwargs: dict[str, Any] = {"follow_redirects": True}
        if self.config.timeout is not None:
            kwargs["timeout"] = self.config.timeout
        return httpx.AsyncClient(**kwargs)

    async def _get_json(self, url: str) -> dict:
        """GET a URL and decode its JSON object body."""
        async with self._client() as client:
            try:
                res = await client.get(url)
                res.raise_for_status()
            except (httpx.HTTPError, httpx.InvalidURL) as e:
                raise UpstreamUnavailable(f"GET {url} failed: {e}") from e

        try:
            data = res.json()
        except ValueError as e:
            raise UpstreamShapeMismatch(f"GET {url} returned invalid JSON") from e

        if not isinstance(data, dict):
            raise UpstreamShapeMismatch(f"GET {url} did not return an object")
        return data

    async def search(self, keyword: str) -> list[SearchResult]:
        """Search for content."""
        try:
            return await self._search(keyword)
        except HanimeError as e:
            logger.warning("[Hanime] Search error: %s", e)
            return []

    async def _search(self, keyword: str) -> list[SearchResult]:
        url = f"{self.config.api_url}/search?keyword={quote(str(keyword), safe=_KEYWORD_SAFE)}"
        data = await self._get_json(url)

        items = data.get("results")
        if not items:
            return []
        if not isinstance(items, list):
            raise UpstreamShapeMismatch("results is not a list")

        base_url = self.config.base_url
        results: list[SearchResult] = []
        for item in items:
            if not isinstance(item, dict):
                logger.warning("[Hanime] Skipping search result that is not an object: %r", item)
                continue

            video_id = item.get("id")
            if video_id is None:
                logger.warning("[Hanime] Search result without id: %r", item)
                video_id = ""

            results.append(SearchResult(
                title=item.get("title"),
                image=item.get("cover"),
                href=f"{base_url}/videos/{video_id}"
            ))

        return results

    async def fetch_details(self, url: str) -> list[DetailRecord]:
        """Fetch content details."""
        try:
            return [await self._fetch_details(url)]
        except HanimeError as e:
            logger.warning("[Hanime] Details error: %s", e)
            return [DETAILS_ERROR]

    async def _fetch_details(self, url: str) -> DetailRecord:
        video_id = extract_video_id(url)
        data = await self._get_json(f"{self.config.api_url}/videos/{video_id}")

        video = data.get("video")
        if not video or not isinstance(video, dict):
            raise UpstreamShapeMismatch("No video data found")

        description = video.get("description")
        if not isinstance(description, str) or not description.strip():
            description = "No description available"

        return DetailRecord(
            description=description,
            aliases=join_aliases(video),
            airdate=format_airdate(video.get("upload_date"))
        )

    async def fetch_episodes(self, url: str) -> list[EpisodeRef]:
        """List episodes. Videos are single items, so this is one episode."""
        try:
            extract_video_id(url)
        except InvalidInput as e:
            logger.warning("[Hanime] Episodes error: %s", e)
            return []
        return [EpisodeRef(href=url, number=1)]

    async def fetch_stream(self, url: str) -> StreamResolution:
        """Resolve the stream URL, preferring HLS over MP4."""
        try:
            return await self._fetch_stream(url)
        except HanimeError as e:
            logger.warning("[Hanime] Stream URL error: %s", e)
            return StreamResolution(stream=None, subtitles=None)

    async def _fetch_stream(self, url: str) -> StreamResolution:
        video_id = extract_video_id(url)
        data = await self._get_json(f"{self.config.api_url}/videos/{video_id}/sources")

        sources = data.get("sources")
        if not sources or not isinstance(sources, list):
            raise UpstreamShapeMismatch("No streaming sources found")

        stream_url = pick_stream_url(sources)
        if not stream_url:
            raise UpstreamShapeMismatch("No valid stream URL found")

        subtitles = english_subtitles(data.get("subtitles"))
        return StreamResolution(stream=stream_url, subtitles=subtitles or None)
