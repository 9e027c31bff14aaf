"""Front-end entry points.

Each function returns a JSON string in the fixed contract the media
browser expects, and never raises:

- ``search_results``     -> ``[{title, image, href}, ...]`` or ``[]``
- ``extract_details``    -> ``[{description, aliases, airdate}]``
- ``extract_episodes``   -> ``[{href, number}]`` or ``[]``
- ``extract_stream_url`` -> ``{stream, subtitles}``
"""

import json

from hanitv.providers import get_provider
from hanitv.providers.base import Provider


def _provider() -> Provider:
    return get_provider("hanime")


def to_json(value) -> str:
    """Serialize a DTO or list of DTOs."""
    if isinstance(value, list):
        return json.dumps([item.to_dict() for item in value])
    return json.dumps(value.to_dict())


async def search_results(keyword: str) -> str:
    return to_json(await _provider().search(keyword))


async def extract_details(url: str) -> str:
    return to_json(await _provider().fetch_details(url))


async def extract_episodes(url: str) -> str:
    return to_json(await _provider().fetch_episodes(url))


async def extract_stream_url(url: str) -> str:
    return to_json(await _provider().fetch_stream(url))
