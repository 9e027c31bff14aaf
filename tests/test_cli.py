"""Tests for the hanitv command-line interface."""

from __future__ import annotations

import json

import respx
from click.testing import CliRunner

from hanitv import __version__
from hanitv.cli import main
from hanitv.config import get_config, get_config_dir

_SEARCH_URL = "https://hanime.tv/api/v8/search"
_SOURCES_URL = "https://hanime.tv/api/v8/videos/42/sources"
_ITEM_URL = "https://hanime.tv/videos/42"


class TestCli:
    def test_version(self) -> None:
        result = CliRunner().invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    @respx.mock
    def test_search_json(self) -> None:
        respx.get(url__startswith=_SEARCH_URL).respond(
            200, json={"results": [{"id": 42, "title": "T", "cover": "c.jpg"}]}
        )

        result = CliRunner().invoke(main, ["search", "x", "--json"])

        assert result.exit_code == 0
        assert json.loads(result.output) == [
            {"title": "T", "image": "c.jpg", "href": "https://hanime.tv/videos/42"}
        ]

    @respx.mock
    def test_search_table(self) -> None:
        respx.get(url__startswith=_SEARCH_URL).respond(
            200, json={"results": [{"id": 42, "title": "Some Title", "cover": "c.jpg"}]}
        )

        result = CliRunner().invoke(main, ["search", "x"])

        assert result.exit_code == 0
        assert "Some Title" in result.output

    def test_episodes_json(self) -> None:
        result = CliRunner().invoke(main, ["episodes", _ITEM_URL, "--json"])
        assert result.exit_code == 0
        assert json.loads(result.output) == [{"href": _ITEM_URL, "number": 1}]

    def test_episodes_invalid_url(self) -> None:
        result = CliRunner().invoke(main, ["episodes", "https://hanime.tv/"])
        assert result.exit_code == 0
        assert "Invalid video URL" in result.output

    @respx.mock
    def test_stream_failure_json(self) -> None:
        respx.get(_SOURCES_URL).respond(500)

        result = CliRunner().invoke(main, ["stream", _ITEM_URL, "--json"])

        assert result.exit_code == 0
        assert json.loads(result.output) == {"stream": None, "subtitles": None}

    def test_config_set(self) -> None:
        result = CliRunner().invoke(main, ["config", "--timeout", "7", "--output", "json"])

        assert result.exit_code == 0
        cfg = get_config()
        assert cfg.timeout == 7.0
        assert cfg.output == "json"

    def test_config_show(self) -> None:
        result = CliRunner().invoke(main, ["config", "--show"])
        assert result.exit_code == 0
        assert "https://hanime.tv/api/v8" in result.output

    def test_config_does_not_persist_env_overrides(self, monkeypatch) -> None:
        monkeypatch.setenv("HANITV_API_URL", "https://tmp-mirror.test/api")

        result = CliRunner().invoke(main, ["config", "--timeout", "7"])

        assert result.exit_code == 0
        saved = json.loads((get_config_dir() / "config.json").read_text(encoding="utf-8"))
        assert saved["api_url"] == "https://hanime.tv/api/v8"
        assert saved["timeout"] == 7.0

    @respx.mock
    def test_details_with_markup_in_upstream_text(self) -> None:
        respx.get("https://hanime.tv/api/v8/videos/42").respond(
            200,
            json={"video": {"title": "Tag [/x] title", "description": "Has [bold]brackets[/bold]"}},
        )

        result = CliRunner().invoke(main, ["details", _ITEM_URL])

        assert result.exit_code == 0
        assert "[/x]" in result.output
        assert "[bold]brackets[/bold]" in result.output

    @respx.mock
    def test_stream_with_markup_in_subtitle_name(self) -> None:
        respx.get(_SOURCES_URL).respond(
            200,
            json={"sources": [{"url": "v.m3u8"}], "subtitles": [{"lang": "en", "url": "s1", "name": "CC [/]"}]},
        )

        result = CliRunner().invoke(main, ["stream", _ITEM_URL])

        assert result.exit_code == 0
        assert "CC [/]" in result.output
