"""Tests for the provider registry."""

from __future__ import annotations

from hanitv.providers import HanimeProvider, get_all_providers, get_provider


class TestRegistry:
    def test_lookup_is_case_insensitive(self) -> None:
        assert isinstance(get_provider("Hanime"), HanimeProvider)

    def test_unknown_provider(self) -> None:
        assert get_provider("nope") is None

    def test_all_providers(self) -> None:
        assert [p.name for p in get_all_providers()] == ["Hanime"]
