"""Tests for deep-link parsing and symbol resolution."""

import pytest

from core.deeplink import DeepLinkResolver, parse_deep_link


@pytest.mark.parametrize("url,symbol", [
    ("stocks://symbol/AAPL", "AAPL"),
    ("stocks://symbol/aapl", "AAPL"),
    ("stocks://symbol/brk.b", "BRK.B"),
    ("stocks://symbol/NVDA/extra", "NVDA"),
    ("  stocks://symbol/msft  ", "MSFT"),
])
def test_parse_accepts_symbol_links(url, symbol):
    assert parse_deep_link(url) == symbol


@pytest.mark.parametrize("url", [
    "https://symbol/AAPL",
    "stocks://quote/AAPL",
    "stocks://symbol/",
    "stocks://symbol",
    "AAPL",
    "",
])
def test_parse_rejects_other_links(url):
    assert parse_deep_link(url) is None


class TestResolver:

    def test_resolve_known_symbol(self, seeded_store):
        resolver = DeepLinkResolver(seeded_store)
        inst = resolver.resolve("aapl")
        assert inst.symbol == "AAPL"
        assert inst.company_name == "Apple Inc."
        assert resolver.selected.symbol == "AAPL"

    def test_resolve_unknown_symbol(self, seeded_store):
        resolver = DeepLinkResolver(seeded_store)
        assert resolver.resolve("INVALID") is None
        assert resolver.selected is None

    def test_resolve_url(self, seeded_store):
        resolver = DeepLinkResolver(seeded_store)
        assert resolver.resolve_url("stocks://symbol/tsla").symbol == "TSLA"
        assert resolver.resolve_url("stocks://symbol/ZZZZ") is None
        assert resolver.resolve_url("mailto:someone@example.com") is None
        assert resolver.selected.symbol == "TSLA"

    def test_resolve_leaves_order_alone(self, seeded_store):
        before = seeded_store.symbols()
        DeepLinkResolver(seeded_store).resolve("COST")
        assert seeded_store.symbols() == before
        assert not seeded_store.is_flashing("COST")
