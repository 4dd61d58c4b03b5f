"""Pytest configuration and shared fixtures."""

import pytest

from core.models import Instrument
from core.store import FeedStateStore
from feeds.instruments import seed_instruments


@pytest.fixture
def three_instruments():
    """A(100), B(50), C(200) in seed order."""
    return [
        Instrument.create("A", 100.0, "Alpha Corp", "First test instrument."),
        Instrument.create("B", 50.0, "Beta Corp", "Second test instrument."),
        Instrument.create("C", 200.0, "Gamma Corp", "Third test instrument."),
    ]


@pytest.fixture
def small_store(three_instruments):
    store = FeedStateStore(three_instruments, flash_duration=0.05)
    yield store
    store.close()


@pytest.fixture
def seeded_store():
    store = FeedStateStore(seed_instruments())
    yield store
    store.close()
