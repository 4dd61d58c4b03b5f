"""Tests for FeedStateStore ordering, flash marks and subscribers."""

import asyncio

import pytest

from core.models import Instrument
from core.store import FeedStateStore


class TestOrdering:

    @pytest.mark.asyncio
    async def test_updated_symbol_moves_to_front(self, small_store):
        assert small_store.symbols() == ["A", "B", "C"]
        small_store.apply("C", 210.0)
        assert small_store.symbols() == ["C", "A", "B"]
        small_store.apply("B", 51.0)
        assert small_store.symbols() == ["B", "C", "A"]

    @pytest.mark.asyncio
    async def test_front_update_keeps_position(self, small_store):
        small_store.apply("A", 101.0)
        small_store.apply("A", 102.0)
        assert small_store.symbols() == ["A", "B", "C"]

    @pytest.mark.asyncio
    async def test_order_is_recency_not_price(self, seeded_store):
        seeded_store.apply("INTC", 44.0)
        seeded_store.apply("COST", 640.0)
        seeded_store.apply("DIS", 96.0)
        assert seeded_store.symbols()[:3] == ["DIS", "COST", "INTC"]

    @pytest.mark.asyncio
    async def test_symbol_set_never_changes(self, seeded_store):
        before = sorted(seeded_store.symbols())
        for sym in ["AAPL", "MSFT", "AAPL", "V", "COST", "AAPL"]:
            seeded_store.apply(sym, 1.0)
        after = seeded_store.symbols()
        assert sorted(after) == before
        assert len(after) == len(set(after)) == 25

    @pytest.mark.asyncio
    async def test_apply_updates_prices(self, small_store):
        updated = small_store.apply("A", 105.0)
        assert updated.price == 105.0
        assert updated.previous_price == 100.0
        assert small_store.select_by_symbol("A").price_change == pytest.approx(5.0)

    @pytest.mark.asyncio
    async def test_unknown_symbol_is_ignored(self, small_store):
        before = [i.model_dump() for i in small_store.instruments()]
        assert small_store.apply("ZZZZ", 10.0) is None
        assert [i.model_dump() for i in small_store.instruments()] == before
        assert not small_store.is_flashing("ZZZZ")

    def test_apply_outside_event_loop_changes_nothing(self, small_store):
        with pytest.raises(RuntimeError):
            small_store.apply("C", 250.0)
        inst = small_store.select_by_symbol("C")
        assert inst.price == 200.0
        assert inst.previous_price == 200.0
        assert small_store.symbols() == ["A", "B", "C"]
        assert not small_store.is_flashing("C")

    def test_duplicate_seed_rejected(self):
        with pytest.raises(ValueError):
            FeedStateStore([
                Instrument.create("A", 1.0, "A", "a"),
                Instrument.create("A", 2.0, "A", "a"),
            ])


class TestSelection:

    @pytest.mark.asyncio
    async def test_select_does_not_touch_order_or_flash(self, small_store):
        inst = small_store.select_by_symbol("B")
        assert inst.symbol == "B"
        assert small_store.symbols() == ["A", "B", "C"]
        assert not small_store.is_flashing("B")

    def test_select_unknown_returns_none(self, small_store):
        assert small_store.select_by_symbol("NOPE") is None

    @pytest.mark.asyncio
    async def test_selected_copy_is_detached(self, small_store):
        inst = small_store.select_by_symbol("A")
        inst.update_price(1.0)
        assert small_store.select_by_symbol("A").price == 100.0


class TestFlash:

    @pytest.mark.asyncio
    async def test_flash_expires_after_a_second(self, seeded_store):
        seeded_store.apply("AAPL", 180.0)
        assert seeded_store.is_flashing("AAPL")
        assert not seeded_store.is_flashing("MSFT")
        await asyncio.sleep(1.1)
        assert not seeded_store.is_flashing("AAPL")

    @pytest.mark.asyncio
    async def test_reflash_resets_window(self):
        store = FeedStateStore([Instrument.create("A", 1.0, "A", "a")], flash_duration=0.2)
        try:
            store.apply("A", 1.1)
            await asyncio.sleep(0.12)
            store.apply("A", 1.2)
            # the first timer would have fired by now
            await asyncio.sleep(0.12)
            assert store.is_flashing("A")
            await asyncio.sleep(0.15)
            assert not store.is_flashing("A")
        finally:
            store.close()

    @pytest.mark.asyncio
    async def test_snapshot_reports_flashing(self, small_store):
        small_store.apply("B", 52.0)
        snap = small_store.snapshot()
        assert [v.symbol for v in snap.instruments] == ["B", "A", "C"]
        assert [v.flashing for v in snap.instruments] == [True, False, False]
        assert snap.instruments[0].price_change == pytest.approx(2.0)

    @pytest.mark.asyncio
    async def test_close_cancels_pending_flashes(self, small_store):
        small_store.apply("A", 1.0)
        small_store.close()
        assert not small_store.is_flashing("A")


class TestSubscribers:

    @pytest.mark.asyncio
    async def test_subscriber_gets_snapshot_per_apply_and_expiry(self, small_store):
        q = small_store.subscribe()
        small_store.apply("C", 201.0)
        snap = await asyncio.wait_for(q.get(), timeout=1.0)
        assert snap.instruments[0].symbol == "C"
        assert snap.instruments[0].flashing
        expired = await asyncio.wait_for(q.get(), timeout=1.0)
        assert not expired.instruments[0].flashing

    @pytest.mark.asyncio
    async def test_unsubscribed_queue_gets_nothing(self, small_store):
        q = small_store.subscribe()
        assert small_store.subscriber_count == 1
        small_store.unsubscribe(q)
        assert small_store.subscriber_count == 0
        small_store.apply("A", 1.0)
        assert q.empty()

    @pytest.mark.asyncio
    async def test_slow_subscriber_keeps_latest(self, three_instruments):
        store = FeedStateStore(three_instruments, queue_size=2)
        try:
            q = store.subscribe()
            for price in (1.0, 2.0, 3.0, 4.0):
                store.apply("A", price)
            assert q.qsize() == 2
            q.get_nowait()
            assert q.get_nowait().instruments[0].price == 4.0
        finally:
            store.close()

    @pytest.mark.asyncio
    async def test_stream_starts_with_current_snapshot(self, small_store):
        stream = small_store.stream()
        first = await stream.__anext__()
        assert [v.symbol for v in first.instruments] == ["A", "B", "C"]
        small_store.apply("B", 49.0)
        second = await asyncio.wait_for(stream.__anext__(), timeout=1.0)
        assert second.instruments[0].symbol == "B"
        await stream.aclose()
