from __future__ import annotations
import asyncio
from typing import Dict, Iterable, List, Optional, Set, AsyncIterator
from core.models import Instrument, InstrumentView, FeedSnapshot, utcnow
from util.logging import get_logger

log = get_logger("store")

class FeedStateStore:
  """Ordered instruments (most recently updated first) plus the flashing set.

  Must be used from a single event loop; apply() is synchronous so updates
  coming from the tick and receive paths never interleave.
  """

  def __init__(self, instruments: Iterable[Instrument], *, flash_duration: float = 1.0, queue_size: int = 16):
    self._order: List[Instrument] = list(instruments)
    self._by_symbol: Dict[str, Instrument] = {}
    for inst in self._order:
      if inst.symbol in self._by_symbol:
        raise ValueError(f"duplicate symbol {inst.symbol!r}")
      self._by_symbol[inst.symbol] = inst
    self._flash_duration = flash_duration
    self._flashing: Set[str] = set()
    self._flash_timers: Dict[str, asyncio.TimerHandle] = {}
    self._subscribers: Set[asyncio.Queue[FeedSnapshot]] = set()
    self._queue_size = queue_size

  def __len__(self) -> int:
    return len(self._order)

  def __contains__(self, symbol: str) -> bool:
    return symbol in self._by_symbol

  def symbols(self) -> List[str]:
    return [i.symbol for i in self._order]

  def apply(self, symbol: str, new_price: float) -> Optional[Instrument]:
    inst = self._by_symbol.get(symbol)
    if inst is None:
      log.warning("ignoring update for unknown symbol %s", symbol)
      return None
    # raises off-loop before anything is touched
    loop = asyncio.get_running_loop()
    inst.update_price(new_price)
    self._order.remove(inst)
    self._order.insert(0, inst)
    self._flash(loop, symbol)
    log.debug("applied %s price=%.2f change=%+.2f", symbol, inst.price, inst.price_change)
    self._publish()
    return inst.model_copy()

  def is_flashing(self, symbol: str) -> bool:
    return symbol in self._flashing

  def select_by_symbol(self, symbol: str) -> Optional[Instrument]:
    inst = self._by_symbol.get(symbol)
    return inst.model_copy() if inst is not None else None

  def instruments(self) -> List[Instrument]:
    return [i.model_copy() for i in self._order]

  def snapshot(self) -> FeedSnapshot:
    return FeedSnapshot(
      taken_at=utcnow(),
      instruments=[InstrumentView.of(i, flashing=i.symbol in self._flashing) for i in self._order],
    )

  # flash marks

  def _flash(self, loop: asyncio.AbstractEventLoop, symbol: str) -> None:
    self._flashing.add(symbol)
    pending = self._flash_timers.pop(symbol, None)
    if pending is not None:
      pending.cancel()
    self._flash_timers[symbol] = loop.call_later(self._flash_duration, self._unflash, symbol)

  def _unflash(self, symbol: str) -> None:
    self._flash_timers.pop(symbol, None)
    self._flashing.discard(symbol)
    self._publish()

  def close(self) -> None:
    for handle in self._flash_timers.values():
      handle.cancel()
    self._flash_timers.clear()
    self._flashing.clear()

  # observers

  def subscribe(self) -> asyncio.Queue[FeedSnapshot]:
    q: asyncio.Queue[FeedSnapshot] = asyncio.Queue(maxsize=self._queue_size)
    self._subscribers.add(q)
    return q

  def unsubscribe(self, q: asyncio.Queue[FeedSnapshot]) -> None:
    self._subscribers.discard(q)

  @property
  def subscriber_count(self) -> int:
    return len(self._subscribers)

  def _publish(self) -> None:
    if not self._subscribers:
      return
    snap = self.snapshot()
    for q in self._subscribers:
      if q.full():
        # slow consumer: keep the newest state
        q.get_nowait()
      q.put_nowait(snap)

  async def stream(self) -> AsyncIterator[FeedSnapshot]:
    q = self.subscribe()
    try:
      yield self.snapshot()
      while True:
        yield await q.get()
    finally:
      self.unsubscribe(q)
