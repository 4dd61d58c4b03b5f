from __future__ import annotations
import asyncio, random
from typing import Dict, Optional, Union
from core.errors import DecodeFailure, StartIgnored
from core.models import ConnectionState, FeedStatus, Instrument, UpdateMessage, decode_update, utcnow
from core.runner import TickRunner
from core.store import FeedStateStore
from feeds.random_walk import PriceGenerator
from services.echo_socket import EchoConnection
from util.logging import get_logger

log = get_logger("scheduler")

class FeedScheduler:
  """Drives the simulated feed.

  Every tick one symbol's generator produces a price which is sent through
  the echo connection. When the echo comes back the store is updated with the
  generator's own latest price; the echoed price only proves the round trip.
  """

  def __init__(self, *, store: FeedStateStore, connection: EchoConnection,
               tick_interval: float = 2.0, connect_grace: float = 1.0,
               volatility: float = 0.02, rng: Optional[random.Random] = None):
    self.store = store
    self.connection = connection
    self.tick_interval = tick_interval
    self.connect_grace = connect_grace
    self._rng = rng or random.Random()
    self._generators: Dict[str, PriceGenerator] = {
      inst.symbol: PriceGenerator(inst.price, volatility=volatility, rng=self._rng)
      for inst in store.instruments()
    }
    self._runner: Optional[TickRunner] = None
    self._running = False
    self._activating = False
    self._generation = 0
    self._ticks_sent = 0
    self._updates_applied = 0
    self._dropped = 0
    self.last_start_error: Optional[str] = None
    connection.on_message(self.on_message)
    connection.on_state_change(self._on_connection_state)

  @property
  def running(self) -> bool:
    return self._running

  def generator(self, symbol: str) -> Optional[PriceGenerator]:
    return self._generators.get(symbol)

  async def start(self) -> bool:
    if self._running or self._activating:
      return self._running
    self._activating = True
    generation = self._generation
    try:
      self.connection.connect()
      await asyncio.sleep(self.connect_grace)
      if generation != self._generation:
        return False
      state = self.connection.state
      if state != "CONNECTED":
        self.last_start_error = str(StartIgnored(f"connection {state.lower()} after {self.connect_grace:.1f}s grace"))
        log.warning("start ignored: %s", self.last_start_error)
        return False
      self.last_start_error = None
      self._runner = TickRunner(interval=self.tick_interval, action=self.tick)
      self._runner.start()
      self._running = True
      log.info("feed started symbols=%d interval=%.1fs", len(self._generators), self.tick_interval)
      return True
    finally:
      self._activating = False

  async def stop(self) -> None:
    if not self._running and not self._activating:
      return
    self._generation += 1
    self._halt_ticks()
    await self.connection.disconnect()
    log.info("feed stopped")

  async def toggle(self) -> bool:
    if self._running:
      await self.stop()
    else:
      await self.start()
    return self._running

  def _halt_ticks(self) -> None:
    if self._runner is not None:
      self._runner.stop()
      self._runner = None
    self._running = False

  def _on_connection_state(self, state: ConnectionState) -> None:
    if state == "DISCONNECTED" and self._running:
      log.warning("connection lost while running: %s", self.connection.last_error)
      self._halt_ticks()

  async def tick(self) -> None:
    if not self._generators:
      return
    symbol = self._rng.choice(list(self._generators))
    price = self._generators[symbol].next()
    msg = UpdateMessage(symbol=symbol, price=price, timestamp=utcnow())
    if await self.connection.send(msg.encode()):
      self._ticks_sent += 1
      log.debug("sent %s %.2f", symbol, price)

  def on_message(self, frame: Union[str, bytes]) -> Optional[Instrument]:
    try:
      msg = decode_update(frame)
    except DecodeFailure as e:
      self._dropped += 1
      log.warning(f"dropping inbound frame: {e}")
      return None
    gen = self._generators.get(msg.symbol)
    if gen is None:
      self._dropped += 1
      log.debug("dropping update for unknown symbol %s", msg.symbol)
      return None
    updated = self.store.apply(msg.symbol, gen.last)
    if updated is not None:
      self._updates_applied += 1
    return updated

  def select_by_symbol(self, symbol: str) -> Optional[Instrument]:
    return self.store.select_by_symbol(symbol)

  def status(self) -> FeedStatus:
    return FeedStatus(
      running=self._running,
      connection=self.connection.state,
      last_error=self.connection.last_error or self.last_start_error,
      ticks_sent=self._ticks_sent,
      updates_applied=self._updates_applied,
      messages_dropped=self._dropped,
    )
