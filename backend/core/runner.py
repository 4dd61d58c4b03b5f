from __future__ import annotations
import asyncio
from typing import Awaitable, Callable, Optional
from util.logging import get_logger

log = get_logger("runner")

class TickRunner:
  """Repeating task: runs `action` immediately, then every `interval` seconds until stop()."""

  def __init__(self, *, interval: float, action: Callable[[], Awaitable[None]], name: str = "feed-tick"):
    self.interval = interval
    self._action = action
    self._name = name
    self._stopping = asyncio.Event()
    self._task: Optional[asyncio.Task] = None
    self._num_ticks = 0

  @property
  def num_ticks(self) -> int:
    return self._num_ticks

  @property
  def running(self) -> bool:
    return self._task is not None and not self._task.done()

  def start(self) -> None:
    if self.running:
      return
    self._stopping.clear()
    self._task = asyncio.get_running_loop().create_task(self._run(), name=self._name)

  async def _run(self) -> None:
    log.info("tick started interval=%.2fs", self.interval)
    try:
      while not self._stopping.is_set():
        self._num_ticks += 1
        try:
          await self._action()
        except Exception as e:
          log.error(f"Error in tick {self._num_ticks}: {e}", exc_info=True)

        try:
          await asyncio.wait_for(self._stopping.wait(), timeout=self.interval)
        except asyncio.TimeoutError:
          continue
    finally:
      log.info("tick stopped after %d ticks", self._num_ticks)

  def stop(self) -> None:
    self._stopping.set()
    if self._task is not None and self._task is not asyncio.current_task():
      self._task.cancel()
    self._task = None
