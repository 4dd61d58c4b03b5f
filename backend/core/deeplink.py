from __future__ import annotations
from typing import Optional
from urllib.parse import urlsplit
from core.models import Instrument
from core.store import FeedStateStore
from util.logging import get_logger

log = get_logger("deeplink")

SCHEME = "stocks"
HOST = "symbol"

def parse_deep_link(url: str) -> Optional[str]:
  """stocks://symbol/aapl -> "AAPL"; anything else -> None."""
  parts = urlsplit(url.strip())
  if parts.scheme.lower() != SCHEME or (parts.hostname or "") != HOST:
    return None
  segments = [s for s in parts.path.split("/") if s]
  if not segments:
    return None
  return segments[0].upper()

class DeepLinkResolver:
  def __init__(self, store: FeedStateStore):
    self._store = store
    self.selected: Optional[Instrument] = None

  def resolve(self, symbol: str) -> Optional[Instrument]:
    inst = self._store.select_by_symbol(symbol.strip().upper())
    if inst is None:
      log.info("no instrument for symbol %r", symbol)
      return None
    self.selected = inst
    return inst

  def resolve_url(self, url: str) -> Optional[Instrument]:
    symbol = parse_deep_link(url)
    if symbol is None:
      log.info("not a symbol link: %s", url)
      return None
    return self.resolve(symbol)
