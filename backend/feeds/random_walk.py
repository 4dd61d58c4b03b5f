from __future__ import annotations
import math, random
from typing import Optional

class PriceGenerator:
  """Bounded random walk around a base price.

  Each step moves the price by a uniform fraction in [-volatility, +volatility]
  and clamps it to 50%..150% of the base. Returned prices are whole cents.
  """

  def __init__(self, base_price: float, *, volatility: float = 0.02, rng: Optional[random.Random] = None):
    self._base = base_price
    self._current = base_price
    self._volatility = volatility
    self._rng = rng or random.Random()
    self._last = round(base_price, 2)
    lo, hi = self.bounds
    # band edges in cents; rounding must never step outside the band
    self._lo_cents = math.ceil(lo * 100 - 1e-6)
    self._hi_cents = math.floor(hi * 100 + 1e-6)

  @property
  def base_price(self) -> float:
    return self._base

  @property
  def last(self) -> float:
    return self._last

  @property
  def bounds(self) -> tuple[float, float]:
    return self._base * 0.5, self._base * 1.5

  def next(self) -> float:
    change = self._rng.uniform(-self._volatility, self._volatility)
    self._current += self._current * change
    lo, hi = self.bounds
    self._current = max(lo, min(hi, self._current))
    cents = min(self._hi_cents, max(self._lo_cents, round(self._current * 100)))
    self._last = cents / 100
    return self._last
