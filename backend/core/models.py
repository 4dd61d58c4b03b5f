from __future__ import annotations
from typing import Literal, List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, ValidationError, computed_field
from datetime import datetime, timezone
from core.errors import DecodeFailure

ConnectionState = Literal["DISCONNECTED", "CONNECTING", "CONNECTED"]

def utcnow() -> datetime:
    return datetime.now(timezone.utc)

class Instrument(BaseModel):
    """A tracked symbol with its current and previous price."""
    model_config = ConfigDict(validate_assignment=True)

    symbol: str = Field(frozen=True)
    company_name: str = Field(frozen=True)
    description: str = Field(frozen=True)
    price: float
    previous_price: float
    last_updated: datetime = Field(default_factory=utcnow)

    @classmethod
    def create(cls, symbol: str, price: float, company_name: str, description: str) -> "Instrument":
        return cls(symbol=symbol, price=price, previous_price=price,
                   company_name=company_name, description=description)

    @computed_field
    @property
    def price_change(self) -> float:
        return self.price - self.previous_price

    @computed_field
    @property
    def price_change_percentage(self) -> float:
        if self.previous_price <= 0:
            return 0.0
        return self.price_change / self.previous_price * 100.0

    @property
    def is_increasing(self) -> bool:
        return self.price > self.previous_price

    @property
    def is_decreasing(self) -> bool:
        return self.price < self.previous_price

    def update_price(self, new_price: float) -> None:
        self.previous_price = self.price
        self.price = new_price
        self.last_updated = utcnow()

class InstrumentView(BaseModel):
    symbol: str
    company_name: str
    description: str
    price: float
    previous_price: float
    price_change: float
    price_change_percentage: float
    last_updated: datetime
    flashing: bool

    @classmethod
    def of(cls, inst: Instrument, *, flashing: bool) -> "InstrumentView":
        return cls(**inst.model_dump(), flashing=flashing)

class FeedSnapshot(BaseModel):
    taken_at: datetime
    instruments: List[InstrumentView]

class FeedStatus(BaseModel):
    running: bool
    connection: ConnectionState
    last_error: Optional[str] = None
    ticks_sent: int = 0
    updates_applied: int = 0
    messages_dropped: int = 0

class UpdateMessage(BaseModel):
    """Wire payload: {"symbol", "price", "timestamp"} as UTF-8 JSON text."""
    model_config = ConfigDict(extra="ignore")

    symbol: str
    price: float
    timestamp: datetime

    def encode(self) -> str:
        return self.model_dump_json()

def decode_update(raw: Union[str, bytes]) -> UpdateMessage:
    if isinstance(raw, (bytes, bytearray)):
        raise DecodeFailure(f"unexpected binary frame ({len(raw)} bytes)")
    try:
        return UpdateMessage.model_validate_json(raw)
    except ValidationError as e:
        raise DecodeFailure(f"malformed update: {e.error_count()} error(s)") from e
