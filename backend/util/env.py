from __future__ import annotations
import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()

@dataclass(frozen=True)
class Settings:
    BACKEND_HOST: str = os.getenv("BACKEND_HOST", "127.0.0.1")
    BACKEND_PORT: int = int(os.getenv("BACKEND_PORT", "8000"))

    # echo transport
    ECHO_URL: str = os.getenv("ECHO_URL", "wss://ws.postman-echo.com/raw")

    # feed timing, seconds
    TICK_INTERVAL: float = float(os.getenv("TICK_INTERVAL", "2.0"))
    CONNECT_GRACE: float = float(os.getenv("CONNECT_GRACE", "1.0"))
    FLASH_DURATION: float = float(os.getenv("FLASH_DURATION", "1.0"))

    VOLATILITY: float = float(os.getenv("VOLATILITY", "0.02"))

settings = Settings()
