from __future__ import annotations
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv
import logging
import psutil
from datetime import datetime, timezone

# Load .env BEFORE anything uses os.getenv(...)
load_dotenv()

from api.routes import router as api_router
from core.deeplink import DeepLinkResolver
from core.scheduler import FeedScheduler
from core.store import FeedStateStore
from feeds.instruments import seed_instruments
from services.echo_socket import EchoConnection
from util.env import Settings, settings as default_settings
from util.logging import setup_logging

logger = logging.getLogger(__name__)

def build_scheduler(cfg: Settings, connection: Optional[EchoConnection] = None) -> FeedScheduler:
    store = FeedStateStore(seed_instruments(), flash_duration=cfg.FLASH_DURATION)
    return FeedScheduler(
        store=store,
        connection=connection or EchoConnection(cfg.ECHO_URL),
        tick_interval=cfg.TICK_INTERVAL,
        connect_grace=cfg.CONNECT_GRACE,
        volatility=cfg.VOLATILITY,
    )

def create_app(scheduler: Optional[FeedScheduler] = None, cfg: Settings = default_settings) -> FastAPI:
    app = FastAPI(title="Price Feed Simulator")

    # Dev CORS: allow all (no cookies with "*")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,   # MUST be False when using "*"
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # one scheduler per process, handed to routes through app.state
    app.state.scheduler = scheduler or build_scheduler(cfg)
    app.state.resolver = DeepLinkResolver(app.state.scheduler.store)

    @app.get("/ping")
    def ping():
        return {"ok": True}

    @app.get("/health")
    async def health_check():
        """Feed status plus process memory."""
        feed = app.state.scheduler.status()
        memory_mb = psutil.Process().memory_info().rss / 1024 / 1024
        memory_ok = memory_mb < 512
        return {
            "status": "healthy" if memory_ok else "degraded",
            "memory_mb": round(memory_mb, 2),
            "memory_ok": memory_ok,
            "feed": feed.model_dump(),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    app.include_router(api_router)

    @app.on_event("shutdown")
    async def shutdown_event():
        """Stop ticking and close the echo socket on the way out."""
        try:
            scheduler = app.state.scheduler
            await scheduler.stop()
            await scheduler.connection.disconnect()
            scheduler.store.close()
        except Exception as e:
            logger.error(f"Error during feed shutdown: {e}", exc_info=True)

    return app

setup_logging()
app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=default_settings.BACKEND_HOST, port=default_settings.BACKEND_PORT)
