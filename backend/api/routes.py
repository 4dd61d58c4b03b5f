from __future__ import annotations
import asyncio
from fastapi import APIRouter, Depends, HTTPException, Request, WebSocket, WebSocketDisconnect, status
from core.deeplink import DeepLinkResolver
from core.models import FeedSnapshot, FeedStatus, InstrumentView
from core.scheduler import FeedScheduler
from util.logging import get_logger

log = get_logger("api")

router = APIRouter()

def get_scheduler(request: Request) -> FeedScheduler:
  return request.app.state.scheduler

def get_resolver(request: Request) -> DeepLinkResolver:
  return request.app.state.resolver

def _view(scheduler: FeedScheduler, symbol: str) -> InstrumentView:
  inst = scheduler.select_by_symbol(symbol)
  if inst is None:
    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"unknown symbol {symbol}")
  return InstrumentView.of(inst, flashing=scheduler.store.is_flashing(symbol))

@router.post("/feed/start", response_model=FeedStatus)
async def start_feed(scheduler: FeedScheduler = Depends(get_scheduler)):
  await scheduler.start()
  return scheduler.status()

@router.post("/feed/stop", response_model=FeedStatus)
async def stop_feed(scheduler: FeedScheduler = Depends(get_scheduler)):
  await scheduler.stop()
  return scheduler.status()

@router.post("/feed/toggle", response_model=FeedStatus)
async def toggle_feed(scheduler: FeedScheduler = Depends(get_scheduler)):
  await scheduler.toggle()
  return scheduler.status()

@router.get("/feed/status", response_model=FeedStatus)
async def feed_status(scheduler: FeedScheduler = Depends(get_scheduler)):
  return scheduler.status()

@router.get("/instruments", response_model=FeedSnapshot)
async def list_instruments(scheduler: FeedScheduler = Depends(get_scheduler)):
  return scheduler.store.snapshot()

@router.get("/instruments/{symbol}", response_model=InstrumentView)
async def get_instrument(symbol: str, scheduler: FeedScheduler = Depends(get_scheduler)):
  return _view(scheduler, symbol.upper())

@router.get("/deeplink", response_model=InstrumentView)
async def open_deep_link(url: str, scheduler: FeedScheduler = Depends(get_scheduler),
                         resolver: DeepLinkResolver = Depends(get_resolver)):
  inst = resolver.resolve_url(url)
  if inst is None:
    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"no instrument for {url}")
  return _view(scheduler, inst.symbol)

@router.post("/instruments/{symbol}/select", response_model=InstrumentView)
async def select_instrument(symbol: str, scheduler: FeedScheduler = Depends(get_scheduler),
                            resolver: DeepLinkResolver = Depends(get_resolver)):
  inst = resolver.resolve(symbol)
  if inst is None:
    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"unknown symbol {symbol}")
  return _view(scheduler, inst.symbol)

@router.get("/selection", response_model=InstrumentView)
async def current_selection(scheduler: FeedScheduler = Depends(get_scheduler),
                            resolver: DeepLinkResolver = Depends(get_resolver)):
  if resolver.selected is None:
    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="nothing selected")
  return _view(scheduler, resolver.selected.symbol)

async def _push_snapshots(ws: WebSocket, scheduler: FeedScheduler) -> None:
  async for snap in scheduler.store.stream():
    await ws.send_json(snap.model_dump(mode="json"))

@router.websocket("/ws/instruments")
async def ws_instruments(ws: WebSocket):
  await ws.accept()
  scheduler: FeedScheduler = ws.app.state.scheduler
  pusher = asyncio.create_task(_push_snapshots(ws, scheduler))
  try:
    # the stream only wakes on updates; watch the client side for the close
    while True:
      msg = await ws.receive()
      if msg["type"] == "websocket.disconnect":
        break
  except WebSocketDisconnect:
    pass
  finally:
    pusher.cancel()
    await asyncio.gather(pusher, return_exceptions=True)
    log.debug("snapshot subscriber went away")
