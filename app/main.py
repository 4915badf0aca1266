from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.routes import router
from app.api.ui import router as ui_router
from app.config.settings import get_settings
from app.services.dashboard_state import DashboardController
from app.services.quote_store import MockQuoteStore
from app.services.refresh_scheduler import RefreshScheduler


@asynccontextmanager
async def lifespan(app: FastAPI):
    scheduler = app.state.refresh_scheduler
    scheduler.start()
    try:
        yield
    finally:
        await scheduler.stop(drain_timeout_sec=app.state.dashboard.store.fetch_latency_sec + 1.0)


def build_services(settings=None) -> tuple[DashboardController, RefreshScheduler]:
    settings = settings or get_settings()
    store = MockQuoteStore(fetch_latency_sec=settings.AGGREGATOR_FETCH_LATENCY_SEC)
    controller = DashboardController(store, watchlist=settings.AGGREGATOR_DEFAULT_WATCHLIST)
    scheduler = RefreshScheduler(controller, interval_sec=settings.AGGREGATOR_REFRESH_INTERVAL_SEC)
    return controller, scheduler


def bind_services(app: FastAPI, settings=None) -> None:
    controller, scheduler = build_services(settings)
    app.state.dashboard = controller
    app.state.refresh_scheduler = scheduler


app = FastAPI(title="Stock Price Aggregator", version="0.1.0", lifespan=lifespan)
app.include_router(router, prefix="/v1")
app.include_router(ui_router)

app.state.get_settings = get_settings
bind_services(app)
