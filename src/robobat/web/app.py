"""FastAPI application serving the dashboard pages and actions."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any, Final

from fastapi import FastAPI, Form
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from starlette.concurrency import run_in_threadpool

from robobat import __version__
from robobat.controller import BatteryDashboard, InvalidThresholdError

logger: Final = logging.getLogger(__name__)


def _back_to(path: str) -> RedirectResponse:
    # Only local paths; anything else falls back to the dashboard
    if not path.startswith("/") or path.startswith("//"):
        path = "/"
    return RedirectResponse(path, status_code=303)


def create_app(dashboard: BatteryDashboard) -> FastAPI:
    """Build the web application around a dashboard controller.

    The simulation clock runs for the lifetime of the application. Routes
    that read or change simulation state are coroutines, so they run on the
    same event loop as the clock ticks. The event log page runs only its
    blocking HTTP fetch in a worker thread and renders back on the loop.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        dashboard.start()
        logger.info("RoboBat dashboard ready")
        try:
            yield
        finally:
            dashboard.stop()
            logger.info("RoboBat dashboard shut down")

    app = FastAPI(title="RoboBat", version=__version__, lifespan=lifespan)
    app.state.dashboard = dashboard
    app.mount(
        "/static",
        StaticFiles(directory=dashboard.settings.paths.static_dir),
        name="static",
    )

    @app.get("/", response_class=HTMLResponse)
    async def dashboard_page() -> str:
        return dashboard.render_dashboard()

    @app.get("/history", response_class=HTMLResponse)
    async def history_page() -> str:
        logs = await run_in_threadpool(dashboard.load_event_log)
        return dashboard.render_history(logs)

    @app.get("/settings", response_class=HTMLResponse)
    async def settings_page() -> str:
        return dashboard.render_settings()

    @app.post("/settings/threshold")
    async def save_threshold(threshold: str = Form("")) -> RedirectResponse:
        try:
            dashboard.save_threshold(threshold)
        except InvalidThresholdError as err:
            logger.warning("%s", err)
            dashboard.sink.error(f"Invalid threshold: {threshold!r}")
        return _back_to("/settings")

    @app.post("/settings/recharge")
    async def recharge_battery() -> RedirectResponse:
        dashboard.recharge()
        return _back_to("/settings")

    @app.post("/settings/theme")
    async def toggle_theme() -> RedirectResponse:
        dashboard.toggle_theme()
        return _back_to("/settings")

    @app.post("/notifications/{notification_id}/dismiss")
    async def dismiss_notification(
        notification_id: int, next: str = Form("/")
    ) -> RedirectResponse:
        dashboard.dismiss_notification(notification_id)
        return _back_to(next)

    @app.get("/api/state")
    async def state() -> dict[str, Any]:
        return dashboard.snapshot()

    return app
