from __future__ import annotations

import logging

from fastapi import FastAPI
from nicegui import app as nicegui_app
from nicegui import ui

from ..config import Settings
from .state import get_services, register_global_state, shutdown_services
from .views.shell import render_shell

logger = logging.getLogger("PromptEvaluator.gui.app")

TITLE = "Prompt Evaluator"


def create_app(settings: Settings) -> FastAPI:
    """Return a FastAPI application with NiceGUI mounted."""

    nicegui_app.config.title = TITLE

    @nicegui_app.on_startup
    async def _on_startup() -> None:
        register_global_state(settings)
        logger.info("GUI services registered", extra={"engine": settings.engine_command})

    nicegui_app.on_shutdown(shutdown_services)

    @ui.page("/")
    def _root() -> None:
        render_shell(get_services())

    return ui.app  # NiceGUI exposes the FastAPI app as ui.app


def run_app(settings: Settings, *, host: str = "127.0.0.1", port: int = 8080) -> None:
    create_app(settings)
    ui.run(host=host, port=port, title=TITLE, reload=False, show=False)
