from __future__ import annotations

import logging
from typing import Callable

from nicegui import events, ui

from ...exceptions import JobLoadError
from ...job.loader import load_job
from ..state import GuiServices

logger = logging.getLogger("PromptEvaluator.gui.open_file")


def render_open_file(services: GuiServices, on_loaded: Callable[[], None]) -> None:
    """Upload area shown until a job file has been opened."""

    def _handle_upload(event: events.UploadEventArguments) -> None:
        text = event.content.read().decode("utf-8", errors="replace")
        try:
            spec = load_job(text)
        except JobLoadError as exc:
            logger.warning("Rejected job file", extra={"file_name": event.name})
            ui.notify(
                str(exc),
                caption="Error loading JSON file",
                type="negative",
                position="top-right",
                close_button=True,
                timeout=0,
                multi_line=True,
            )
            return
        ui.notify("Loaded input", type="positive", position="top-right")
        services.app_state.set_job(spec)
        on_loaded()

    with ui.column().classes("w-full h-[80vh] items-center justify-center gap-4"):
        ui.label("Drag JSON file here or click to select file").classes("text-xl")
        ui.upload(on_upload=_handle_upload, auto_upload=True, max_files=1).props("accept=.json")
