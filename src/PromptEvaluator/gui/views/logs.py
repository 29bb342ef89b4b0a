from __future__ import annotations

from nicegui import ui

from ..ansi import strip_ansi
from ..state import GuiServices

REFRESH_INTERVAL_S = 0.25


def render_logs(services: GuiServices) -> None:
    """Engine output of the current run, refreshed while fragments arrive."""

    logs = services.controller.logs
    seen = {"count": -1}

    with ui.scroll_area().classes("w-full h-[75vh] bg-slate-950 rounded") as area:
        output = ui.label().classes("font-mono text-sm text-slate-100 whitespace-pre-wrap p-3")

    def refresh() -> None:
        if len(logs) == seen["count"]:
            return
        seen["count"] = len(logs)
        output.set_text(strip_ansi(logs.text()))
        area.scroll_to(percent=1.0)

    refresh()
    ui.timer(REFRESH_INTERVAL_S, refresh)
