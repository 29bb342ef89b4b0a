from __future__ import annotations

from nicegui import ui

from ...run.models import RunResult
from ..state import GuiServices


def _field(title: str, value: str) -> None:
    ui.label(title).classes("text-xs uppercase text-gray-500 tracking-wide")
    ui.label(value).classes("text-sm whitespace-pre-wrap")


def render_result(result: RunResult) -> None:
    with ui.card().classes("w-full p-4 gap-2"):
        ui.label(result.name).classes("text-lg font-semibold")
        _field("System", result.system)
        _field("User", result.user)
        ui.separator()
        _field("Response", result.response)


def render_results(services: GuiServices) -> None:
    """One card per committed result, in engine output order."""

    results = services.app_state.results
    if not results:
        ui.label("No results yet. Run a job from the editor.").classes("text-gray-500")
        return
    with ui.column().classes("w-full gap-4"):
        for result in results:
            render_result(result)
