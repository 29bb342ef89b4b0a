from __future__ import annotations

from typing import Dict

from nicegui import ui
from nicegui.element import Element

from ...state import AppTab
from ..state import GuiServices
from .editor import render_editor
from .logs import render_logs
from .open_file import render_open_file
from .results import render_results


def render_shell(services: GuiServices) -> None:
    """Render global chrome (header, navigation) and the three job views."""

    app_state = services.app_state
    nav_buttons: Dict[AppTab, ui.button] = {}
    panels: Dict[AppTab, Element] = {}

    def select(tab: AppTab) -> None:
        for key, button in nav_buttons.items():
            if key is tab:
                button.classes(add="bg-white text-slate-900", remove="bg-slate-700 text-white")
            else:
                button.classes(add="bg-slate-700 text-white", remove="bg-white text-slate-900")
        for key, panel in panels.items():
            panel.set_visibility(key is tab)

    with ui.header().classes("items-center justify-between bg-slate-900 text-white px-6 py-4 gap-4"):
        ui.label("Prompt Evaluator").classes("text-xl font-bold")
        with ui.row().classes("items-center gap-2") as navigation:
            for tab in AppTab:
                nav_buttons[tab] = ui.button(
                    tab.value, on_click=lambda t=tab: app_state.set_active_tab(t)
                ).props("flat")

    @ui.refreshable
    def results_panel() -> None:
        render_results(services)

    @ui.refreshable
    def body() -> None:
        panels.clear()
        if app_state.job is None:
            navigation.set_visibility(False)
            render_open_file(services, on_loaded=lambda: app_state.set_active_tab(AppTab.EDITOR))
            return
        navigation.set_visibility(True)
        with ui.column().classes("w-full p-6") as panels[AppTab.EDITOR]:
            render_editor(services)
        with ui.column().classes("w-full p-6") as panels[AppTab.LOGS]:
            render_logs(services)
        with ui.column().classes("w-full p-6") as panels[AppTab.RESULTS]:
            results_panel()
        select(app_state.active_tab)

    with ui.column().classes("w-full") as page:
        body()

    def on_change(field_name: str) -> None:
        if field_name == "active_tab":
            select(app_state.active_tab)
        elif field_name == "results":
            results_panel.refresh()
        elif field_name == "job" and not panels:
            body.refresh()

    unsubscribe = app_state.subscribe(on_change)
    unregister = services.notifier.register(page)
    ui.context.client.on_disconnect(unsubscribe)
    ui.context.client.on_disconnect(unregister)
