from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional

from nicegui import ui
from nicegui.element import Element

from ..config import Settings
from ..engine import SubprocessEngine
from ..run.controller import RunController
from ..run.events import EventChannel
from ..run.notifications import Notification, NotificationLevel
from ..state import AppState

_NOTIFY_TYPES = {
    NotificationLevel.SUCCESS: "positive",
    NotificationLevel.INFO: "info",
    NotificationLevel.ERROR: "negative",
}


class PageNotifier:
    """Shows notifications on every open page.

    Run events arrive outside of any page context, so each page registers an
    element whose context is entered before calling ``ui.notify``.
    """

    def __init__(self) -> None:
        self._targets: List[Element] = []

    def register(self, element: Element) -> Callable[[], None]:
        self._targets.append(element)

        def unregister() -> None:
            if element in self._targets:
                self._targets.remove(element)

        return unregister

    def notify(self, notification: Notification) -> None:
        for element in list(self._targets):
            with element:
                ui.notify(
                    notification.message,
                    caption=notification.title,
                    type=_NOTIFY_TYPES[notification.level],
                    position="top-right",
                    close_button=notification.persistent,
                    timeout=0 if notification.persistent else 5000,
                )


@dataclass
class GuiServices:
    settings: Settings
    app_state: AppState
    events: EventChannel
    engine: SubprocessEngine
    notifier: PageNotifier
    controller: RunController


_services: Optional[GuiServices] = None


def register_global_state(settings: Settings) -> GuiServices:
    """Create the process-wide state shared by every page."""

    global _services
    if _services is None:
        app_state = AppState()
        events = EventChannel()
        notifier = PageNotifier()
        engine = SubprocessEngine(
            settings.engine_command,
            events,
            output_dir=settings.output_dir,
            use_gpu=settings.use_gpu,
        )
        controller = RunController(
            engine,
            events,
            app_state,
            notifier=notifier,
            reveal_delay_s=settings.reveal_delay_s,
        )
        _services = GuiServices(
            settings=settings,
            app_state=app_state,
            events=events,
            engine=engine,
            notifier=notifier,
            controller=controller,
        )
    return _services


def get_services() -> GuiServices:
    if _services is None:
        raise RuntimeError("GUI services are not registered; call register_global_state first")
    return _services


async def shutdown_services() -> None:
    global _services
    if _services is None:
        return
    _services.controller.close()
    await _services.engine.aclose()
    _services = None
