"""Process-wide state shared by every view of the application."""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Callable, List, Optional, Sequence, Tuple

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .job.models import JobSpecification
    from .run.models import RunResult

logger = logging.getLogger("PromptEvaluator.state")

StateListener = Callable[[str], None]


class AppTab(str, Enum):
    EDITOR = "Editor"
    LOGS = "Logs"
    RESULTS = "Results"


class AppState:
    """Observable container for the current job, results and active view.

    Each field has one writer: the editing surface sets the job, the run
    controller sets results. Listeners receive the name of the changed field.
    """

    def __init__(self) -> None:
        self._job: Optional[JobSpecification] = None
        self._results: Tuple[RunResult, ...] = ()
        self._active_tab = AppTab.EDITOR
        self._listeners: List[StateListener] = []

    @property
    def job(self) -> Optional[JobSpecification]:
        return self._job

    @property
    def results(self) -> Tuple[RunResult, ...]:
        return self._results

    @property
    def active_tab(self) -> AppTab:
        return self._active_tab

    def set_job(self, job: Optional[JobSpecification]) -> None:
        self._job = job
        self._notify("job")

    def set_results(self, results: Sequence[RunResult]) -> None:
        self._results = tuple(results)
        self._notify("results")

    def set_active_tab(self, tab: AppTab) -> None:
        if tab == self._active_tab:
            return
        self._active_tab = tab
        self._notify("active_tab")

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, field_name: str) -> None:
        logger.debug("State changed", extra={"field": field_name})
        for listener in list(self._listeners):
            listener(field_name)


__all__ = ["AppTab", "AppState", "StateListener"]
