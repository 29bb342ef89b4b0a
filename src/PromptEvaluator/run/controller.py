"""Run lifecycle state machine.

The controller submits a job to the engine, follows the engine's ``log`` and
``done`` events for that run and commits the decoded results. It is driven
from a single asyncio loop: ``submit`` suspends only while the engine
acknowledges dispatch and every event callback is a separate resumption.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, List, Optional, Protocol

from ..exceptions import DecodeError, DispatchError
from ..job.encoder import Submission, encode
from ..job.models import JobSpecification
from ..state import AppState, AppTab
from .decoder import decode
from .events import DONE_EVENT, LOG_EVENT, EventChannel, SubscriptionToken
from .logs import LogAggregator
from .models import RunState
from .notifications import LoggingNotifier, Notification, Notifier

logger = logging.getLogger("PromptEvaluator.run.controller")


class EngineClient(Protocol):
    """Command boundary towards the evaluation engine."""

    async def dispatch(self, submission: Submission) -> None: ...


Scheduler = Callable[[float, Callable[[], None]], object]
StateCallback = Callable[[RunState], None]

DEFAULT_REVEAL_DELAY_S = 1.0


def _loop_scheduler(delay: float, callback: Callable[[], None]) -> object:
    return asyncio.get_running_loop().call_later(delay, callback)


class RunController:
    """Owns :class:`RunState` and the subscriptions of the active run."""

    def __init__(
        self,
        engine: EngineClient,
        events: EventChannel,
        app_state: AppState,
        *,
        logs: Optional[LogAggregator] = None,
        notifier: Optional[Notifier] = None,
        schedule: Optional[Scheduler] = None,
        reveal_delay_s: float = DEFAULT_REVEAL_DELAY_S,
    ) -> None:
        self._engine = engine
        self._events = events
        self._app_state = app_state
        self._logs = logs if logs is not None else LogAggregator()
        self._notifier = notifier or LoggingNotifier()
        self._schedule = schedule or _loop_scheduler
        self._reveal_delay_s = reveal_delay_s
        self._state = RunState.IDLE
        self._subscriptions: List[SubscriptionToken] = []
        self._listeners: List[StateCallback] = []

    @property
    def state(self) -> RunState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state is RunState.RUNNING

    @property
    def logs(self) -> LogAggregator:
        return self._logs

    def add_listener(self, callback: StateCallback) -> Callable[[], None]:
        self._listeners.append(callback)

        def remove() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return remove

    async def submit(self, spec: JobSpecification) -> bool:
        """Start a run for ``spec``; returns ``False`` when no run was started."""

        if self._state is RunState.RUNNING:
            logger.warning("Run already in progress; submission ignored")
            return False

        submission = encode(spec)
        self._set_state(RunState.RUNNING)
        self._logs.reset()
        self._subscribe()
        logger.info(
            "Dispatching run",
            extra={
                "variables": len(spec.variables),
                "local_models": len(spec.local_models),
                "remote_models": len(spec.remote_models),
            },
        )
        dispatched = False
        try:
            await self._engine.dispatch(submission)
            dispatched = True
        except DispatchError as exc:
            logger.error("Dispatch failed", extra={"error": str(exc)})
            self._notifier.notify(Notification.failure("Unable to start run", str(exc)))
            return False
        finally:
            # Any failure, including cancellation, releases the run before propagating.
            if not dispatched:
                self._finish()

        # The engine may already have completed while dispatch was awaited.
        if self._state is RunState.RUNNING:
            self._reveal(AppTab.LOGS)
        return True

    def close(self) -> None:
        """Release the active run's subscriptions, e.g. when the view unmounts."""

        if self._subscriptions or self._state is RunState.RUNNING:
            logger.info("Run controller closed while a run was active")
        self._finish()

    def _subscribe(self) -> None:
        self._release()
        self._subscriptions = [
            self._events.subscribe(LOG_EVENT, self._on_log),
            self._events.subscribe(DONE_EVENT, self._on_done),
        ]

    def _release(self) -> None:
        for token in self._subscriptions:
            self._events.unsubscribe(token)
        self._subscriptions = []

    def _finish(self) -> None:
        self._release()
        self._set_state(RunState.IDLE)

    def _on_log(self, fragment: str) -> None:
        if self._state is not RunState.RUNNING:
            logger.debug("Ignoring log fragment received after completion")
            return
        self._logs.append(fragment)

    def _on_done(self, payload: str) -> None:
        if self._state is not RunState.RUNNING:
            logger.debug("Ignoring completion event while idle")
            return
        self._finish()
        try:
            results = decode(payload)
        except DecodeError as exc:
            logger.error(
                "Result payload could not be decoded",
                extra={"line_index": exc.line_index, "reason": exc.reason},
            )
            self._notifier.notify(Notification.failure("Unable to read results", str(exc)))
            return

        self._app_state.set_results(results)
        logger.info("Run complete", extra={"results": len(results)})
        self._notifier.notify(Notification.success("Run complete", f"{len(results)} outputs generated"))
        self._reveal(AppTab.RESULTS)

    def _reveal(self, tab: AppTab) -> None:
        self._schedule(self._reveal_delay_s, lambda: self._app_state.set_active_tab(tab))

    def _set_state(self, state: RunState) -> None:
        if state is self._state:
            return
        self._state = state
        for callback in list(self._listeners):
            callback(state)


__all__ = ["EngineClient", "RunController", "Scheduler", "DEFAULT_REVEAL_DELAY_S"]
