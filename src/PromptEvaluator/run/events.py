"""Subscription channel for engine events."""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from typing import Callable, Dict

LOG_EVENT = "log"
DONE_EVENT = "done"

EventHandler = Callable[[str], None]

logger = logging.getLogger("PromptEvaluator.run.events")


@dataclass(frozen=True)
class SubscriptionToken:
    event: str
    token_id: int


class EventChannel:
    """Delivers engine events to explicitly acquired subscriptions.

    Handlers run synchronously on the emitting thread, which is the asyncio
    loop thread for every engine bridge in this package.
    """

    def __init__(self) -> None:
        self._handlers: Dict[str, Dict[int, EventHandler]] = {}
        self._ids = itertools.count(1)

    def subscribe(self, event: str, handler: EventHandler) -> SubscriptionToken:
        token = SubscriptionToken(event=event, token_id=next(self._ids))
        self._handlers.setdefault(event, {})[token.token_id] = handler
        return token

    def unsubscribe(self, token: SubscriptionToken) -> None:
        handlers = self._handlers.get(token.event)
        if handlers is not None:
            handlers.pop(token.token_id, None)

    def emit(self, event: str, payload: str) -> None:
        handlers = list(self._handlers.get(event, {}).values())
        if not handlers:
            logger.debug("No subscribers for engine event", extra={"event": event})
        for handler in handlers:
            handler(payload)

    def listener_count(self, event: str) -> int:
        return len(self._handlers.get(event, {}))


__all__ = [
    "LOG_EVENT",
    "DONE_EVENT",
    "EventHandler",
    "SubscriptionToken",
    "EventChannel",
]
