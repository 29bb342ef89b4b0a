"""Run lifecycle: events, log aggregation, result decoding and control."""

from .decoder import decode
from .events import DONE_EVENT, LOG_EVENT, EventChannel, SubscriptionToken
from .logs import LogAggregator
from .models import RunResult, RunState
from .notifications import (
    LoggingNotifier,
    Notification,
    NotificationLevel,
    Notifier,
    RecordingNotifier,
)
from .controller import EngineClient, RunController

__all__ = [
    "DONE_EVENT",
    "EngineClient",
    "LOG_EVENT",
    "EventChannel",
    "LogAggregator",
    "LoggingNotifier",
    "Notification",
    "NotificationLevel",
    "Notifier",
    "RecordingNotifier",
    "RunController",
    "RunResult",
    "RunState",
    "SubscriptionToken",
    "decode",
]
