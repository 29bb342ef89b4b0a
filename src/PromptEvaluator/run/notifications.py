"""User-facing notifications raised by the run lifecycle."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Protocol


class NotificationLevel(str, Enum):
    SUCCESS = "success"
    INFO = "info"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    title: str
    message: str
    level: NotificationLevel = NotificationLevel.INFO
    persistent: bool = False

    @classmethod
    def success(cls, title: str, message: str) -> "Notification":
        return cls(title=title, message=message, level=NotificationLevel.SUCCESS)

    @classmethod
    def failure(cls, title: str, message: str) -> "Notification":
        """Failures stay on screen until the user dismisses them."""

        return cls(title=title, message=message, level=NotificationLevel.ERROR, persistent=True)


class Notifier(Protocol):
    def notify(self, notification: Notification) -> None: ...


class LoggingNotifier:
    """Notifier used when no interactive surface is attached."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger("PromptEvaluator.notifications")

    def notify(self, notification: Notification) -> None:
        level = logging.ERROR if notification.level is NotificationLevel.ERROR else logging.INFO
        self._logger.log(
            level,
            "%s: %s",
            notification.title,
            notification.message,
            extra={"persistent": notification.persistent},
        )


class RecordingNotifier:
    """Collects notifications in memory."""

    def __init__(self) -> None:
        self.notifications: List[Notification] = []

    def notify(self, notification: Notification) -> None:
        self.notifications.append(notification)

    @property
    def failures(self) -> List[Notification]:
        return [item for item in self.notifications if item.level is NotificationLevel.ERROR]


__all__ = [
    "NotificationLevel",
    "Notification",
    "Notifier",
    "LoggingNotifier",
    "RecordingNotifier",
]
