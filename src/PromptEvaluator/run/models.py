"""Data models for run orchestration."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class RunState(str, Enum):
    """Lifecycle of the run controller."""

    IDLE = "idle"
    RUNNING = "running"


@dataclass(frozen=True)
class RunResult:
    """One engine output for a model and variable combination."""

    name: str
    system: str
    user: str
    response: str


__all__ = ["RunState", "RunResult"]
