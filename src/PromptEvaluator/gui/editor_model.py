"""Editing-surface model backing the job editor view."""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Protocol, TypeVar

from ..job.editable import EditableJob, from_editable, to_editable
from ..job.models import JobSpecification

logger = logging.getLogger("PromptEvaluator.gui.editor")

Edit = Callable[[EditableJob], EditableJob]


class Control(Protocol):
    def enable(self) -> None: ...

    def disable(self) -> None: ...


C = TypeVar("C", bound=Control)


class EditorModel:
    """Holds the job being edited and applies positional edits to it.

    Edits are refused while ``is_locked`` reports a run in progress, which
    keeps the submitted job read-only until the run returns to idle. Bound
    controls follow the same lock so the page never shows text the model
    has refused.
    """

    def __init__(self, spec: JobSpecification, *, is_locked: Optional[Callable[[], bool]] = None) -> None:
        self._job = to_editable(spec)
        self._is_locked = is_locked or (lambda: False)
        self._controls: List[Control] = []

    @property
    def job(self) -> EditableJob:
        return self._job

    @property
    def locked(self) -> bool:
        return self._is_locked()

    def apply(self, edit: Edit) -> bool:
        if self.locked:
            logger.debug("Edit ignored while a run is in progress")
            return False
        self._job = edit(self._job)
        return True

    def bind(self, control: C) -> C:
        """Register an input that must be read-only while the model is locked."""

        self._controls.append(control)
        self._apply_lock(control, self.locked)
        return control

    def sync_controls(self) -> None:
        # Controls removed from the page by a refresh are dropped.
        self._controls = [control for control in self._controls if not getattr(control, "is_deleted", False)]
        locked = self.locked
        for control in self._controls:
            self._apply_lock(control, locked)

    @staticmethod
    def _apply_lock(control: Control, locked: bool) -> None:
        if locked:
            control.disable()
        else:
            control.enable()

    def specification(self) -> JobSpecification:
        return from_editable(self._job)


__all__ = ["Control", "EditorModel"]
