"""Tests for the GUI-independent parts of the editor."""

from __future__ import annotations

from functools import partial

from PromptEvaluator.gui.ansi import strip_ansi
from PromptEvaluator.gui.editor_model import EditorModel
from PromptEvaluator.job import editable
from PromptEvaluator.job.models import JobSpecification


def test_edits_apply_when_unlocked() -> None:
    model = EditorModel(JobSpecification.create(variables={"a": ["1"]}))

    assert model.apply(partial(editable.rename_variable, index=0, key="b")) is True
    assert model.specification().variables == {"b": ("1",)}


def test_edits_are_refused_while_locked() -> None:
    running = {"value": True}
    model = EditorModel(JobSpecification.create(prompt="p"), is_locked=lambda: running["value"])

    assert model.apply(editable.insert_variable) is False
    assert model.specification() == JobSpecification.create(prompt="p")

    running["value"] = False
    assert model.apply(editable.insert_variable) is True
    assert model.specification().variables == {"": ("",)}


def test_strip_ansi_removes_colour_and_cursor_sequences() -> None:
    text = "\x1b[32mok\x1b[0m \x1b[2K\x1b[1Gprogress \x1b]0;title\x07done"

    assert strip_ansi(text) == "ok progress done"


class FakeControl:
    def __init__(self) -> None:
        self.enabled = True
        self.is_deleted = False

    def enable(self) -> None:
        self.enabled = True

    def disable(self) -> None:
        self.enabled = False


def test_bound_controls_follow_the_run_lock() -> None:
    running = {"value": False}
    model = EditorModel(JobSpecification.create(prompt="p"), is_locked=lambda: running["value"])
    prompt = model.bind(FakeControl())

    running["value"] = True
    model.sync_controls()
    assert prompt.enabled is False

    late = model.bind(FakeControl())
    assert late.enabled is False

    running["value"] = False
    model.sync_controls()
    assert prompt.enabled is True
    assert late.enabled is True


def test_controls_removed_by_a_refresh_are_released() -> None:
    running = {"value": False}
    model = EditorModel(JobSpecification.create(), is_locked=lambda: running["value"])
    stale = model.bind(FakeControl())
    stale.is_deleted = True

    running["value"] = True
    model.sync_controls()

    assert stale.enabled is True
