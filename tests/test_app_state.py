"""Tests for the shared application state."""

from __future__ import annotations

from typing import List

from PromptEvaluator.job.models import JobSpecification
from PromptEvaluator.run.models import RunResult
from PromptEvaluator.state import AppState, AppTab


def test_initial_state() -> None:
    state = AppState()

    assert state.job is None
    assert state.results == ()
    assert state.active_tab is AppTab.EDITOR


def test_listeners_receive_changed_field() -> None:
    state = AppState()
    changes: List[str] = []
    unsubscribe = state.subscribe(changes.append)

    state.set_job(JobSpecification.create(prompt="p"))
    state.set_results([RunResult("m", "s", "u", "r")])
    state.set_active_tab(AppTab.RESULTS)
    state.set_active_tab(AppTab.RESULTS)
    unsubscribe()
    state.set_active_tab(AppTab.EDITOR)

    assert changes == ["job", "results", "active_tab"]
    assert state.results == (RunResult("m", "s", "u", "r"),)
