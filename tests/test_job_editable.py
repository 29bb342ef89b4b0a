"""Tests for positional editing of job specifications."""

from __future__ import annotations

import pytest

from PromptEvaluator.job import editable
from PromptEvaluator.job.editable import EditableJob, EditableVariable, from_editable, to_editable
from PromptEvaluator.job.models import JobSpecification, LocalModel, RemoteModel


def sample_spec() -> JobSpecification:
    return JobSpecification.create(
        prompt="Describe {animal} in {style}",
        system="sys",
        variables={"animal": ["cat", "dog"], "style": ["prose"]},
        local_models=[LocalModel(path="a.gguf", template_path="a.txt", architecture="llama")],
        remote_models=[RemoteModel(name="remote", api_base_url="https://api.example.test/v1")],
    )


def test_to_editable_preserves_variable_order() -> None:
    job = to_editable(sample_spec())

    assert [entry.key for entry in job.variables] == ["animal", "style"]
    assert job.variables[0].values == ("cat", "dog")


def test_round_trip_with_unique_keys_is_identity() -> None:
    spec = sample_spec()

    assert from_editable(to_editable(spec)) == spec
    assert from_editable(to_editable(from_editable(to_editable(spec)))) == spec


def test_duplicate_keys_last_values_win_first_position_kept() -> None:
    job = EditableJob(
        variables=(
            EditableVariable("a", ("1",)),
            EditableVariable("b", ("2",)),
            EditableVariable("a", ("3",)),
        )
    )

    spec = from_editable(job)

    assert list(spec.variables) == ["a", "b"]
    assert spec.variables["a"] == ("3",)


def test_insert_variable_defaults_to_blank_row_at_end() -> None:
    job = editable.insert_variable(to_editable(sample_spec()))

    assert job.variables[-1] == EditableVariable(key="", values=("",))
    assert len(job.variables) == 3


def test_insert_variable_at_position() -> None:
    job = editable.insert_variable(to_editable(sample_spec()), 0, EditableVariable("first", ("x",)))

    assert [entry.key for entry in job.variables] == ["first", "animal", "style"]


def test_editing_returns_new_job_and_leaves_original_untouched() -> None:
    original = to_editable(sample_spec())
    edited = editable.rename_variable(original, 0, "creature")

    assert original.variables[0].key == "animal"
    assert edited.variables[0].key == "creature"
    assert from_editable(edited).variables["creature"] == ("cat", "dog")


def test_value_operations() -> None:
    job = to_editable(sample_spec())
    job = editable.insert_value(job, 0, value="bird")
    job = editable.set_value(job, 0, 1, "wolf")
    job = editable.remove_value(job, 0, 0)

    assert job.variables[0].values == ("wolf", "bird")


def test_remove_variable() -> None:
    job = editable.remove_variable(to_editable(sample_spec()), 0)

    assert list(from_editable(job).variables) == ["style"]


def test_model_operations() -> None:
    job = to_editable(sample_spec())
    job = editable.insert_local_model(job)
    job = editable.update_local_model(job, 1, path="b.gguf", architecture="mistral")
    job = editable.remove_local_model(job, 0)
    job = editable.insert_remote_model(job, 0)
    job = editable.update_remote_model(job, 0, name="other", skip=True)
    job = editable.remove_remote_model(job, 1)

    assert job.local_models == (LocalModel(path="b.gguf", architecture="mistral"),)
    assert job.remote_models == (RemoteModel(name="other", skip=True),)


@pytest.mark.parametrize(
    "operation",
    [
        lambda job: editable.remove_variable(job, 5),
        lambda job: editable.rename_variable(job, -1, "x"),
        lambda job: editable.insert_variable(job, 9),
        lambda job: editable.set_value(job, 0, 7, "x"),
        lambda job: editable.remove_local_model(job, 3),
        lambda job: editable.update_remote_model(job, 2, name="x"),
    ],
)
def test_out_of_range_positions_raise_index_error(operation) -> None:
    with pytest.raises(IndexError):
        operation(to_editable(sample_spec()))
