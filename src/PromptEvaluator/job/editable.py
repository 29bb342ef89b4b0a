"""Positional editing view over a job specification.

The editing surface works on :class:`EditableJob`, where variables are an
ordered sequence of ``(key, values)`` entries so that rows can be inserted and
removed by position while the user is still typing a name. Submission always
goes through the canonical mapping form; :func:`to_editable` and
:func:`from_editable` convert between the two.

Duplicate keys are a legal transient state of the editable form. When the
mapping is re-derived the last entry with a given key wins its value list;
the key keeps the position of its first occurrence.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Sequence, Tuple, TypeVar

from .models import JobSpecification, LocalModel, RemoteModel

T = TypeVar("T")


@dataclass(frozen=True)
class EditableVariable:
    key: str = ""
    values: Tuple[str, ...] = ("",)


@dataclass(frozen=True)
class EditableJob:
    prompt: str = ""
    system: str = ""
    variables: Tuple[EditableVariable, ...] = field(default_factory=tuple)
    local_models: Tuple[LocalModel, ...] = field(default_factory=tuple)
    remote_models: Tuple[RemoteModel, ...] = field(default_factory=tuple)


def to_editable(spec: JobSpecification) -> EditableJob:
    return EditableJob(
        prompt=spec.prompt,
        system=spec.system,
        variables=tuple(
            EditableVariable(key=key, values=tuple(values)) for key, values in spec.variables.items()
        ),
        local_models=tuple(spec.local_models),
        remote_models=tuple(spec.remote_models),
    )


def from_editable(job: EditableJob) -> JobSpecification:
    variables: Dict[str, Tuple[str, ...]] = {}
    for entry in job.variables:
        variables[entry.key] = tuple(entry.values)
    return JobSpecification(
        prompt=job.prompt,
        system=job.system,
        variables=variables,
        local_models=tuple(job.local_models),
        remote_models=tuple(job.remote_models),
    )


def _insert(items: Sequence[T], index: Optional[int], item: T) -> Tuple[T, ...]:
    items = tuple(items)
    if index is None:
        return items + (item,)
    if not 0 <= index <= len(items):
        raise IndexError(f"insert position {index} out of range for {len(items)} entries")
    return items[:index] + (item,) + items[index:]


def _remove(items: Sequence[T], index: int) -> Tuple[T, ...]:
    items = tuple(items)
    if not 0 <= index < len(items):
        raise IndexError(f"position {index} out of range for {len(items)} entries")
    return items[:index] + items[index + 1 :]


def _set(items: Sequence[T], index: int, item: T) -> Tuple[T, ...]:
    items = tuple(items)
    if not 0 <= index < len(items):
        raise IndexError(f"position {index} out of range for {len(items)} entries")
    return items[:index] + (item,) + items[index + 1 :]


def _variable(job: EditableJob, index: int) -> EditableVariable:
    if not 0 <= index < len(job.variables):
        raise IndexError(f"variable {index} out of range for {len(job.variables)} variables")
    return job.variables[index]


def insert_variable(
    job: EditableJob,
    index: Optional[int] = None,
    variable: Optional[EditableVariable] = None,
) -> EditableJob:
    return replace(job, variables=_insert(job.variables, index, variable or EditableVariable()))


def remove_variable(job: EditableJob, index: int) -> EditableJob:
    return replace(job, variables=_remove(job.variables, index))


def rename_variable(job: EditableJob, index: int, key: str) -> EditableJob:
    entry = replace(_variable(job, index), key=key)
    return replace(job, variables=_set(job.variables, index, entry))


def insert_value(
    job: EditableJob,
    variable_index: int,
    index: Optional[int] = None,
    value: str = "",
) -> EditableJob:
    entry = _variable(job, variable_index)
    entry = replace(entry, values=_insert(entry.values, index, value))
    return replace(job, variables=_set(job.variables, variable_index, entry))


def remove_value(job: EditableJob, variable_index: int, index: int) -> EditableJob:
    entry = _variable(job, variable_index)
    entry = replace(entry, values=_remove(entry.values, index))
    return replace(job, variables=_set(job.variables, variable_index, entry))


def set_value(job: EditableJob, variable_index: int, index: int, value: str) -> EditableJob:
    entry = _variable(job, variable_index)
    entry = replace(entry, values=_set(entry.values, index, value))
    return replace(job, variables=_set(job.variables, variable_index, entry))


def insert_local_model(
    job: EditableJob,
    index: Optional[int] = None,
    model: Optional[LocalModel] = None,
) -> EditableJob:
    return replace(job, local_models=_insert(job.local_models, index, model or LocalModel()))


def remove_local_model(job: EditableJob, index: int) -> EditableJob:
    return replace(job, local_models=_remove(job.local_models, index))


def update_local_model(job: EditableJob, index: int, **fields: Any) -> EditableJob:
    if not 0 <= index < len(job.local_models):
        raise IndexError(f"local model {index} out of range for {len(job.local_models)} models")
    model = replace(job.local_models[index], **fields)
    return replace(job, local_models=_set(job.local_models, index, model))


def insert_remote_model(
    job: EditableJob,
    index: Optional[int] = None,
    model: Optional[RemoteModel] = None,
) -> EditableJob:
    return replace(job, remote_models=_insert(job.remote_models, index, model or RemoteModel()))


def remove_remote_model(job: EditableJob, index: int) -> EditableJob:
    return replace(job, remote_models=_remove(job.remote_models, index))


def update_remote_model(job: EditableJob, index: int, **fields: Any) -> EditableJob:
    if not 0 <= index < len(job.remote_models):
        raise IndexError(f"remote model {index} out of range for {len(job.remote_models)} models")
    model = replace(job.remote_models[index], **fields)
    return replace(job, remote_models=_set(job.remote_models, index, model))


__all__ = [
    "EditableVariable",
    "EditableJob",
    "to_editable",
    "from_editable",
    "insert_variable",
    "remove_variable",
    "rename_variable",
    "insert_value",
    "remove_value",
    "set_value",
    "insert_local_model",
    "remove_local_model",
    "update_local_model",
    "insert_remote_model",
    "remove_remote_model",
    "update_remote_model",
]
