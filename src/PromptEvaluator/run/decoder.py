"""Decode the newline-delimited result payload of a completed run."""

from __future__ import annotations

import json
from typing import Any, List, Tuple

from ..exceptions import DecodeError
from .models import RunResult

RESULT_FIELDS = ("name", "system", "user", "response")


def _parse_line(line_index: int, line: str) -> RunResult:
    try:
        record: Any = json.loads(line)
    except json.JSONDecodeError as exc:
        raise DecodeError(line_index, line, f"invalid JSON ({exc.msg})") from exc
    if not isinstance(record, dict):
        raise DecodeError(line_index, line, "record is not a JSON object")
    values: List[str] = []
    for name in RESULT_FIELDS:
        value = record.get(name)
        if not isinstance(value, str):
            raise DecodeError(line_index, line, f"field '{name}' is missing or not a string")
        values.append(value)
    return RunResult(*values)


def decode(payload: str) -> Tuple[RunResult, ...]:
    """Parse every non-empty line of ``payload`` into a :class:`RunResult`.

    Decoding is all-or-nothing: the first malformed line raises
    :class:`DecodeError` with its 0-based position in ``payload``.
    """

    results: List[RunResult] = []
    for line_index, line in enumerate(payload.split("\n")):
        if not line:
            continue
        results.append(_parse_line(line_index, line))
    return tuple(results)


__all__ = ["RESULT_FIELDS", "decode"]
