"""Tests for decoding engine result payloads."""

from __future__ import annotations

import json

import pytest

from PromptEvaluator.exceptions import DecodeError
from PromptEvaluator.run.decoder import decode
from PromptEvaluator.run.models import RunResult


def record(name: str, response: str = "r") -> str:
    return json.dumps({"name": name, "system": "s", "user": "u", "response": response})


@pytest.mark.parametrize("payload", ["", "\n", "\n\n\n"])
def test_empty_payloads_decode_to_empty(payload: str) -> None:
    assert decode(payload) == ()


def test_decode_preserves_order_and_skips_empty_lines() -> None:
    payload = "\n".join([record("a"), "", record("b"), ""])

    assert decode(payload) == (
        RunResult(name="a", system="s", user="u", response="r"),
        RunResult(name="b", system="s", user="u", response="r"),
    )


def test_extra_fields_are_ignored() -> None:
    line = json.dumps({"name": "a", "system": "s", "user": "u", "response": "r", "tokens": 12})

    assert decode(line)[0].name == "a"


@pytest.mark.parametrize(
    "bad_line, reason",
    [
        ("{not json", "invalid JSON"),
        ("[1, 2]", "not a JSON object"),
        (json.dumps({"name": "a", "system": "s", "user": "u"}), "'response'"),
        (json.dumps({"name": 1, "system": "s", "user": "u", "response": "r"}), "'name'"),
    ],
)
def test_first_malformed_line_fails_the_whole_payload(bad_line: str, reason: str) -> None:
    payload = "\n".join([record("a"), "", bad_line, record("c")])

    with pytest.raises(DecodeError) as excinfo:
        decode(payload)

    assert excinfo.value.line_index == 2
    assert excinfo.value.raw_line == bad_line
    assert reason in excinfo.value.reason


def test_whitespace_only_line_is_malformed() -> None:
    with pytest.raises(DecodeError) as excinfo:
        decode("\n".join([record("a"), "   ", record("b")]))

    assert excinfo.value.line_index == 1
    assert excinfo.value.raw_line == "   "
