"""Encode job specifications into engine submissions."""

from __future__ import annotations

import json
from typing import Any, Dict

from .models import JobSpecification

Submission = Dict[str, Any]


def encode(spec: JobSpecification) -> Submission:
    """Return the request payload consumed by the engine.

    The payload mirrors the specification in camelCase mapping form. No
    validation happens here; the engine rejects jobs it cannot run.
    """

    return spec.to_mapping()


def encode_json(spec: JobSpecification) -> str:
    return json.dumps(encode(spec), ensure_ascii=False)


__all__ = ["Submission", "encode", "encode_json"]
