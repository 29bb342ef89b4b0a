from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Dict, List

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import pytest  # noqa: E402

FAKE_ENGINE = '''
import json
import sys

args = sys.argv[1:]
mode = "ok"
if args[:1] == ["--mode"]:
    mode = args[1]
    args = args[2:]
output = args[args.index("--output") + 1]
job = json.loads(sys.stdin.read())

with open(output + ".received.json", "w", encoding="utf-8") as handle:
    json.dump({"argv": args, "job": job}, handle)

print("\\x1b[32mloading\\x1b[0m", len(job["variables"]), "variables", flush=True)
print("warming up", file=sys.stderr, flush=True)

if mode == "fail":
    sys.exit(3)

models = [m["path"] for m in job["localModels"] if not m.get("skip")]
models += [m["name"] for m in job["remoteModels"] if not m.get("skip")]
with open(output, "w", encoding="utf-8") as handle:
    if mode == "garbage":
        handle.write("not json\\n")
    for name in models:
        record = {"name": name, "system": job["system"], "user": job["prompt"], "response": "ok"}
        handle.write(json.dumps(record) + "\\n")
print("done", flush=True)
'''


def job_document() -> Dict[str, Any]:
    return {
        "prompt": "Summarise {topic}",
        "system": "You are terse.",
        "variables": {"topic": ["cats", "dogs"], "tone": ["dry"]},
        "localModels": [
            {"path": "models/llama.gguf", "templatePath": "templates/llama.txt", "architecture": "llama"}
        ],
        "remoteModels": [{"name": "gpt-4o-mini", "apiBaseUrl": "https://api.example.test/v1"}],
    }


@pytest.fixture
def job_payload() -> Dict[str, Any]:
    return job_document()


@pytest.fixture
def job_file(tmp_path: Path, job_payload: Dict[str, Any]) -> Path:
    path = tmp_path / "job.json"
    path.write_text(json.dumps(job_payload), encoding="utf-8")
    return path


@pytest.fixture
def fake_engine(tmp_path: Path) -> List[str]:
    """Command line of a stand-in engine driven by the current interpreter."""

    script = tmp_path / "fake_engine.py"
    script.write_text(FAKE_ENGINE, encoding="utf-8")
    return [sys.executable, str(script)]
