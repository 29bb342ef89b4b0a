"""Tests for CLI application wiring."""

from __future__ import annotations

import json
from pathlib import Path
from typing import List

import pytest
from typer.testing import CliRunner

from PromptEvaluator.cli import app


def write_config(tmp_path: Path, engine: List[str]) -> Path:
    config_path = tmp_path / "settings.yaml"
    config_path.write_text(
        json.dumps(
            {
                "engine_command": engine,
                "output_dir": "outputs",
                "log_path": "logs/cli.log",
                "reveal_delay_s": 0,
            }
        ),
        encoding="utf-8",
    )
    return config_path


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    for name in ("PROMPT_EVALUATOR_ENGINE", "PROMPT_EVALUATOR_USE_GPU", "PROMPT_EVALUATOR_LOG_FORMAT"):
        monkeypatch.delenv(name, raising=False)


def test_validate_reports_counts(job_file: Path) -> None:
    result = CliRunner().invoke(app, ["validate", str(job_file)])

    assert result.exit_code == 0
    assert "Loaded input: 2 variables, 1 local models, 1 remote models" in result.output


def test_validate_rejects_invalid_job(tmp_path: Path) -> None:
    bad = tmp_path / "bad.json"
    bad.write_text('{"prompt": 1}', encoding="utf-8")

    result = CliRunner().invoke(app, ["validate", str(bad)])

    assert result.exit_code == 1
    assert "Error loading JSON file" in result.output


def test_invalid_config_exits_with_error(tmp_path: Path, job_file: Path) -> None:
    config_path = tmp_path / "broken.yaml"
    config_path.write_text("log_format: xml\n", encoding="utf-8")

    result = CliRunner().invoke(app, ["--config", str(config_path), "validate", str(job_file)])

    assert result.exit_code == 1
    assert "[error]" in result.output


def test_run_prints_results(tmp_path: Path, job_file: Path, fake_engine: List[str]) -> None:
    config_path = write_config(tmp_path, fake_engine)

    result = CliRunner().invoke(app, ["--config", str(config_path), "run", str(job_file)])

    assert result.exit_code == 0, result.output
    assert "Run complete" in result.output
    assert "2 outputs generated" in result.output
    assert "gpt-4o-mini" in result.output
    assert "Summarise {topic}" in result.output
    assert list((tmp_path / "outputs").glob("output-*.ndjson"))
    assert (tmp_path / "logs" / "cli.log").exists()


def test_run_fails_on_unreadable_results(tmp_path: Path, job_file: Path, fake_engine: List[str]) -> None:
    config_path = write_config(tmp_path, [*fake_engine, "--mode", "garbage"])

    result = CliRunner().invoke(app, ["--config", str(config_path), "run", "--hide-logs", str(job_file)])

    assert result.exit_code == 1
    assert "Unable to read results" in result.output


def test_run_fails_when_engine_is_missing(tmp_path: Path, job_file: Path) -> None:
    config_path = write_config(tmp_path, [str(tmp_path / "missing-engine")])

    result = CliRunner().invoke(app, ["--config", str(config_path), "run", str(job_file)])

    assert result.exit_code == 1
    assert "Unable to start run" in result.output


def test_version() -> None:
    result = CliRunner().invoke(app, ["version"])

    assert result.exit_code == 0
    assert result.output.strip() == "0.1.0"
