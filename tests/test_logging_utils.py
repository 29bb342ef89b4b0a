"""Tests for logging configuration."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from PromptEvaluator.config import Settings
from PromptEvaluator.logging_utils import LOGGER_NAME, configure_logging, logging_config


def test_console_handler_targets_stderr(tmp_path: Path) -> None:
    config = logging_config(Settings(log_path=tmp_path / "app.log", verbose=True))

    assert config["handlers"]["console"]["stream"] == "ext://sys.stderr"
    assert config["loggers"][LOGGER_NAME]["level"] == "DEBUG"
    assert config["handlers"]["file"]["formatter"] == "text"


def test_json_log_file(tmp_path: Path) -> None:
    log_path = tmp_path / "logs" / "app.log"
    logger = configure_logging(Settings(log_path=log_path, log_format="json"))

    logging.getLogger(f"{LOGGER_NAME}.engine").info("Engine finished", extra={"returncode": 0})
    for handler in logger.handlers:
        handler.flush()

    record = json.loads(log_path.read_text(encoding="utf-8").strip().splitlines()[-1])
    assert record["message"] == "Engine finished"
    assert record["name"] == "PromptEvaluator.engine"
    assert record["returncode"] == 0
