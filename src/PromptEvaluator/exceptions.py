"""Custom exception types for the prompt evaluation client."""

from __future__ import annotations


class PromptEvaluatorError(RuntimeError):
    """Base class for prompt evaluator failures."""


class ConfigError(PromptEvaluatorError):
    """Raised when the settings file cannot be read or validated."""


class JobLoadError(PromptEvaluatorError):
    """Raised when a job file is not a valid job specification."""


class DispatchError(PromptEvaluatorError):
    """Raised when a submission cannot be delivered to the evaluation engine."""


class DecodeError(PromptEvaluatorError):
    """Raised when the terminal result payload contains a malformed record."""

    def __init__(self, line_index: int, raw_line: str, reason: str) -> None:
        super().__init__(f"Malformed result record on line {line_index}: {reason}")
        self.line_index = line_index
        self.raw_line = raw_line
        self.reason = reason


__all__ = [
    "PromptEvaluatorError",
    "ConfigError",
    "JobLoadError",
    "DispatchError",
    "DecodeError",
]
