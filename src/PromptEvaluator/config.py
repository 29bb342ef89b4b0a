"""Settings for the prompt evaluator client."""

from __future__ import annotations

import os
import shlex
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .exceptions import ConfigError

ENV_ENGINE = "PROMPT_EVALUATOR_ENGINE"
ENV_USE_GPU = "PROMPT_EVALUATOR_USE_GPU"
ENV_LOG_FORMAT = "PROMPT_EVALUATOR_LOG_FORMAT"

_TRUTHY = {"1", "true", "yes", "on"}


class Settings(BaseModel):
    engine_command: List[str] = Field(
        default_factory=lambda: ["prompt-engine"],
        description="Executable (and leading arguments) of the evaluation engine",
    )
    use_gpu: bool = False
    output_dir: Path = Field(default=Path("."))
    reveal_delay_s: float = Field(default=1.0, ge=0.0)
    log_path: Path = Field(default=Path("logs/prompt-evaluator.log"))
    log_format: str = Field(default="text")
    verbose: bool = False

    @field_validator("engine_command")
    @classmethod
    def validate_engine_command(cls, value: List[str]) -> List[str]:
        if not value:
            raise ValueError("engine_command must contain at least the executable")
        return value

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, value: str) -> str:
        allowed = {"text", "json"}
        if value not in allowed:
            raise ValueError(f"log_format must be one of {sorted(allowed)}")
        return value


def load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise ConfigError(f"Settings file not found: {path}")
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Settings file is not valid YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Settings file must contain a mapping: {path}")
    return data


def _env_overrides(env: Mapping[str, str]) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    if env.get(ENV_ENGINE):
        overrides["engine_command"] = shlex.split(env[ENV_ENGINE])
    if env.get(ENV_USE_GPU):
        overrides["use_gpu"] = env[ENV_USE_GPU].strip().lower() in _TRUTHY
    if env.get(ENV_LOG_FORMAT):
        overrides["log_format"] = env[ENV_LOG_FORMAT].strip().lower()
    return overrides


def load_settings(
    path: Optional[Path] = None,
    *,
    env: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> Settings:
    """Merge file settings, environment and explicit overrides, in that order."""

    data: Dict[str, Any] = load_yaml(path) if path is not None else {}
    base_dir = path.parent if path is not None else None
    file_keys = set(data)
    data.update(_env_overrides(os.environ if env is None else env))
    data.update({key: value for key, value in (overrides or {}).items() if value is not None})
    try:
        settings = Settings.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc
    if base_dir is not None:
        updates: Dict[str, Path] = {}
        for name in ("output_dir", "log_path"):
            value: Path = getattr(settings, name)
            if not value.is_absolute() and name in file_keys and name not in (overrides or {}):
                updates[name] = (base_dir / value).resolve()
        if updates:
            settings = settings.model_copy(update=updates)
    return settings


__all__ = ["Settings", "load_settings", "load_yaml", "ENV_ENGINE", "ENV_USE_GPU", "ENV_LOG_FORMAT"]
