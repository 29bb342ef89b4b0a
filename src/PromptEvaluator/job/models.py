"""Data models describing an evaluation job."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Sequence, Tuple

DEFAULT_API_BASE_URL = "https://api.openai.com/v1"


@dataclass(frozen=True)
class LocalModel:
    """A model file evaluated in-process by the engine."""

    path: str = ""
    template_path: str = ""
    architecture: str = ""
    skip: bool = False

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "LocalModel":
        return cls(
            path=str(data.get("path", "")),
            template_path=str(data.get("templatePath", "")),
            architecture=str(data.get("architecture", "")),
            skip=bool(data.get("skip", False)),
        )

    def to_mapping(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "path": self.path,
            "templatePath": self.template_path,
            "architecture": self.architecture,
        }
        if self.skip:
            payload["skip"] = True
        return payload


@dataclass(frozen=True)
class RemoteModel:
    """A chat model served behind an OpenAI-compatible API."""

    name: str = ""
    api_base_url: str = ""
    skip: bool = False

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "RemoteModel":
        return cls(
            name=str(data.get("name", "")),
            api_base_url=str(data.get("apiBaseUrl", "")),
            skip=bool(data.get("skip", False)),
        )

    def to_mapping(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"name": self.name, "apiBaseUrl": self.api_base_url}
        if self.skip:
            payload["skip"] = True
        return payload


@dataclass(frozen=True)
class JobSpecification:
    """Canonical job form: variables keyed by name, in insertion order."""

    prompt: str = ""
    system: str = ""
    variables: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)
    local_models: Tuple[LocalModel, ...] = field(default_factory=tuple)
    remote_models: Tuple[RemoteModel, ...] = field(default_factory=tuple)

    @classmethod
    def create(
        cls,
        *,
        prompt: str = "",
        system: str = "",
        variables: Mapping[str, Sequence[str]] | None = None,
        local_models: Sequence[LocalModel] = (),
        remote_models: Sequence[RemoteModel] = (),
    ) -> "JobSpecification":
        """Build a specification, normalising sequences to tuples."""

        return cls(
            prompt=prompt,
            system=system,
            variables={key: tuple(values) for key, values in (variables or {}).items()},
            local_models=tuple(local_models),
            remote_models=tuple(remote_models),
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "JobSpecification":
        variables = data.get("variables") or {}
        return cls.create(
            prompt=str(data.get("prompt", "")),
            system=str(data.get("system", "")),
            variables={str(key): [str(value) for value in values] for key, values in variables.items()},
            local_models=[LocalModel.from_mapping(item) for item in data.get("localModels") or []],
            remote_models=[RemoteModel.from_mapping(item) for item in data.get("remoteModels") or []],
        )

    def to_mapping(self) -> Dict[str, Any]:
        return {
            "prompt": self.prompt,
            "system": self.system,
            "variables": {key: list(values) for key, values in self.variables.items()},
            "localModels": [model.to_mapping() for model in self.local_models],
            "remoteModels": [model.to_mapping() for model in self.remote_models],
        }


__all__ = ["DEFAULT_API_BASE_URL", "LocalModel", "RemoteModel", "JobSpecification"]
