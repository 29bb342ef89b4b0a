"""Validation of job files opened by the user."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..exceptions import JobLoadError
from .models import DEFAULT_API_BASE_URL, JobSpecification, LocalModel, RemoteModel

logger = logging.getLogger("PromptEvaluator.job.loader")


class LocalModelSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    path: str
    architecture: str
    template_path: str = Field(..., alias="templatePath")
    skip: bool = False


class RemoteModelSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    api_base_url: str = Field(default=DEFAULT_API_BASE_URL, alias="apiBaseUrl")
    skip: bool = False


class JobFileSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    prompt: str
    system: str
    variables: Dict[str, List[str]]
    local_models: List[LocalModelSchema] = Field(..., alias="localModels")
    remote_models: List[RemoteModelSchema] = Field(..., alias="remoteModels")

    def to_specification(self) -> JobSpecification:
        return JobSpecification.create(
            prompt=self.prompt,
            system=self.system,
            variables=self.variables,
            local_models=[
                LocalModel(
                    path=model.path,
                    template_path=model.template_path,
                    architecture=model.architecture,
                    skip=model.skip,
                )
                for model in self.local_models
            ],
            remote_models=[
                RemoteModel(name=model.name, api_base_url=model.api_base_url, skip=model.skip)
                for model in self.remote_models
            ],
        )


def load_job(text: str) -> JobSpecification:
    """Parse and validate a job document, raising :class:`JobLoadError`."""

    try:
        document = JobFileSchema.model_validate_json(text)
    except ValidationError as exc:
        raise JobLoadError(str(exc)) from exc
    spec = document.to_specification()
    logger.info(
        "Loaded job",
        extra={
            "variables": len(spec.variables),
            "local_models": len(spec.local_models),
            "remote_models": len(spec.remote_models),
        },
    )
    return spec


def load_job_file(path: Path) -> JobSpecification:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise JobLoadError(f"Unable to read job file {path}: {exc}") from exc
    return load_job(text)


__all__ = ["JobFileSchema", "load_job", "load_job_file"]
