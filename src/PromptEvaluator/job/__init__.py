"""Job specification model, editable view, encoder and loader."""

from .editable import (
    EditableJob,
    EditableVariable,
    from_editable,
    insert_local_model,
    insert_remote_model,
    insert_value,
    insert_variable,
    remove_local_model,
    remove_remote_model,
    remove_value,
    remove_variable,
    rename_variable,
    set_value,
    to_editable,
    update_local_model,
    update_remote_model,
)
from .encoder import Submission, encode, encode_json
from .loader import load_job, load_job_file
from .models import DEFAULT_API_BASE_URL, JobSpecification, LocalModel, RemoteModel

__all__ = [
    "DEFAULT_API_BASE_URL",
    "EditableJob",
    "EditableVariable",
    "JobSpecification",
    "LocalModel",
    "RemoteModel",
    "Submission",
    "encode",
    "encode_json",
    "from_editable",
    "insert_local_model",
    "insert_remote_model",
    "insert_value",
    "insert_variable",
    "load_job",
    "load_job_file",
    "remove_local_model",
    "remove_remote_model",
    "remove_value",
    "remove_variable",
    "rename_variable",
    "set_value",
    "to_editable",
    "update_local_model",
    "update_remote_model",
]
