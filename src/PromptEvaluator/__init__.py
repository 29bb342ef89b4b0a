"""PromptEvaluator package exports."""

from .exceptions import *  # noqa: F401,F403
from .exceptions import __all__ as _exceptions_all
from .job import *  # noqa: F401,F403
from .job import __all__ as _job_all
from .run import *  # noqa: F401,F403
from .run import __all__ as _run_all
from .state import *  # noqa: F401,F403
from .state import __all__ as _state_all

__all__ = [
    *_exceptions_all,
    *_job_all,
    *_run_all,
    *_state_all,
]
