"""Process-per-execution sandbox for submitted source code."""

from coderunner.sandbox.dispatcher import ExecutionDispatcher
from coderunner.sandbox.languages import Language, UnsupportedLanguageError
from coderunner.sandbox.models import ExecutionRequest, ExecutionResult, ExecutionStatus
from coderunner.sandbox.runner import ProcessRunner

__all__ = [
    "ExecutionDispatcher",
    "ExecutionRequest",
    "ExecutionResult",
    "ExecutionStatus",
    "Language",
    "ProcessRunner",
    "UnsupportedLanguageError",
]
