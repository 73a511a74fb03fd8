"""
coderunner - sandboxed code execution and automated test grading.

Runs submitted JavaScript, Python, TypeScript or C# source in a separate
process with a wall-clock limit, and grades submissions by evaluating test
expressions and comparing the results structurally.
"""

from coderunner.models.schemas import LanguageInfo, TestCase, TestResult, TestRunSummary
from coderunner.sandbox.languages import Language, UnsupportedLanguageError
from coderunner.sandbox.models import ExecutionResult, ExecutionStatus
from coderunner.services.execution_service import CodeExecutionService, get_execution_service

__version__ = "1.0.0"

__all__ = [
    "CodeExecutionService",
    "ExecutionResult",
    "ExecutionStatus",
    "Language",
    "LanguageInfo",
    "TestCase",
    "TestResult",
    "TestRunSummary",
    "UnsupportedLanguageError",
    "get_execution_service",
]
