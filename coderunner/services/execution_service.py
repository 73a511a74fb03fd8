"""
Execution service: the surface the host application calls into.

Usage::

    service = get_execution_service()
    result = await service.execute("console.log('hello')", "javascript")
    results = await service.run_tests(code, "python", [
        {"test": "add(2, 3)", "expected": 5, "name": "sums"},
    ])
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Iterable

from structlog import get_logger

from coderunner.config import SandboxConfig, get_settings
from coderunner.grading.harness import GradingHarness, summarize
from coderunner.models.schemas import LanguageInfo, TestCase, TestResult, TestRunSummary
from coderunner.sandbox.dispatcher import ExecutionDispatcher
from coderunner.sandbox.languages import Language
from coderunner.sandbox.models import ExecutionResult

logger = get_logger()


class CodeExecutionService:
    """Facade over the dispatcher and the grading harness. Holds configuration only."""

    def __init__(self, config: SandboxConfig | None = None) -> None:
        self._config = config or get_settings().sandbox
        self._dispatcher = ExecutionDispatcher(self._config)
        self._harness = GradingHarness(self._dispatcher)

    @property
    def config(self) -> SandboxConfig:
        return self._config

    async def execute(
        self,
        code: str,
        language: str | Language,
        timeout_ms: int | None = None,
    ) -> ExecutionResult:
        """
        Run *code* once and return its result.

        Raises:
            UnsupportedLanguageError: if *language* is not in the language table.
        """
        return await self._dispatcher.execute(code, language, timeout_ms=timeout_ms)

    async def run_tests(
        self,
        code: str,
        language: str | Language,
        tests: Iterable[TestCase | dict[str, Any]],
    ) -> list[TestResult]:
        """Grade *code*; one result per test, in order. Plain dicts are validated into ``TestCase``."""
        cases = [
            test if isinstance(test, TestCase) else TestCase.model_validate(test)
            for test in tests
        ]
        return await self._harness.run_tests(code, language, cases)

    async def run_tests_summary(
        self,
        code: str,
        language: str | Language,
        tests: Iterable[TestCase | dict[str, Any]],
    ) -> TestRunSummary:
        return summarize(await self.run_tests(code, language, tests))

    def supported_languages(self) -> list[LanguageInfo]:
        return [
            LanguageInfo(
                id=profile.language.value,
                name=profile.display_name,
                extension=profile.extension,
                editor_language=profile.editor_language,
            )
            for profile in self._dispatcher.profiles
        ]


@lru_cache
def get_execution_service() -> CodeExecutionService:
    """Get the process-wide service built from the cached settings."""
    logger.info("Initializing execution service")
    return CodeExecutionService(get_settings().sandbox)
