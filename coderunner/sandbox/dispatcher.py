"""
Execution dispatcher.

Orchestrates: language resolution → source audit → wrapper → process runner.
This is the single entry point used by the grading harness and the service.
"""

from __future__ import annotations

from structlog import get_logger

from coderunner.config import SandboxConfig
from coderunner.sandbox.languages import (
    Language,
    LanguageProfile,
    build_profiles,
    resolve_language,
)
from coderunner.sandbox.models import ExecutionRequest, ExecutionResult
from coderunner.sandbox.runner import ProcessRunner
from coderunner.sandbox.security import SecurityAuditor

logger = get_logger()


class ExecutionDispatcher:
    """
    Maps a language to its wrapper + interpreter and runs the submission.

    Usage::

        dispatcher = ExecutionDispatcher(get_settings().sandbox)
        result = await dispatcher.execute("print(1 + 1)", "python")
    """

    def __init__(
        self,
        config: SandboxConfig,
        runner: ProcessRunner | None = None,
    ) -> None:
        self._config = config
        self._profiles = build_profiles(config)
        self._runner = runner or ProcessRunner(config)
        self._auditor = SecurityAuditor(set(config.blocked_python_modules))

    @property
    def profiles(self) -> list[LanguageProfile]:
        return list(self._profiles.values())

    def profile_for(self, language: str | Language) -> LanguageProfile:
        """Return the profile for *language*; raises ``UnsupportedLanguageError``."""
        return self._profiles[resolve_language(language)]

    async def execute(
        self,
        code: str,
        language: str | Language,
        timeout_ms: int | None = None,
    ) -> ExecutionResult:
        """
        Wrap and run *code* in a fresh process.

        Raises:
            UnsupportedLanguageError: before anything is written or spawned.
        """
        profile = self.profile_for(language)

        if profile.language is Language.PYTHON:
            audit = self._auditor.audit(code)
            if not audit.syntax_ok:
                logger.info("Submission does not parse", reason=audit.warnings[0])
            elif audit.warnings:
                logger.warning("Suspicious submission", warnings=audit.warnings)

        result = await self._runner.run(
            profile.command,
            profile.wrapper.wrap(code),
            profile.extension,
            timeout_ms=timeout_ms,
        )

        logger.info(
            "Code execution finished",
            language=profile.language.value,
            status=result.status.value,
            duration_ms=result.execution_time_ms,
        )

        return result

    async def submit(
        self,
        request: ExecutionRequest,
        timeout_ms: int | None = None,
    ) -> ExecutionResult:
        """Same as ``execute`` for a prepared request."""
        return await self.execute(request.code, request.language, timeout_ms=timeout_ms)
