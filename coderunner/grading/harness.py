"""
Test harness for grading submissions.

Every test case gets its own probe program (submission + evaluation epilogue)
and its own process. A failure in one test case is recorded in that case's
``TestResult`` and never stops the rest of the batch.
"""

from __future__ import annotations

import json
from typing import Any, Iterable

from structlog import get_logger

from coderunner.grading.comparator import values_equal
from coderunner.models.schemas import TestCase, TestResult, TestRunSummary
from coderunner.sandbox.dispatcher import ExecutionDispatcher
from coderunner.sandbox.languages import Language

logger = get_logger()


def parse_probe_output(output: str) -> dict[str, Any] | None:
    """
    Extract the probe report from captured stdout.

    The report is the last non-empty line, so anything the submission printed
    before it is ignored. Returns None when that line is missing or is not a
    JSON object with a ``success`` key.
    """
    lines = [line for line in output.splitlines() if line.strip()]
    if not lines:
        return None
    try:
        report = json.loads(lines[-1])
    except json.JSONDecodeError:
        return None
    if not isinstance(report, dict) or "success" not in report:
        return None
    return report


def summarize(results: list[TestResult]) -> TestRunSummary:
    """Build the aggregate view of a grading run."""
    passed_count = sum(1 for result in results if result.passed)
    return TestRunSummary(
        all_passed=all(result.passed for result in results),
        passed_count=passed_count,
        total_count=len(results),
        test_results=results,
    )


class GradingHarness:
    """Runs test cases against a submission, one process per test case."""

    def __init__(self, dispatcher: ExecutionDispatcher) -> None:
        self._dispatcher = dispatcher

    async def run_tests(
        self,
        code: str,
        language: str | Language,
        tests: Iterable[TestCase],
    ) -> list[TestResult]:
        """Return one ``TestResult`` per test case, in input order."""
        results: list[TestResult] = []
        for test in tests:
            results.append(await self._run_one(code, language, test))

        logger.info(
            "Test run finished",
            language=getattr(language, "value", language),
            passed=sum(1 for result in results if result.passed),
            total=len(results),
        )
        return results

    async def _run_one(
        self,
        code: str,
        language: str | Language,
        test: TestCase,
    ) -> TestResult:
        try:
            profile = self._dispatcher.profile_for(language)
            probe = profile.wrapper.build_probe(code, test.test_expression)
            execution = await self._dispatcher.execute(probe, profile.language)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Test case could not be run", test_name=test.name, error=str(exc))
            return self._failed(test, f"Test Error: {exc}")

        if not execution.success:
            return self._failed(test, f"Execution Error: {execution.error or 'non-zero exit status'}")

        report = parse_probe_output(execution.output)
        if report is None:
            return self._failed(test, f"Parse Error: {execution.output}")

        if not report["success"]:
            return self._failed(test, f"Error: {report.get('error')}")

        actual = report.get("result")
        return TestResult(
            passed=values_equal(actual, test.expected),
            expected=test.expected,
            actual=actual,
            test_name=test.name,
        )

    @staticmethod
    def _failed(test: TestCase, actual: str) -> TestResult:
        return TestResult(
            passed=False,
            expected=test.expected,
            actual=actual,
            test_name=test.name,
        )
