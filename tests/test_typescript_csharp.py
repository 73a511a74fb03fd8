"""
End-to-end tests for the unguarded TypeScript and C# paths.

These need ``ts-node`` (run through npx) and ``dotnet-script`` and are skipped
when either toolchain is missing. Both tools start slowly on first use, hence
the generous limit.
"""

import shutil
import sys
import time

import pytest

from coderunner.config import SandboxConfig
from coderunner.models import schemas
from coderunner.sandbox.models import ExecutionStatus
from coderunner.services.execution_service import CodeExecutionService

requires_ts_node = pytest.mark.skipif(
    shutil.which("npx") is None or shutil.which("ts-node") is None,
    reason="ts-node is not installed",
)
requires_dotnet_script = pytest.mark.skipif(
    shutil.which("dotnet") is None or shutil.which("dotnet-script") is None,
    reason="dotnet-script is not installed",
)


@pytest.fixture
def slow_service(temp_dir) -> CodeExecutionService:
    config = SandboxConfig(temp_dir=temp_dir, python_binary=sys.executable, timeout_ms=120000)
    return CodeExecutionService(config)


@requires_ts_node
class TestTypeScript:
    """ts-node runs the source as written."""

    async def test_hello(self, slow_service, leftover_files):
        result = await slow_service.execute("const x: number = 21;\nconsole.log(x * 2);", "ts")

        assert result.success is True
        assert result.output == "42"
        assert leftover_files() == []

    async def test_grading(self, slow_service):
        code = "function add(a: number, b: number): number { return a + b; }"
        results = await slow_service.run_tests(
            code,
            "typescript",
            [
                schemas.TestCase(test_expression="add(2, 3);", expected=5, name="sums"),
                schemas.TestCase(test_expression="add(2, 2)", expected=5, name="wrong"),
            ],
        )

        assert [r.passed for r in results] == [True, False]
        assert results[1].actual == 4

    async def test_infinite_loop_times_out(self, slow_service, leftover_files):
        started = time.monotonic()
        result = await slow_service.execute("while (true) {}", "typescript", timeout_ms=5000)

        assert result.status is ExecutionStatus.TIMEOUT
        assert time.monotonic() - started < 15
        assert leftover_files() == []


@requires_dotnet_script
class TestCSharp:
    """dotnet-script runs the source as written."""

    async def test_hello(self, slow_service, leftover_files):
        result = await slow_service.execute("System.Console.WriteLine(6 * 7);", "csharp")

        assert result.success is True
        assert result.output == "42"
        assert leftover_files() == []

    async def test_grading(self, slow_service):
        results = await slow_service.run_tests(
            "int Add(int a, int b) => a + b;",
            "cs",
            [schemas.TestCase(test_expression="Add(2, 3);", expected=5, name="sums")],
        )

        assert results[0].passed is True
        assert results[0].actual == 5
