"""Shared fixtures: a sandbox rooted in a per-test temp directory, using the current interpreter."""

import sys

import pytest

from coderunner.config import SandboxConfig, get_settings
from coderunner.services.execution_service import CodeExecutionService


@pytest.fixture
def temp_dir(tmp_path):
    return tmp_path / "code-execution"


@pytest.fixture
def sandbox_config(temp_dir) -> SandboxConfig:
    return SandboxConfig(
        temp_dir=temp_dir,
        python_binary=sys.executable,
        timeout_ms=10000,
    )


@pytest.fixture
def service(sandbox_config) -> CodeExecutionService:
    return CodeExecutionService(sandbox_config)


@pytest.fixture(autouse=True)
def _reset_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def leftover_files(temp_dir):
    """Callable listing files still present in the sandbox temp directory."""
    def _list() -> list:
        if not temp_dir.exists():
            return []
        return list(temp_dir.iterdir())
    return _list
