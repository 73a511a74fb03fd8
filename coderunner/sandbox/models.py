"""Data models for the code execution sandbox."""

from dataclasses import dataclass, field
from enum import Enum


class ExecutionStatus(str, Enum):
    """How a single execution ended."""

    SUCCESS = "success"
    RUNTIME_ERROR = "runtime_error"
    TIMEOUT = "timeout"
    SPAWN_FAILURE = "spawn_failure"


@dataclass(frozen=True)
class ExecutionRequest:
    """Request to execute source code in a given language."""

    code: str
    language: str


@dataclass
class ExecutionResult:
    """Result of a sandbox code execution."""

    success: bool
    output: str = ""
    error: str | None = None
    execution_time_ms: int = 0
    memory_usage: int | None = None
    status: ExecutionStatus = ExecutionStatus.SUCCESS
    truncated: bool = False

    def to_dict(self) -> dict:
        """Serialize to the camelCase shape consumed by HTTP callers."""
        payload = {
            "success": self.success,
            "output": self.output,
            "executionTime": self.execution_time_ms,
            "status": self.status.value,
        }
        if self.error is not None:
            payload["error"] = self.error
        if self.memory_usage is not None:
            payload["memoryUsage"] = self.memory_usage
        if self.truncated:
            payload["truncated"] = True
        return payload


@dataclass
class SecurityAuditResult:
    """Result of the AST-based audit of a Python submission."""

    syntax_ok: bool = True
    warnings: list[str] = field(default_factory=list)
