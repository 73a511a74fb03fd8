"""Services module."""

from .execution_service import CodeExecutionService, get_execution_service

__all__ = ["CodeExecutionService", "get_execution_service"]
