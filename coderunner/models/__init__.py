"""Data models module."""

from .schemas import LanguageInfo, TestCase, TestResult, TestRunSummary

__all__ = ["LanguageInfo", "TestCase", "TestResult", "TestRunSummary"]
