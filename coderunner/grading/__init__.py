"""Automated grading of submissions against test expressions."""

from coderunner.grading.comparator import values_equal
from coderunner.grading.harness import GradingHarness, parse_probe_output, summarize

__all__ = ["GradingHarness", "parse_probe_output", "summarize", "values_equal"]
