"""
Tests for the log-only audit of Python submissions.
"""

from coderunner.sandbox.security import SecurityAuditor


class TestSecurityAuditor:
    """Findings are collected, nothing is blocked."""

    def test_clean_code(self):
        result = SecurityAuditor({"os"}).audit("import math\nprint(math.pi)\n")

        assert result.syntax_ok is True
        assert result.warnings == []

    def test_blocked_module_import(self):
        result = SecurityAuditor({"os"}).audit("import os.path\nfrom os import getcwd\n")

        assert "Import of blocked module: os.path" in result.warnings
        assert "Import of blocked module: os" in result.warnings

    def test_suspicious_calls(self):
        result = SecurityAuditor().audit("eval('1')\nsubprocess.run(['ls'])\n")

        assert "Potentially dangerous call: eval" in result.warnings
        assert "Potentially dangerous call: subprocess.run" in result.warnings

    def test_syntax_error_reported(self):
        result = SecurityAuditor().audit("def broken(:\n")

        assert result.syntax_ok is False
        assert result.warnings[0].startswith("Syntax error at line 1")
