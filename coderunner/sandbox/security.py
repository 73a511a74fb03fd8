"""
AST-based audit of Python submissions.

The guarded wrapper enforces the import and builtin policy at runtime; this
module only inspects the source ahead of time and the dispatcher logs what
it finds. Nothing here blocks execution: syntax errors are reported by the
interpreter itself, and blocked imports fail inside the sandbox.
"""

from __future__ import annotations

import ast

from coderunner.sandbox.models import SecurityAuditResult

# Patterns to warn about (logged only)
WARN_CALL_PATTERNS: set[str] = {
    "os.system",
    "os.popen",
    "os.fork",
    "subprocess.call",
    "subprocess.run",
    "subprocess.Popen",
    "shutil.rmtree",
    "__import__",
    "eval",
    "exec",
    "compile",
    "open",
    "getattr",
}


class SecurityAuditor:
    """Collects warnings about imports of blocked modules and suspicious calls."""

    def __init__(self, blocked_modules: set[str] | None = None) -> None:
        self.blocked_modules = blocked_modules or set()

    def audit(self, code: str) -> SecurityAuditResult:
        """Inspect Python source and return the findings."""
        try:
            tree = ast.parse(code)
        except SyntaxError as exc:
            return SecurityAuditResult(
                syntax_ok=False,
                warnings=[f"Syntax error at line {exc.lineno}: {exc.msg}"],
            )

        warnings: list[str] = []
        for node in ast.walk(tree):
            warning = self._check_imports(node) or self._check_calls(node)
            if warning:
                warnings.append(warning)

        return SecurityAuditResult(syntax_ok=True, warnings=warnings)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _check_imports(self, node: ast.AST) -> str | None:
        if isinstance(node, ast.Import):
            for alias in node.names:
                if alias.name.split(".")[0] in self.blocked_modules:
                    return f"Import of blocked module: {alias.name}"
        elif isinstance(node, ast.ImportFrom):
            if node.module and node.module.split(".")[0] in self.blocked_modules:
                return f"Import of blocked module: {node.module}"
        return None

    def _check_calls(self, node: ast.AST) -> str | None:
        if not isinstance(node, ast.Call):
            return None

        name = self._resolve_call_name(node)
        if name in WARN_CALL_PATTERNS:
            return f"Potentially dangerous call: {name}"
        return None

    @staticmethod
    def _resolve_call_name(node: ast.Call) -> str:
        """Best-effort extraction of a dotted call name from a Call AST node."""
        if isinstance(node.func, ast.Name):
            return node.func.id

        parts: list[str] = []
        current: ast.expr = node.func
        while isinstance(current, ast.Attribute):
            parts.append(current.attr)
            current = current.value
        if isinstance(current, ast.Name):
            parts.append(current.id)

        return ".".join(reversed(parts))
