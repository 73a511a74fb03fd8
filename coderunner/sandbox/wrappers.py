"""
Per-language source wrappers.

A wrapper turns raw submission text into the program that is actually written
to disk and handed to the interpreter. The Python and JavaScript wrappers add a
guarded preamble (output capture, shadowed capabilities) and an error trap that
turns an uncaught exception into ``Runtime Error: <message>`` on stderr plus a
non-zero exit status. TypeScript and C# submissions run unmodified.

Wrappers also build the grading probe: the submission followed by an epilogue
that evaluates one test expression and prints a single JSON line, either
``{"success": true, "result": ...}`` or ``{"success": false, "error": ...}``.
The expression gets a line of its own, so a trailing comment or a single
trailing ``;`` is accepted. JavaScript ``undefined`` has no JSON form and is
reported as an error rather than as ``null``.

Guarding happens inside the same interpreter, so it keeps honest code honest
but is not an isolation boundary.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from string import Template
from typing import Iterable


_PYTHON_GUARD = Template('''\
import builtins as _builtins
import io as _io
import sys as _sys

_BLOCKED_MODULES = frozenset($blocked_modules)
_BLOCKED_BUILTINS = frozenset($blocked_builtins)
_real_import = _builtins.__import__


def _guarded_import(name, globals=None, locals=None, fromlist=(), level=0):
    if level == 0 and name.partition(".")[0] in _BLOCKED_MODULES:
        raise ImportError(f"Import of '{name}' is not allowed")
    return _real_import(name, globals, locals, fromlist, level)


_namespace_builtins = {
    key: value
    for key, value in vars(_builtins).items()
    if key not in _BLOCKED_BUILTINS
}
_namespace_builtins["__import__"] = _guarded_import

_source = $source
_captured = _io.StringIO()
_real_stdout = _sys.stdout
_sys.stdout = _captured
_exit_status = 0
try:
    exec(
        compile(_source, "<submission>", "exec"),
        {"__builtins__": _namespace_builtins, "__name__": "__main__"},
    )
except Exception as _exc:
    print(f"Runtime Error: {_exc}", file=_sys.stderr)
    _exit_status = 1
finally:
    _sys.stdout = _real_stdout
    _sys.stdout.write(_captured.getvalue())
    _sys.stdout.flush()
_sys.exit(_exit_status)
''')

_PYTHON_PROBE = Template('''\
$code

import json as _probe_json
try:
    _probe_result = (
$expression
    )
    print(_probe_json.dumps({"success": True, "result": _probe_result}))
except Exception as _probe_error:
    print(_probe_json.dumps({"success": False, "error": str(_probe_error)}))
''')

_JAVASCRIPT_GUARD = Template('''\
const __sandboxInspect = require('util').inspect;
const __sandboxStdout = process.stdout;
const __sandboxStderr = process.stderr;
const __sandboxFormat = (args) => args
  .map((value) => (typeof value === 'string' ? value : __sandboxInspect(value)))
  .join(' ') + '\\n';
const __sandboxConsole = Object.freeze({
  log: (...args) => __sandboxStdout.write(__sandboxFormat(args)),
  info: (...args) => __sandboxStdout.write(__sandboxFormat(args)),
  debug: (...args) => __sandboxStdout.write(__sandboxFormat(args)),
  warn: (...args) => __sandboxStderr.write(__sandboxFormat(args)),
  error: (...args) => __sandboxStderr.write(__sandboxFormat(args)),
});
const __sandboxProcess = Object.freeze({ stdout: __sandboxStdout, stderr: __sandboxStderr });

try {
  (function (console, process, require, module, exports, global, globalThis, fs, __dirname, __filename) {
    // Inner scope so submissions may redeclare the shadowed names.
    (function () {
$code
    }).call(this);
  }).call(Object.create(null), __sandboxConsole, __sandboxProcess);
} catch (error) {
  const message = error instanceof Error ? error.message : String(error);
  __sandboxStderr.write('Runtime Error: ' + message + '\\n');
  process.exitCode = 1;
}
''')

_JAVASCRIPT_PROBE = Template('''\
$code

try {
  const __probeResult = (
$expression
  );
  if (__probeResult === undefined) {
    console.log(JSON.stringify({ success: false, error: "Expression evaluated to undefined" }));
  } else {
    console.log(JSON.stringify({ success: true, result: __probeResult }));
  }
} catch (error) {
  console.log(JSON.stringify({ success: false, error: error instanceof Error ? error.message : String(error) }));
}
''')

_CSHARP_PROBE = Template('''\
$code

try
{
    var __probeResult = (
$expression
    );
    System.Console.WriteLine(System.Text.Json.JsonSerializer.Serialize(new { success = true, result = __probeResult }));
}
catch (System.Exception __probeError)
{
    System.Console.WriteLine(System.Text.Json.JsonSerializer.Serialize(new { success = false, error = __probeError.Message }));
}
''')


def _probe_expression(expression: str) -> str:
    """Trim a test expression so it can sit inside parentheses on its own line."""
    expression = expression.strip()
    if expression.endswith(";"):
        expression = expression[:-1].rstrip()
    return expression


class SourceWrapper(ABC):
    """Abstract base class for per-language wrappers."""

    @abstractmethod
    def wrap(self, code: str) -> str:
        """Return the program text that runs *code* under this language's guard."""
        pass

    @abstractmethod
    def build_probe(self, code: str, expression: str) -> str:
        """Return *code* followed by an epilogue that reports *expression* as JSON."""
        pass


class PythonWrapper(SourceWrapper):
    """Runs the submission via ``exec`` with filtered builtins and a guarded import."""

    def __init__(
        self,
        blocked_modules: Iterable[str] = (),
        blocked_builtins: Iterable[str] = (),
    ) -> None:
        self.blocked_modules = sorted(set(blocked_modules))
        self.blocked_builtins = sorted(set(blocked_builtins))

    def wrap(self, code: str) -> str:
        # The source is embedded as a string literal, so its indentation is never touched.
        return _PYTHON_GUARD.substitute(
            blocked_modules=repr(self.blocked_modules),
            blocked_builtins=repr(self.blocked_builtins),
            source=repr(code),
        )

    def build_probe(self, code: str, expression: str) -> str:
        return _PYTHON_PROBE.substitute(code=code, expression=_probe_expression(expression))


class JavaScriptWrapper(SourceWrapper):
    """Runs the submission inside a function whose parameters shadow Node's capabilities."""

    def wrap(self, code: str) -> str:
        return _JAVASCRIPT_GUARD.substitute(code=code)

    def build_probe(self, code: str, expression: str) -> str:
        return _JAVASCRIPT_PROBE.substitute(code=code, expression=_probe_expression(expression))


class TypeScriptWrapper(SourceWrapper):
    """No guard; ts-node runs the source as written."""

    def wrap(self, code: str) -> str:
        return code

    def build_probe(self, code: str, expression: str) -> str:
        return _JAVASCRIPT_PROBE.substitute(code=code, expression=_probe_expression(expression))


class CSharpWrapper(SourceWrapper):
    """No guard; dotnet-script runs the source as written."""

    def wrap(self, code: str) -> str:
        return code

    def build_probe(self, code: str, expression: str) -> str:
        return _CSHARP_PROBE.substitute(code=code, expression=_probe_expression(expression))
