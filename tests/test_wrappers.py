"""
Tests for the per-language source wrappers.

These only inspect the generated program text; nothing is executed here.
"""

import pytest

from coderunner.sandbox.wrappers import (
    CSharpWrapper,
    JavaScriptWrapper,
    PythonWrapper,
    TypeScriptWrapper,
)


class TestPythonWrapper:
    """Guarded Python programs."""

    def test_wrapped_program_is_valid_python(self):
        wrapper = PythonWrapper(blocked_modules=["os"], blocked_builtins=["open"])
        program = wrapper.wrap("def f():\n    return 1\n\nprint(f())\n")

        compile(program, "<wrapped>", "exec")

    def test_source_embedded_as_literal(self):
        code = "if True:\n    print('indented')\n"
        program = PythonWrapper().wrap(code)

        assert repr(code) in program

    def test_policy_lists_embedded(self):
        program = PythonWrapper(
            blocked_modules=["socket", "os", "os"],
            blocked_builtins=["eval"],
        ).wrap("pass")

        assert "frozenset(['os', 'socket'])" in program
        assert "frozenset(['eval'])" in program

    def test_quotes_and_dollars_survive(self):
        code = "print('''$HOME''', \"${x}\")"
        program = PythonWrapper().wrap(code)

        compile(program, "<wrapped>", "exec")
        assert repr(code) in program

    def test_probe_appends_expression(self):
        probe = PythonWrapper().build_probe("def add(a, b):\n    return a + b", "  add(2, 3)\n")

        assert probe.startswith("def add(a, b):")
        assert "_probe_result = (\nadd(2, 3)\n    )" in probe
        compile(probe, "<probe>", "exec")

    @pytest.mark.parametrize(
        "expression",
        ["add(2, 3);", "add(2, 3)  # sums", "add(2, 3);  ", "add(\n    2,\n    3,\n)"],
    )
    def test_expression_accepts_trailing_semicolon_and_comment(self, expression):
        probe = PythonWrapper().build_probe("def add(a, b):\n    return a + b", expression)

        compile(probe, "<probe>", "exec")

    def test_only_one_semicolon_stripped(self):
        probe = PythonWrapper().build_probe("", "1;;")

        assert "\n1;\n" in probe


class TestJavaScriptWrapper:
    """Guarded JavaScript programs."""

    def test_user_code_inside_guard_function(self):
        program = JavaScriptWrapper().wrap("console.log('hi');")

        assert "console.log('hi');" in program
        assert "function (console, process, require, module, exports" in program
        assert "Runtime Error: " in program
        assert "process.exitCode = 1" in program

    def test_template_literals_left_alone(self):
        code = "const name = 'x'; console.log(`hello ${name}`);"

        assert code in JavaScriptWrapper().wrap(code)

    def test_probe_prints_json_line(self):
        probe = JavaScriptWrapper().build_probe("function add(a,b){return a+b;}", "add(2,3)")

        assert "const __probeResult = (\nadd(2,3)\n  );" in probe
        assert "JSON.stringify({ success: true, result: __probeResult })" in probe

    def test_trailing_semicolon_stripped(self):
        probe = JavaScriptWrapper().build_probe("function add(a,b){return a+b;}", "add(2,3); ")

        assert "\nadd(2,3)\n" in probe
        assert "add(2,3);" not in probe

    def test_undefined_result_reported(self):
        probe = JavaScriptWrapper().build_probe("", "void 0")

        assert "__probeResult === undefined" in probe
        assert "Expression evaluated to undefined" in probe


class TestUnguardedWrappers:
    """TypeScript and C# run as written but still build probes."""

    def test_typescript_passthrough(self):
        code = "const x: number = 1;\nconsole.log(x);"

        assert TypeScriptWrapper().wrap(code) == code
        assert "__probeResult = (\nx + 1\n  );" in TypeScriptWrapper().build_probe(code, "x + 1;")

    def test_typescript_shares_javascript_epilogue(self):
        probe = TypeScriptWrapper().build_probe("const n: number = 2;", "n * 2")

        assert probe.startswith("const n: number = 2;")
        assert "JSON.stringify({ success: true, result: __probeResult })" in probe
        assert "Expression evaluated to undefined" in probe

    def test_csharp_passthrough(self):
        code = 'System.Console.WriteLine("hi");'

        assert CSharpWrapper().wrap(code) == code
        probe = CSharpWrapper().build_probe("int Add(int a, int b) => a + b;", "Add(2, 3)")
        assert "var __probeResult = (\nAdd(2, 3)\n    );" in probe
        assert "JsonSerializer.Serialize" in probe

    def test_csharp_trailing_semicolon_stripped(self):
        probe = CSharpWrapper().build_probe("int Add(int a, int b) => a + b;", "Add(2, 3);")

        assert "\nAdd(2, 3)\n" in probe
        assert "Add(2, 3);" not in probe
        assert "catch (System.Exception __probeError)" in probe
