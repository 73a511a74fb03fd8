"""
Command-line entry point.

    coderunner run solution.py
    coderunner run script.txt --language javascript --timeout-ms 2000
    coderunner test solution.js --tests tests.json
    coderunner languages

Results are printed to stdout as JSON; logs go to stderr.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Sequence

from structlog import get_logger

from coderunner.config import get_settings
from coderunner.logging_setup import configure_logging
from coderunner.sandbox.languages import UnsupportedLanguageError, resolve_language
from coderunner.services.execution_service import CodeExecutionService

logger = get_logger()


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="coderunner",
        description="Run or grade a source file in a sandboxed child process.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    run_cmd = sub.add_parser("run", help="Execute a source file and print the result")
    run_cmd.add_argument("file", type=Path, help="Source file to execute")

    test_cmd = sub.add_parser("test", help="Grade a source file against test expressions")
    test_cmd.add_argument("file", type=Path, help="Source file under test")
    test_cmd.add_argument(
        "--tests",
        type=Path,
        required=True,
        help='JSON file: [{"test": "add(2, 3)", "expected": 5, "name": "sums"}, ...]',
    )

    for cmd in (run_cmd, test_cmd):
        cmd.add_argument(
            "--language",
            "-l",
            default=None,
            help="Language name or alias; inferred from the file extension when omitted",
        )
        cmd.add_argument(
            "--timeout-ms",
            type=_positive_int,
            default=None,
            help="Override the configured wall-clock limit",
        )

    sub.add_parser("languages", help="List supported languages")
    return parser


def _print_json(payload: Any) -> None:
    print(json.dumps(payload, indent=2, default=str))


async def _dispatch(args: argparse.Namespace, service: CodeExecutionService) -> int:
    if args.command == "languages":
        _print_json([info.model_dump(by_alias=True) for info in service.supported_languages()])
        return 0

    code = args.file.read_text(encoding="utf-8")
    language = resolve_language(args.language or args.file.suffix.lstrip("."))

    if args.command == "run":
        result = await service.execute(code, language)
        _print_json(result.to_dict())
        return 0 if result.success else 1

    tests = json.loads(args.tests.read_text(encoding="utf-8"))
    summary = await service.run_tests_summary(code, language, tests)
    _print_json(summary.model_dump(by_alias=True))
    return 0 if summary.all_passed else 1


def main(argv: Sequence[str] | None = None) -> int:
    settings = get_settings()
    configure_logging(settings)

    args = build_parser().parse_args(argv)

    config = settings.sandbox
    if getattr(args, "timeout_ms", None) is not None:
        config = config.model_copy(update={"timeout_ms": args.timeout_ms})
    service = CodeExecutionService(config)

    try:
        return asyncio.run(_dispatch(args, service))
    except UnsupportedLanguageError as exc:
        logger.error("Unsupported language", language=exc.language)
        print(str(exc), file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
