"""
Child-process runner for prepared source files.

Lifecycle per execution:
  1. Write the program text to ``<temp_dir>/<uuid4>.<ext>``
  2. Spawn the interpreter against it in a new session, stdout / stderr piped
  3. Drain both pipes while waiting for exit, keeping at most
     ``max_output_size`` characters of each
  4. On timeout or cancellation kill the whole process group, then reap
  5. Delete the source file, whatever happened above

Interpreters such as ``npx ts-node`` and ``dotnet script`` start children of
their own that inherit the pipes, so the kill targets the process group and
not only the direct child.

Runners hold no per-execution state, so one instance can serve any number of
concurrent executions. File names are unique per execution; nothing is locked.
"""

from __future__ import annotations

import asyncio
import os
import signal
import time
from pathlib import Path
from typing import Sequence
from uuid import uuid4

from structlog import get_logger

from coderunner.config import SandboxConfig
from coderunner.sandbox.models import ExecutionResult, ExecutionStatus

logger = get_logger()

_TRUNCATION_MARKER = "\n… [output truncated]"
_READ_CHUNK_SIZE = 64 * 1024
# Upper bound on UTF-8 bytes per character
_MAX_CHAR_BYTES = 4


class ProcessRunner:
    """Runs one program text per call in its own OS process."""

    def __init__(self, config: SandboxConfig) -> None:
        self._config = config

    async def run(
        self,
        command: Sequence[str],
        source: str,
        extension: str,
        timeout_ms: int | None = None,
    ) -> ExecutionResult:
        """
        Execute *source* with ``command + [path]`` and return the result.

        Args:
            command: Interpreter argv prefix, e.g. ``("node",)``.
            source: Program text to write to the ephemeral file.
            extension: File extension without the dot.
            timeout_ms: Wall-clock limit; defaults to the configured one.

        Returns:
            ``ExecutionResult``; never raises except on cancellation.

        Raises:
            ValueError: *timeout_ms* is below 1, before anything is written.
        """
        limit_ms = self._config.timeout_ms if timeout_ms is None else timeout_ms
        if limit_ms < 1:
            raise ValueError(f"timeout_ms must be at least 1, got {limit_ms}")

        path = Path(self._config.temp_dir) / f"{uuid4()}.{extension}"
        start_time = time.monotonic()
        process: asyncio.subprocess.Process | None = None
        io_task: asyncio.Future | None = None

        try:
            try:
                await asyncio.to_thread(self._write_source, path, source)
                process = await asyncio.create_subprocess_exec(
                    *command,
                    str(path),
                    stdin=asyncio.subprocess.DEVNULL,
                    stdout=asyncio.subprocess.PIPE,
                    stderr=asyncio.subprocess.PIPE,
                    start_new_session=True,
                )
            except (OSError, UnicodeError) as exc:
                logger.warning("Failed to start execution", command=command[0], error=str(exc))
                return ExecutionResult(
                    success=False,
                    error=str(exc) or exc.__class__.__name__,
                    execution_time_ms=self._elapsed_ms(start_time),
                    status=ExecutionStatus.SPAWN_FAILURE,
                )

            io_task = asyncio.ensure_future(self._communicate(process))
            done, _ = await asyncio.wait({io_task}, timeout=limit_ms / 1000.0)

            if not done:
                self._kill(process)
                # Pipes reach EOF once the group is dead; this also reaps the child.
                await io_task
                logger.info("Execution timed out", command=command[0], timeout_ms=limit_ms)
                return ExecutionResult(
                    success=False,
                    error=f"Execution timed out after {limit_ms}ms",
                    execution_time_ms=self._elapsed_ms(start_time),
                    status=ExecutionStatus.TIMEOUT,
                )

            stdout_raw, stdout_over, stderr_raw, stderr_over = io_task.result()
            stdout_str, stdout_truncated = self._process_output(stdout_raw, stdout_over)
            stderr_str, stderr_truncated = self._process_output(stderr_raw, stderr_over)
            succeeded = process.returncode == 0

            return ExecutionResult(
                success=succeeded,
                output=stdout_str,
                error=stderr_str or None,
                execution_time_ms=self._elapsed_ms(start_time),
                status=ExecutionStatus.SUCCESS if succeeded else ExecutionStatus.RUNTIME_ERROR,
                truncated=stdout_truncated or stderr_truncated,
            )

        except asyncio.CancelledError:
            if process is not None:
                self._kill(process)
            if io_task is not None:
                await io_task
            raise
        finally:
            await asyncio.to_thread(self._remove_source, path)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _communicate(
        self, process: asyncio.subprocess.Process
    ) -> tuple[bytes, bool, bytes, bool]:
        """Drain both pipes to EOF with a bounded buffer each, then reap."""
        limit = self._config.max_output_size * _MAX_CHAR_BYTES
        (stdout_raw, stdout_over), (stderr_raw, stderr_over) = await asyncio.gather(
            self._read_capped(process.stdout, limit),
            self._read_capped(process.stderr, limit),
        )
        await process.wait()
        return stdout_raw, stdout_over, stderr_raw, stderr_over

    @staticmethod
    async def _read_capped(stream: asyncio.StreamReader, limit: int) -> tuple[bytes, bool]:
        buffer = bytearray()
        overflowed = False
        while chunk := await stream.read(_READ_CHUNK_SIZE):
            room = limit - len(buffer)
            if len(chunk) > room:
                overflowed = True
            if room > 0:
                buffer.extend(chunk[:room])
            # Past the limit the pipe is still drained so the child never blocks on write.
        return bytes(buffer), overflowed

    @staticmethod
    def _write_source(path: Path, source: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(source, encoding="utf-8")

    @staticmethod
    def _remove_source(path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            logger.warning("Failed to remove temp source", path=str(path), error=str(exc))

    @staticmethod
    def _kill(process: asyncio.subprocess.Process) -> None:
        # The child leads its own session, so its pid is the process group id.
        try:
            os.killpg(process.pid, signal.SIGKILL)
        except ProcessLookupError:
            pass

    @staticmethod
    def _elapsed_ms(start_time: float) -> int:
        return max(0, int((time.monotonic() - start_time) * 1000))

    def _process_output(self, raw: bytes, overflowed: bool = False) -> tuple[str, bool]:
        """Decode and strip one captured stream, truncating it to ``max_output_size``."""
        max_size = self._config.max_output_size
        text = raw.decode("utf-8", errors="replace").strip()

        if overflowed or len(text) > max_size:
            return text[:max_size] + _TRUNCATION_MARKER, True
        return text, False
