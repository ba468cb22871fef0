"""Process runner: tokenize, spawn, capture, read, validate.

popen-runner runtime module v0.1.0

This module provides:
- Whitespace tokenization of a command line into an argv (no shell quoting)
- Child process creation with stdout/stderr redirected into pipes
- Single-consume stream endpoints on the child handle
- Concurrent draining of stdout and stderr (no pipe-buffer deadlock)
- Success only when the child wrote nothing to stderr

Key design points:
- Success is decided by stderr emptiness alone; the exit status is recorded
  in CapturedOutput.returncode but never consulted
- stdout and stderr are read in one anyio task group and joined before
  validation, so a child filling its stderr pipe cannot block the stdout read
- No timeout or cancellation: a hung child hangs the caller
"""

from __future__ import annotations

import codecs
import logging
import subprocess
from dataclasses import dataclass, field

import anyio
from anyio.abc import ByteReceiveStream, Process

from ..config import get_config
from .errors import (
    AccessError,
    EmptyCommandError,
    StderrCaptureError,
    StderrNotEmpty,
    StdoutCaptureError,
    UnknownEncodingError,
)
from .types import CapturedOutput

__all__ = [
    "ChildProcess",
    "ProcessRunner",
    "run_command",
    "tokenize_command",
]

logger = logging.getLogger(__name__)


def tokenize_command(command: str) -> list[str]:
    """Split a command line into an argv on runs of whitespace.

    No quoting or escaping is supported: a token cannot contain spaces.

    Args:
        command: Raw command line, e.g. "echo hello world"

    Returns:
        argv list, e.g. ["echo", "hello", "world"]

    Raises:
        EmptyCommandError: If the command is empty or whitespace-only
    """
    argv = command.split()
    if not argv:
        raise EmptyCommandError(command)
    return argv


@dataclass
class ChildProcess:
    """Handle to a spawned child process.

    The stdout and stderr endpoints can each be taken once; a second take
    returns None.

    Attributes:
        process: The underlying anyio process
        argv: Command line the process was started with
    """

    process: Process
    argv: list[str]
    _stdout: ByteReceiveStream | None = field(init=False, default=None, repr=False)
    _stderr: ByteReceiveStream | None = field(init=False, default=None, repr=False)

    def __post_init__(self) -> None:
        self._stdout = self.process.stdout
        self._stderr = self.process.stderr

    @property
    def pid(self) -> int:
        """OS process identifier."""
        return self.process.pid

    @property
    def returncode(self) -> int | None:
        """Exit status, None until the process has been reaped."""
        return self.process.returncode

    def take_stdout(self) -> ByteReceiveStream | None:
        """Move the stdout endpoint out of the handle."""
        stream, self._stdout = self._stdout, None
        return stream

    def take_stderr(self) -> ByteReceiveStream | None:
        """Move the stderr endpoint out of the handle."""
        stream, self._stderr = self._stderr, None
        return stream


class ProcessRunner:
    """Run a command line and return its stdout if stderr stayed empty.

    Each spawn() replaces the child handle held by the runner, so at most one
    handle is live per runner. A child still running when the runner is
    dropped is left alone.

    Example:
        runner = ProcessRunner("git rev-parse HEAD")
        try:
            sha = runner.spawn().strip()
        except StderrNotEmpty as e:
            print(f"git complained: {e.stderr}")
        print(runner.pid)
    """

    def __init__(self, command: str, *, encoding: str | None = None) -> None:
        """Initialize the runner.

        Args:
            command: The command to run, including its arguments
            encoding: Text encoding of child output (None = configured default)
        """
        self._command = command
        self._encoding = encoding
        self._child: ChildProcess | None = None
        self._output: CapturedOutput | None = None

    def __repr__(self) -> str:
        return f"ProcessRunner(command={self._command!r}, pid={self.pid})"

    @property
    def command(self) -> str:
        """The command line, verbatim."""
        return self._command

    @property
    def encoding(self) -> str:
        """Encoding used to decode stdout and stderr."""
        return self._encoding or get_config().encoding

    @property
    def pid(self) -> int | None:
        """OS process identifier of the current child, or None."""
        if self._child is None:
            return None
        return self._child.pid

    @property
    def output(self) -> CapturedOutput | None:
        """Full capture of the most recent run, including failed ones."""
        return self._output

    def spawn(self) -> str:
        """Spawn the command, read both streams and return stdout.

        Blocks until the child closes stdout and stderr. Must not be called
        from inside a running event loop; use spawn_async() there.

        Returns:
            Captured stdout text

        Raises:
            EmptyCommandError: If the command has no tokens
            UnknownEncodingError: If the output encoding is not a known codec
            StderrNotEmpty: If the child wrote anything to stderr
            OSError: If the process cannot be started or its output cannot
                be read or decoded
        """
        return anyio.run(self.spawn_async)

    async def spawn_async(self) -> str:
        """Coroutine form of spawn().

        This method:
        1. Tokenizes the command and starts the child
        2. Takes the stdout and stderr endpoints from the child handle
        3. Drains both streams concurrently until EOF
        4. Reaps the child
        5. Fails with StderrNotEmpty if any stderr text was captured

        Returns:
            Captured stdout text
        """
        argv = tokenize_command(self._command)
        encoding = self._resolve_encoding()
        self._output = None
        self._child = None

        self._child = ChildProcess(process=await self._start_process(argv), argv=argv)

        logger.debug(f"Started subprocess pid={self._child.pid} argv={argv[0]}")

        stdout, stderr = self._capture_streams()

        texts: dict[str, str] = {}
        # Read errors are collected, not raised, so they never leave the task
        # group wrapped in an ExceptionGroup
        failures: list[OSError] = []

        async def drain(name: str, stream: ByteReceiveStream) -> None:
            try:
                texts[name] = await self._read_stream(stream, encoding)
            except OSError as e:
                failures.append(e)

        try:
            async with anyio.create_task_group() as tg:
                tg.start_soon(drain, "stdout", stdout)
                tg.start_soon(drain, "stderr", stderr)
        finally:
            await self._child.process.wait()

        logger.debug(
            f"Subprocess completed pid={self._child.pid} "
            f"returncode={self._child.returncode}"
        )

        if failures:
            raise failures[0]

        self._output = CapturedOutput(
            argv=argv,
            pid=self._child.pid,
            returncode=self._child.returncode,
            stdout=texts["stdout"],
            stderr=texts["stderr"],
        )
        logger.debug(
            f"Captured output pid={self._output.pid} "
            f"stdout={len(self._output.stdout)} chars "
            f"stderr={len(self._output.stderr)} chars "
            f"returncode={self._output.returncode}"
        )

        if not self._output.ok:
            raise StderrNotEmpty(self._output.stderr)

        return self._output.stdout

    async def _start_process(self, argv: list[str]) -> Process:
        """Start the child with piped stdout/stderr.

        stdin is connected to DEVNULL so the child never reads from the
        caller's terminal or protocol channel.

        Args:
            argv: Tokenized command line

        Returns:
            The started anyio process
        """
        return await anyio.open_process(
            argv,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )

    def _capture_streams(self) -> tuple[ByteReceiveStream, ByteReceiveStream]:
        """Take the stdout and stderr endpoints from the current child.

        Returns:
            Tuple of (stdout, stderr) endpoints

        Raises:
            AccessError: If there is no child handle
            StdoutCaptureError: If stdout was already taken
            StderrCaptureError: If stderr was already taken
        """
        if self._child is None:
            raise AccessError("Error accessing child process")

        stdout = self._child.take_stdout()
        if stdout is None:
            raise StdoutCaptureError("Failed to capture stdout")

        stderr = self._child.take_stderr()
        if stderr is None:
            raise StderrCaptureError("Failed to capture stderr")

        return stdout, stderr

    def _resolve_encoding(self) -> str:
        """Check that the output encoding names a known codec.

        Returns:
            The encoding name

        Raises:
            UnknownEncodingError: If no codec is registered under that name
        """
        encoding = self.encoding
        try:
            codecs.lookup(encoding)
        except LookupError as e:
            raise UnknownEncodingError(encoding) from e
        return encoding

    async def _read_stream(self, stream: ByteReceiveStream, encoding: str) -> str:
        """Read a stream to EOF and decode it.

        Args:
            stream: stdout or stderr endpoint
            encoding: Codec used to decode the bytes

        Returns:
            Decoded text

        Raises:
            OSError: If the read fails or the bytes are not valid text
        """
        chunks: list[bytes] = []
        try:
            async with stream:
                async for chunk in stream:
                    chunks.append(chunk)
        except (anyio.BrokenResourceError, anyio.ClosedResourceError) as e:
            raise OSError(f"Failed to read child stream: {e!r}") from e

        data = b"".join(chunks)
        try:
            return data.decode(encoding)
        except UnicodeDecodeError as e:
            raise OSError(f"Child output is not valid {encoding}: {e}") from e


# Convenience function for simple use cases
def run_command(command: str, *, encoding: str | None = None) -> str:
    """Run a command line and return its stdout.

    Args:
        command: The command to run, including its arguments
        encoding: Text encoding of child output (None = configured default)

    Returns:
        Captured stdout text

    Raises:
        Same as ProcessRunner.spawn()
    """
    return ProcessRunner(command, encoding=encoding).spawn()
