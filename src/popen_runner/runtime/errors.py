"""Runner exception classes.

popen-runner runtime module v0.1.0

Every class here derives from RunnerError, which is itself an OSError, so
``except OSError`` around ``ProcessRunner.spawn()`` catches both these and
the process-creation failures (FileNotFoundError, PermissionError, ...)
raised by the operating system.
"""

from __future__ import annotations

__all__ = [
    "RunnerError",
    "EmptyCommandError",
    "AccessError",
    "StdoutCaptureError",
    "StderrCaptureError",
    "StderrNotEmpty",
    "UnknownEncodingError",
]


class RunnerError(OSError):
    """Base exception for the process runner."""
    pass


class EmptyCommandError(RunnerError):
    """The command line contained no tokens."""

    def __init__(self, command: str = "") -> None:
        self.command = command
        super().__init__(f"Empty command: {command!r}")


class UnknownEncodingError(RunnerError):
    """The output encoding does not name a registered codec."""

    def __init__(self, encoding: str) -> None:
        self.encoding = encoding
        super().__init__(f"Unknown encoding: {encoding!r}")


class AccessError(RunnerError):
    """No child process handle exists."""
    pass


class StdoutCaptureError(RunnerError):
    """The stdout endpoint was already taken."""
    pass


class StderrCaptureError(RunnerError):
    """The stderr endpoint was already taken."""
    pass


class StderrNotEmpty(RunnerError):
    """The child wrote to stderr.

    Raised regardless of the child's exit status.

    Attributes:
        stderr: Full captured stderr text
    """

    def __init__(self, stderr: str) -> None:
        self.stderr = stderr
        super().__init__(stderr)
