"""popen-runner - run a command line and capture its output.

Environment variables:
    POPEN_RUNNER_ENCODING: Encoding of captured output (default utf-8)
    POPEN_RUNNER_LOG_DEBUG: Log to a temp file at DEBUG (default false)

Usage:
    from popen_runner import ProcessRunner

    runner = ProcessRunner("uname -s")
    print(runner.spawn())
"""

__version__ = "0.1.0"

from .runtime import (
    AccessError,
    CapturedOutput,
    EmptyCommandError,
    ProcessRunner,
    RunnerError,
    StderrCaptureError,
    StderrNotEmpty,
    StdoutCaptureError,
    UnknownEncodingError,
    run_command,
)

__all__ = [
    "__version__",
    "AccessError",
    "CapturedOutput",
    "EmptyCommandError",
    "ProcessRunner",
    "RunnerError",
    "StderrCaptureError",
    "StderrNotEmpty",
    "StdoutCaptureError",
    "UnknownEncodingError",
    "run_command",
]
