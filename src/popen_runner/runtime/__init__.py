"""Runtime module for one-shot subprocess execution.

This module tokenizes a command line, runs it with piped stdout/stderr and
returns stdout when the child wrote nothing to stderr.
"""

from __future__ import annotations

from .errors import (
    AccessError,
    EmptyCommandError,
    RunnerError,
    StderrCaptureError,
    StderrNotEmpty,
    StdoutCaptureError,
    UnknownEncodingError,
)
from .process_runner import ChildProcess, ProcessRunner, run_command, tokenize_command
from .types import CapturedOutput

__all__ = [
    "AccessError",
    "CapturedOutput",
    "ChildProcess",
    "EmptyCommandError",
    "ProcessRunner",
    "RunnerError",
    "StderrCaptureError",
    "StderrNotEmpty",
    "StdoutCaptureError",
    "UnknownEncodingError",
    "run_command",
    "tokenize_command",
]
