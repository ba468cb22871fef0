"""Runtime data models.

popen-runner runtime module v0.1.0
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

__all__ = ["CapturedOutput"]


class CapturedOutput(BaseModel):
    """Fully materialized output of one child process run.

    Attributes:
        argv: Tokenized command line (first element is the executable)
        pid: OS process identifier of the child
        returncode: Exit status, recorded for diagnostics only
        stdout: Decoded stdout text
        stderr: Decoded stderr text
    """

    model_config = ConfigDict(frozen=True)

    argv: list[str] = Field(min_length=1)
    pid: int
    returncode: int | None = None
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        """Whether the run counts as a success (nothing written to stderr)."""
        return not self.stderr
