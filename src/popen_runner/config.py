"""Environment variable configuration.

Environment variables:
    POPEN_RUNNER_ENCODING: Text encoding for captured stdout/stderr
        - Default: utf-8
        - Unknown codec names fall back to the default

    POPEN_RUNNER_LOG_DEBUG: Debug logging mode
        - true/1/yes/on = enabled (log written to a temp file at DEBUG)
        - false/0/no/off = disabled (default, log written to stderr at INFO)
"""

from __future__ import annotations

import codecs
import os
import tempfile
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

__all__ = ["Config", "load_config", "get_config", "reload_config", "DEFAULT_ENCODING"]

DEFAULT_ENCODING = "utf-8"


def _parse_bool(value: str | None, default: bool = False) -> bool:
    """Parse a boolean environment variable."""
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes", "on")


def _parse_encoding(value: str | None) -> str:
    """Parse the encoding environment variable.

    Args:
        value: Codec name, e.g. "utf-8" or "latin-1"

    Returns:
        Canonical codec name, or DEFAULT_ENCODING when unset or unknown
    """
    if not value or not value.strip():
        return DEFAULT_ENCODING
    try:
        return codecs.lookup(value.strip()).name
    except LookupError:
        return DEFAULT_ENCODING


@dataclass
class Config:
    """Runner configuration.

    Attributes:
        encoding: Text encoding used to decode child output
        log_debug: Debug logging mode (log to temp file)
        log_file: Log file path (set automatically when log_debug=True)
    """

    encoding: str = DEFAULT_ENCODING
    log_debug: bool = False
    log_file: str | None = None

    def __repr__(self) -> str:
        return (
            f"Config(encoding={self.encoding}, "
            f"log_debug={self.log_debug}, "
            f"log_file={self.log_file})"
        )


def _generate_log_file_path() -> str:
    """Generate a log file path.

    Returns:
        Absolute path of a timestamped log file under the system temp directory
    """
    log_dir = Path(tempfile.gettempdir()) / "popen-runner"
    log_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = log_dir / f"popen_runner_debug_{timestamp}.log"
    return str(log_file.resolve())


def load_config() -> Config:
    """Load configuration from environment variables."""
    log_debug = _parse_bool(os.environ.get("POPEN_RUNNER_LOG_DEBUG"), default=False)
    log_file = _generate_log_file_path() if log_debug else None

    return Config(
        encoding=_parse_encoding(os.environ.get("POPEN_RUNNER_ENCODING")),
        log_debug=log_debug,
        log_file=log_file,
    )


# Global instance (lazily loaded)
_config: Config | None = None


def get_config() -> Config:
    """Return the global configuration instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config() -> Config:
    """Reload configuration (used by tests)."""
    global _config
    _config = load_config()
    return _config
