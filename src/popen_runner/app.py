"""popen-runner command line entry point.

Contains logging setup and the main entry point.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from . import __version__
from .config import Config, get_config
from .runtime import EmptyCommandError, ProcessRunner, StderrNotEmpty

__all__ = ["configure_logging", "main"]

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Exit code used by POSIX shells when the program is not found
EXIT_NOT_FOUND = 127


class JsonSerializingFormatter(logging.Formatter):
    """Formatter that JSON-serializes object arguments of a log record."""

    def format(self, record: logging.LogRecord) -> str:
        if record.args and isinstance(record.args, tuple):
            new_args = []
            for arg in record.args:
                try:
                    if hasattr(arg, "model_dump"):
                        # Pydantic model
                        new_args.append(json.dumps(arg.model_dump(), ensure_ascii=False))
                    elif isinstance(arg, dict):
                        new_args.append(json.dumps(arg, ensure_ascii=False, default=str))
                    else:
                        new_args.append(arg)
                except (TypeError, ValueError):
                    new_args.append(arg)
            record.args = tuple(new_args)
        return super().format(record)


def configure_logging(config: Config) -> None:
    """Configure log handlers for the popen_runner namespace.

    Args:
        config: Runner configuration; log_debug selects file output at DEBUG
    """
    log_handlers: list[logging.Handler] = []

    if config.log_debug and config.log_file:
        file_handler = logging.FileHandler(config.log_file, encoding="utf-8")
        file_handler.setFormatter(JsonSerializingFormatter(LOG_FORMAT))
        log_handlers.append(file_handler)
        log_level = logging.DEBUG
    else:
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        log_handlers.append(stderr_handler)
        log_level = logging.INFO

    # Third-party loggers stay at WARNING
    logging.basicConfig(
        level=logging.WARNING,
        handlers=log_handlers,
    )
    logging.getLogger("popen_runner").setLevel(log_level)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="popen-runner",
        description="Run a command and print its stdout; fail if it writes to stderr.",
    )
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "--pid",
        action="store_true",
        help="Print the child process id to stderr after the run",
    )
    parser.add_argument(
        "command",
        nargs=argparse.REMAINDER,
        help="Command line to run (split on whitespace, no shell quoting)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Returns:
        Process exit code
    """
    config = get_config()
    configure_logging(config)

    args = _build_parser().parse_args(argv)
    command = " ".join(args.command)
    runner = ProcessRunner(command, encoding=config.encoding)

    logger.debug(f"Running command: {command!r} ({config})")

    try:
        stdout = runner.spawn()
    except StderrNotEmpty as e:
        sys.stderr.write(e.stderr)
        return 1
    except EmptyCommandError:
        print("popen-runner: no command given", file=sys.stderr)
        return 1
    except FileNotFoundError as e:
        print(f"popen-runner: {e}", file=sys.stderr)
        return EXIT_NOT_FOUND
    except OSError as e:
        print(f"popen-runner: {e}", file=sys.stderr)
        return 1
    finally:
        if args.pid and runner.pid is not None:
            print(f"pid={runner.pid}", file=sys.stderr)

    sys.stdout.write(stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
