"""
pureansi package init.
Exports the terminal, its building blocks, and logging setup.
"""

import argparse
import datetime
import json
import logging
import os
import sys
from typing import List, Optional

from .emulation.grid_buffer import GridBuffer
from .emulation.snapshot import (
    GridSnapshot,
    SnapshotComparison,
    compare_snapshots,
    take_snapshot,
)
from .exceptions import InvalidWidthError, PureAnsiError, SnapshotError
from .protocol.ansi_parser import AnsiParser, ParserStatus
from .terminal import Terminal
from .warnings import (
    CollectingDiagnosticSink,
    Diagnostic,
    LoggingDiagnosticSink,
    WarningCategory,
    add_warning_arguments,
    configure_warnings_from_args,
    get_categorized_logger,
)

DEFAULT_WIDTH = 80


class JSONFormatter(logging.Formatter):
    """JSON formatter with structured logging support."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.datetime.now().isoformat(),
            "level": record.levelname,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
        }

        # Diagnostic context (final byte, params, mode, ...)
        extra = getattr(record, "pureansi_extra", {})
        if extra:
            log_entry.update(extra)

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, ensure_ascii=False, default=str)


def setup_logging(level: str = "WARNING") -> None:
    """
    Setup basic logging configuration.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    use_json = os.environ.get("PUREANSI_LOG_JSON", "false").lower() == "true"
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper()))
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    if use_json:
        handler = logging.StreamHandler()
        handler.setFormatter(JSONFormatter())
        root.addHandler(handler)
    else:
        logging.basicConfig(level=getattr(logging, level.upper()))


def _default_width() -> int:
    raw = os.environ.get("PUREANSI_WIDTH")
    if raw is None:
        return DEFAULT_WIDTH
    try:
        width = int(raw)
    except ValueError:
        width = 0
    if width <= 0:
        get_categorized_logger(__name__).log_configuration_warning(
            f"Ignoring invalid PUREANSI_WIDTH={raw!r}, using {DEFAULT_WIDTH}"
        )
        return DEFAULT_WIDTH
    return width


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="pureansi - render terminal output to plain text"
    )
    parser.add_argument(
        "input",
        nargs="?",
        default="-",
        help="File with raw terminal output ('-' for stdin, the default)",
    )
    parser.add_argument(
        "--width",
        type=int,
        default=_default_width(),
        help="Terminal width in columns (default $PUREANSI_WIDTH or 80)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Logging level",
    )
    parser.add_argument("--snapshot", help="Save a JSON snapshot to this path")
    parser.add_argument(
        "--compare",
        help="Compare against a saved JSON snapshot; exit 1 when they differ",
    )
    add_warning_arguments(parser)
    return parser


def _read_input(path: str) -> bytes:
    if path == "-":
        return sys.stdin.buffer.read()
    with open(path, "rb") as f:
        return f.read()


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point: render a capture and optionally snapshot or compare it."""
    parser = _build_arg_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level)
    filters = configure_warnings_from_args(args)
    log = logging.getLogger(__name__)

    try:
        terminal = Terminal(
            args.width, diagnostics=LoggingDiagnosticSink(filters=filters)
        )
    except InvalidWidthError as e:
        parser.error(str(e))

    try:
        data = _read_input(args.input)
    except OSError as e:
        log.error(f"Cannot read input {args.input}: {e}")
        return 2

    terminal.feed(data)
    sys.stdout.write(terminal.contents_to_string())

    snapshot = take_snapshot(terminal)
    if args.snapshot:
        try:
            snapshot.save_to_file(args.snapshot)
        except OSError as e:
            log.error(f"Cannot write snapshot {args.snapshot}: {e}")
            return 2

    if args.compare:
        try:
            baseline = GridSnapshot.load_from_file(args.compare)
        except SnapshotError as e:
            log.error(f"Cannot load baseline: {e}")
            return 2
        comparison = compare_snapshots(baseline, snapshot)
        if comparison.has_differences():
            sys.stderr.write(comparison.format_report() + "\n")
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())


__all__ = [
    "Terminal",
    "AnsiParser",
    "ParserStatus",
    "GridBuffer",
    "GridSnapshot",
    "SnapshotComparison",
    "take_snapshot",
    "compare_snapshots",
    "Diagnostic",
    "WarningCategory",
    "CollectingDiagnosticSink",
    "LoggingDiagnosticSink",
    "PureAnsiError",
    "InvalidWidthError",
    "SnapshotError",
    "JSONFormatter",
    "setup_logging",
    "main",
]
