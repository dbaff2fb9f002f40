"""
Terminal: the public entry point of pureansi.

A ``Terminal`` wires one ``AnsiParser`` to one ``GridBuffer``: bytes go in
through ``feed``, every command the parser emits is applied to the grid
before the next byte is looked at, and ``contents_to_string`` reads back what
a terminal of that width would show.

Instances are not thread-safe; callers sharing one across threads must
serialise access themselves.
"""

import logging
from typing import Callable, Optional, Tuple

from .emulation.grid_buffer import GridBuffer
from .protocol.ansi_parser import AnsiParser, ByteInput
from .protocol.commands import BeginSyncUpdate, EndSyncUpdate, TermCmd
from .utils.logging_utils import log_data_processing, log_debug_operation
from .warnings import DiagnosticSink, LoggingDiagnosticSink

logger = logging.getLogger(__name__)

CommandObserver = Callable[[TermCmd], None]


class Terminal:
    """Minimal ANSI terminal whose contents can be read back as a string."""

    def __init__(
        self,
        width: int,
        diagnostics: Optional[DiagnosticSink] = None,
        on_command: Optional[CommandObserver] = None,
    ) -> None:
        """
        Initialize a terminal.

        Args:
            width: Number of columns; must be a positive int.
            diagnostics: Sink shared by parser and grid for notices about
                ignored or unimplemented sequences. Defaults to logging.
            on_command: Optional observer called with every command after it
                has been applied, e.g. to act on synchronized-update markers.

        Raises:
            InvalidWidthError: if ``width`` is not a positive int.
        """
        self._diagnostics = (
            diagnostics if diagnostics is not None else LoggingDiagnosticSink(logger)
        )
        self.grid = GridBuffer(width, diagnostics=self._diagnostics)
        self.parser = AnsiParser(diagnostics=self._diagnostics)
        self.on_command = on_command
        self.sync_update_active = False

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    def feed(self, data: ByteInput) -> None:
        """Feed raw terminal output, updating the grid. Never raises on bad input."""
        log_data_processing(logger, "Feeding terminal", f"{len(data)} bytes")
        self.parser.advance(data, self._apply)

    def _apply(self, command: TermCmd) -> None:
        self.grid.apply(command)
        if isinstance(command, BeginSyncUpdate):
            self.sync_update_active = True
        elif isinstance(command, EndSyncUpdate):
            self.sync_update_active = False
        if self.on_command is not None:
            self.on_command(command)

    def reset(self) -> None:
        """Completely reset the terminal: empty grid, cursor at origin, fresh parser."""
        self.grid.reset()
        self.parser.reset()
        self.sync_update_active = False
        log_debug_operation(logger, "Terminal reset")

    def contents_to_string(self) -> str:
        """Get the contents of the terminal as a string, one line per row."""
        return self.grid.contents_to_string()

    def is_empty(self) -> bool:
        """Whether nothing has been written since construction or the last reset."""
        return self.grid.is_empty()

    def get_position(self) -> Tuple[int, int]:
        """Cursor position as ``(row, col)``."""
        return self.grid.get_position()

    def __repr__(self) -> str:
        return f"Terminal(width={self.width}, height={self.height})"
