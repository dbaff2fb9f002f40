"""Growable fixed-width character grid driven by terminal commands."""

import logging
from typing import List, Optional, Tuple

from ..exceptions import InvalidWidthError
from ..protocol.commands import (
    BeginSyncUpdate,
    CarriageReturn,
    ClearScreen,
    CursorDown,
    CursorLeft,
    CursorNextLine,
    CursorPreviousLine,
    CursorRight,
    CursorSet,
    CursorUp,
    EndSyncUpdate,
    EraseToEndOfLine,
    LineFeed,
    PutChar,
    TermCmd,
)
from ..warnings import Diagnostic, DiagnosticSink, LoggingDiagnosticSink, WarningCategory

logger = logging.getLogger(__name__)

SPACE = " "
CLEAR_ENTIRE_SCREEN = 2


def validate_width(width: int) -> int:
    """Return ``width`` if it is a positive int, else raise ``InvalidWidthError``."""
    if isinstance(width, bool) or not isinstance(width, int) or width <= 0:
        raise InvalidWidthError(
            "width must be a positive integer", context={"width": repr(width)}
        )
    return width


class GridBuffer:
    """
    Character cells plus a cursor, ``width`` columns wide.

    Rows are allocated lazily when a character is written on them, so
    ``height`` only ever grows until ``reset``. Every allocated row holds
    exactly ``width`` cells. The cursor column may run past ``width`` after a
    cursor-right; the overflow wraps onto following rows on the next write.
    """

    def __init__(self, width: int, diagnostics: Optional[DiagnosticSink] = None):
        """
        Initialize the GridBuffer.

        :param width: Number of columns, fixed for the buffer's lifetime.
        :param diagnostics: Sink for notices about unimplemented modes.
        :raises InvalidWidthError: if ``width`` is not a positive int.
        """
        self.width: int = validate_width(width)
        self.height: int = 0
        self.cells: List[str] = []
        self.cursor_row: int = 0
        self.cursor_col: int = 0
        self._diagnostics: DiagnosticSink = (
            diagnostics if diagnostics is not None else LoggingDiagnosticSink(logger)
        )

    @property
    def diagnostics(self) -> DiagnosticSink:
        return self._diagnostics

    # Cursor -----------------------------------------------------------
    def get_position(self) -> Tuple[int, int]:
        """Get current cursor position as ``(row, col)``."""
        return (self.cursor_row, self.cursor_col)

    def set_position(self, row: int, col: int) -> None:
        """Set cursor position; negative values saturate at 0."""
        self.cursor_row = max(row, 0)
        self.cursor_col = max(col, 0)

    def carriage_return(self) -> None:
        self.cursor_col = 0

    def line_feed(self) -> None:
        self.cursor_row += 1

    def cursor_up(self, count: int) -> None:
        self.cursor_row = max(self.cursor_row - count, 0)

    def cursor_down(self, count: int) -> None:
        self.cursor_row += count

    def cursor_left(self, count: int) -> None:
        self.cursor_col = max(self.cursor_col - count, 0)

    def cursor_right(self, count: int) -> None:
        self.cursor_col += count

    def cursor_next_line(self, count: int) -> None:
        self.cursor_down(count)
        self.cursor_col = 0

    def cursor_previous_line(self, count: int) -> None:
        self.cursor_up(count)
        self.cursor_col = 0

    def cursor_set(self, x: int, y: int) -> None:
        """Move to absolute zero-based column ``x`` and row ``y``."""
        self.set_position(y, x)

    # Cells ------------------------------------------------------------
    def _extend(self) -> None:
        self.cells.extend(SPACE * self.width)
        self.height += 1

    def _extend_to_cursor(self) -> None:
        while self.cursor_row >= self.height:
            self._extend()

    def _index(self, row: int, col: int) -> int:
        return row * self.width + col

    def put_char(self, char: str) -> None:
        """Write ``char`` at the cursor, growing rows as needed, then advance."""
        if self.cursor_col >= self.width:
            extra_rows, self.cursor_col = divmod(self.cursor_col, self.width)
            self.cursor_row += extra_rows
        self._extend_to_cursor()
        self.cells[self._index(self.cursor_row, self.cursor_col)] = char
        self.cursor_col += 1
        if self.cursor_col >= self.width:
            # The next row is allocated on the next write, not here
            self.cursor_col = 0
            self.cursor_row += 1

    def erase_to_end_of_line(self) -> None:
        """Blank the cursor row from the cursor column to the last column."""
        for col in range(self.cursor_col, self.width):
            idx = self._index(self.cursor_row, col)
            if idx >= len(self.cells):
                break
            self.cells[idx] = SPACE

    def clear_screen(self, mode: int = CLEAR_ENTIRE_SCREEN) -> None:
        """Blank every allocated cell. Height and cursor are unchanged."""
        if mode != CLEAR_ENTIRE_SCREEN:
            self._diagnostics(
                Diagnostic(
                    WarningCategory.UNIMPLEMENTED,
                    logging.WARNING,
                    f"Clear mode {mode} not implemented, clearing entire screen",
                    {"mode": mode},
                )
            )
        self.cells[:] = SPACE * len(self.cells)

    def reset(self) -> None:
        """Drop all rows and move the cursor to the origin."""
        self.cells = []
        self.height = 0
        self.cursor_row = 0
        self.cursor_col = 0

    # Commands ---------------------------------------------------------
    def apply(self, command: TermCmd) -> None:
        """
        Apply one parser command to the grid.

        :raises TypeError: if ``command`` is not one of the ``TermCmd`` types.
        """
        if isinstance(command, PutChar):
            self.put_char(command.char)
        elif isinstance(command, CarriageReturn):
            self.carriage_return()
        elif isinstance(command, LineFeed):
            self.line_feed()
        elif isinstance(command, CursorUp):
            self.cursor_up(command.count)
        elif isinstance(command, CursorDown):
            self.cursor_down(command.count)
        elif isinstance(command, CursorLeft):
            self.cursor_left(command.count)
        elif isinstance(command, CursorRight):
            self.cursor_right(command.count)
        elif isinstance(command, CursorNextLine):
            self.cursor_next_line(command.count)
        elif isinstance(command, CursorPreviousLine):
            self.cursor_previous_line(command.count)
        elif isinstance(command, CursorSet):
            self.cursor_set(command.x, command.y)
        elif isinstance(command, EraseToEndOfLine):
            self.erase_to_end_of_line()
        elif isinstance(command, ClearScreen):
            self.clear_screen(command.mode)
        elif isinstance(command, (BeginSyncUpdate, EndSyncUpdate)):
            # Advisory only, nothing to draw
            pass
        else:
            raise TypeError(f"Unknown terminal command: {command!r}")

    # Rendering --------------------------------------------------------
    def line(self, row: int) -> str:
        """Return row ``row`` as exactly ``width`` characters."""
        if not 0 <= row < self.height:
            raise IndexError(f"row {row} out of range for height {self.height}")
        start = self._index(row, 0)
        return "".join(self.cells[start : start + self.width])

    def lines(self) -> List[str]:
        return [self.line(row) for row in range(self.height)]

    def contents_to_string(self) -> str:
        """Render every row followed by a newline; empty when nothing was written."""
        return "".join(f"{line}\n" for line in self.lines())

    def is_empty(self) -> bool:
        """True when no row has been allocated since construction or reset."""
        return not self.cells

    def __repr__(self) -> str:
        return (
            f"GridBuffer(width={self.width}, height={self.height}, "
            f"cursor=({self.cursor_row}, {self.cursor_col}))"
        )
