"""
ANSI escape sequence parser for pureansi.

This module turns a raw terminal byte stream (UTF-8 text mixed with ANSI/VT
escape sequences) into the closed set of commands in ``commands.py``. The
parser knows nothing about the grid; it only keeps enough state to resume a
sequence or a multi-byte character that is split across ``advance`` calls.
"""

import codecs
import logging
from enum import Enum
from typing import Callable, Iterator, List, Optional, Union

from ..warnings import Diagnostic, DiagnosticSink, LoggingDiagnosticSink, WarningCategory
from .commands import (
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
from .utils import (
    CSI_INTRODUCER,
    ESC,
    KEYPAD_APPLICATION_MODE,
    SYNC_UPDATE_MODE,
    describe_byte,
    is_final_byte,
    is_param_byte,
    parse_param,
)

logger = logging.getLogger(__name__)

ByteInput = Union[bytes, bytearray, memoryview, str]
Emit = Callable[[TermCmd], None]

# Final byte -> command class for the single-count cursor movements
_MOVEMENT_COMMANDS = {
    "A": CursorUp,
    "B": CursorDown,
    "C": CursorRight,
    "D": CursorLeft,
    "E": CursorNextLine,
    "F": CursorPreviousLine,
}


class ParserStatus(Enum):
    """Position of the parser in the escape-sequence grammar."""

    INIT = "init"
    ESCAPE_SEEN = "escape_seen"
    CONTROL_SEQUENCE_STARTED = "control_sequence_started"


def _new_decoder() -> codecs.IncrementalDecoder:
    return codecs.getincrementaldecoder("utf-8")(errors="replace")


class AnsiParser:
    """Byte-at-a-time ANSI parser emitting ``TermCmd`` values."""

    def __init__(self, diagnostics: Optional[DiagnosticSink] = None) -> None:
        """
        Initialize the parser.

        Args:
            diagnostics: Receives a ``Diagnostic`` for every sequence that is
                consumed without effect. Defaults to a sink that logs through
                the categorized logger.
        """
        self.status: ParserStatus = ParserStatus.INIT
        self.param_bytes: bytearray = bytearray()
        self._decoder = _new_decoder()
        # An empty CollectingDiagnosticSink is falsy, so test against None
        self._diagnostics: DiagnosticSink = (
            diagnostics if diagnostics is not None else LoggingDiagnosticSink(logger)
        )

    @property
    def diagnostics(self) -> DiagnosticSink:
        return self._diagnostics

    def reset(self) -> None:
        """Return to the initial state, dropping partial sequences and characters."""
        self.status = ParserStatus.INIT
        self.param_bytes.clear()
        self._decoder = _new_decoder()

    def advance(self, data: ByteInput, emit: Emit) -> None:
        """
        Parse ``data`` to completion, calling ``emit`` for each command in order.

        State carries over to the next call, so a sequence or a UTF-8
        character split across chunks is handled as if fed in one piece.
        Malformed input never raises.

        Args:
            data: Raw terminal output. ``str`` input is encoded as UTF-8.
            emit: Callback receiving each command synchronously.
        """
        if isinstance(data, str):
            data = data.encode("utf-8")

        for byte in bytes(data):
            if self.status is ParserStatus.INIT:
                self._advance_text(byte, emit)
            elif self.status is ParserStatus.ESCAPE_SEEN:
                self._advance_escape(byte)
            else:
                self._advance_control_sequence(byte, emit)

    def iter_commands(self, data: ByteInput) -> Iterator[TermCmd]:
        """Return an iterator over the commands produced by ``data``."""
        commands: List[TermCmd] = []
        self.advance(data, commands.append)
        return iter(commands)

    # Internal helpers -------------------------------------------------
    def _report(
        self, category: WarningCategory, level: int, message: str, **context: object
    ) -> None:
        self._diagnostics(Diagnostic(category, level, message, dict(context)))

    def _advance_text(self, byte: int, emit: Emit) -> None:
        # ESC can never be part of a multi-byte character, so when it arrives
        # the decoder flushes any pending bytes as U+FFFD ahead of it.
        for char in self._decoder.decode(bytes((byte,))):
            if char == "\x1b":
                self.status = ParserStatus.ESCAPE_SEEN
            elif char == "\r":
                emit(CarriageReturn())
            elif char == "\n":
                emit(LineFeed())
            else:
                emit(PutChar(char))

    def _advance_escape(self, byte: int) -> None:
        if byte == CSI_INTRODUCER:
            self.status = ParserStatus.CONTROL_SEQUENCE_STARTED
            return

        if byte == KEYPAD_APPLICATION_MODE:
            self._report(
                WarningCategory.UNKNOWN_DATA,
                logging.DEBUG,
                "Ignored private mode ESC =",
            )
        else:
            self._report(
                WarningCategory.PARSING,
                logging.ERROR,
                f"Unexpected byte {describe_byte(byte)} after ESC",
                byte=byte,
            )
        self.status = ParserStatus.INIT

    def _advance_control_sequence(self, byte: int, emit: Emit) -> None:
        if is_param_byte(byte):
            self.param_bytes.append(byte)
        elif is_final_byte(byte):
            try:
                self._dispatch(chr(byte), self.param_bytes.decode("ascii"), emit)
            finally:
                self.param_bytes.clear()
                self.status = ParserStatus.INIT
        elif byte == ESC:
            # Abandon the open sequence instead of logging ESC and staying in
            # it; the ESC then starts the next escape sequence.
            self._report(
                WarningCategory.STATE_MANAGEMENT,
                logging.WARNING,
                "Control sequence abandoned by ESC",
                params=self.param_bytes.decode("ascii"),
            )
            self.param_bytes.clear()
            self.status = ParserStatus.ESCAPE_SEEN
        else:
            self._report(
                WarningCategory.PARSING,
                logging.ERROR,
                f"Unexpected byte {describe_byte(byte)} in control sequence",
                byte=byte,
                params=self.param_bytes.decode("ascii"),
            )

    def _dispatch(self, final: str, params: str, emit: Emit) -> None:
        """Emit the command selected by the final byte of a control sequence."""
        if final == "m":
            # Colors and attributes are not modelled
            return
        elif final == "K":
            emit(EraseToEndOfLine())
        elif final in _MOVEMENT_COMMANDS:
            emit(_MOVEMENT_COMMANDS[final](parse_param(params, 0, 1)))
        elif final == "H":
            # CUP is "row;col", both 1-based
            row = parse_param(params, 0, 1)
            col = parse_param(params, 1, 1)
            emit(CursorSet(x=max(col - 1, 0), y=max(row - 1, 0)))
        elif final == "J":
            emit(ClearScreen(parse_param(params, 0, 2)))
        elif final in ("h", "l"):
            if params == SYNC_UPDATE_MODE:
                emit(BeginSyncUpdate() if final == "h" else EndSyncUpdate())
            else:
                self._report(
                    WarningCategory.UNKNOWN_DATA,
                    logging.DEBUG,
                    f"Ignored mode change CSI {params}{final}",
                    final=final,
                    params=params,
                )
        else:
            self._report(
                WarningCategory.UNKNOWN_DATA,
                logging.WARNING,
                f"Ignored control sequence CSI {params}{final} "
                f"(final {describe_byte(ord(final))})",
                final=final,
                params=params,
            )
