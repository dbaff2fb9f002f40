"""
Terminal commands produced by the ANSI parser.

The set is closed: every command the parser can emit is listed in ``TermCmd``
and the grid buffer handles each of them. Adding a sequence means adding a
class here and a branch in ``GridBuffer.apply`` together.
"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class PutChar:
    """Write one character at the cursor and advance."""

    char: str


@dataclass(frozen=True)
class CarriageReturn:
    pass


@dataclass(frozen=True)
class LineFeed:
    pass


@dataclass(frozen=True)
class CursorUp:
    count: int = 1


@dataclass(frozen=True)
class CursorDown:
    count: int = 1


@dataclass(frozen=True)
class CursorLeft:
    count: int = 1


@dataclass(frozen=True)
class CursorRight:
    count: int = 1


@dataclass(frozen=True)
class CursorNextLine:
    """Move to the start of the line ``count`` rows down (CSI E)."""

    count: int = 1


@dataclass(frozen=True)
class CursorPreviousLine:
    """Move to the start of the line ``count`` rows up (CSI F)."""

    count: int = 1


@dataclass(frozen=True)
class CursorSet:
    """Absolute, zero-based cursor position."""

    x: int = 0
    y: int = 0


@dataclass(frozen=True)
class EraseToEndOfLine:
    pass


@dataclass(frozen=True)
class ClearScreen:
    """Erase in display. Mode 2 (entire screen) is the documented one."""

    mode: int = 2


@dataclass(frozen=True)
class BeginSyncUpdate:
    pass


@dataclass(frozen=True)
class EndSyncUpdate:
    pass


TermCmd = Union[
    PutChar,
    CarriageReturn,
    LineFeed,
    CursorUp,
    CursorDown,
    CursorLeft,
    CursorRight,
    CursorNextLine,
    CursorPreviousLine,
    CursorSet,
    EraseToEndOfLine,
    ClearScreen,
    BeginSyncUpdate,
    EndSyncUpdate,
]

__all__ = [
    "PutChar",
    "CarriageReturn",
    "LineFeed",
    "CursorUp",
    "CursorDown",
    "CursorLeft",
    "CursorRight",
    "CursorNextLine",
    "CursorPreviousLine",
    "CursorSet",
    "EraseToEndOfLine",
    "ClearScreen",
    "BeginSyncUpdate",
    "EndSyncUpdate",
    "TermCmd",
]
