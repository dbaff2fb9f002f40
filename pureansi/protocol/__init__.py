"""Escape-sequence parsing for pureansi."""

from .ansi_parser import AnsiParser, ParserStatus
from .commands import TermCmd

__all__ = ["AnsiParser", "ParserStatus", "TermCmd"]
