"""Byte constants and parameter helpers for ANSI control sequences."""

from typing import List

# C0 control introducing every escape sequence
ESC = 0x1B

# Bytes following ESC
CSI_INTRODUCER = 0x5B  # '['
KEYPAD_APPLICATION_MODE = 0x3D  # '='

# Control sequence byte ranges (ECMA-48)
PARAM_BYTE_MIN = 0x30  # '0'
PARAM_BYTE_MAX = 0x3F  # '?'
FINAL_BYTE_MIN = 0x40  # '@'
FINAL_BYTE_MAX = 0x7E  # '~'

PARAM_SEPARATOR = ";"

# DEC private mode for synchronized output
SYNC_UPDATE_MODE = "?2026"

# Parameters are limited to what fits in one unsigned byte
MAX_PARAM_VALUE = 0xFF


def is_param_byte(byte: int) -> bool:
    return PARAM_BYTE_MIN <= byte <= PARAM_BYTE_MAX


def is_final_byte(byte: int) -> bool:
    return FINAL_BYTE_MIN <= byte <= FINAL_BYTE_MAX


def split_params(params: str) -> List[str]:
    """Split parameter text into its ``;``-separated fields."""
    return params.split(PARAM_SEPARATOR)


def parse_param(params: str, index: int, default: int) -> int:
    """
    Parse one numeric field of a control sequence's parameter text.

    Fields are decimal unsigned bytes. A missing, empty, non-numeric or
    out-of-range field yields ``default``; each field is judged on its own.

    Args:
        params: Accumulated parameter text, e.g. ``"12;40"``
        index: Zero-based field index
        default: Value used when the field is unusable

    Returns:
        The parsed value or ``default``
    """
    fields = split_params(params)
    if index >= len(fields):
        return default
    field = fields[index]
    if not field or not all("0" <= ch <= "9" for ch in field):
        return default
    value = int(field)
    if value > MAX_PARAM_VALUE:
        return default
    return value


def describe_byte(byte: int) -> str:
    """Render a byte for diagnostics as ``'c' (0xNN)``."""
    printable = chr(byte) if 0x20 <= byte < 0x7F else "?"
    return f"'{printable}' (0x{byte:02X})"
