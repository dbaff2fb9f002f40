"""
Utilities package for pureansi.

Contains common utility functions used across the pureansi codebase.
"""

from .logging_utils import log_data_processing, log_debug_operation

__all__ = [
    "log_debug_operation",
    "log_data_processing",
]
