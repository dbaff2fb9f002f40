"""
pureansi warning categorization system.

Provides categorized warnings and the injectable diagnostic sinks used by the
parser and grid to report input they do not model.
"""

from .categories import (
    WarningCategory,
    WarningFilters,
    configure_default_filters,
    create_parser_debug_filter,
    create_production_filter,
    get_warning_filters,
)
from .infrastructure import (
    CategorizedLogger,
    CollectingDiagnosticSink,
    Diagnostic,
    DiagnosticSink,
    LoggingDiagnosticSink,
    NullDiagnosticSink,
    add_warning_arguments,
    configure_warnings_from_args,
    get_categorized_logger,
    setup_default_warning_filters,
)

__all__ = [
    # Categories
    "WarningCategory",
    "WarningFilters",
    "get_warning_filters",
    "configure_default_filters",
    "create_parser_debug_filter",
    "create_production_filter",
    # Infrastructure
    "CategorizedLogger",
    "get_categorized_logger",
    "setup_default_warning_filters",
    "add_warning_arguments",
    "configure_warnings_from_args",
    # Diagnostics
    "Diagnostic",
    "DiagnosticSink",
    "LoggingDiagnosticSink",
    "CollectingDiagnosticSink",
    "NullDiagnosticSink",
]
