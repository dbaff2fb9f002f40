"""
Categorized warning infrastructure for pureansi.

This module provides the filtering logger, the diagnostic records emitted by
the parser and grid, and the sinks that receive them.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from .categories import (
    WarningCategory,
    WarningFilters,
    configure_default_filters,
    create_parser_debug_filter,
    create_production_filter,
    get_warning_filters,
)

logger = logging.getLogger(__name__)


class CategorizedLogger:
    """A logger that supports categorized warnings with filtering."""

    def __init__(
        self, logger: logging.Logger, filters: Optional[WarningFilters] = None
    ) -> None:
        """Initialize categorized logger.

        Args:
            logger: The underlying logger instance
            filters: Warning filters to use (uses global filters if None)
        """
        self._logger = logger
        self._filters = filters

    @property
    def logger(self) -> logging.Logger:
        """Get the underlying logger instance."""
        return self._logger

    @property
    def filters(self) -> WarningFilters:
        # Resolved lazily so that a later preset switch applies to existing loggers
        return self._filters if self._filters is not None else get_warning_filters()

    def log(
        self, category: WarningCategory, level: int, message: str, **kwargs: Any
    ) -> None:
        """Log ``message`` at ``level`` if ``category`` passes the filters."""
        if self.filters.should_log(category, level):
            formatted_message = f"[{category.value.upper()}] {message}"
            self._logger.log(level, formatted_message, **kwargs)

    def debug(self, category: WarningCategory, message: str, **kwargs: Any) -> None:
        self.log(category, logging.DEBUG, message, **kwargs)

    def info(self, category: WarningCategory, message: str, **kwargs: Any) -> None:
        self.log(category, logging.INFO, message, **kwargs)

    def warning(self, category: WarningCategory, message: str, **kwargs: Any) -> None:
        self.log(category, logging.WARNING, message, **kwargs)

    def error(self, category: WarningCategory, message: str, **kwargs: Any) -> None:
        self.log(category, logging.ERROR, message, **kwargs)

    def log_configuration_warning(self, message: str, **kwargs: Any) -> None:
        """Convenience method for configuration warnings."""
        self.warning(WarningCategory.CONFIGURATION, message, **kwargs)


def get_categorized_logger(
    name: str, filters: Optional[WarningFilters] = None
) -> CategorizedLogger:
    """Get a categorized logger by name."""
    return CategorizedLogger(logging.getLogger(name), filters)


@dataclass(frozen=True)
class Diagnostic:
    """A single human-readable notice about input the emulator did not model."""

    category: WarningCategory
    level: int
    message: str
    context: Dict[str, Any] = field(default_factory=dict)

    @property
    def level_name(self) -> str:
        return logging.getLevelName(self.level)


DiagnosticSink = Callable[[Diagnostic], None]


class LoggingDiagnosticSink:
    """Default sink: forwards diagnostics to ``logging`` through the filters."""

    def __init__(
        self,
        logger: Optional[logging.Logger] = None,
        filters: Optional[WarningFilters] = None,
    ) -> None:
        self._categorized = CategorizedLogger(
            logger or logging.getLogger("pureansi.diagnostics"), filters
        )

    def __call__(self, diagnostic: Diagnostic) -> None:
        self._categorized.log(
            diagnostic.category,
            diagnostic.level,
            diagnostic.message,
            extra={"pureansi_extra": dict(diagnostic.context)},
        )


class CollectingDiagnosticSink:
    """Sink that keeps every diagnostic in memory, mostly for tests."""

    def __init__(self) -> None:
        self.records: List[Diagnostic] = []

    def __call__(self, diagnostic: Diagnostic) -> None:
        self.records.append(diagnostic)

    def __len__(self) -> int:
        return len(self.records)

    def messages(self) -> List[str]:
        return [record.message for record in self.records]

    def by_category(self, category: WarningCategory) -> List[Diagnostic]:
        return [record for record in self.records if record.category is category]

    def clear(self) -> None:
        self.records.clear()


class NullDiagnosticSink:
    """Sink that discards everything."""

    def __call__(self, diagnostic: Diagnostic) -> None:
        return None


def setup_default_warning_filters(environment: str = "development") -> WarningFilters:
    """Setup default warning filters based on environment.

    Args:
        environment: Environment type ('development', 'production', 'parser_debug')

    Returns:
        Configured warning filters
    """
    if environment == "parser_debug":
        return create_parser_debug_filter()
    elif environment == "production":
        return create_production_filter()
    else:
        configure_default_filters()
        return get_warning_filters()


def add_warning_arguments(parser: Any) -> None:
    """Add command-line arguments for warning configuration.

    Args:
        parser: ArgumentParser instance
    """
    parser.add_argument(
        "--warning-filters",
        choices=["development", "production", "parser_debug"],
        default="development",
        help="Warning filter preset to use",
    )

    parser.add_argument(
        "--disable-warning-categories",
        nargs="*",
        default=[],
        help="Warning categories to disable (e.g., unknown_data unimplemented)",
    )

    parser.add_argument(
        "--enable-warning-categories",
        nargs="*",
        default=[],
        help="Warning categories to enable (overrides presets)",
    )


def configure_warnings_from_args(args: Any) -> WarningFilters:
    """Configure warning filters from parsed command-line arguments."""
    filters = setup_default_warning_filters(
        getattr(args, "warning_filters", "development")
    )

    disable_categories = getattr(args, "disable_warning_categories", [])
    for category_name in disable_categories:
        try:
            category = WarningCategory(category_name.lower())
            filters.disable_category(category)
        except ValueError:
            logger.warning(f"Unknown warning category: {category_name}")

    enable_categories = getattr(args, "enable_warning_categories", [])
    for category_name in enable_categories:
        try:
            category = WarningCategory(category_name.lower())
            filters.enable_category(category)
        except ValueError:
            logger.warning(f"Unknown warning category: {category_name}")

    return filters

