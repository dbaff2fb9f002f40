"""
Warning categories for pureansi.

Categories let callers tell apart the different kinds of diagnostics the
parser and grid report, so that noisy ones (unrecognised sequences in real
CLI output, for example) can be silenced without losing the important ones.
"""

import logging
from enum import Enum
from typing import Dict, Set


class WarningCategory(Enum):
    """Enumeration of warning categories."""

    # Input stream issues
    PARSING = "parsing"  # Unexpected bytes inside an escape sequence
    UNKNOWN_DATA = "unknown_data"  # Recognised but unsupported sequences

    # Behaviour gaps
    UNIMPLEMENTED = "unimplemented"  # Supported command, unsupported mode

    # Framework-related warnings
    STATE_MANAGEMENT = "state_management"  # Resets and abandoned sequences
    CONFIGURATION = "configuration"  # Invalid configuration values
    SNAPSHOT = "snapshot"  # Snapshot persistence and comparison


class WarningFilters:
    """Manages warning category filters."""

    def __init__(self) -> None:
        self._enabled_categories: Set[WarningCategory] = set(WarningCategory)
        self._disabled_categories: Set[WarningCategory] = set()
        self._custom_levels: Dict[WarningCategory, int] = {}

    def enable_category(self, category: WarningCategory) -> None:
        """Enable a warning category."""
        self._disabled_categories.discard(category)
        self._enabled_categories.add(category)

    def disable_category(self, category: WarningCategory) -> None:
        """Disable a warning category."""
        self._enabled_categories.discard(category)
        self._disabled_categories.add(category)

    def set_category_level(self, category: WarningCategory, level: int) -> None:
        """Set the minimum logging level for a specific category."""
        self._custom_levels[category] = level

    def is_category_enabled(self, category: WarningCategory) -> bool:
        return (
            category in self._enabled_categories
            and category not in self._disabled_categories
        )

    def should_log(self, category: WarningCategory, level: int) -> bool:
        """Determine if a message of ``level`` in ``category`` should be logged."""
        if not self.is_category_enabled(category):
            return False

        custom_level = self._custom_levels.get(category)
        if custom_level is not None:
            return level >= custom_level

        return True

    def get_enabled_categories(self) -> Set[WarningCategory]:
        return self._enabled_categories - self._disabled_categories

    def get_disabled_categories(self) -> Set[WarningCategory]:
        return self._disabled_categories.copy()

    def get_custom_levels(self) -> Dict[WarningCategory, int]:
        return dict(self._custom_levels)

    def reset(self) -> None:
        """Reset all filters to default (all enabled)."""
        self._enabled_categories = set(WarningCategory)
        self._disabled_categories = set()
        self._custom_levels.clear()


# Global warning filters instance
_global_warning_filters = WarningFilters()


def get_warning_filters() -> WarningFilters:
    """Get the global warning filters instance."""
    return _global_warning_filters


def configure_default_filters() -> None:
    """Configure the global filters for everyday use: everything enabled."""
    filters = get_warning_filters()
    filters.reset()


def create_parser_debug_filter() -> WarningFilters:
    """Create filters for debugging escape-sequence handling."""
    filters: WarningFilters = WarningFilters()

    filters.enable_category(WarningCategory.PARSING)
    filters.enable_category(WarningCategory.UNKNOWN_DATA)
    filters.enable_category(WarningCategory.UNIMPLEMENTED)
    filters.enable_category(WarningCategory.STATE_MANAGEMENT)

    filters.disable_category(WarningCategory.CONFIGURATION)
    filters.disable_category(WarningCategory.SNAPSHOT)

    return filters


def create_production_filter() -> WarningFilters:
    """Create filters for capturing real program output.

    Real CLI output is full of sequences this emulator does not model, so
    unknown data is silenced and only actual parse problems are kept.
    """
    filters: WarningFilters = WarningFilters()

    filters.enable_category(WarningCategory.PARSING)
    filters.enable_category(WarningCategory.CONFIGURATION)
    filters.enable_category(WarningCategory.SNAPSHOT)

    filters.set_category_level(WarningCategory.PARSING, logging.ERROR)

    filters.disable_category(WarningCategory.UNKNOWN_DATA)
    filters.disable_category(WarningCategory.UNIMPLEMENTED)
    filters.disable_category(WarningCategory.STATE_MANAGEMENT)

    return filters

