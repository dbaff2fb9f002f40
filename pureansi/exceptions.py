"""Exceptions for pureansi with contextual information."""

from typing import Any, Dict, Optional


class PureAnsiError(Exception):
    """Base error for pureansi with contextual information."""

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None,
    ):
        """
        Initialize a pureansi error.

        Args:
            message: Error message
            context: Optional context information (width, path, operation, etc.)
            original_exception: Original exception that caused this error
        """
        super().__init__(message)
        self.context = context or {}
        self.original_exception = original_exception

    def __str__(self) -> str:
        """Get string representation with context."""
        base_msg = super().__str__()
        if self.context:
            context_items = []
            for key, value in self.context.items():
                if isinstance(value, str) and len(value) > 50:
                    # Truncate long values
                    value = value[:47] + "..."
                context_items.append(f"{key}={value}")
            context_str = ", ".join(context_items)
            return f"{base_msg} (Context: {context_str})"
        return base_msg

    def __repr__(self) -> str:
        base_repr = super().__repr__()
        if self.context:
            return f"{base_repr} (context={self.context!r})"
        return base_repr

    def add_context(self, key: str, value: Any) -> None:
        """Add context information to the exception."""
        self.context[key] = value

    def get_context(self, key: str, default: Any = None) -> Any:
        """Get context information from the exception, or ``default``."""
        return self.context.get(key, default)


class InvalidWidthError(PureAnsiError, ValueError):
    """Raised when a grid is constructed with a width that is not a positive int."""

    pass


class SnapshotError(PureAnsiError):
    """Snapshot data could not be read or does not describe a valid grid."""

    pass
