"""
Exception hierarchy for jot.

All jot exceptions inherit from JotError, allowing callers to catch
all jot-specific exceptions with a single except clause.

Exception Categories:
    - ConfigError: Invalid or unreadable configuration file
    - InvalidAppNameError: App name cannot locate a data directory
    - StorageError: Data directory or database operation failed

Design Principles:
    - All errors have error codes for programmatic handling
    - All errors include context (path, operation) where applicable
    - All errors provide actionable suggestions where possible
    - "Not found" on soft delete is a return value, not an error
"""

from dataclasses import dataclass, field
from typing import Any


# =============================================================================
# Error Codes
# =============================================================================

# Configuration errors: 1xxx
ERROR_CONFIG_INVALID = 1001
ERROR_CONFIG_APP_NAME = 1002

# Storage errors: 5xxx
ERROR_STORAGE_CONNECTION = 5001
ERROR_STORAGE_WRITE = 5002
ERROR_STORAGE_READ = 5003
ERROR_STORAGE_DATA_DIR = 5005
ERROR_STORAGE_CLOSED = 5006
ERROR_STORAGE_CONSTRAINT = 5007


# =============================================================================
# Base Exception
# =============================================================================


@dataclass
class JotError(Exception):
    """
    Base exception for all jot errors.

    Attributes:
        message: Human-readable error description
        code: Numeric error code for programmatic handling
        suggestion: Optional hint for how to resolve the error
        context: Optional dict with additional debugging info
    """

    message: str = ""
    code: int = 0
    suggestion: str | None = None
    context: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        """Format error for display."""
        parts = [f"[E{self.code}] {self.message}"]
        if self.suggestion:
            parts.append(f"\nSuggestion: {self.suggestion}")
        return "".join(parts)

    def __repr__(self) -> str:
        """Format error for debugging."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code}, "
            f"context={self.context!r})"
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "code": self.code,
            "suggestion": self.suggestion,
            "context": self.context,
        }


# =============================================================================
# Configuration Errors
# =============================================================================


@dataclass
class ConfigError(JotError):
    """Raised when a config file cannot be read or fails validation."""

    path: str = ""
    reason: str = ""

    def __post_init__(self) -> None:
        """Set defaults after dataclass init."""
        if not self.message:
            self.message = f"Invalid config {self.path}: {self.reason}"
        if self.code == 0:
            self.code = ERROR_CONFIG_INVALID
        self.context.update({
            "path": self.path,
            "reason": self.reason,
        })


@dataclass
class InvalidAppNameError(JotError):
    """Raised when the app name is empty."""

    app_name: str = ""

    def __post_init__(self) -> None:
        """Set defaults after dataclass init."""
        if not self.message:
            self.message = f"Invalid app name: {self.app_name!r}"
        if self.code == 0:
            self.code = ERROR_CONFIG_APP_NAME
        if not self.suggestion:
            self.suggestion = "Use a non-empty identifier such as 'jot'"
        self.context["app_name"] = self.app_name


# =============================================================================
# Storage Errors
# =============================================================================


@dataclass
class StorageError(JotError):
    """
    Base class for storage/database errors.

    These are the I/O failures of the store: they are surfaced to the
    caller unchanged and never retried.

    Attributes:
        operation: The operation that failed (e.g., "add_thought")
    """

    operation: str = ""

    def __post_init__(self) -> None:
        """Set defaults after dataclass init."""
        self.context["operation"] = self.operation


@dataclass
class DataDirectoryError(StorageError):
    """Raised when the data directory cannot be created."""

    path: str = ""
    underlying_error: str = ""

    def __post_init__(self) -> None:
        """Set defaults after dataclass init."""
        if not self.message:
            self.message = f"Cannot create data directory {self.path}: {self.underlying_error}"
        if self.code == 0:
            self.code = ERROR_STORAGE_DATA_DIR
        if not self.suggestion:
            self.suggestion = "Check permissions, or point --data-dir somewhere writable"
        if not self.operation:
            self.operation = "resolve_data_dir"
        super().__post_init__()
        self.context.update({
            "path": self.path,
            "underlying_error": self.underlying_error,
        })


@dataclass
class StorageConnectionError(StorageError):
    """Raised when database connection fails."""

    db_path: str = ""

    def __post_init__(self) -> None:
        """Set defaults after dataclass init."""
        if not self.message:
            self.message = f"Failed to connect to database: {self.db_path}"
        if self.code == 0:
            self.code = ERROR_STORAGE_CONNECTION
        if not self.suggestion:
            self.suggestion = "Check that the database path is valid and writable"
        super().__post_init__()
        self.context["db_path"] = self.db_path


@dataclass
class StoreClosedError(StorageError):
    """Raised when an operation is issued against a closed store."""

    def __post_init__(self) -> None:
        """Set defaults after dataclass init."""
        if not self.message:
            self.message = f"Store is closed; cannot {self.operation}"
        if self.code == 0:
            self.code = ERROR_STORAGE_CLOSED
        super().__post_init__()


@dataclass
class StorageWriteError(StorageError):
    """Raised when a write operation fails."""

    underlying_error: str = ""

    def __post_init__(self) -> None:
        """Set defaults after dataclass init."""
        if not self.message:
            self.message = f"Database write failed: {self.underlying_error}"
        if self.code == 0:
            self.code = ERROR_STORAGE_WRITE
        super().__post_init__()
        self.context["underlying_error"] = self.underlying_error


@dataclass
class StorageReadError(StorageError):
    """Raised when a read operation fails."""

    underlying_error: str = ""

    def __post_init__(self) -> None:
        """Set defaults after dataclass init."""
        if not self.message:
            self.message = f"Database read failed: {self.underlying_error}"
        if self.code == 0:
            self.code = ERROR_STORAGE_READ
        super().__post_init__()
        self.context["underlying_error"] = self.underlying_error


@dataclass
class ThoughtConstraintError(StorageWriteError):
    """Raised when an insert violates a column constraint (e.g. NULL text)."""

    def __post_init__(self) -> None:
        """Set defaults after dataclass init."""
        if not self.message:
            self.message = f"Thought rejected by schema: {self.underlying_error}"
        if self.code == 0:
            self.code = ERROR_STORAGE_CONSTRAINT
        if not self.suggestion:
            self.suggestion = "Thought text is required"
        super().__post_init__()
