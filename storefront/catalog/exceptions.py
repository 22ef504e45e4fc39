"""Catalog exceptions.

Errors raised by the catalog import and read paths. Recoverable row-level
problems (missing identifiers, unparseable prices) are handled inside the
importer and never surface as exceptions.
"""

from typing import Any


class CatalogError(Exception):
    """Base class for all catalog exceptions."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize catalog error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class CatalogSourceNotFoundError(CatalogError):
    """Raised when an import source cannot be opened."""

    def __init__(self, path: str) -> None:
        """Initialize source not found error.

        Args:
            path: Path of the missing source.
        """
        super().__init__(
            f"Catalog source not found: {path}",
            details={"path": path},
        )


class CatalogStructureError(CatalogError):
    """Raised when an import feed is structurally invalid.

    Batches committed before the error stay committed.
    """

    def __init__(self, reason: str, line_number: int | None = None) -> None:
        """Initialize structure error.

        Args:
            reason: What is wrong with the feed.
            line_number: Feed line where the problem was detected.
        """
        super().__init__(
            reason,
            details={"line_number": line_number},
        )
        self.line_number = line_number
