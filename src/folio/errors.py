"""Error hierarchy for folio failure modes.

Every error carries a code, a category, a severity, and the HTTP status
the web layer should answer with.  ``to_response()`` builds the JSON
envelope; messages never include internal details.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class ErrorSeverity(StrEnum):
    """Severity for observability and client handling."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(StrEnum):
    """High-level error categories."""

    SOURCE = "source"
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    INTERNAL = "internal"


class FolioError(Exception):
    """Base exception for all folio errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        http_status: int = 500,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.http_status = http_status

    def to_response(self) -> dict[str, Any]:
        """REST error envelope."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
            },
        }


class SourceError(FolioError):
    """The content source could not be read."""

    def __init__(self, message: str, *, source: str = "") -> None:
        super().__init__(
            message,
            code="SOURCE_UNAVAILABLE",
            category=ErrorCategory.SOURCE,
            severity=ErrorSeverity.CRITICAL,
            http_status=502,
        )
        self.source = source


class FrontmatterError(FolioError):
    """A content record's frontmatter could not be parsed or validated."""

    def __init__(self, message: str, *, record: str = "") -> None:
        super().__init__(
            message,
            code="INVALID_FRONTMATTER",
            category=ErrorCategory.VALIDATION,
            severity=ErrorSeverity.ERROR,
            http_status=500,
        )
        self.record = record


class NotFoundError(FolioError):
    """Requested page or record does not exist."""

    def __init__(self, message: str = "That page can't be found") -> None:
        super().__init__(
            message,
            code="NOT_FOUND",
            category=ErrorCategory.RESOURCE_NOT_FOUND,
            severity=ErrorSeverity.INFO,
            http_status=404,
        )

    def to_response(self) -> dict[str, Any]:
        response = super().to_response()
        response["error"]["home"] = "/"
        return response
