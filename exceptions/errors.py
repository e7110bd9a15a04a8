"""
Custom exception classes for the application.

Every error carries a machine-readable code and an HTTP status so routes
can turn it into the standard error body with AppError.to_dict().
"""

from typing import Optional, Any
from datetime import datetime, timezone


class AppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions inherit from this.

    Attributes:
        code: Error code (e.g., "PRODUCT_NOT_FOUND")
        message: Human-readable message
        status_code: HTTP status code
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class NotFoundError(AppError):
    """Resource not found (404)."""

    def __init__(
        self,
        resource: str,
        identifier: str,
        code: Optional[str] = None
    ):
        super().__init__(
            code=code or f"{resource.upper()}_NOT_FOUND",
            message=f"{resource} not found",
            status_code=404,
            details={"id": identifier}
        )


class ValidationError(AppError):
    """Validation failed (422)."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=422,
            details=details
        )


class ConflictError(AppError):
    """Conflict with the current state of a resource (409)."""

    def __init__(
        self,
        message: str,
        code: str = "CONFLICT",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=409,
            details=details
        )


class ExternalServiceError(AppError):
    """External service failure (503)."""

    def __init__(
        self,
        service: str,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code=f"{service.upper()}_ERROR",
            message=message,
            status_code=503,
            details={"service": service, **(details or {})}
        )


class DatabaseError(AppError):
    """Database operation failed (500)."""

    def __init__(
        self,
        operation: str,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code="DATABASE_ERROR",
            message=f"Database {operation} failed: {message}",
            status_code=500,
            details={"operation": operation, **(details or {})}
        )


# ===================
# CATALOG ERRORS
# ===================

class ProductNotFoundError(NotFoundError):
    """Product not found."""

    def __init__(self, product_id: str):
        super().__init__(
            resource="Product",
            identifier=product_id,
            code="PRODUCT_NOT_FOUND"
        )


class ListNotFoundError(NotFoundError):
    """Saved list not found."""

    def __init__(self, list_id: str):
        super().__init__(
            resource="List",
            identifier=list_id,
            code="LIST_NOT_FOUND"
        )


class EmptyListError(ValidationError):
    """Saving a list that has no named rows."""

    def __init__(self):
        super().__init__(
            code="LIST_EMPTY",
            message="List has no valid rows to save"
        )


# ===================
# IMPORT SOURCE ERRORS
# ===================

class ExcelParseError(ValidationError):
    """Excel file parsing failed."""

    def __init__(
        self,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code="EXCEL_PARSE_ERROR",
            message=message,
            details=details
        )


class EmptySourceError(ValidationError):
    """Import source produced zero records."""

    def __init__(self, source: str):
        super().__init__(
            code="IMPORT_SOURCE_EMPTY",
            message="The file is empty or contains no readable rows",
            details={"source": source}
        )


class UnsupportedFileTypeError(ValidationError):
    """AI extraction only reads images and PDFs."""

    def __init__(self, content_type: Optional[str]):
        super().__init__(
            code="UNSUPPORTED_FILE_TYPE",
            message="Only image or PDF files can be scanned",
            details={"content_type": content_type}
        )


class ExtractionParseError(ValidationError):
    """AI extraction response was not valid structured data."""

    def __init__(self, response_preview: str):
        super().__init__(
            code="EXTRACTION_PARSE_ERROR",
            message="Could not read structured data from the extraction response",
            details={"response_preview": response_preview[:500]}
        )


class ExtractionUnavailableError(ExternalServiceError):
    """AI extraction service missing or failing."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(
            service="extraction",
            message=message,
            details=details
        )


# ===================
# RECONCILIATION ERRORS
# ===================

class ImportSessionNotFoundError(NotFoundError):
    """Pending import session not found (already confirmed, discarded or expired)."""

    def __init__(self, session_id: str):
        super().__init__(
            resource="Import session",
            identifier=session_id,
            code="IMPORT_SESSION_NOT_FOUND"
        )


class InvalidImportStateError(ConflictError):
    """Import session is not in a state that allows the requested step."""

    def __init__(self, current: str, expected: str):
        super().__init__(
            code="INVALID_IMPORT_STATE",
            message=f"Cannot proceed from '{current}', expected '{expected}'",
            details={"current_state": current, "expected_state": expected}
        )


class CandidatePersistError(DatabaseError):
    """Saving confirmed candidates to the catalog failed; nothing was merged."""

    def __init__(self, candidate_ids: list[str], message: str):
        super().__init__(
            operation="upsert",
            message=message,
            details={"candidate_ids": candidate_ids}
        )
        self.code = "CANDIDATE_PERSIST_FAILED"
