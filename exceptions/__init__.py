"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    NotFoundError,
    ValidationError,
    ConflictError,
    ExternalServiceError,
    DatabaseError,

    # Catalog and lists
    ProductNotFoundError,
    ListNotFoundError,
    EmptyListError,

    # Import sources
    ExcelParseError,
    EmptySourceError,
    UnsupportedFileTypeError,
    ExtractionParseError,
    ExtractionUnavailableError,

    # Reconciliation
    ImportSessionNotFoundError,
    InvalidImportStateError,
    CandidatePersistError,
)

__all__ = [
    # Base
    "AppError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
    "ExternalServiceError",
    "DatabaseError",

    # Catalog and lists
    "ProductNotFoundError",
    "ListNotFoundError",
    "EmptyListError",

    # Import sources
    "ExcelParseError",
    "EmptySourceError",
    "UnsupportedFileTypeError",
    "ExtractionParseError",
    "ExtractionUnavailableError",

    # Reconciliation
    "ImportSessionNotFoundError",
    "InvalidImportStateError",
    "CandidatePersistError",
]
