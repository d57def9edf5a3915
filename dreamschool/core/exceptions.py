"""
Custom exceptions for the Dream School core.
"""

from typing import Optional, Any, Dict


class SchoolCoreError(Exception):
    """Base exception for all Dream School core errors."""

    default_code = "SCHOOL_CORE_ERROR"

    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.default_code
        self.details = details or {}


class ValidationError(SchoolCoreError):
    """Raised when data validation fails."""
    default_code = "VALIDATION_ERROR"


class InvalidMarksError(ValidationError):
    """Raised when marks obtained fall outside [0, marks total]."""
    default_code = "INVALID_MARKS"


class InvalidPercentageError(ValidationError):
    """Raised when a percentage is not a finite number in [0, 100]."""
    default_code = "INVALID_PERCENTAGE"


class ResourceNotFoundError(SchoolCoreError):
    """Raised when a requested resource is not found."""
    default_code = "NOT_FOUND"


class UnknownStudentError(ResourceNotFoundError):
    """Raised when a student id does not resolve through the roster."""
    default_code = "UNKNOWN_STUDENT"


class UnknownCodeError(ResourceNotFoundError):
    """Raised when a subject, assessment-type or class code is not recognized."""
    default_code = "UNKNOWN_CODE"


class DivisionByZeroError(SchoolCoreError):
    """Raised when a percentage is taken over a zero marks total."""
    default_code = "DIVISION_BY_ZERO"


class NoAssessmentsError(SchoolCoreError):
    """Raised when a report is requested strictly for a student with no marks."""
    default_code = "NO_ASSESSMENTS"


class DuplicateEntityError(SchoolCoreError):
    """Raised when attempting to create a duplicate entity."""
    default_code = "DUPLICATE_ENTITY"


class ConfigurationError(SchoolCoreError):
    """Raised when configuration is invalid."""
    default_code = "INVALID_CONFIG"


class PersistenceError(SchoolCoreError):
    """Raised when the persistence collaborator fails to store a record."""
    default_code = "PERSISTENCE_FAILED"


class ReadOnlyRosterError(SchoolCoreError):
    """Raised when records are loaded into a roster the session does not own."""
    default_code = "READ_ONLY_ROSTER"
