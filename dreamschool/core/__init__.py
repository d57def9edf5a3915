"""
Core module containing the domain object model, enumerations and grading scale.
"""

from .entities import *
from .interfaces import *
from .exceptions import *
from .enums import *
from .grading import GRADE_BANDS, GradeBand, grade, grade_for_marks, percentage
from .identifiers import IdGenerator, generate_id

__all__ = [
    # Entities
    "AbstractEntity",
    "Student",
    "Assessment",
    "CalendarEvent",
    "as_date",
    "validate_marks",

    # Interfaces
    "StudentDirectory",
    "RecordSink",

    # Enums
    "ClassLevel",
    "Subject",
    "AssessmentType",
    "EventKind",
    "MarkerColor",
    "SUBJECT_LABELS",
    "ASSESSMENT_TYPE_LABELS",
    "EVENT_KIND_COLORS",
    "color_for_kind",
    "subject_label",
    "assessment_type_label",

    # Grading
    "GRADE_BANDS",
    "GradeBand",
    "grade",
    "grade_for_marks",
    "percentage",

    # Identifiers
    "IdGenerator",
    "generate_id",

    # Exceptions
    "SchoolCoreError",
    "ValidationError",
    "InvalidMarksError",
    "InvalidPercentageError",
    "ResourceNotFoundError",
    "UnknownStudentError",
    "UnknownCodeError",
    "DivisionByZeroError",
    "NoAssessmentsError",
    "DuplicateEntityError",
    "ConfigurationError",
    "PersistenceError",
    "ReadOnlyRosterError",
]
