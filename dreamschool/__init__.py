"""
Dream School: assessment grading and academic calendar core.

Aggregation engines behind the Dream School mobile front-end: marks entries
are turned into per-student grades, averages and report documents, and
calendar event streams are merged into a date-keyed marker index.
"""

from .main import LoadResult, QueryResult, ReportResult, SchoolSession, SubmissionResult

__version__ = "1.0.0"
__author__ = "Dream School Development Team"
__description__ = "Assessment grading and academic calendar core for Dream School"

__all__ = [
    "SchoolSession",
    "SubmissionResult",
    "ReportResult",
    "LoadResult",
    "QueryResult",
]
