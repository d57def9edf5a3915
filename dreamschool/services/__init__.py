"""
Services module containing the grading, calendar and report engines.
"""

from .aggregation import AssessmentAggregator, BreakdownRow, RankingEntry, StudentSummary
from .calendar_index import CalendarEventIndex, DateMarker, birthday_events
from .report_assembler import ReportDataAssembler, round_one_decimal

__all__ = [
    "AssessmentAggregator",
    "BreakdownRow",
    "RankingEntry",
    "StudentSummary",
    "CalendarEventIndex",
    "DateMarker",
    "birthday_events",
    "ReportDataAssembler",
    "round_one_decimal",
]
