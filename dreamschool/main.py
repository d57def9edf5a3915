"""
Session facade for the Dream School core.

A SchoolSession owns one roster, one assessment repository and one calendar
index, and is the boundary the UI and sync collaborators call into. Domain
errors raised by the components are converted into result objects here and
never propagate past the session's boundary methods: writes and loads
report through SubmissionResult, ReportResult and LoadResult, and read
helpers that can fail return a QueryResult.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union

from pydantic import ValidationError as RecordValidationError

from .config import load_config
from .core.entities import Assessment, CalendarEvent, DateLike
from .core.enums import ClassLevel
from .core.exceptions import ReadOnlyRosterError, SchoolCoreError, UnknownStudentError
from .core.interfaces import RecordSink, StudentDirectory
from .persistence.repositories import AssessmentRepository, InMemoryRoster
from .schemas import AssessmentRecord, CalendarEventRecord, MarksEntry, ReportDocument, StudentRecord
from .services.aggregation import AssessmentAggregator, RankingEntry, StudentSummary
from .services.calendar_index import CalendarEventIndex, birthday_events
from .services.report_assembler import ReportDataAssembler

logger = logging.getLogger(__name__)

INVALID_RECORD = "INVALID_RECORD"


@dataclass
class SubmissionResult:
    """Result of a marks submission."""
    success: bool
    assessment_id: Optional[str] = None
    error_code: Optional[str] = None
    message: str = ""
    details: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ReportResult:
    """Result of a report build."""
    success: bool
    document: Optional[ReportDocument] = None
    error_code: Optional[str] = None
    message: str = ""
    details: Dict[str, Any] = field(default_factory=dict)


@dataclass
class QueryResult:
    """Result of a read helper; ``value`` holds the answer on success."""
    success: bool
    value: Any = None
    error_code: Optional[str] = None
    message: str = ""
    details: Dict[str, Any] = field(default_factory=dict)


@dataclass
class RejectedRecord:
    index: int
    error_code: str
    message: str


@dataclass
class LoadResult:
    """Outcome of loading a batch of raw records from the sync collaborator."""
    loaded: int = 0
    rejected: List[RejectedRecord] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.rejected


def _failure(exc: Union[SchoolCoreError, RecordValidationError]) -> Dict[str, Any]:
    """error_code, message and details for a caught exception."""
    if isinstance(exc, SchoolCoreError):
        return {'error_code': exc.error_code, 'message': exc.message, 'details': dict(exc.details)}
    return {
        'error_code': INVALID_RECORD,
        'message': str(exc),
        'details': {'errors': exc.errors(include_url=False)},
    }


class SchoolSession:
    """One logical session of the Dream School core."""

    def __init__(self, config: Optional[Mapping[str, Any]] = None,
                 roster: Optional[StudentDirectory] = None,
                 sink: Optional[RecordSink[Assessment]] = None,
                 today: Callable[[], date] = date.today):
        self._config = load_config(config)
        self._roster = roster if roster is not None else InMemoryRoster()
        self._repository = AssessmentRepository(self._roster, sink=sink, today=today)
        self._aggregator = AssessmentAggregator(self._repository)
        self._calendar = CalendarEventIndex(
            upcoming_days=self._config['upcoming_days'],
            today=today,
        )
        self._assembler = ReportDataAssembler(
            school_name=self._config['school_name'],
            today=today,
        )
        logger.debug("Session initialized for %s", self._config['school_name'])

    @property
    def config(self) -> Dict[str, Any]:
        return dict(self._config)

    @property
    def roster(self) -> StudentDirectory:
        return self._roster

    @property
    def repository(self) -> AssessmentRepository:
        return self._repository

    @property
    def aggregator(self) -> AssessmentAggregator:
        return self._aggregator

    @property
    def calendar(self) -> CalendarEventIndex:
        return self._calendar

    @property
    def assembler(self) -> ReportDataAssembler:
        return self._assembler

    # Sync collaborator

    def load_students(self, records: Iterable[Mapping[str, Any]]) -> LoadResult:
        """Validate raw student records and add them to the roster.

        A roster supplied by the caller is read-only; every record is then
        rejected with READ_ONLY_ROSTER.
        """
        return self._load(records, self._add_student)

    def load_assessments(self, records: Iterable[Mapping[str, Any]]) -> LoadResult:
        """Validate previously persisted assessments and append them."""
        return self._load(
            records,
            lambda raw: self._repository.load([AssessmentRecord.model_validate(raw).to_entity()]),
        )

    def load_events(self, records: Iterable[Mapping[str, Any]]) -> LoadResult:
        """Validate a batch of calendar events and ingest the valid ones in order."""
        events: List[CalendarEvent] = []
        result = self._load(records, lambda raw: events.append(CalendarEventRecord.model_validate(raw).to_entity()))
        self._calendar.ingest(events)
        return result

    def load_birthdays(self, year: int) -> QueryResult:
        """Ingest a birthday event per rostered student; ``value`` is the count."""
        def ingest() -> int:
            students = [s for level in ClassLevel for s in self._roster.list_by_class(level)]
            return self._calendar.ingest(birthday_events(students, year))
        return self._query("load_birthdays", ingest)

    def _add_student(self, raw: Mapping[str, Any]) -> None:
        if not isinstance(self._roster, InMemoryRoster):
            raise ReadOnlyRosterError(
                "Students can only be loaded into the session's own roster",
                details={"roster": type(self._roster).__name__},
            )
        self._roster.add(StudentRecord.model_validate(raw).to_entity())

    def _query(self, operation: str, fetch: Callable[[], Any]) -> QueryResult:
        try:
            value = fetch()
        except SchoolCoreError as exc:
            failure = _failure(exc)
            logger.warning("%s failed: %s", operation, failure['error_code'])
            return QueryResult(success=False, **failure)
        return QueryResult(success=True, value=value)

    def _load(self, records: Iterable[Mapping[str, Any]], apply: Callable[[Mapping[str, Any]], Any]) -> LoadResult:
        result = LoadResult()
        for index, raw in enumerate(records):
            try:
                apply(raw)
            except (SchoolCoreError, RecordValidationError) as exc:
                failure = _failure(exc)
                logger.warning("Rejected record %d: %s", index, failure['error_code'])
                result.rejected.append(RejectedRecord(index, failure['error_code'], failure['message']))
            else:
                result.loaded += 1
        return result

    # Marks entry and reports

    def submit_marks(self, entry: Union[MarksEntry, Mapping[str, Any]]) -> SubmissionResult:
        """Record a marks entry, reporting failure as a result instead of raising."""
        try:
            if not isinstance(entry, MarksEntry):
                raw = dict(entry)
                if 'marks_total' not in raw and 'totalMarks' not in raw:
                    raw['marks_total'] = self._config['default_total_marks']
                entry = MarksEntry.model_validate(raw)
            assessment_id = self._repository.record(entry)
        except (SchoolCoreError, RecordValidationError) as exc:
            failure = _failure(exc)
            logger.warning("Marks submission rejected: %s", failure['error_code'])
            return SubmissionResult(success=False, **failure)
        return SubmissionResult(success=True, assessment_id=assessment_id)

    def build_report(self, student_id: str, require_assessments: bool = False) -> ReportResult:
        """Assemble the report document for a rostered student."""
        try:
            student = self._roster.find_by_id(student_id)
            if student is None:
                raise UnknownStudentError(
                    f"Unknown student: {student_id}", details={"student_id": student_id}
                )
            document = self._assembler.assemble(
                student,
                self._repository.list_by_student(student_id),
                require_assessments=require_assessments,
            )
        except SchoolCoreError as exc:
            failure = _failure(exc)
            logger.warning("Report for %s not built: %s", student_id, failure['error_code'])
            return ReportResult(success=False, **failure)
        return ReportResult(success=True, document=document)

    def student_summary(self, student_id: str) -> StudentSummary:
        """Summary for a student; an unknown ID yields the empty summary."""
        return self._aggregator.summary(student_id)

    def class_ranking(self, class_level: Union[ClassLevel, str, int]) -> QueryResult:
        """Ranking of a class; ``value`` is a list of RankingEntry."""
        def rank() -> List[RankingEntry]:
            level = ClassLevel.parse(class_level)
            return self._aggregator.class_ranking(level, self._roster.list_by_class(level))
        return self._query("class_ranking", rank)

    # Calendar

    def events_today(self, today: Optional[DateLike] = None) -> QueryResult:
        return self._query("events_today", lambda: self._calendar.today(today))

    def upcoming_events(self, today: Optional[DateLike] = None, days: Optional[int] = None) -> QueryResult:
        return self._query("upcoming_events", lambda: self._calendar.upcoming(today, days))

    def marker_for(self, day: DateLike) -> QueryResult:
        """``value`` is the DateMarker of ``day``, or None when nothing is on it."""
        return self._query("marker_for", lambda: self._calendar.marker_for(day))

    def markers(self) -> Dict[str, Dict[str, object]]:
        """Markers in the calendar widget's ``markedDates`` shape."""
        return {key: marker.to_dict() for key, marker in self._calendar.markers().items()}
