import itertools
from datetime import date

import pytest

from dreamschool.core.entities import Assessment, CalendarEvent, Student
from dreamschool.core.enums import AssessmentType, ClassLevel, EventKind, Subject
from dreamschool.main import SchoolSession
from dreamschool.persistence.repositories import AssessmentRepository, InMemoryRoster
from dreamschool.schemas import MarksEntry
from dreamschool.services.aggregation import AssessmentAggregator
from dreamschool.services.calendar_index import CalendarEventIndex

TODAY = date(2024, 1, 15)


class FixtureBuilder:
    """Builds students, marks entries and calendar events with sensible defaults."""

    def __init__(self):
        self._ids = itertools.count(1)

    def _next(self, prefix: str) -> str:
        return f"{prefix}{next(self._ids)}"

    def student(self, **overrides) -> Student:
        values = {
            'name': "राहुल शर्मा",
            'class_level': ClassLevel.FIRST,
            'roll_number': 1,
            'birth_date': date(2018, 1, 15),
            'parent_name': "संजय शर्मा",
            'contact': "9876543210",
            'entity_id': self._next("s"),
        }
        values.update(overrides)
        return Student(**values)

    def marks(self, student_id: str, marks_obtained: int, marks_total: int = 25, **overrides) -> MarksEntry:
        values = {
            'student_id': student_id,
            'subject': Subject.MARATHI,
            'assessment_type': AssessmentType.FA1,
            'marks_obtained': marks_obtained,
            'marks_total': marks_total,
            'assessed_on': TODAY,
        }
        values.update(overrides)
        return MarksEntry(**values)

    def assessment(self, student_id: str, marks_obtained: int, marks_total: int = 25, **overrides) -> Assessment:
        values = {
            'student_id': student_id,
            'subject': Subject.MARATHI,
            'assessment_type': AssessmentType.FA1,
            'marks_obtained': marks_obtained,
            'marks_total': marks_total,
            'assessed_on': TODAY,
            'class_level': ClassLevel.FIRST,
            'entity_id': self._next("a"),
        }
        values.update(overrides)
        return Assessment(**values)

    def event(self, event_date, kind=EventKind.EVENT, **overrides) -> CalendarEvent:
        values = {
            'title': "शालेय दिन",
            'event_date': event_date,
            'kind': kind,
            'description': None,
            'entity_id': self._next("e"),
        }
        values.update(overrides)
        return CalendarEvent(**values)


@pytest.fixture
def build() -> FixtureBuilder:
    return FixtureBuilder()


@pytest.fixture
def class_one(build):
    """Three students of class 1, in roll-number order."""
    return [
        build.student(name="राहुल शर्मा", roll_number=1, entity_id="1"),
        build.student(name="प्रिया पाटील", roll_number=2, birth_date=date(2018, 3, 22),
                      parent_name="राज पाटील", contact="9876543211", entity_id="2"),
        build.student(name="अर्जुन देशमुख", roll_number=3, birth_date=date(2018, 5, 10),
                      parent_name="विकास देशमुख", contact="9876543212", entity_id="3"),
    ]


@pytest.fixture
def roster(class_one) -> InMemoryRoster:
    return InMemoryRoster(class_one)


@pytest.fixture
def repository(roster) -> AssessmentRepository:
    return AssessmentRepository(roster, today=lambda: TODAY)


@pytest.fixture
def aggregator(repository) -> AssessmentAggregator:
    return AssessmentAggregator(repository)


@pytest.fixture
def calendar_index() -> CalendarEventIndex:
    return CalendarEventIndex(today=lambda: TODAY)


@pytest.fixture
def session(roster) -> SchoolSession:
    return SchoolSession(roster=roster, today=lambda: TODAY)
