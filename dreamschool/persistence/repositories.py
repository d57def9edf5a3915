"""
In-memory repositories for students and assessment records.

Both stores are meant to be driven by a single session. They hold no locks:
concurrent writers against one instance get last-write-wins and must be
serialized by the caller.
"""

import logging
from collections import defaultdict
from datetime import date
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Tuple

from ..core.entities import Assessment, Student, validate_marks
from ..core.enums import ClassLevel
from ..core.exceptions import DuplicateEntityError, PersistenceError, SchoolCoreError, UnknownStudentError
from ..core.identifiers import generate_id
from ..core.interfaces import RecordSink, StudentDirectory
from ..schemas import MarksEntry

logger = logging.getLogger(__name__)


class InMemoryRoster(StudentDirectory):
    """Student directory backed by a dict, unique by id and by roll number per class."""

    def __init__(self, students: Optional[Iterable[Student]] = None):
        self._students: Dict[str, Student] = {}
        self._roll_index: Dict[Tuple[ClassLevel, int], str] = {}
        if students:
            self.add_all(students)

    def add(self, student: Student) -> Student:
        """Add a student to the roster."""
        if student.id in self._students:
            raise DuplicateEntityError(
                f"Student {student.id} already exists",
                details={"student_id": student.id},
            )
        roll_key = (student.class_level, student.roll_number)
        if roll_key in self._roll_index:
            raise DuplicateEntityError(
                f"Roll number {student.roll_number} already taken in class {student.class_level.value}",
                details={
                    "class_level": student.class_level.value,
                    "roll_number": student.roll_number,
                    "existing_student_id": self._roll_index[roll_key],
                },
            )
        self._students[student.id] = student
        self._roll_index[roll_key] = student.id
        logger.debug("Roster: added student %s (class %s, roll %d)",
                     student.id, student.class_level.value, student.roll_number)
        return student

    def add_all(self, students: Iterable[Student]) -> None:
        for student in students:
            self.add(student)

    def find_by_id(self, student_id: str) -> Optional[Student]:
        """Find a student by ID."""
        return self._students.get(student_id)

    def get(self, student_id: str) -> Student:
        """Get a student by ID, raising when the roster does not know it."""
        student = self._students.get(student_id)
        if student is None:
            raise UnknownStudentError(
                f"Unknown student: {student_id}",
                details={"student_id": student_id},
            )
        return student

    def list_by_class(self, class_level: ClassLevel) -> List[Student]:
        """List the students of a class level ordered by roll number."""
        level = ClassLevel.parse(class_level)
        students = [s for s in self._students.values() if s.class_level == level]
        return sorted(students, key=lambda s: s.roll_number)

    def __contains__(self, student_id: object) -> bool:
        return student_id in self._students

    def __iter__(self) -> Iterator[Student]:
        return iter(self._students.values())

    def __len__(self) -> int:
        return len(self._students)


class AssessmentRepository:
    """Append-only store of assessment records, in insertion order."""

    _MAX_ID_ATTEMPTS = 5

    def __init__(self, roster: StudentDirectory,
                 sink: Optional[RecordSink[Assessment]] = None,
                 id_factory: Callable[[], str] = generate_id,
                 today: Callable[[], date] = date.today):
        self._roster = roster
        self._sink = sink
        self._id_factory = id_factory
        self._today = today
        self._records: List[Assessment] = []
        self._by_id: Dict[str, Assessment] = {}
        self._by_student: Dict[str, List[Assessment]] = defaultdict(list)

    def record(self, entry: MarksEntry) -> str:
        """Validate a marks entry, append it and return the new assessment ID."""
        validate_marks(entry.marks_obtained, entry.marks_total)
        student = self._resolve_student(entry.student_id)

        assessment = Assessment(
            student_id=student.id,
            subject=entry.subject,
            assessment_type=entry.assessment_type,
            marks_obtained=entry.marks_obtained,
            marks_total=entry.marks_total,
            assessed_on=entry.assessed_on or self._today(),
            class_level=entry.class_level or student.class_level,
            entity_id=self._fresh_id(),
        )
        # the sink sees the record first; nothing is stored if it refuses
        if self._sink is not None:
            self._persist(assessment)
        self._append(assessment)
        logger.debug("Recorded assessment %s for student %s: %s %s %d/%d",
                     assessment.id, student.id, assessment.subject.value,
                     assessment.assessment_type.value, assessment.marks_obtained,
                     assessment.marks_total)
        return assessment.id

    def load(self, assessments: Iterable[Assessment]) -> int:
        """Append previously persisted assessments, keeping their IDs."""
        count = 0
        for assessment in assessments:
            validate_marks(assessment.marks_obtained, assessment.marks_total)
            self._resolve_student(assessment.student_id)
            if assessment.id in self._by_id:
                raise DuplicateEntityError(
                    f"Assessment {assessment.id} already exists",
                    details={"assessment_id": assessment.id},
                )
            self._append(assessment)
            count += 1
        logger.debug("Loaded %d persisted assessments", count)
        return count

    def get(self, assessment_id: str) -> Optional[Assessment]:
        return self._by_id.get(assessment_id)

    def list_by_student(self, student_id: str) -> List[Assessment]:
        """All assessments for a student in insertion order."""
        return list(self._by_student.get(student_id, ()))

    def list_by_class(self, class_level: ClassLevel) -> List[Assessment]:
        """All assessments recorded for a class level in insertion order."""
        level = ClassLevel.parse(class_level)
        return [a for a in self._records if a.class_level == level]

    def __iter__(self) -> Iterator[Assessment]:
        return iter(list(self._records))

    def __len__(self) -> int:
        return len(self._records)

    def _resolve_student(self, student_id: str) -> Student:
        student = self._roster.find_by_id(student_id)
        if student is None:
            raise UnknownStudentError(
                f"Unknown student: {student_id}",
                details={"student_id": student_id},
            )
        return student

    def _persist(self, assessment: Assessment) -> None:
        try:
            self._sink.persist(assessment)
        except SchoolCoreError:
            raise
        except Exception as e:
            raise PersistenceError(
                f"Failed to persist assessment {assessment.id}: {e}",
                details={"assessment_id": assessment.id, "cause": type(e).__name__},
            ) from e

    def _fresh_id(self) -> str:
        for _ in range(self._MAX_ID_ATTEMPTS):
            candidate = self._id_factory()
            if candidate not in self._by_id:
                return candidate
            logger.warning("Assessment id collision on %s, regenerating", candidate)
        raise DuplicateEntityError(
            f"Could not generate a unique assessment id after {self._MAX_ID_ATTEMPTS} attempts"
        )

    def _append(self, assessment: Assessment) -> None:
        self._records.append(assessment)
        self._by_id[assessment.id] = assessment
        self._by_student[assessment.student_id].append(assessment)
