"""
Assessment aggregation: percentages, averages, letter grades and class ranking.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List

from ..core.entities import Assessment, Student
from ..core.enums import AssessmentType, ClassLevel, Subject
from ..core.grading import grade, percentage
from ..persistence.repositories import AssessmentRepository

logger = logging.getLogger(__name__)

_TIE_PRECISION = 9


@dataclass(frozen=True)
class BreakdownRow:
    """One assessment of a student with its derived percentage and letter."""
    assessment_id: str
    subject: Subject
    assessment_type: AssessmentType
    marks_obtained: int
    marks_total: int
    percentage: float
    letter: str


@dataclass(frozen=True)
class StudentSummary:
    """Aggregate figures for a student.

    ``has_data`` is False when the student has no assessments, in which case
    ``average_percentage`` is the 0 sentinel rather than a measured average.
    """
    student_id: str
    assessment_count: int
    average_percentage: float
    overall_grade: str

    @property
    def has_data(self) -> bool:
        return self.assessment_count > 0


@dataclass(frozen=True)
class RankingEntry:
    rank: int
    student_id: str
    roll_number: int
    name: str
    average_percentage: float
    overall_grade: str
    assessment_count: int


class AssessmentAggregator:
    """Computes derived figures on demand from the assessment repository."""

    def __init__(self, repository: AssessmentRepository):
        self._repository = repository

    @staticmethod
    def percentage_of(assessment: Assessment) -> float:
        return percentage(assessment.marks_obtained, assessment.marks_total)

    def average_percentage(self, student_id: str) -> float:
        """Mean percentage over the student's assessments, 0 when there are none."""
        assessments = self._repository.list_by_student(student_id)
        return self.mean_percentage(assessments)

    def overall_grade(self, student_id: str) -> str:
        return grade(self.average_percentage(student_id))

    def per_subject_breakdown(self, student_id: str) -> List[BreakdownRow]:
        """One row per assessment, in the order the marks were entered."""
        return self.breakdown_rows(self._repository.list_by_student(student_id))

    def summary(self, student_id: str) -> StudentSummary:
        assessments = self._repository.list_by_student(student_id)
        average = self.mean_percentage(assessments)
        return StudentSummary(
            student_id=student_id,
            assessment_count=len(assessments),
            average_percentage=average,
            overall_grade=grade(average),
        )

    def class_ranking(self, class_level: ClassLevel, students: Iterable[Student]) -> List[RankingEntry]:
        """Rank the students of a class by average percentage.

        Averages equal to nine decimal places share a rank and the following rank is skipped
        (1, 1, 3). Within a shared rank students are ordered by roll number.
        Students outside ``class_level`` are ignored.
        """
        level = ClassLevel.parse(class_level)
        scored = []
        for student in students:
            if student.class_level != level:
                continue
            summary = self.summary(student.id)
            scored.append((student, summary))

        scored.sort(key=lambda pair: (-self._tie_key(pair[1].average_percentage), pair[0].roll_number))

        ranking: List[RankingEntry] = []
        previous_average = None
        rank = 0
        for position, (student, summary) in enumerate(scored, start=1):
            tie_key = self._tie_key(summary.average_percentage)
            if tie_key != previous_average:
                rank = position
                previous_average = tie_key
            ranking.append(RankingEntry(
                rank=rank,
                student_id=student.id,
                roll_number=student.roll_number,
                name=student.name,
                average_percentage=summary.average_percentage,
                overall_grade=summary.overall_grade,
                assessment_count=summary.assessment_count,
            ))
        logger.debug("Ranked %d students in class %s", len(ranking), level.value)
        return ranking

    @staticmethod
    def _tie_key(average: float) -> float:
        # averages equal up to float noise share a rank
        return round(average, _TIE_PRECISION)

    @classmethod
    def mean_percentage(cls, assessments: List[Assessment]) -> float:
        """Mean percentage of a list of assessments, 0 for an empty list."""
        if not assessments:
            return 0
        total = sum(cls.percentage_of(a) for a in assessments)
        return total / len(assessments)

    @classmethod
    def breakdown_rows(cls, assessments: Iterable[Assessment]) -> List[BreakdownRow]:
        return [cls._row(a) for a in assessments]

    @classmethod
    def _row(cls, assessment: Assessment) -> BreakdownRow:
        pct = cls.percentage_of(assessment)
        return BreakdownRow(
            assessment_id=assessment.id,
            subject=assessment.subject,
            assessment_type=assessment.assessment_type,
            marks_obtained=assessment.marks_obtained,
            marks_total=assessment.marks_total,
            percentage=pct,
            letter=grade(pct),
        )
