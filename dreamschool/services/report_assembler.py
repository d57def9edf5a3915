"""
Report assembly: packages a student's marks into a ReportDocument for
external renderers.
"""

import logging
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Iterable

from ..core.entities import Assessment, Student
from ..core.enums import assessment_type_label, subject_label
from ..core.exceptions import NoAssessmentsError
from ..core.grading import grade
from .aggregation import AssessmentAggregator
from ..schemas import ReportDocument, ReportHeader, ReportRow, ReportSummary

logger = logging.getLogger(__name__)

DEFAULT_SCHOOL_NAME = "Dream School"


def round_one_decimal(value: float) -> float:
    """Round half-up to one decimal place on the exact binary value.

    Only exact binary ties round up: 12.45 is stored just below the tie and
    rounds down to 12.4, while 6.25 rounds up to 6.3.
    """
    return float(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


class ReportDataAssembler:
    """Builds report documents; rows keep the order the marks were entered in."""

    def __init__(self, school_name: str = DEFAULT_SCHOOL_NAME,
                 today: Callable[[], date] = date.today):
        self._school_name = school_name
        self._today = today

    def assemble(self, student: Student, assessments: Iterable[Assessment],
                 require_assessments: bool = False) -> ReportDocument:
        assessments = list(assessments)
        if require_assessments and not assessments:
            raise NoAssessmentsError(
                f"Student {student.id} has no assessments",
                details={"student_id": student.id},
            )

        rows = [
            ReportRow(
                subject=row.subject.value,
                subject_label=subject_label(row.subject),
                assessment_type=row.assessment_type.value,
                assessment_type_label=assessment_type_label(row.assessment_type),
                marks_obtained=row.marks_obtained,
                marks_total=row.marks_total,
                percentage=round_one_decimal(row.percentage),
                grade=row.letter,
            )
            for row in AssessmentAggregator.breakdown_rows(assessments)
        ]
        average = AssessmentAggregator.mean_percentage(assessments)
        document = ReportDocument(
            student_id=student.id,
            generated_on=self._today(),
            header=ReportHeader(
                school_name=self._school_name,
                student_name=student.name,
                class_level=student.class_level.value,
                roll_number=student.roll_number,
                parent_name=student.parent_name,
            ),
            rows=rows,
            summary=ReportSummary(
                assessment_count=len(rows),
                average_percentage=round_one_decimal(average),
                overall_grade=grade(average),
            ),
        )
        logger.debug("Assembled report for student %s with %d rows", student.id, len(rows))
        return document
