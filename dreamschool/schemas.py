"""
Pydantic models for records crossing the core boundary.

Inbound models validate raw records from the sync collaborator and the
marks-entry form; they accept the camelCase keys the mobile app stores.
Outbound models describe the report document handed to external renderers.
"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .core.entities import Assessment, CalendarEvent, Student
from .core.enums import AssessmentType, ClassLevel, Subject


class _Record(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


# Inbound records

class StudentRecord(_Record):
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=200)
    class_level: ClassLevel = Field(..., alias="class")
    roll_number: int = Field(..., ge=1, alias="rollNo")
    birth_date: date = Field(..., alias="birthDate")
    parent_name: str = Field("", alias="parentName")
    contact: str = ""

    @field_validator("class_level", mode="before")
    @classmethod
    def _parse_class_level(cls, value):
        return ClassLevel.parse(value)

    def to_entity(self) -> Student:
        return Student(
            name=self.name,
            class_level=self.class_level,
            roll_number=self.roll_number,
            birth_date=self.birth_date,
            parent_name=self.parent_name,
            contact=self.contact,
            entity_id=self.id,
        )


class MarksEntry(_Record):
    """A marks-entry form submission; identity is assigned on record."""
    student_id: str = Field(..., min_length=1, alias="studentId")
    subject: Subject
    assessment_type: AssessmentType = Field(..., alias="assessmentType")
    marks_obtained: int = Field(..., alias="marks")
    marks_total: int = Field(..., alias="totalMarks")
    assessed_on: Optional[date] = Field(None, alias="date")
    class_level: Optional[ClassLevel] = Field(None, alias="class")

    @field_validator("subject", mode="before")
    @classmethod
    def _parse_subject(cls, value):
        return Subject.parse(value)

    @field_validator("assessment_type", mode="before")
    @classmethod
    def _parse_assessment_type(cls, value):
        return AssessmentType.parse(value)

    @field_validator("class_level", mode="before")
    @classmethod
    def _parse_class_level(cls, value):
        if value is None:
            return None
        return ClassLevel.parse(value)


class AssessmentRecord(MarksEntry):
    """A previously persisted assessment, with its identity."""
    id: str = Field(..., min_length=1)
    assessed_on: date = Field(..., alias="date")
    class_level: ClassLevel = Field(..., alias="class")

    def to_entity(self) -> Assessment:
        return Assessment(
            student_id=self.student_id,
            subject=self.subject,
            assessment_type=self.assessment_type,
            marks_obtained=self.marks_obtained,
            marks_total=self.marks_total,
            assessed_on=self.assessed_on,
            class_level=self.class_level,
            entity_id=self.id,
        )


class CalendarEventRecord(_Record):
    id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    event_date: date = Field(..., alias="date")
    # unrecognized kinds are kept as-is and rendered with the default color
    kind: str = Field(..., min_length=1, alias="type")
    description: Optional[str] = None

    def to_entity(self) -> CalendarEvent:
        return CalendarEvent(
            title=self.title,
            event_date=self.event_date,
            kind=self.kind,
            description=self.description,
            entity_id=self.id,
        )


# Report document

class ReportHeader(BaseModel):
    school_name: str
    student_name: str
    class_level: str
    roll_number: int
    parent_name: str


class ReportRow(BaseModel):
    subject: str
    subject_label: str
    assessment_type: str
    assessment_type_label: str
    marks_obtained: int
    marks_total: int
    percentage: float
    grade: str


class ReportSummary(BaseModel):
    assessment_count: int
    average_percentage: float
    overall_grade: str


class ReportDocument(BaseModel):
    student_id: str
    generated_on: date
    header: ReportHeader
    rows: List[ReportRow] = Field(default_factory=list)
    summary: ReportSummary
