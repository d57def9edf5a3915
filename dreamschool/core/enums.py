"""
Enumerations and lookup tables for the Dream School core.
"""

from enum import Enum
from typing import Dict, Optional, Union

from .exceptions import UnknownCodeError


class ClassLevel(Enum):
    """School class levels (standards one to eight)."""
    FIRST = "1"
    SECOND = "2"
    THIRD = "3"
    FOURTH = "4"
    FIFTH = "5"
    SIXTH = "6"
    SEVENTH = "7"
    EIGHTH = "8"

    @classmethod
    def parse(cls, value: Union["ClassLevel", str, int]) -> "ClassLevel":
        """Resolve a class level from its code, number or Devanagari numeral."""
        if isinstance(value, cls):
            return value
        code = str(value).strip()
        code = _DEVANAGARI_DIGITS.get(code, code)
        try:
            return cls(code)
        except ValueError:
            raise UnknownCodeError(
                f"Unknown class level: {value!r}",
                details={"kind": "class_level", "code": value},
            ) from None

    @property
    def number(self) -> int:
        return int(self.value)


_DEVANAGARI_DIGITS = {
    "१": "1", "२": "2", "३": "3", "४": "4",
    "५": "5", "६": "6", "७": "7", "८": "8",
}


class Subject(Enum):
    """Subjects taught across the class levels."""
    MARATHI = "marathi"
    ENGLISH = "english"
    MATHEMATICS = "mathematics"
    SCIENCE = "science"
    SOCIAL_SCIENCE = "socialScience"
    DRAWING = "drawing"
    PHYSICAL_EDUCATION = "physicalEducation"

    @classmethod
    def parse(cls, value: Union["Subject", str]) -> "Subject":
        """Resolve a subject from its code."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnknownCodeError(
                f"Unknown subject code: {value!r}",
                details={"kind": "subject", "code": value},
            ) from None

    @property
    def label(self) -> str:
        return SUBJECT_LABELS[self]


class AssessmentType(Enum):
    """Continuous and comprehensive evaluation (CCE) assessment slots."""
    FA1 = "fa1"  # formative
    FA2 = "fa2"
    SA1 = "sa1"  # half-yearly summative
    FA3 = "fa3"
    FA4 = "fa4"
    SA2 = "sa2"  # annual summative

    @classmethod
    def parse(cls, value: Union["AssessmentType", str]) -> "AssessmentType":
        """Resolve an assessment type from its code."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnknownCodeError(
                f"Unknown assessment type code: {value!r}",
                details={"kind": "assessment_type", "code": value},
            ) from None

    @property
    def label(self) -> str:
        return ASSESSMENT_TYPE_LABELS[self]

    @property
    def is_summative(self) -> bool:
        return self in (AssessmentType.SA1, AssessmentType.SA2)


class EventKind(Enum):
    """Kinds of calendar events."""
    BIRTHDAY = "birthday"
    HOLIDAY = "holiday"
    EVENT = "event"
    EXAM = "exam"

    @classmethod
    def lookup(cls, value: Union["EventKind", str, None]) -> Optional["EventKind"]:
        """Resolve an event kind, or None when the kind is not recognized."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


class MarkerColor(Enum):
    """Color tokens used for calendar date markers and the legend."""
    BIRTHDAY = "#ff6b6b"
    HOLIDAY = "#4ecdc4"
    EVENT = "#45b7d1"
    EXAM = "#ffa726"
    DEFAULT = "#95a5a6"


SUBJECT_LABELS: Dict[Subject, str] = {
    Subject.MARATHI: "मराठी",
    Subject.ENGLISH: "इंग्रजी",
    Subject.MATHEMATICS: "गणित",
    Subject.SCIENCE: "विज्ञान",
    Subject.SOCIAL_SCIENCE: "सामाजिक शास्त्र",
    Subject.DRAWING: "चित्रकला",
    Subject.PHYSICAL_EDUCATION: "शारीरिक शिक्षण",
}

ASSESSMENT_TYPE_LABELS: Dict[AssessmentType, str] = {
    AssessmentType.FA1: "सतत मूल्यांकन १",
    AssessmentType.FA2: "सतत मूल्यांकन २",
    AssessmentType.SA1: "अर्धवार्षिक परीक्षा",
    AssessmentType.FA3: "सतत मूल्यांकन ३",
    AssessmentType.FA4: "सतत मूल्यांकन ४",
    AssessmentType.SA2: "वार्षिक परीक्षा",
}

EVENT_KIND_COLORS: Dict[EventKind, MarkerColor] = {
    EventKind.BIRTHDAY: MarkerColor.BIRTHDAY,
    EventKind.HOLIDAY: MarkerColor.HOLIDAY,
    EventKind.EVENT: MarkerColor.EVENT,
    EventKind.EXAM: MarkerColor.EXAM,
}


def color_for_kind(kind: Union[EventKind, str, None]) -> MarkerColor:
    """Color token for an event kind; unrecognized kinds get the default token."""
    resolved = EventKind.lookup(kind)
    if resolved is None:
        return MarkerColor.DEFAULT
    return EVENT_KIND_COLORS[resolved]


def subject_label(code: Union[Subject, str]) -> str:
    """Display label for a subject code."""
    return Subject.parse(code).label


def assessment_type_label(code: Union[AssessmentType, str]) -> str:
    """Display label for an assessment-type code."""
    return AssessmentType.parse(code).label
