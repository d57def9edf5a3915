"""
Core entities for the Dream School core.

Entities are read-only once constructed: a corrected marks entry is a new
Assessment, and students and calendar events are owned by external
collaborators that hand them in.
"""

from abc import ABC
from datetime import date, datetime, timezone
from typing import Any, Dict, Optional, Union

from .enums import AssessmentType, ClassLevel, EventKind, MarkerColor, Subject, color_for_kind
from .exceptions import InvalidMarksError, ValidationError
from .identifiers import generate_id

DateLike = Union[date, str]


def as_date(value: DateLike) -> date:
    """Coerce a date or ISO ``YYYY-MM-DD`` string to a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError:
        raise ValidationError(f"Invalid date: {value!r}", details={"value": value}) from None


def validate_marks(marks_obtained: int, marks_total: int) -> None:
    """Check ``0 <= marks_obtained <= marks_total`` with a positive total."""
    if marks_total <= 0:
        raise InvalidMarksError(
            f"Total marks must be positive, got {marks_total}",
            details={"marks_obtained": marks_obtained, "marks_total": marks_total},
        )
    if marks_obtained < 0 or marks_obtained > marks_total:
        raise InvalidMarksError(
            f"Marks {marks_obtained} out of range for total {marks_total}",
            details={"marks_obtained": marks_obtained, "marks_total": marks_total},
        )


class AbstractEntity(ABC):
    """Base abstract entity with a universal ID and creation timestamp."""

    def __init__(self, entity_id: Optional[str] = None):
        self._id = entity_id or generate_id()
        self._created_at = datetime.now(timezone.utc)

    @property
    def id(self) -> str:
        """Get the entity ID."""
        return self._id

    @property
    def created_at(self) -> datetime:
        """Get creation timestamp."""
        return self._created_at

    def to_dict(self) -> Dict[str, Any]:
        """Convert entity to dictionary."""
        return {'id': self._id}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AbstractEntity):
            return NotImplemented
        return type(self) is type(other) and self.to_dict() == other.to_dict()

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._id))

    def __str__(self) -> str:
        return f"{self.__class__.__name__}(id={self._id})"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self._id!r})"


class Student(AbstractEntity):
    """Student as supplied by the roster collaborator."""

    def __init__(self, name: str, class_level: Union[ClassLevel, str, int], roll_number: int,
                 birth_date: DateLike, parent_name: str = "", contact: str = "", **kwargs):
        super().__init__(**kwargs)
        if not name:
            raise ValidationError("Student name is required")
        if isinstance(roll_number, bool) or not isinstance(roll_number, int) or roll_number < 1:
            raise ValidationError(
                f"Roll number must be a positive integer, got {roll_number!r}",
                details={"roll_number": roll_number},
            )
        self._name = name
        self._class_level = ClassLevel.parse(class_level)
        self._roll_number = roll_number
        self._birth_date = as_date(birth_date)
        self._parent_name = parent_name
        self._contact = contact

    @property
    def name(self) -> str:
        return self._name

    @property
    def class_level(self) -> ClassLevel:
        return self._class_level

    @property
    def roll_number(self) -> int:
        return self._roll_number

    @property
    def birth_date(self) -> date:
        return self._birth_date

    @property
    def parent_name(self) -> str:
        return self._parent_name

    @property
    def contact(self) -> str:
        return self._contact

    def to_dict(self) -> Dict[str, Any]:
        """Convert student to dictionary."""
        base_dict = super().to_dict()
        base_dict.update({
            'name': self._name,
            'class_level': self._class_level.value,
            'roll_number': self._roll_number,
            'birth_date': self._birth_date.isoformat(),
            'parent_name': self._parent_name,
            'contact': self._contact,
        })
        return base_dict


class Assessment(AbstractEntity):
    """Immutable marks entry for one student, subject and assessment slot."""

    def __init__(self, student_id: str, subject: Union[Subject, str],
                 assessment_type: Union[AssessmentType, str], marks_obtained: int,
                 marks_total: int, assessed_on: DateLike,
                 class_level: Union[ClassLevel, str, int], **kwargs):
        super().__init__(**kwargs)
        validate_marks(marks_obtained, marks_total)
        self._student_id = student_id
        self._subject = Subject.parse(subject)
        self._assessment_type = AssessmentType.parse(assessment_type)
        self._marks_obtained = marks_obtained
        self._marks_total = marks_total
        self._assessed_on = as_date(assessed_on)
        self._class_level = ClassLevel.parse(class_level)

    @property
    def student_id(self) -> str:
        return self._student_id

    @property
    def subject(self) -> Subject:
        return self._subject

    @property
    def assessment_type(self) -> AssessmentType:
        return self._assessment_type

    @property
    def marks_obtained(self) -> int:
        return self._marks_obtained

    @property
    def marks_total(self) -> int:
        return self._marks_total

    @property
    def assessed_on(self) -> date:
        return self._assessed_on

    @property
    def class_level(self) -> ClassLevel:
        return self._class_level

    def to_dict(self) -> Dict[str, Any]:
        """Convert assessment to dictionary."""
        base_dict = super().to_dict()
        base_dict.update({
            'student_id': self._student_id,
            'subject': self._subject.value,
            'assessment_type': self._assessment_type.value,
            'marks_obtained': self._marks_obtained,
            'marks_total': self._marks_total,
            'date': self._assessed_on.isoformat(),
            'class_level': self._class_level.value,
        })
        return base_dict


class CalendarEvent(AbstractEntity):
    """Calendar entry; the kind may be one the core does not recognize."""

    def __init__(self, title: str, event_date: DateLike, kind: Union[EventKind, str],
                 description: Optional[str] = None, **kwargs):
        super().__init__(**kwargs)
        self._title = title
        self._date = as_date(event_date)
        self._kind = kind.value if isinstance(kind, EventKind) else str(kind)
        self._description = description

    @property
    def title(self) -> str:
        return self._title

    @property
    def date(self) -> date:
        return self._date

    @property
    def kind(self) -> str:
        """Raw kind code as received."""
        return self._kind

    @property
    def event_kind(self) -> Optional[EventKind]:
        """Recognized kind, or None for kinds introduced by external sources."""
        return EventKind.lookup(self._kind)

    @property
    def color(self) -> MarkerColor:
        return color_for_kind(self._kind)

    @property
    def description(self) -> Optional[str]:
        return self._description

    def to_dict(self) -> Dict[str, Any]:
        """Convert calendar event to dictionary."""
        base_dict = super().to_dict()
        base_dict.update({
            'title': self._title,
            'date': self._date.isoformat(),
            'kind': self._kind,
            'description': self._description,
        })
        return base_dict
