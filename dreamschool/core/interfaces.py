"""
Core interfaces for the collaborators the Dream School core is wired to.
"""

from abc import ABC, abstractmethod
from typing import Generic, List, Optional, TypeVar

from .entities import Student
from .enums import ClassLevel


T = TypeVar('T')


class StudentDirectory(ABC):
    """Roster lookup used to resolve student references."""

    @abstractmethod
    def find_by_id(self, student_id: str) -> Optional[Student]:
        """Find a student by ID."""
        pass

    @abstractmethod
    def list_by_class(self, class_level: ClassLevel) -> List[Student]:
        """List the students of a class level ordered by roll number."""
        pass


class RecordSink(ABC, Generic[T]):
    """Receives records created inside the core for durable storage."""

    @abstractmethod
    def persist(self, record: T) -> None:
        """Hand a newly created record to the persistence collaborator."""
        pass
