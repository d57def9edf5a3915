"""
Persistence module with the in-memory stores driven by a session.
"""

from .repositories import AssessmentRepository, InMemoryRoster

__all__ = [
    "AssessmentRepository",
    "InMemoryRoster",
]
