"""
Percentage to letter-grade scale.
"""

import math
from dataclasses import dataclass
from typing import Tuple

from .exceptions import DivisionByZeroError, InvalidPercentageError


@dataclass(frozen=True)
class GradeBand:
    """Letter awarded from ``lower_bound`` (inclusive) upwards."""
    lower_bound: float
    letter: str


GRADE_BANDS: Tuple[GradeBand, ...] = (
    GradeBand(90, "A+"),
    GradeBand(80, "A"),
    GradeBand(70, "B+"),
    GradeBand(60, "B"),
    GradeBand(50, "C+"),
    GradeBand(40, "C"),
    GradeBand(35, "D"),
    GradeBand(0, "F"),
)


def _check_bands(bands: Tuple[GradeBand, ...]) -> None:
    bounds = [band.lower_bound for band in bands]
    if any(upper <= lower for upper, lower in zip(bounds, bounds[1:])):
        raise ValueError(f"Grade bands must be strictly descending: {bounds}")
    if bounds[-1] != 0:
        raise ValueError("Lowest grade band must start at 0")


_check_bands(GRADE_BANDS)


def grade(percentage: float) -> str:
    """Letter grade for a percentage in [0, 100]."""
    if isinstance(percentage, bool) or not isinstance(percentage, (int, float)):
        raise InvalidPercentageError(
            f"Percentage must be a number, got {percentage!r}",
            details={"percentage": percentage},
        )
    if not math.isfinite(percentage) or not 0 <= percentage <= 100:
        raise InvalidPercentageError(
            f"Percentage must be within [0, 100], got {percentage}",
            details={"percentage": percentage},
        )
    for band in GRADE_BANDS:
        if percentage >= band.lower_bound:
            return band.letter
    # unreachable: the last band starts at 0
    return GRADE_BANDS[-1].letter


def percentage(marks_obtained: int, marks_total: int) -> float:
    """``100 * marks_obtained / marks_total``."""
    if marks_total == 0:
        raise DivisionByZeroError(
            "Cannot take a percentage of zero total marks",
            details={"marks_obtained": marks_obtained},
        )
    return 100 * marks_obtained / marks_total


def grade_for_marks(marks_obtained: int, marks_total: int) -> str:
    """Letter grade for a single marks entry."""
    return grade(percentage(marks_obtained, marks_total))
