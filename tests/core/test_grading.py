"""
Unit Tests for the Grade Scale

Boundary exactness at every band threshold and rejection of invalid input.
"""

import math

import pytest

from dreamschool.core.exceptions import DivisionByZeroError, InvalidPercentageError
from dreamschool.core.grading import GRADE_BANDS, grade, grade_for_marks, percentage


class TestGrade:
    """Tests for grade()."""

    @pytest.mark.parametrize("pct, letter", [
        (100, "A+"),
        (90, "A+"),
        (89.99, "A"),
        (80, "A"),
        (79.99, "B+"),
        (70, "B+"),
        (69.99, "B"),
        (60, "B"),
        (59.99, "C+"),
        (50, "C+"),
        (49.99, "C"),
        (40, "C"),
        (39.99, "D"),
        (35, "D"),
        (34.99, "F"),
        (0, "F"),
    ])
    def test_grade_when_on_or_below_threshold_then_returns_band_letter(self, pct, letter):
        assert grade(pct) == letter

    @pytest.mark.parametrize("bad", [-0.01, 100.01, 250, math.nan, math.inf, -math.inf])
    def test_grade_when_out_of_range_then_raises_invalid_percentage(self, bad):
        with pytest.raises(InvalidPercentageError) as excinfo:
            grade(bad)
        assert excinfo.value.error_code == "INVALID_PERCENTAGE"

    @pytest.mark.parametrize("bad", ["90", None, True])
    def test_grade_when_not_a_number_then_raises_invalid_percentage(self, bad):
        with pytest.raises(InvalidPercentageError):
            grade(bad)


class TestBands:

    def test_bands_when_listed_then_strictly_descending_and_start_at_zero(self):
        bounds = [band.lower_bound for band in GRADE_BANDS]
        assert bounds == sorted(bounds, reverse=True)
        assert len(set(bounds)) == len(bounds)
        assert bounds[-1] == 0

    def test_bands_when_listed_then_letters_match_scheme(self):
        assert [band.letter for band in GRADE_BANDS] == ["A+", "A", "B+", "B", "C+", "C", "D", "F"]


class TestPercentage:

    def test_percentage_when_valid_marks_then_scales_to_hundred(self):
        assert percentage(20, 25) == 80.0
        assert percentage(18, 25) == 72.0
        assert percentage(0, 25) == 0.0
        assert percentage(25, 25) == 100.0

    def test_percentage_when_total_zero_then_raises_division_by_zero(self):
        with pytest.raises(DivisionByZeroError):
            percentage(0, 0)

    def test_grade_for_marks_when_called_then_grades_the_percentage(self):
        assert grade_for_marks(20, 25) == "A"
        assert grade_for_marks(8, 25) == "F"
