import pytest

from dreamschool.core.enums import (
    AssessmentType,
    ClassLevel,
    EventKind,
    MarkerColor,
    Subject,
    assessment_type_label,
    color_for_kind,
    subject_label,
)
from dreamschool.core.exceptions import UnknownCodeError


class TestClassLevel:

    @pytest.mark.parametrize("raw", ["3", 3, " 3 ", "३", ClassLevel.THIRD])
    def test_parse_when_code_number_or_devanagari_then_resolves(self, raw):
        assert ClassLevel.parse(raw) is ClassLevel.THIRD

    @pytest.mark.parametrize("raw", ["9", "0", "", "first"])
    def test_parse_when_unknown_then_raises_unknown_code(self, raw):
        with pytest.raises(UnknownCodeError) as excinfo:
            ClassLevel.parse(raw)
        assert excinfo.value.details["kind"] == "class_level"

    def test_number_when_accessed_then_returns_int(self):
        assert ClassLevel.EIGHTH.number == 8


class TestLabels:

    def test_subject_label_when_code_known_then_returns_display_text(self):
        assert subject_label("mathematics") == "गणित"
        assert subject_label(Subject.SOCIAL_SCIENCE) == "सामाजिक शास्त्र"

    def test_subject_label_when_code_unknown_then_raises_unknown_code(self):
        with pytest.raises(UnknownCodeError) as excinfo:
            subject_label("history")
        assert excinfo.value.error_code == "UNKNOWN_CODE"

    def test_assessment_type_label_when_code_known_then_returns_display_text(self):
        assert assessment_type_label("sa2") == "वार्षिक परीक्षा"
        assert AssessmentType.FA1.label == "सतत मूल्यांकन १"

    def test_assessment_type_label_when_code_unknown_then_raises_unknown_code(self):
        with pytest.raises(UnknownCodeError):
            assessment_type_label("fa5")

    def test_labels_when_every_member_then_has_entry(self):
        assert all(s.label for s in Subject)
        assert all(t.label for t in AssessmentType)

    def test_is_summative_when_term_exam_then_true(self):
        assert AssessmentType.SA1.is_summative
        assert not AssessmentType.FA3.is_summative


class TestColors:

    @pytest.mark.parametrize("kind, color", [
        ("birthday", MarkerColor.BIRTHDAY),
        ("holiday", MarkerColor.HOLIDAY),
        (EventKind.EVENT, MarkerColor.EVENT),
        ("exam", MarkerColor.EXAM),
    ])
    def test_color_for_kind_when_known_then_returns_its_token(self, kind, color):
        assert color_for_kind(kind) is color

    @pytest.mark.parametrize("kind", ["sports-day", "", None, "Holiday"])
    def test_color_for_kind_when_unrecognized_then_returns_default(self, kind):
        assert color_for_kind(kind) is MarkerColor.DEFAULT

    def test_lookup_when_unrecognized_then_none(self):
        assert EventKind.lookup("webinar") is None
