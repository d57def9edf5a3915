from datetime import date

import pytest
from pydantic import ValidationError

from dreamschool.core.enums import AssessmentType, ClassLevel, EventKind, Subject
from dreamschool.core.exceptions import UnknownCodeError
from dreamschool.schemas import AssessmentRecord, CalendarEventRecord, MarksEntry, StudentRecord


class TestStudentRecord:

    def test_validate_when_camel_case_keys_then_maps_fields(self):
        record = StudentRecord.model_validate({
            "id": "7", "name": "प्रिया पाटील", "class": "३", "rollNo": 2,
            "birthDate": "2016-03-22", "parentName": "राज पाटील", "contact": "9876543211",
            "createdAt": "2024-01-01T00:00:00Z",
        })
        student = record.to_entity()
        assert student.id == "7"
        assert student.class_level is ClassLevel.THIRD
        assert student.birth_date == date(2016, 3, 22)
        assert student.parent_name == "राज पाटील"

    def test_validate_when_roll_number_zero_then_rejected(self):
        with pytest.raises(ValidationError):
            StudentRecord.model_validate({"id": "7", "name": "x", "class": "1", "rollNo": 0,
                                          "birthDate": "2016-03-22"})


class TestMarksEntry:

    def test_validate_when_snake_case_names_then_accepted(self):
        entry = MarksEntry(student_id="1", subject="science", assessment_type="fa2",
                           marks_obtained=10, marks_total=20)
        assert entry.subject is Subject.SCIENCE
        assert entry.assessment_type is AssessmentType.FA2
        assert entry.assessed_on is None
        assert entry.class_level is None

    def test_validate_when_assessment_type_unknown_then_unknown_code_propagates(self):
        with pytest.raises(UnknownCodeError):
            MarksEntry.model_validate({"studentId": "1", "subject": "marathi", "assessmentType": "fa9",
                                       "marks": 1, "totalMarks": 2})


class TestAssessmentRecord:

    def test_validate_when_date_missing_then_rejected(self):
        with pytest.raises(ValidationError):
            AssessmentRecord.model_validate({"id": "a1", "studentId": "1", "subject": "marathi",
                                             "assessmentType": "fa1", "marks": 1, "totalMarks": 2,
                                             "class": "1"})

    def test_to_entity_when_valid_then_keeps_id(self):
        record = AssessmentRecord.model_validate({"id": "a1", "studentId": "1", "subject": "drawing",
                                                  "assessmentType": "sa2", "marks": 1, "totalMarks": 2,
                                                  "date": "2024-03-30", "class": 4})
        assessment = record.to_entity()
        assert assessment.id == "a1"
        assert assessment.class_level is ClassLevel.FOURTH
        assert assessment.subject is Subject.DRAWING


class TestCalendarEventRecord:

    def test_to_entity_when_type_key_used_then_kind_set(self):
        event = CalendarEventRecord.model_validate(
            {"id": "h1", "title": "दिवाळी", "date": "2024-11-01", "type": "holiday"}
        ).to_entity()
        assert event.event_kind is EventKind.HOLIDAY
        assert event.date == date(2024, 11, 1)
        assert event.description is None
