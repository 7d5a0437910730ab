"""Unit tests for WCP field extraction."""

import math

import pytest

from wcpaudit.errors import ExtractionError
from wcpaudit.extraction import check_format, extract
from wcpaudit.models import ExtractedRecord, FindingKind


class TestExtract:
    def test_comma_separated_entry(self):
        record = extract("Role: Electrician, Hours: 45, Wage: $50")
        assert record == ExtractedRecord(role="Electrician", hours=45.0, wage=50.0)

    def test_labels_are_case_insensitive_and_whitespace_tolerant(self):
        record = extract("role:Laborer\n  HOURS :  37.5 ;wage:   26.45")
        assert record.role == "Laborer"
        assert record.hours == 37.5
        assert record.wage == 26.45

    def test_pipe_and_sentence_punctuation(self):
        record = extract("Role: Laborer. | Hours: 40. | Wage: $ 30.")
        assert record == ExtractedRecord("Laborer", 40.0, 30.0)

    @pytest.mark.parametrize("text, wage", [
        ("Role: Electrician, Hours: 40, Wage: $55.00!", 55.0),
        ("Role: Electrician, Hours: 40, Wage: $55.00?", 55.0),
        ("Role: Electrician, Hours: 40, Wage: $55.00 (USD)", 55.0),
        ("Role: Electrician, Hours: 40, Wage: $35.50/hour", 35.5),
    ])
    def test_trailing_punctuation_and_units_are_ignored(self, text, wage):
        assert extract(text) == ExtractedRecord("Electrician", 40.0, wage)

    def test_negative_zero_is_normalised(self):
        hours = extract("Role: Laborer, Hours: -0, Wage: 30").hours
        assert hours == 0.0
        assert math.copysign(1.0, hours) == 1.0
        assert str(hours) == "0.0"

    def test_role_case_is_preserved(self):
        assert extract("Role: electrician, Hours: 40, Wage: 55").role == "electrician"

    def test_bounds_are_inclusive(self):
        assert extract("Role: Laborer, Hours: 168, Wage: 1000").hours == 168.0
        assert extract("Role: Laborer, Hours: 0, Wage: 0").wage == 0.0

    @pytest.mark.parametrize("text, field", [
        ("Hours: 40, Wage: 55", "role"),
        ("Role: Electrician, Wage: 55", "hours"),
        ("Role: Electrician, Hours: 40", "wage"),
    ])
    def test_missing_field_raises(self, text, field):
        with pytest.raises(ExtractionError) as exc:
            extract(text)
        assert exc.value.field == field
        assert field in exc.value.message

    @pytest.mark.parametrize("text, field, value", [
        ("Role: Electrician, Hours: forty, Wage: 55", "hours", "forty"),
        ("Role: Electrician, Hours: 40, Wage: nan", "wage", "nan"),
        ("Role: Electrician, Hours: inf, Wage: 55", "hours", "inf"),
        ("Role: Electrician, Hours: 4e1, Wage: 55", "hours", "4e1"),
        ("Role: Electrician, Hours: 45hrs, Wage: 55", "hours", "45hrs"),
        ("Role: Electrician, Hours: 40, Wage: $55.0.0", "wage", "55.0.0"),
        ("Role: Electrician, Hours: 40, Wage: $", "wage", ""),
    ])
    def test_non_numeric_value_raises(self, text, field, value):
        with pytest.raises(ExtractionError) as exc:
            extract(text)
        assert exc.value.field == field
        assert exc.value.value == value
        assert "Non-numeric" in exc.value.message

    @pytest.mark.parametrize("text, field, value", [
        ("Role: Laborer, Hours: 169, Wage: 30", "hours", "169"),
        ("Role: Laborer, Hours: -1, Wage: 30", "hours", "-1"),
        ("Role: Laborer, Hours: 40, Wage: 1000.01", "wage", "1000.01"),
        ("Role: Laborer, Hours: 40, Wage: -5", "wage", "-5"),
    ])
    def test_out_of_range_value_raises(self, text, field, value):
        with pytest.raises(ExtractionError) as exc:
            extract(text)
        assert exc.value.field == field
        assert value in exc.value.message
        assert "Out-of-range" in exc.value.message

    def test_role_must_start_with_a_letter(self):
        with pytest.raises(ExtractionError) as exc:
            extract("Role: 123, Hours: 40, Wage: 55")
        assert exc.value.field == "role"

    def test_non_text_input_raises(self):
        with pytest.raises(ExtractionError):
            extract(None)

    def test_is_deterministic(self):
        text = "Role: Electrician, Hours: 45, Wage: $55.00"
        assert extract(text) == extract(text)
        messages = []
        for _ in range(2):
            with pytest.raises(ExtractionError) as exc:
                extract("Role: Electrician, Hours: 200, Wage: 55")
            messages.append(exc.value.message)
        assert messages[0] == messages[1]

    def test_error_details_identify_field(self):
        with pytest.raises(ExtractionError) as exc:
            extract("Role: Electrician, Hours: 200, Wage: 55")
        assert exc.value.to_dict()["error"]["details"] == {"field": "hours", "value": "200"}
        assert exc.value.status_code == 400


class TestCheckFormat:
    def test_valid_entry_has_no_findings(self):
        assert check_format("Role: Electrician, Hours: 40, Wage: 55") == []

    def test_reports_every_bad_field_in_order(self):
        findings = check_format("Role: Electrician, Hours: lots")
        assert [f.kind for f in findings] == [FindingKind.INVALID_FORMAT] * 2
        assert "hours" in findings[0].detail
        assert "wage" in findings[1].detail

    def test_empty_text(self):
        assert len(check_format("")) == 3
