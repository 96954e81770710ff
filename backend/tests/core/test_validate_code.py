"""Validate-Code Results — verifies negative and positive envelopes."""

from uuid import uuid4

from termserver.core.records import ConceptRecord
from termserver.core.validate_code import (
    missing_resource_result, unknown_code_result, valid_code_result,
)


def _concept(display: str | None) -> ConceptRecord:
    return ConceptRecord(id=uuid4(), code_system_id=uuid4(), code="a", display=display)


def test_missing_code_system_message():
    result = missing_resource_result("CodeSystem", "http://nope")
    assert result.get_boolean("result") is False
    assert result.get_string("message") == "CodeSystem 'http://nope' not found"


def test_unknown_code_message():
    result = unknown_code_result("http://s", "zz")
    assert result.get_boolean("result") is False
    assert result.get_string("message") == "Code 'zz' not found in system 'http://s'"


def test_valid_code_without_display_check():
    result = valid_code_result(_concept("Alpha"))
    assert result.to_dict()["parameter"] == [
        {"name": "result", "valueBoolean": True},
        {"name": "display", "valueString": "Alpha"},
    ]


def test_display_mismatch_keeps_result_true():
    result = valid_code_result(_concept("Alpha"), "Alfa")
    assert result.get_boolean("result") is True
    assert result.get_string("message") == (
        "Display value 'Alfa' does not match expected 'Alpha'"
    )
    assert [p.name for p in result.parameter] == ["result", "message", "display"]


def test_matching_display_has_no_message():
    result = valid_code_result(_concept("Alpha"), "Alpha")
    assert result.get_parameter("message") is None


def test_stored_display_absent_skips_comparison():
    result = valid_code_result(_concept(None), "Anything")
    assert result.get_parameter("message") is None
    assert result.get_string("display") == ""
