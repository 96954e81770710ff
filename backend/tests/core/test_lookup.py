"""Lookup Result — verifies the $lookup envelope shape."""

from uuid import uuid4

from termserver.core.lookup import build_lookup_result, render_property_value
from termserver.core.records import CodeSystemRecord, ConceptRecord


def _code_system(name: str | None = "Letters") -> CodeSystemRecord:
    return CodeSystemRecord(
        id=uuid4(), url="http://example.org/cs", status="active",
        content={}, name=name,
    )


def _concept(**kwargs) -> ConceptRecord:
    return ConceptRecord(id=uuid4(), code_system_id=uuid4(), code="a", **kwargs)


def test_minimal_lookup_has_name_and_display_only():
    result = build_lookup_result(_code_system(), _concept(display="Alpha"))
    assert result.to_dict()["parameter"] == [
        {"name": "name", "valueString": "Letters"},
        {"name": "display", "valueString": "Alpha"},
    ]


def test_absent_name_and_display_render_empty():
    result = build_lookup_result(_code_system(name=None), _concept())
    assert result.get_string("name") == ""
    assert result.get_string("display") == ""


def test_definition_becomes_designation_group():
    result = build_lookup_result(
        _code_system(), _concept(display="Alpha", definition="First letter"),
    )
    designation = result.get_parameter("designation")
    assert [p.to_dict() for p in designation.part] == [
        {"name": "use", "valueCode": "definition"},
        {"name": "value", "valueString": "First letter"},
    ]


def test_one_property_group_per_entry_in_order():
    result = build_lookup_result(
        _code_system(),
        _concept(display="Alpha", properties={"status": "active", "order": 1}),
    )
    groups = result.get_all("property")
    assert [g.to_dict()["part"] for g in groups] == [
        [{"name": "code", "valueCode": "status"}, {"name": "value", "valueString": "active"}],
        [{"name": "code", "valueCode": "order"}, {"name": "value", "valueString": "1"}],
    ]


def test_render_property_value():
    assert render_property_value("x") == "x"
    assert render_property_value(True) == "true"
    assert render_property_value({"a": [1, 2]}) == '{"a":[1,2]}'
