"""Lookup Result — projects a resolved CodeSystem + concept into a $lookup envelope.

Invariants:
    - name and display always present (empty string when the stored value is absent)
    - designation group only when the concept has a definition
    - one property group per property, in the mapping's iteration order (not sorted)
    - Pure: the shell resolves CodeSystem/concept and raises NotFound before calling here
"""

import json
from typing import Any

from termserver.core.parameters import Parameter, Parameters
from termserver.core.records import CodeSystemRecord, ConceptRecord


def render_property_value(value: Any) -> str:
    """Strings as-is; anything else as compact JSON text."""
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def build_lookup_result(
    code_system: CodeSystemRecord, concept: ConceptRecord,
) -> Parameters:
    params = [
        Parameter.string("name", code_system.name or ""),
        Parameter.string("display", concept.display or ""),
    ]

    if concept.definition is not None:
        params.append(Parameter.group("designation", [
            Parameter.code("use", "definition"),
            Parameter.string("value", concept.definition),
        ]))

    for key, value in (concept.properties or {}).items():
        params.append(Parameter.group("property", [
            Parameter.code("code", key),
            Parameter.string("value", render_property_value(value)),
        ]))

    return Parameters(params)
