"""Validate-Code Results — negative and positive $validate-code envelopes.

Invariants:
    - A missing CodeSystem/ValueSet/code is a valid answer (result=false), never an error
    - Display mismatch is advisory: adds a message, result stays true
    - A valid result always ends with the stored display (empty string when absent)
"""

from termserver.core.parameters import Parameter, Parameters
from termserver.core.records import ConceptRecord


def missing_resource_result(resource_type: str, url: str) -> Parameters:
    return Parameters([
        Parameter.boolean("result", False),
        Parameter.string("message", f"{resource_type} '{url}' not found"),
    ])


def unknown_code_result(system: str, code: str) -> Parameters:
    return Parameters([
        Parameter.boolean("result", False),
        Parameter.string("message", f"Code '{code}' not found in system '{system}'"),
    ])


def valid_code_result(concept: ConceptRecord, display: str | None = None) -> Parameters:
    params = [Parameter.boolean("result", True)]
    # Only compared when both sides have a display
    if display is not None and concept.display is not None and display != concept.display:
        params.append(Parameter.string(
            "message",
            f"Display value '{display}' does not match expected '{concept.display}'",
        ))
    params.append(Parameter.string("display", concept.display or ""))
    return Parameters(params)
