"""Parameters Schema — validates posted FHIR Parameters bodies at the API boundary.

Invariants:
    - resourceType must be "Parameters" (defaults to it when omitted)
    - Every entry must parse into the core envelope: string name, at most one
      value[x] whose JSON type fits its kind, parts recursively valid
    - Parse failures surface as RequestValidationError → 400 VALIDATION_ERROR

Design Decisions:
    - Pydantic only checks the outer shape; the tagged-variant parse lives in
      core/parameters.py so the same rules apply to tests and handlers
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from termserver.core.parameters import Parameter, Parameters


class ParametersBody(BaseModel):
    """Request body for POST operation endpoints."""
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    resource_type: Literal["Parameters"] = Field("Parameters", alias="resourceType")
    parameter: list[dict[str, Any]] | None = None

    @field_validator("parameter")
    @classmethod
    def entries_parse(cls, v: list[dict[str, Any]] | None):
        for entry in v or []:
            Parameter.from_dict(entry)
        return v

    def to_envelope(self) -> Parameters:
        return Parameters.from_dict({"parameter": self.parameter or []})
