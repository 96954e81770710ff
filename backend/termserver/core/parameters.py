"""Result Envelope — FHIR Parameters resource as a tagged-variant model.

Invariants:
    - A Parameter carries a value OR parts, never both; neither = pure grouping node
    - ParameterValue.kind is the discriminant AND the wire field name (valueString, valueCode, ...)
    - An accessor for one kind returns None for a value stored under another kind
      (a valueCode "abc" is not readable as a string)
    - Name lookups return the first match; names are not unique
    - to_dict/from_dict preserve the kind, not just the text

Design Decisions:
    - Plain dataclasses, no pydantic: the envelope is built by pure core functions
      and validated at the API boundary by schemas/parameters.py
    - Enum value doubles as wire field name: one table drives both directions
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable


class ValueKind(str, Enum):
    """Supported value[x] types."""
    STRING = "valueString"
    BOOLEAN = "valueBoolean"
    INTEGER = "valueInteger"
    DECIMAL = "valueDecimal"
    CODE = "valueCode"
    URI = "valueUri"
    URL = "valueUrl"
    CANONICAL = "valueCanonical"
    CODING = "valueCoding"
    CODEABLE_CONCEPT = "valueCodeableConcept"


_TEXT_KINDS = frozenset({
    ValueKind.STRING, ValueKind.CODE, ValueKind.URI,
    ValueKind.URL, ValueKind.CANONICAL,
})
_WIRE_FIELDS = {k.value: k for k in ValueKind}


# ─── Datatypes ───────────────────────────────────────────────────

@dataclass(frozen=True)
class Coding:
    """FHIR Coding — every field independently optional."""
    system: str | None = None
    version: str | None = None
    code: str | None = None
    display: str | None = None

    def with_display(self, display: str) -> "Coding":
        return Coding(self.system, self.version, self.code, display)

    def to_dict(self) -> dict:
        return {
            k: v for k, v in (
                ("system", self.system), ("version", self.version),
                ("code", self.code), ("display", self.display),
            ) if v is not None
        }

    @classmethod
    def from_dict(cls, data: Any) -> "Coding":
        if not isinstance(data, dict):
            raise ValueError("Coding must be a JSON object")
        values = {}
        for key in ("system", "version", "code", "display"):
            val = data.get(key)
            if val is not None and not isinstance(val, str):
                raise ValueError(f"Coding.{key} must be a string")
            values[key] = val
        return cls(**values)


@dataclass(frozen=True)
class CodeableConcept:
    """FHIR CodeableConcept — optional codings plus optional text."""
    coding: tuple[Coding, ...] | None = None
    text: str | None = None

    def to_dict(self) -> dict:
        out: dict[str, Any] = {}
        if self.coding is not None:
            out["coding"] = [c.to_dict() for c in self.coding]
        if self.text is not None:
            out["text"] = self.text
        return out

    @classmethod
    def from_dict(cls, data: Any) -> "CodeableConcept":
        if not isinstance(data, dict):
            raise ValueError("CodeableConcept must be a JSON object")
        raw_coding = data.get("coding")
        if raw_coding is not None and not isinstance(raw_coding, list):
            raise ValueError("CodeableConcept.coding must be an array")
        text = data.get("text")
        if text is not None and not isinstance(text, str):
            raise ValueError("CodeableConcept.text must be a string")
        coding = (
            tuple(Coding.from_dict(c) for c in raw_coding)
            if raw_coding is not None else None
        )
        return cls(coding=coding, text=text)


# ─── Tagged value ────────────────────────────────────────────────

@dataclass(frozen=True)
class ParameterValue:
    """One-of value slot. kind decides which accessor may read it."""
    kind: ValueKind
    value: Any

    def to_wire(self) -> Any:
        if self.kind in (ValueKind.CODING, ValueKind.CODEABLE_CONCEPT):
            return self.value.to_dict()
        return self.value

    @classmethod
    def from_wire(cls, kind: ValueKind, raw: Any) -> "ParameterValue":
        """Parse one wire value, raising ValueError when it does not fit kind."""
        if kind in _TEXT_KINDS:
            if not isinstance(raw, str):
                raise ValueError(f"{kind.value} must be a string")
            return cls(kind, raw)
        if kind == ValueKind.BOOLEAN:
            if not isinstance(raw, bool):
                raise ValueError("valueBoolean must be true or false")
            return cls(kind, raw)
        if kind == ValueKind.INTEGER:
            if isinstance(raw, bool) or not isinstance(raw, int):
                raise ValueError("valueInteger must be an integer")
            return cls(kind, raw)
        if kind == ValueKind.DECIMAL:
            if isinstance(raw, bool) or not isinstance(raw, (int, float)):
                raise ValueError("valueDecimal must be a number")
            return cls(kind, float(raw))
        if kind == ValueKind.CODING:
            return cls(kind, Coding.from_dict(raw))
        return cls(kind, CodeableConcept.from_dict(raw))


# ─── Parameter / Parameters ──────────────────────────────────────

@dataclass
class Parameter:
    """Named entry: a value, nested parts, or neither."""
    name: str
    value: ParameterValue | None = None
    part: list["Parameter"] | None = None

    def __post_init__(self):
        if self.value is not None and self.part is not None:
            raise ValueError(
                f"Parameter '{self.name}' cannot carry both a value and parts",
            )

    def value_as(self, kind: ValueKind) -> Any:
        """Return the value if it was built with `kind`, else None."""
        if self.value is None or self.value.kind != kind:
            return None
        return self.value.value

    @classmethod
    def string(cls, name: str, value: str) -> "Parameter":
        return cls(name, ParameterValue(ValueKind.STRING, value))

    @classmethod
    def boolean(cls, name: str, value: bool) -> "Parameter":
        return cls(name, ParameterValue(ValueKind.BOOLEAN, value))

    @classmethod
    def code(cls, name: str, value: str) -> "Parameter":
        return cls(name, ParameterValue(ValueKind.CODE, value))

    @classmethod
    def uri(cls, name: str, value: str) -> "Parameter":
        return cls(name, ParameterValue(ValueKind.URI, value))

    @classmethod
    def integer(cls, name: str, value: int) -> "Parameter":
        return cls(name, ParameterValue(ValueKind.INTEGER, value))

    @classmethod
    def coding(cls, name: str, coding: Coding) -> "Parameter":
        return cls(name, ParameterValue(ValueKind.CODING, coding))

    @classmethod
    def group(cls, name: str, parts: Iterable["Parameter"]) -> "Parameter":
        return cls(name, part=list(parts))

    def to_dict(self) -> dict:
        out: dict[str, Any] = {"name": self.name}
        if self.value is not None:
            out[self.value.kind.value] = self.value.to_wire()
        if self.part is not None:
            out["part"] = [p.to_dict() for p in self.part]
        return out

    @classmethod
    def from_dict(cls, data: Any) -> "Parameter":
        if not isinstance(data, dict):
            raise ValueError("parameter entries must be JSON objects")
        name = data.get("name")
        if not isinstance(name, str):
            raise ValueError("parameter.name must be a string")

        # Unrecognised value[x] fields (valueDate, valueQuantity, ...) are ignored
        kinds = [_WIRE_FIELDS[k] for k in data if k in _WIRE_FIELDS]
        if len(kinds) > 1:
            raise ValueError(f"Parameter '{name}' has more than one value[x]")
        value = ParameterValue.from_wire(kinds[0], data[kinds[0].value]) if kinds else None

        raw_part = data.get("part")
        part = None
        if raw_part is not None:
            if not isinstance(raw_part, list):
                raise ValueError(f"Parameter '{name}'.part must be an array")
            part = [cls.from_dict(p) for p in raw_part]
        return cls(name, value, part)


@dataclass
class Parameters:
    """FHIR Parameters resource: ordered, non-unique named entries."""
    parameter: list[Parameter] = field(default_factory=list)

    def get_parameter(self, name: str) -> Parameter | None:
        return next((p for p in self.parameter if p.name == name), None)

    def get(self, name: str, kind: ValueKind) -> Any:
        """Value of the first parameter called `name`, if it holds `kind`."""
        param = self.get_parameter(name)
        return param.value_as(kind) if param else None

    def first_of(self, name: str, kinds: Iterable[ValueKind]) -> Any:
        """Try kinds in order; first non-None wins."""
        for kind in kinds:
            value = self.get(name, kind)
            if value is not None:
                return value
        return None

    def get_string(self, name: str) -> str | None:
        return self.get(name, ValueKind.STRING)

    def get_boolean(self, name: str) -> bool | None:
        return self.get(name, ValueKind.BOOLEAN)

    def get_code(self, name: str) -> str | None:
        return self.get(name, ValueKind.CODE)

    def get_uri(self, name: str) -> str | None:
        return self.get(name, ValueKind.URI)

    def get_integer(self, name: str) -> int | None:
        return self.get(name, ValueKind.INTEGER)

    def get_all(self, name: str) -> list[Parameter]:
        return [p for p in self.parameter if p.name == name]

    def to_dict(self) -> dict:
        out: dict[str, Any] = {"resourceType": "Parameters"}
        if self.parameter:
            out["parameter"] = [p.to_dict() for p in self.parameter]
        return out

    @classmethod
    def from_dict(cls, data: Any) -> "Parameters":
        if not isinstance(data, dict):
            raise ValueError("Parameters must be a JSON object")
        if data.get("resourceType", "Parameters") != "Parameters":
            raise ValueError("resourceType must be 'Parameters'")
        raw = data.get("parameter") or []
        if not isinstance(raw, list):
            raise ValueError("Parameters.parameter must be an array")
        return cls([Parameter.from_dict(p) for p in raw])
