"""Input Resolver — turns query args, Parameters bodies and path-bound resources into operation inputs.

Invariants:
    - Two argument sources share one protocol: QueryArguments (flat) and ParametersArguments (typed)
    - Typed sources try the domain-natural kind first, then fall back:
      canonical URLs → uri, codes → code, free text → string
    - A path-bound resource pre-fixes the system/url AND version; body/query cannot override it
    - Missing required argument → MissingParameterError naming the field; never defaulted
    - Pure: no IO, no store access

Design Decisions:
    - Frozen input dataclasses per operation: handlers receive fully-resolved, immutable arguments
    - Empty strings count as missing for required arguments (`?code=` is not a code)
"""

from dataclasses import dataclass
from typing import Any, Iterable, Protocol

from termserver.core.errors import InvalidParameterError, MissingParameterError
from termserver.core.parameters import Parameters, ValueKind


DEFAULT_EXPAND_OFFSET: int = 0
DEFAULT_EXPAND_COUNT: int = 100

URI_FIRST = (ValueKind.URI, ValueKind.STRING)
CANONICAL_FIRST = (
    ValueKind.URI, ValueKind.CANONICAL, ValueKind.URL, ValueKind.STRING,
)
CODE_FIRST = (ValueKind.CODE, ValueKind.STRING)
TEXT_ONLY = (ValueKind.STRING,)


# ─── Argument sources ────────────────────────────────────────────

class ArgumentSource(Protocol):
    """Where operation arguments come from."""
    def text(self, name: str, kinds: Iterable[ValueKind]) -> str | None: ...
    def flag(self, name: str) -> bool | None: ...
    def number(self, name: str) -> int | None: ...


class QueryArguments:
    """Flat key/value arguments (GET query string). Kinds are ignored."""

    _TRUE = frozenset({"true", "1", "yes"})
    _FALSE = frozenset({"false", "0", "no"})

    def __init__(self, values: dict[str, Any]):
        self._values = {k: v for k, v in values.items() if v is not None}

    def text(self, name: str, kinds: Iterable[ValueKind] = TEXT_ONLY) -> str | None:
        value = self._values.get(name)
        return None if value is None else str(value)

    def flag(self, name: str) -> bool | None:
        value = self._values.get(name)
        if value is None or isinstance(value, bool):
            return value
        lowered = str(value).strip().lower()
        if lowered in self._TRUE:
            return True
        if lowered in self._FALSE:
            return False
        raise InvalidParameterError(f"{name} must be true or false", name)

    def number(self, name: str) -> int | None:
        value = self._values.get(name)
        if value is None or (isinstance(value, int) and not isinstance(value, bool)):
            return value
        try:
            return int(str(value))
        except ValueError:
            raise InvalidParameterError(f"{name} must be an integer", name)


class ParametersArguments:
    """Arguments carried by a posted Parameters resource."""

    def __init__(self, params: Parameters):
        self._params = params

    def text(self, name: str, kinds: Iterable[ValueKind] = TEXT_ONLY) -> str | None:
        return self._params.first_of(name, kinds)

    def flag(self, name: str) -> bool | None:
        return self._params.get_boolean(name)

    def number(self, name: str) -> int | None:
        return self._params.get_integer(name)


@dataclass(frozen=True)
class BoundResource:
    """Resource addressed by the request path (instance-level operations)."""
    url: str
    version: str | None = None


# ─── Resolved inputs ─────────────────────────────────────────────

@dataclass(frozen=True)
class LookupInput:
    system: str
    code: str
    version: str | None = None


@dataclass(frozen=True)
class ValidateCodeInput:
    system: str
    code: str
    version: str | None = None
    display: str | None = None


@dataclass(frozen=True)
class ValueSetValidateCodeInput:
    url: str
    system: str
    code: str
    version: str | None = None
    display: str | None = None


@dataclass(frozen=True)
class SubsumesInput:
    system: str
    code_a: str
    code_b: str
    version: str | None = None


@dataclass(frozen=True)
class TranslateInput:
    system: str
    code: str
    url: str | None = None
    version: str | None = None
    target: str | None = None
    reverse: bool = False


@dataclass(frozen=True)
class ExpandInput:
    url: str
    version: str | None = None
    filter: str | None = None
    offset: int = DEFAULT_EXPAND_OFFSET
    count: int = DEFAULT_EXPAND_COUNT


# ─── Helpers ─────────────────────────────────────────────────────

def _require(value: str | None, field: str, message: str | None = None) -> str:
    if value is None or value == "":
        raise MissingParameterError(message or f"{field} parameter required", field)
    return value


def _non_negative(value: int | None, field: str, default: int) -> int:
    if value is None:
        return default
    if value < 0:
        raise InvalidParameterError(f"{field} must not be negative", field)
    return value


# ─── Per-operation resolution ────────────────────────────────────

def resolve_lookup(
    args: ArgumentSource, bound: BoundResource | None = None,
) -> LookupInput:
    if bound:
        system, version = bound.url, bound.version
    else:
        system = _require(args.text("system", URI_FIRST), "system")
        version = args.text("version", TEXT_ONLY)
    code = _require(args.text("code", CODE_FIRST), "code")
    return LookupInput(system=system, code=code, version=version)


def resolve_validate_code(
    args: ArgumentSource, bound: BoundResource | None = None,
) -> ValidateCodeInput:
    if bound:
        system, version = bound.url, bound.version
    else:
        system = _require(
            args.text("system", URI_FIRST) or args.text("url", CANONICAL_FIRST),
            "system", "system or url parameter required",
        )
        version = args.text("version", TEXT_ONLY)
    code = _require(args.text("code", CODE_FIRST), "code")
    return ValidateCodeInput(
        system=system, code=code, version=version,
        display=args.text("display", TEXT_ONLY),
    )


def resolve_value_set_validate_code(
    args: ArgumentSource, bound: BoundResource | None = None,
) -> ValueSetValidateCodeInput:
    if bound:
        url, version = bound.url, bound.version
    else:
        url = _require(
            args.text("url", CANONICAL_FIRST), "url",
            "url parameter required for ValueSet",
        )
        version = args.text("valueSetVersion", TEXT_ONLY)
    code = _require(args.text("code", CODE_FIRST), "code")
    system = _require(
        args.text("system", URI_FIRST), "system",
        "system parameter required for ValueSet validation",
    )
    return ValueSetValidateCodeInput(
        url=url, system=system, code=code, version=version,
        display=args.text("display", TEXT_ONLY),
    )


def resolve_subsumes(
    args: ArgumentSource, bound: BoundResource | None = None,
) -> SubsumesInput:
    if bound:
        system, version = bound.url, bound.version
    else:
        system = _require(args.text("system", URI_FIRST), "system")
        version = args.text("version", TEXT_ONLY)
    code_a = _require(args.text("codeA", CODE_FIRST), "codeA")
    code_b = _require(args.text("codeB", CODE_FIRST), "codeB")
    return SubsumesInput(system=system, code_a=code_a, code_b=code_b, version=version)


def resolve_translate(
    args: ArgumentSource, bound: BoundResource | None = None,
) -> TranslateInput:
    """url is optional here: its absence is answered with result=false, not an error."""
    if bound:
        url, version = bound.url, bound.version
    else:
        url = args.text("url", CANONICAL_FIRST) or None
        version = args.text("conceptMapVersion", TEXT_ONLY)
    code = _require(args.text("code", CODE_FIRST), "code")
    system = _require(args.text("system", URI_FIRST), "system")
    return TranslateInput(
        system=system, code=code, url=url, version=version,
        target=args.text("target", URI_FIRST) or None,
        reverse=bool(args.flag("reverse")),
    )


def resolve_expand(
    args: ArgumentSource, bound: BoundResource | None = None,
) -> ExpandInput:
    if bound:
        url, version = bound.url, bound.version
    else:
        url = _require(args.text("url", CANONICAL_FIRST), "url")
        version = args.text("valueSetVersion", TEXT_ONLY)
    return ExpandInput(
        url=url, version=version,
        filter=args.text("filter", TEXT_ONLY) or None,
        offset=_non_negative(args.number("offset"), "offset", DEFAULT_EXPAND_OFFSET),
        count=_non_negative(args.number("count"), "count", DEFAULT_EXPAND_COUNT),
    )
