"""ConceptMap Translation — tolerant walk of group → element → target.

Invariants:
    - The ConceptMap content is a loosely-typed document: missing or mistyped
      optional fields are treated as absent, never as malformed input
    - Forward: group.source must equal the source system; effective target system = group.target
    - Reverse: group.target must equal the source system; effective target system = group.source
    - Targets without a code are skipped; equivalence defaults to "equivalent"
    - Output order = group order, then element order, then target order (no re-sorting)
    - result is true iff at least one match was emitted

Design Decisions:
    - Match collection separated from envelope building: TranslationMatch is testable
      without Parameters plumbing
"""

from dataclasses import dataclass
from typing import Any, Iterator

from termserver.core.parameters import Coding, Parameter, Parameters


DEFAULT_EQUIVALENCE = "equivalent"
NO_MAP_MESSAGE = "ConceptMap URL parameter is required (search not yet implemented)"


@dataclass(frozen=True)
class TranslationMatch:
    equivalence: str
    system: str
    code: str
    display: str | None = None

    def to_parameter(self) -> Parameter:
        coding = Coding(system=self.system, code=self.code)
        if self.display is not None:
            coding = coding.with_display(self.display)
        return Parameter.group("match", [
            Parameter.code("equivalence", self.equivalence),
            Parameter.coding("concept", coding),
        ])


def _objects(value: Any) -> list[dict]:
    """List of JSON objects under a key, ignoring anything else."""
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _text(node: dict, key: str) -> str | None:
    value = node.get(key)
    return value if isinstance(value, str) else None


def find_matches(
    content: dict,
    source_system: str,
    source_code: str,
    target_system: str | None = None,
    reverse: bool = False,
) -> Iterator[TranslationMatch]:
    """Yield translations of source_code in document order."""
    for group in _objects(content.get("group")):
        group_source = _text(group, "source")
        group_target = _text(group, "target")
        matched_system = group_target if reverse else group_source
        if matched_system != source_system:
            continue
        effective_system = (group_source if reverse else group_target) or ""

        for element in _objects(group.get("element")):
            if _text(element, "code") != source_code:
                continue
            for target in _objects(element.get("target")):
                code = _text(target, "code")
                if code is None:
                    continue
                if target_system is not None and effective_system != target_system:
                    continue
                yield TranslationMatch(
                    equivalence=_text(target, "equivalence") or DEFAULT_EQUIVALENCE,
                    system=effective_system,
                    code=code,
                    display=_text(target, "display"),
                )


def build_translate_result(
    matches: list[TranslationMatch], source_system: str, source_code: str,
) -> Parameters:
    params = [Parameter.boolean("result", bool(matches))]
    if not matches:
        params.append(Parameter.string(
            "message",
            f"No translation found for code '{source_code}' in system '{source_system}'",
        ))
    params.extend(m.to_parameter() for m in matches)
    return Parameters(params)


def no_concept_map_result() -> Parameters:
    """Translate without a ConceptMap url: explicit negative answer, no search."""
    return Parameters([
        Parameter.boolean("result", False),
        Parameter.string("message", NO_MAP_MESSAGE),
    ])
