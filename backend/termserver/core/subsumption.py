"""Subsumption — classifies two codes of one CodeSystem.

Invariants:
    - Textually equal codes are `equivalent` without consulting the closure
    - Otherwise the store relation decides: A ancestor of B → subsumes,
      B ancestor of A → subsumed-by, neither → not-subsumed
"""

from termserver.core.domain_types import SubsumptionOutcome, SubsumptionRelation
from termserver.core.parameters import Parameter, Parameters


_OUTCOME_BY_RELATION = {
    SubsumptionRelation.A_SUBSUMES_B: SubsumptionOutcome.SUBSUMES,
    SubsumptionRelation.B_SUBSUMES_A: SubsumptionOutcome.SUBSUMED_BY,
    SubsumptionRelation.NONE: SubsumptionOutcome.NOT_SUBSUMED,
}


def is_equivalent(code_a: str, code_b: str) -> bool:
    return code_a == code_b


def outcome_for(relation: SubsumptionRelation) -> SubsumptionOutcome:
    return _OUTCOME_BY_RELATION[relation]


def build_subsumes_result(outcome: SubsumptionOutcome) -> Parameters:
    return Parameters([Parameter.code("outcome", outcome.value)])
