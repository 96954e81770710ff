"""Search Bundle — wraps stored resource documents into a FHIR searchset Bundle.

Invariants:
    - total is the count of all stored resources of the type, not the page size
    - entries keep the store's order (most recently updated first)
"""

from typing import Any, Iterable


def build_search_bundle(total: int, resources: Iterable[dict[str, Any]]) -> dict:
    return {
        "resourceType": "Bundle",
        "type": "searchset",
        "total": total,
        "entry": [
            {"resource": resource, "search": {"mode": "match"}}
            for resource in resources
        ],
    }
