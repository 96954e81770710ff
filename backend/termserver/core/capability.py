"""Capability Documents — CapabilityStatement and TerminologyCapabilities builders.

Invariants:
    - Pure functions: software identity and FHIR release are passed in
    - Only interactions the server actually serves are advertised (read, search-type
      and the terminology operations); the server is read-only
"""

from termserver.core.domain_types import FhirVersion, ResourceType

FHIR_RELEASES = {
    FhirVersion.R4: "4.0.1",
    FhirVersion.R5: "5.0.0",
    FhirVersion.R6: "6.0.0",
}

_COMMON_SEARCH = [
    {"name": "url", "type": "uri"},
    {"name": "status", "type": "token"},
    {"name": "fhirVersion", "type": "token"},
    {"name": "_count", "type": "number"},
    {"name": "_offset", "type": "number"},
]

_OPERATIONS = {
    ResourceType.CODE_SYSTEM: ["lookup", "validate-code", "subsumes"],
    ResourceType.VALUE_SET: ["expand", "validate-code"],
    ResourceType.CONCEPT_MAP: ["translate"],
}


def fhir_release(version: str) -> str:
    """Map a route prefix (r4/r5/r6) to its FHIR release number; unknown → R4."""
    try:
        return FHIR_RELEASES[FhirVersion(version.lower())]
    except ValueError:
        return FHIR_RELEASES[FhirVersion.R4]


def _resource_entry(resource_type: ResourceType) -> dict:
    search = list(_COMMON_SEARCH)
    if resource_type is not ResourceType.CONCEPT_MAP:
        search.insert(1, {"name": "name", "type": "string"})
    return {
        "type": resource_type.value,
        "interaction": [{"code": "read"}, {"code": "search-type"}],
        "searchParam": search,
        "operation": [
            {
                "name": op,
                "definition": f"http://hl7.org/fhir/OperationDefinition/{resource_type.value}-{op}",
            }
            for op in _OPERATIONS[resource_type]
        ],
    }


def build_capability_statement(
    software_name: str, software_version: str, fhir_version: str,
) -> dict:
    return {
        "resourceType": "CapabilityStatement",
        "status": "active",
        "kind": "instance",
        "software": {"name": software_name, "version": software_version},
        "implementation": {
            "description": "FHIR Terminology Service. Multi-version base URLs: /r4, /r5, /r6",
        },
        "fhirVersion": fhir_version,
        "format": ["json"],
        "rest": [{
            "mode": "server",
            "resource": [_resource_entry(rt) for rt in ResourceType],
        }],
    }


def build_terminology_capabilities(software_name: str, software_version: str) -> dict:
    return {
        "resourceType": "TerminologyCapabilities",
        "status": "active",
        "kind": "instance",
        "software": {"name": software_name, "version": software_version},
        "codeSystem": [],
        "expansion": {"hierarchical": False, "paging": True},
        "codeSearch": "all",
        "validateCode": {"translations": False},
    }
