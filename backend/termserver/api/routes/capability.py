"""Capability Routes — /metadata and /TerminologyCapabilities for each FHIR base URL.

Invariants:
    - fhirVersion in the CapabilityStatement follows the base URL the client used
    - No store access: documents are built from settings alone
"""

from fastapi import APIRouter, Request

from termserver.config import get_settings
from termserver.core.capability import (
    build_capability_statement, build_terminology_capabilities, fhir_release,
)

router = APIRouter(tags=["capabilities"])


def _base_version(request: Request) -> str:
    return request.url.path.strip("/").split("/", 1)[0]


@router.get("/metadata")
async def capability_statement(request: Request):
    settings = get_settings()
    return build_capability_statement(
        settings.software_name, settings.software_version,
        fhir_release(_base_version(request)),
    )


@router.get("/TerminologyCapabilities")
async def terminology_capabilities():
    settings = get_settings()
    return build_terminology_capabilities(
        settings.software_name, settings.software_version,
    )
