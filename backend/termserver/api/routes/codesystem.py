"""CodeSystem Routes — $lookup, $validate-code, $subsumes plus read and search.

Invariants:
    - Every operation exists as type-level and instance-level, GET and POST
    - Instance forms pin the bound CodeSystem's url and version
    - Operation routes are declared before the read route so `$op` never reads as an id

Design Decisions:
    - GET arguments arrive as flat query strings, POST as a Parameters body;
      both are reduced to one ArgumentSource before resolution
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query

from termserver.api.dependencies import get_store
from termserver.core.domain_types import ResourceType, SearchParams
from termserver.core.input_resolver import (
    ArgumentSource, ParametersArguments, QueryArguments,
    resolve_lookup, resolve_subsumes, resolve_validate_code,
)
from termserver.core.repository_protocols import TerminologyStore
from termserver.schemas.parameters import ParametersBody
from termserver.services.handle_codesystem import CodeSystemOperations
from termserver.services.handle_resources import ResourceQueries

router = APIRouter(prefix="/CodeSystem", tags=["CodeSystem"])


def _lookup_query(
    system: str | None = None,
    code: str | None = None,
    version: str | None = None,
) -> ArgumentSource:
    return QueryArguments({"system": system, "code": code, "version": version})


def _validate_code_query(
    url: str | None = None,
    system: str | None = None,
    code: str | None = None,
    version: str | None = None,
    display: str | None = None,
) -> ArgumentSource:
    return QueryArguments({
        "url": url, "system": system, "code": code,
        "version": version, "display": display,
    })


def _subsumes_query(
    system: str | None = None,
    version: str | None = None,
    code_a: str | None = Query(None, alias="codeA"),
    code_b: str | None = Query(None, alias="codeB"),
) -> ArgumentSource:
    return QueryArguments({
        "system": system, "version": version, "codeA": code_a, "codeB": code_b,
    })


# ─── $lookup ─────────────────────────────────────────────────────

@router.get("/$lookup")
async def lookup_get(
    args: ArgumentSource = Depends(_lookup_query),
    store: TerminologyStore = Depends(get_store),
):
    result = await CodeSystemOperations(store).lookup(resolve_lookup(args))
    return result.to_dict()


@router.post("/$lookup")
async def lookup_post(
    body: ParametersBody, store: TerminologyStore = Depends(get_store),
):
    args = ParametersArguments(body.to_envelope())
    result = await CodeSystemOperations(store).lookup(resolve_lookup(args))
    return result.to_dict()


@router.get("/{resource_id}/$lookup")
async def lookup_instance_get(
    resource_id: UUID,
    args: ArgumentSource = Depends(_lookup_query),
    store: TerminologyStore = Depends(get_store),
):
    ops = CodeSystemOperations(store)
    bound = await ops.bind(resource_id)
    return (await ops.lookup(resolve_lookup(args, bound))).to_dict()


@router.post("/{resource_id}/$lookup")
async def lookup_instance_post(
    resource_id: UUID, body: ParametersBody,
    store: TerminologyStore = Depends(get_store),
):
    ops = CodeSystemOperations(store)
    bound = await ops.bind(resource_id)
    args = ParametersArguments(body.to_envelope())
    return (await ops.lookup(resolve_lookup(args, bound))).to_dict()


# ─── $validate-code ──────────────────────────────────────────────

@router.get("/$validate-code")
async def validate_code_get(
    args: ArgumentSource = Depends(_validate_code_query),
    store: TerminologyStore = Depends(get_store),
):
    result = await CodeSystemOperations(store).validate_code(
        resolve_validate_code(args),
    )
    return result.to_dict()


@router.post("/$validate-code")
async def validate_code_post(
    body: ParametersBody, store: TerminologyStore = Depends(get_store),
):
    args = ParametersArguments(body.to_envelope())
    result = await CodeSystemOperations(store).validate_code(
        resolve_validate_code(args),
    )
    return result.to_dict()


@router.get("/{resource_id}/$validate-code")
async def validate_code_instance_get(
    resource_id: UUID,
    args: ArgumentSource = Depends(_validate_code_query),
    store: TerminologyStore = Depends(get_store),
):
    ops = CodeSystemOperations(store)
    bound = await ops.bind(resource_id)
    return (await ops.validate_code(resolve_validate_code(args, bound))).to_dict()


@router.post("/{resource_id}/$validate-code")
async def validate_code_instance_post(
    resource_id: UUID, body: ParametersBody,
    store: TerminologyStore = Depends(get_store),
):
    ops = CodeSystemOperations(store)
    bound = await ops.bind(resource_id)
    args = ParametersArguments(body.to_envelope())
    return (await ops.validate_code(resolve_validate_code(args, bound))).to_dict()


# ─── $subsumes ───────────────────────────────────────────────────

@router.get("/$subsumes")
async def subsumes_get(
    args: ArgumentSource = Depends(_subsumes_query),
    store: TerminologyStore = Depends(get_store),
):
    result = await CodeSystemOperations(store).subsumes(resolve_subsumes(args))
    return result.to_dict()


@router.post("/$subsumes")
async def subsumes_post(
    body: ParametersBody, store: TerminologyStore = Depends(get_store),
):
    args = ParametersArguments(body.to_envelope())
    result = await CodeSystemOperations(store).subsumes(resolve_subsumes(args))
    return result.to_dict()


@router.get("/{resource_id}/$subsumes")
async def subsumes_instance_get(
    resource_id: UUID,
    args: ArgumentSource = Depends(_subsumes_query),
    store: TerminologyStore = Depends(get_store),
):
    ops = CodeSystemOperations(store)
    bound = await ops.bind(resource_id)
    return (await ops.subsumes(resolve_subsumes(args, bound))).to_dict()


@router.post("/{resource_id}/$subsumes")
async def subsumes_instance_post(
    resource_id: UUID, body: ParametersBody,
    store: TerminologyStore = Depends(get_store),
):
    ops = CodeSystemOperations(store)
    bound = await ops.bind(resource_id)
    args = ParametersArguments(body.to_envelope())
    return (await ops.subsumes(resolve_subsumes(args, bound))).to_dict()


# ─── Read / Search ───────────────────────────────────────────────

@router.get("")
async def search_code_systems(
    url: str | None = None,
    name: str | None = None,
    status: str | None = None,
    fhir_version: str | None = Query(None, alias="fhirVersion"),
    count: int | None = Query(None, alias="_count", ge=0),
    offset: int | None = Query(None, alias="_offset", ge=0),
    store: TerminologyStore = Depends(get_store),
):
    params = SearchParams(
        url=url, name=name, status=status, fhir_version=fhir_version,
        limit=count, offset=offset,
    )
    return await ResourceQueries(store).search(ResourceType.CODE_SYSTEM, params)


@router.get("/{id_or_url:path}")
async def read_code_system(
    id_or_url: str, store: TerminologyStore = Depends(get_store),
):
    """Read by UUID, falling back to canonical url (latest version)."""
    return await ResourceQueries(store).read(ResourceType.CODE_SYSTEM, id_or_url)
