"""ValueSet Routes — $expand and $validate-code plus read and search.

Invariants:
    - $expand answers with the expanded ValueSet document, not a Parameters envelope
    - Instance forms pin the bound ValueSet's url and version
    - Operation routes are declared before the read route
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query

from termserver.api.dependencies import get_store
from termserver.core.domain_types import ResourceType, SearchParams
from termserver.core.input_resolver import (
    ArgumentSource, ParametersArguments, QueryArguments,
    resolve_expand, resolve_value_set_validate_code,
)
from termserver.core.repository_protocols import TerminologyStore
from termserver.schemas.parameters import ParametersBody
from termserver.services.handle_resources import ResourceQueries
from termserver.services.handle_valueset import ValueSetOperations

router = APIRouter(prefix="/ValueSet", tags=["ValueSet"])


def _expand_query(
    url: str | None = None,
    value_set_version: str | None = Query(None, alias="valueSetVersion"),
    filter: str | None = None,
    offset: str | None = None,
    count: str | None = None,
) -> ArgumentSource:
    return QueryArguments({
        "url": url, "valueSetVersion": value_set_version,
        "filter": filter, "offset": offset, "count": count,
    })


def _validate_code_query(
    url: str | None = None,
    value_set_version: str | None = Query(None, alias="valueSetVersion"),
    system: str | None = None,
    code: str | None = None,
    display: str | None = None,
) -> ArgumentSource:
    return QueryArguments({
        "url": url, "valueSetVersion": value_set_version,
        "system": system, "code": code, "display": display,
    })


# ─── $expand ─────────────────────────────────────────────────────

@router.get("/$expand")
async def expand_get(
    args: ArgumentSource = Depends(_expand_query),
    store: TerminologyStore = Depends(get_store),
):
    return await ValueSetOperations(store).expand(resolve_expand(args))


@router.post("/$expand")
async def expand_post(
    body: ParametersBody, store: TerminologyStore = Depends(get_store),
):
    args = ParametersArguments(body.to_envelope())
    return await ValueSetOperations(store).expand(resolve_expand(args))


@router.get("/{resource_id}/$expand")
async def expand_instance_get(
    resource_id: UUID,
    args: ArgumentSource = Depends(_expand_query),
    store: TerminologyStore = Depends(get_store),
):
    ops = ValueSetOperations(store)
    bound = await ops.bind(resource_id)
    return await ops.expand(resolve_expand(args, bound))


@router.post("/{resource_id}/$expand")
async def expand_instance_post(
    resource_id: UUID, body: ParametersBody,
    store: TerminologyStore = Depends(get_store),
):
    ops = ValueSetOperations(store)
    bound = await ops.bind(resource_id)
    args = ParametersArguments(body.to_envelope())
    return await ops.expand(resolve_expand(args, bound))


# ─── $validate-code ──────────────────────────────────────────────

@router.get("/$validate-code")
async def validate_code_get(
    args: ArgumentSource = Depends(_validate_code_query),
    store: TerminologyStore = Depends(get_store),
):
    result = await ValueSetOperations(store).validate_code(
        resolve_value_set_validate_code(args),
    )
    return result.to_dict()


@router.post("/$validate-code")
async def validate_code_post(
    body: ParametersBody, store: TerminologyStore = Depends(get_store),
):
    args = ParametersArguments(body.to_envelope())
    result = await ValueSetOperations(store).validate_code(
        resolve_value_set_validate_code(args),
    )
    return result.to_dict()


@router.get("/{resource_id}/$validate-code")
async def validate_code_instance_get(
    resource_id: UUID,
    args: ArgumentSource = Depends(_validate_code_query),
    store: TerminologyStore = Depends(get_store),
):
    ops = ValueSetOperations(store)
    bound = await ops.bind(resource_id)
    result = await ops.validate_code(resolve_value_set_validate_code(args, bound))
    return result.to_dict()


@router.post("/{resource_id}/$validate-code")
async def validate_code_instance_post(
    resource_id: UUID, body: ParametersBody,
    store: TerminologyStore = Depends(get_store),
):
    ops = ValueSetOperations(store)
    bound = await ops.bind(resource_id)
    args = ParametersArguments(body.to_envelope())
    result = await ops.validate_code(resolve_value_set_validate_code(args, bound))
    return result.to_dict()


# ─── Read / Search ───────────────────────────────────────────────

@router.get("")
async def search_value_sets(
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
    return await ResourceQueries(store).search(ResourceType.VALUE_SET, params)


@router.get("/{id_or_url:path}")
async def read_value_set(
    id_or_url: str, store: TerminologyStore = Depends(get_store),
):
    return await ResourceQueries(store).read(ResourceType.VALUE_SET, id_or_url)
