"""ConceptMap Routes — $translate plus read and search.

Invariants:
    - $translate without a ConceptMap url answers result=false (200), not 400
    - Instance forms pin the bound ConceptMap's url and version
    - Operation routes are declared before the read route
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query

from termserver.api.dependencies import get_store
from termserver.core.domain_types import ResourceType, SearchParams
from termserver.core.input_resolver import (
    ArgumentSource, ParametersArguments, QueryArguments, resolve_translate,
)
from termserver.core.repository_protocols import TerminologyStore
from termserver.schemas.parameters import ParametersBody
from termserver.services.handle_conceptmap import ConceptMapOperations
from termserver.services.handle_resources import ResourceQueries

router = APIRouter(prefix="/ConceptMap", tags=["ConceptMap"])


def _translate_query(
    url: str | None = None,
    concept_map_version: str | None = Query(None, alias="conceptMapVersion"),
    system: str | None = None,
    code: str | None = None,
    target: str | None = None,
    reverse: str | None = None,
) -> ArgumentSource:
    return QueryArguments({
        "url": url, "conceptMapVersion": concept_map_version,
        "system": system, "code": code, "target": target, "reverse": reverse,
    })


@router.get("/$translate")
async def translate_get(
    args: ArgumentSource = Depends(_translate_query),
    store: TerminologyStore = Depends(get_store),
):
    result = await ConceptMapOperations(store).translate(resolve_translate(args))
    return result.to_dict()


@router.post("/$translate")
async def translate_post(
    body: ParametersBody, store: TerminologyStore = Depends(get_store),
):
    args = ParametersArguments(body.to_envelope())
    result = await ConceptMapOperations(store).translate(resolve_translate(args))
    return result.to_dict()


@router.get("/{resource_id}/$translate")
async def translate_instance_get(
    resource_id: UUID,
    args: ArgumentSource = Depends(_translate_query),
    store: TerminologyStore = Depends(get_store),
):
    ops = ConceptMapOperations(store)
    bound = await ops.bind(resource_id)
    return (await ops.translate(resolve_translate(args, bound))).to_dict()


@router.post("/{resource_id}/$translate")
async def translate_instance_post(
    resource_id: UUID, body: ParametersBody,
    store: TerminologyStore = Depends(get_store),
):
    ops = ConceptMapOperations(store)
    bound = await ops.bind(resource_id)
    args = ParametersArguments(body.to_envelope())
    return (await ops.translate(resolve_translate(args, bound))).to_dict()


@router.get("")
async def search_concept_maps(
    url: str | None = None,
    status: str | None = None,
    fhir_version: str | None = Query(None, alias="fhirVersion"),
    count: int | None = Query(None, alias="_count", ge=0),
    offset: int | None = Query(None, alias="_offset", ge=0),
    store: TerminologyStore = Depends(get_store),
):
    params = SearchParams(
        url=url, status=status, fhir_version=fhir_version,
        limit=count, offset=offset,
    )
    return await ResourceQueries(store).search(ResourceType.CONCEPT_MAP, params)


@router.get("/{id_or_url:path}")
async def read_concept_map(
    id_or_url: str, store: TerminologyStore = Depends(get_store),
):
    return await ResourceQueries(store).read(ResourceType.CONCEPT_MAP, id_or_url)
