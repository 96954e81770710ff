"""ValueSet Operations — $expand and $validate-code against a TerminologyStore.

Invariants:
    - Expand: missing ValueSet → ResourceNotFoundError; missing expansion → empty, not an error
    - Expand returns the ValueSet document with `expansion` spliced in, not a Parameters envelope
    - Validate-Code delegates to the CodeSystem check; the ValueSet url is an anchor only,
      a missing ValueSet row does not change the answer and membership is NOT checked
"""

import logging
import uuid
from datetime import datetime, timezone
from uuid import UUID

from termserver.core.domain_types import ResourceType
from termserver.core.errors import ResourceNotFoundError
from termserver.core.expansion import build_expanded_value_set
from termserver.core.input_resolver import (
    BoundResource, ExpandInput, ValidateCodeInput, ValueSetValidateCodeInput,
)
from termserver.core.parameters import Parameters
from termserver.core.repository_protocols import TerminologyStore
from termserver.services.handle_codesystem import CodeSystemOperations

logger = logging.getLogger(__name__)


def new_expansion_identifier() -> str:
    return f"urn:uuid:{uuid.uuid4()}"


class ValueSetOperations:
    """Operations scoped to one ValueSet."""

    def __init__(self, store: TerminologyStore):
        self.store = store

    async def bind(self, value_set_id: UUID) -> BoundResource:
        value_set = await self.store.get_value_set_by_id(value_set_id)
        if not value_set:
            raise ResourceNotFoundError.by_id(ResourceType.VALUE_SET.value, value_set_id)
        return BoundResource(url=value_set.url, version=value_set.version)

    async def expand(self, inp: ExpandInput) -> dict:
        value_set = await self.store.get_value_set(inp.url, inp.version)
        if not value_set:
            raise ResourceNotFoundError.by_url(ResourceType.VALUE_SET.value, inp.url)

        entries = await self.store.get_value_set_expansion(value_set.id) or []
        expanded = build_expanded_value_set(
            value_set.content, entries,
            identifier=new_expansion_identifier(),
            timestamp=datetime.now(timezone.utc),
            filter_text=inp.filter,
            offset=inp.offset,
            count=inp.count,
        )
        logger.debug(
            f"expand {inp.url}",
            extra={
                "operation": "expand", "url": inp.url,
                "total": expanded["expansion"]["total"],
            },
        )
        return expanded

    async def validate_code(self, inp: ValueSetValidateCodeInput) -> Parameters:
        # TODO: check membership against get_value_set_expansion once the
        # intended semantics for unexpanded value sets are settled
        logger.debug(
            f"validate-code via {inp.url}",
            extra={"operation": "validate-code", "url": inp.url},
        )
        return await CodeSystemOperations(self.store).validate_code(
            ValidateCodeInput(system=inp.system, code=inp.code, display=inp.display),
        )
