"""Route Dependencies — wires a request-scoped TerminologyStore into handlers.

Invariants:
    - One AsyncSession (and so one store) per request, closed by get_db
    - Routes depend on get_store, never on the session directly
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from termserver.infrastructure.database import get_db
from termserver.infrastructure.sql_store import SqlTerminologyStore


async def get_store(db: AsyncSession = Depends(get_db)) -> SqlTerminologyStore:
    return SqlTerminologyStore(db)
