"""Store Failures — verifies DatabaseError mapping and propagation.

Invariants:
    - A SQLAlchemy failure inside the store surfaces as DatabaseError (STORE_FAILURE)
    - Handlers never swallow or retry store failures
"""

import pytest
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine

from termserver.core.errors import DatabaseError
from termserver.core.input_resolver import (
    ExpandInput, LookupInput, SubsumesInput, TranslateInput, ValidateCodeInput,
    ValueSetValidateCodeInput,
)
from termserver.infrastructure.database import DatabaseSessionManager
from termserver.infrastructure.sql_store import SqlTerminologyStore
from termserver.services.handle_codesystem import CodeSystemOperations
from termserver.services.handle_conceptmap import ConceptMapOperations
from termserver.services.handle_valueset import ValueSetOperations


class _FailingStore:
    """Every store call fails the way SqlTerminologyStore reports failures."""

    def __init__(self):
        self.calls = 0

    def __getattr__(self, name):
        async def fail(*args, **kwargs):
            self.calls += 1
            raise DatabaseError("query failed", name)
        return fail


async def test_sql_store_maps_driver_errors():
    """Querying a database without the schema raises DatabaseError, not OperationalError."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    try:
        async with AsyncSession(engine) as session:
            with pytest.raises(DatabaseError) as exc:
                await SqlTerminologyStore(session).get_code_system("http://x")
        assert exc.value.code == "STORE_FAILURE"
        assert exc.value.http_status == 503
        assert exc.value.context.operation == "get_code_system"
    finally:
        await engine.dispose()


@pytest.mark.parametrize("call", [
    lambda s: CodeSystemOperations(s).lookup(LookupInput("http://x", "a")),
    lambda s: CodeSystemOperations(s).validate_code(ValidateCodeInput("http://x", "a")),
    lambda s: CodeSystemOperations(s).subsumes(SubsumesInput("http://x", "a", "b")),
    lambda s: ValueSetOperations(s).expand(ExpandInput("http://x")),
    lambda s: ValueSetOperations(s).validate_code(
        ValueSetValidateCodeInput("http://x", "http://s", "a"),
    ),
    lambda s: ConceptMapOperations(s).translate(TranslateInput("http://s", "a", url="http://x")),
])
async def test_handlers_propagate_store_failure_once(call):
    store = _FailingStore()
    with pytest.raises(DatabaseError):
        await call(store)
    assert store.calls == 1


async def test_session_manager_maps_escaping_errors():
    manager = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    try:
        with pytest.raises(DatabaseError) as exc:
            async with manager.session() as session:
                await session.execute(text("SELECT code FROM missing_table"))
        assert exc.value.operation == "session"
        assert exc.value.http_status == 503
    finally:
        await manager.dispose()
