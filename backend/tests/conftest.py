"""Root conftest — shared test configuration and seeded in-memory database.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - Seed data is inserted through the ORM, the same tables migrations create

Design Decisions:
    - SQLite in-memory: fast, no external dependency; PostgreSQL-specific
      features are not exercised by the read-only store
    - One seed fixture shared by service and route tests so both assert
      against the same terminology
"""

import os
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, create_async_engine, async_sessionmaker,
)

from termserver.db.base import Base  # noqa: E402
from termserver.infrastructure.sql_store import SqlTerminologyStore  # noqa: E402
from termserver.models import (  # noqa: E402
    ClosureEntry, CodeSystem, Concept, ConceptMap, ValueSet, ValueSetExpansion,
)

from seed_data import (  # noqa: E402
    CARDIAC_ENTRIES, CM_URL, CS_URL, OTHER_URL, VS_SMALL_URL, VS_UNEXPANDED_URL, VS_URL,
)


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def store(test_db):
    return SqlTerminologyStore(test_db)


@pytest.fixture
async def seeded(test_db):
    """Two versions of a letters CodeSystem, three ValueSets and a ConceptMap."""
    now = datetime.now(timezone.utc)

    old_cs = CodeSystem(
        url=CS_URL, version="0.9", status="retired", name="LettersOld",
        fhir_version="r4", updated_at=now - timedelta(days=30),
        content={"resourceType": "CodeSystem", "url": CS_URL, "version": "0.9"},
    )
    cs = CodeSystem(
        url=CS_URL, version="1.0", status="active", name="Letters",
        title="Letters of the alphabet", fhir_version="r4", updated_at=now,
        content={
            "resourceType": "CodeSystem", "url": CS_URL, "version": "1.0",
            "name": "Letters", "status": "active", "content": "complete",
        },
    )
    test_db.add_all([old_cs, cs])
    await test_db.flush()

    test_db.add_all([
        Concept(code_system_id=old_cs.id, code="legacy", display="Legacy letter"),
        Concept(
            code_system_id=cs.id, code="a", display="Alpha",
            definition="First letter",
            properties={"status": "active", "order": 1},
        ),
        Concept(code_system_id=cs.id, code="b", display="Beta"),
        Concept(code_system_id=cs.id, code="z"),
        Concept(
            code_system_id=cs.id, code="q", display="Quebec",
            properties=[{"code": "inactive", "valueBoolean": True}],
        ),
        ClosureEntry(
            code_system_id=cs.id, ancestor_code="a", descendant_code="b", depth=1,
        ),
    ])

    vs = ValueSet(
        url=VS_URL, version="1", status="active", name="Numbers",
        fhir_version="r4", updated_at=now,
        content={"resourceType": "ValueSet", "url": VS_URL, "name": "Numbers"},
    )
    vs_small = ValueSet(
        url=VS_SMALL_URL, status="active", name="Cardiac",
        fhir_version="r5", updated_at=now - timedelta(days=1),
        content={"resourceType": "ValueSet", "url": VS_SMALL_URL, "name": "Cardiac"},
    )
    vs_unexpanded = ValueSet(
        url=VS_UNEXPANDED_URL, status="draft", name="Unexpanded",
        updated_at=now - timedelta(days=2),
        content={"resourceType": "ValueSet", "url": VS_UNEXPANDED_URL},
    )
    test_db.add_all([vs, vs_small, vs_unexpanded])
    await test_db.flush()

    test_db.add_all([
        ValueSetExpansion(
            value_set_id=vs.id,
            expansion_data={"contains": [
                {"system": CS_URL, "code": f"n{i}", "display": f"Number {i}"}
                for i in range(150)
            ]},
        ),
        ValueSetExpansion(
            value_set_id=vs_small.id,
            expansion_data={"contains": CARDIAC_ENTRIES},
        ),
    ])

    cm = ConceptMap(
        url=CM_URL, version="2", status="active", name="LettersToSymbols",
        source_uri=CS_URL, target_uri=OTHER_URL, updated_at=now,
        content={
            "resourceType": "ConceptMap", "url": CM_URL,
            "group": [
                {
                    "source": CS_URL, "target": OTHER_URL,
                    "element": [
                        {"code": "a", "target": [
                            {"code": "@", "display": "At", "equivalence": "equivalent"},
                            {"code": "*"},
                        ]},
                        {"code": "b", "target": [
                            {"code": "#", "equivalence": "wider"},
                        ]},
                    ],
                },
                "not-a-group",
                {"source": OTHER_URL, "element": "malformed"},
            ],
        },
    )
    test_db.add(cm)
    await test_db.commit()

    return SimpleNamespace(
        code_system=cs, old_code_system=old_cs,
        value_set=vs, small_value_set=vs_small,
        unexpanded_value_set=vs_unexpanded, concept_map=cm,
    )
