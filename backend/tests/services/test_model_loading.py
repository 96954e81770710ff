"""Model Loading — child collections are never loaded implicitly.

Invariants:
    - CodeSystem.concepts and ValueSet.expansions raise on lazy access;
      the store queries them explicitly
"""

import pytest
from sqlalchemy import inspect

from termserver.models.code_system import CodeSystem
from termserver.models.value_set import ValueSet


@pytest.mark.parametrize("model, collection", [
    (CodeSystem, "concepts"),
    (ValueSet, "expansions"),
])
def test_collections_raise_on_lazy_load(model, collection):
    assert inspect(model).relationships[collection].lazy == "raise"
