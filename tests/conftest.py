"""
Shared pytest fixtures for relmap tests.

Every test runs with:
- a fresh service container (new relation store, hook pipeline, settings)
- the working directory set to an empty temporary directory, so no
  .relmap/config.toml or pyproject.toml from the checkout is picked up
- RELMAP_* environment variables cleared
"""

import os

import pytest

from relmap.core.bootstrap import reset
from relmap.relations.store import RelationMappingStore
from relmap.resolution import RecordKindResolver


@pytest.fixture(autouse=True)
def isolated_relmap(tmp_path, monkeypatch):
    """Isolate container state, cwd and environment for each test."""
    for key in list(os.environ):
        if key.startswith("RELMAP_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    reset()
    yield
    reset()


@pytest.fixture
def resolver() -> RecordKindResolver:
    """Resolver using the default importlib loader."""
    return RecordKindResolver()


@pytest.fixture
def store(resolver) -> RelationMappingStore:
    """A relation store independent of the container's."""
    return RelationMappingStore(resolver=resolver)
