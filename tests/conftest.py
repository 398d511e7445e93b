import pytest

from highlighter.core.store import MemoryStore, TermStore


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def term_store(memory_store):
    return TermStore(memory_store)
