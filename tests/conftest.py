import pytest

from lambda_openapi.metadata.store import store


@pytest.fixture(autouse=True)
def clean_store():
    """Each test starts with fresh sequence counters and an empty store."""
    store.reset_sequence()
    yield
    store.clear_all()
    store.reset_sequence()
