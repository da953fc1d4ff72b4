import pytest

from src.routers.profile import get_profile_engine


@pytest.fixture(autouse=True)
def fresh_profile_engine():
    """The router caches one engine per process; start every test without it."""
    get_profile_engine.cache_clear()
    yield
    get_profile_engine.cache_clear()
