import pytest

from fieldpoly import rng


@pytest.fixture(autouse=True)
def seeded_rng():
    """Seed the global entropy source so random draws are reproducible."""
    rng.set_seed(42)
    yield
    rng.set_seed(None)
