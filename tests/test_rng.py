"""Tests for the entropy sources."""

import pytest

from fieldpoly import rng


def test_set_seed_reproducible():
    rng.set_seed(7)
    a = [rng.randbelow(1000) for _ in range(5)]
    rng.set_seed(7)
    b = [rng.randbelow(1000) for _ in range(5)]
    assert a == b


def test_set_seed_none_uses_system_source():
    rng.set_seed(None)
    assert rng.get_rng().seed is None
    assert 0 <= rng.randbelow(10) < 10


def test_get_rng_tracks_seed():
    rng.set_seed(3)
    assert rng.get_rng().seed == 3


def test_randbelow_bounds():
    for source in (rng.DeterministicRNG(), rng.DeterministicRNG(1)):
        assert source.randbelow(1) == 0
        for _ in range(50):
            assert 0 <= source.randbelow(5) < 5


def test_randbelow_rejects_empty_range():
    with pytest.raises(ValueError):
        rng.DeterministicRNG().randbelow(0)
    with pytest.raises(ValueError):
        rng.DeterministicRNG(1).randbelow(-3)
