"""Entropy sources for sampling field elements.

Use set_seed(n) at test start for reproducibility.
Default (no seed) uses os.urandom for cryptographic randomness.
"""

import logging
import os
import random as _random

logger = logging.getLogger(__name__)

# Extra random bits drawn beyond the bound, keeping modulo bias below 2^-64.
_SLACK_BYTES = 8


class DeterministicRNG:
    """Seeded PRNG wrapper. When seed is None, uses os.urandom."""

    def __init__(self, seed=None):
        self._seed = seed
        if seed is not None:
            self._rng = _random.Random(seed)
        else:
            self._rng = None  # Use os-level randomness

    @property
    def seed(self):
        return self._seed

    def randbelow(self, n: int) -> int:
        """Uniform integer in [0, n)."""
        if n <= 0:
            raise ValueError(f"randbelow bound must be positive, got {n}")
        if self._rng is not None:
            return self._rng.randrange(n)
        nbytes = (n.bit_length() + 7) // 8 + _SLACK_BYTES
        return int.from_bytes(os.urandom(nbytes), 'big') % n


# Global instance
_global_rng = DeterministicRNG(seed=None)


def set_seed(seed: int | None):
    """Set global seed for reproducibility. None = cryptographic randomness."""
    global _global_rng
    _global_rng = DeterministicRNG(seed=seed)
    if seed is None:
        logger.debug("Global RNG reset to os.urandom")
    else:
        logger.debug("Global RNG seeded with %r", seed)


def get_rng() -> DeterministicRNG:
    """Return the current global entropy source."""
    return _global_rng


def randbelow(n: int) -> int:
    return _global_rng.randbelow(n)
