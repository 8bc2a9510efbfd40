"""Test utilities: small fields, polynomial builders, invariant checks."""

from fieldpoly import rng
from fieldpoly.field import field
from fieldpoly.polynomial import Polynomial

SMALL_PRIMES = (7, 17, 23)

F7 = field(7)
F17 = field(17)


def P17(coeffs):
    return Polynomial(coeffs, field=F17)


def random_polys(count, max_degree, f=F17, seed=0, allow_zero=True):
    """Reproducible list of random polynomials with degrees in [-1, max_degree]."""
    source = rng.DeterministicRNG(seed)
    polys = []
    for _ in range(count):
        lo = -1 if allow_zero else 0
        degree = lo + source.randbelow(max_degree - lo + 1)
        if degree == -1:
            polys.append(Polynomial.zero(f))
        else:
            polys.append(Polynomial.random(degree, rng=source, field=f))
    return polys


def assert_trimmed(p):
    """No trailing zero coefficient and degree matches the coefficient count."""
    if p.degree == -1:
        assert p.coefficients == []
    else:
        assert len(p.coefficients) == p.degree + 1
        assert p.coefficients[-1].value != 0
    assert all(0 <= c.value < p.field.MODULUS for c in p.coefficients)
