"""Prime field arithmetic and dense polynomials over it."""

from fieldpoly.errors import (FieldError, DivisionByZero, DivisionByZeroPolynomial,
                              InexactDivision, ModulusMismatch)
from fieldpoly.field import FieldElement, PRIME, field, is_prime
from fieldpoly.polynomial import Polynomial
from fieldpoly.interpolation import (from_roots, lagrange_basis, interpolate,
                                     lagrange_coefficients_at_zero, interpolate_at_zero)
from fieldpoly import rng
