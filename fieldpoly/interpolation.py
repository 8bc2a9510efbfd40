"""Vanishing polynomials and Lagrange interpolation over F_p."""

from typing import Sequence

from fieldpoly.field import FieldElement
from fieldpoly.polynomial import Polynomial


def _field_of(values: Sequence, field: type[FieldElement] | None) -> type[FieldElement]:
    if field is not None:
        return field
    return next((type(v) for v in values if isinstance(v, FieldElement)), FieldElement)


def _check_distinct(xs: Sequence[FieldElement]):
    seen = set()
    for x in xs:
        if x.value in seen:
            raise ValueError(f"Duplicate interpolation point x = {x.value}")
        seen.add(x.value)


def from_roots(roots: Sequence, field: type[FieldElement] | None = None) -> Polynomial:
    """Vanishing polynomial prod_i (x - r_i); the constant 1 for no roots."""
    field = _field_of(roots, field)
    p = Polynomial.one(field)
    for root in roots:
        p = p * Polynomial([-field.coerce(root), 1], field=field)
    return p


def lagrange_basis(xs: Sequence, field: type[FieldElement] | None = None) -> list[Polynomial]:
    """Return [L_0, ..., L_{n-1}] with L_i(x) = prod_{j!=i} (x - x_j) / (x_i - x_j).

    Each L_i is Z(x) / (x - x_i) scaled by 1 / prod_{j!=i} (x_i - x_j), where
    Z is the vanishing polynomial of all xs. The divisions are exact.
    """
    if not xs:
        return []
    field = _field_of(xs, field)
    xs = [field.coerce(x) for x in xs]
    _check_distinct(xs)

    z = from_roots(xs, field)
    basis = []
    for i, xi in enumerate(xs):
        denominator = field.one()
        for j, xj in enumerate(xs):
            if i != j:
                denominator = denominator * (xi - xj)
        basis.append((z / from_roots([xi], field)) / denominator)
    return basis


def interpolate(xs: Sequence, ys: Sequence, field: type[FieldElement] | None = None) -> Polynomial:
    """The unique polynomial f of degree < n with f(xs[i]) = ys[i]."""
    if len(xs) != len(ys):
        raise ValueError(f"Mismatched lengths: {len(xs)} x-values, {len(ys)} y-values")
    field = _field_of(list(xs) + list(ys), field)
    if not xs:
        return Polynomial.zero(field)
    result = Polynomial.zero(field)
    for y, basis in zip(ys, lagrange_basis(xs, field)):
        result = result + basis * y
    return result


def lagrange_coefficients_at_zero(x_values: Sequence[FieldElement],
                                  field: type[FieldElement] | None = None) -> list[FieldElement]:
    """Precompute Lagrange basis coefficients at x=0 for given x-coordinates.

    Returns lambda_i = prod_{j!=i} (-x_j) / (x_i - x_j) for each i.
    """
    if not x_values:
        return []
    field = _field_of(x_values, field)
    x_values = [field.coerce(x) for x in x_values]
    _check_distinct(x_values)
    n = len(x_values)
    lambdas = []
    for i in range(n):
        numerator = field.one()
        denominator = field.one()
        for j in range(n):
            if i == j:
                continue
            numerator = numerator * (-x_values[j])
            denominator = denominator * (x_values[i] - x_values[j])
        lambdas.append(numerator / denominator)
    return lambdas


def interpolate_at_zero(points: Sequence[tuple[FieldElement, FieldElement]],
                        field: type[FieldElement] | None = None) -> FieldElement:
    """Lagrange interpolation evaluated at x=0.

    points: list of (x_i, y_i) pairs.
    Returns p(0) = sum_i y_i * lambda_i.
    """
    if not points:
        raise ValueError("Need at least one point to interpolate")
    field = _field_of([v for point in points for v in point], field)
    lambdas = lagrange_coefficients_at_zero([x for x, _ in points], field)
    result = field.zero()
    for (_, y), lam in zip(points, lambdas):
        result = result + lam * y
    return result
