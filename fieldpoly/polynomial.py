"""Dense univariate polynomials over F_p."""

from typing import Iterable

from fieldpoly.errors import DivisionByZeroPolynomial, InexactDivision, ModulusMismatch
from fieldpoly.field import FieldElement


def _is_scalar(x) -> bool:
    return isinstance(x, (FieldElement, int))


class Polynomial:
    """Polynomial over F_p. coefficients[0] = constant term.

    The coefficient list never ends in a zero, so degree is always exact and
    the zero polynomial has degree -1 and no coefficients. Every operation
    returns a fresh polynomial with its own coefficient storage; the *_assign
    methods overwrite the receiver instead.
    """

    __slots__ = ('field', 'coefficients', 'degree')

    def __init__(self, coeffs: Iterable = (), field: type[FieldElement] | None = None):
        coeffs = list(coeffs)
        if field is None:
            field = next((type(c) for c in coeffs if isinstance(c, FieldElement)), FieldElement)
        self.field = field
        self.coefficients = [self._lift(c) for c in coeffs]
        self._trim()

    def _lift(self, c) -> FieldElement:
        """Copy c into this polynomial's field as a fresh element."""
        return self.field(self.field.coerce(c).value)

    def _trim(self):
        while self.coefficients and not self.coefficients[-1]:
            self.coefficients.pop()
        self.degree = len(self.coefficients) - 1

    def _check(self, other: 'Polynomial') -> 'Polynomial':
        if not isinstance(other, Polynomial):
            raise TypeError(f"Expected a polynomial, got {type(other).__name__}")
        if other.field.MODULUS != self.field.MODULUS:
            raise ModulusMismatch(self.field.MODULUS, other.field.MODULUS)
        return other

    def _promote(self, other) -> 'Polynomial':
        """Accept a polynomial, or a scalar as a constant polynomial."""
        if isinstance(other, Polynomial):
            return self._check(other)
        if _is_scalar(other):
            return Polynomial([other], field=self.field)
        raise TypeError(f"Expected a polynomial or scalar, got {type(other).__name__}")

    def _replace(self, other: 'Polynomial'):
        self.coefficients = other.coefficients
        self.degree = other.degree

    # Constructors

    @classmethod
    def zero(cls, field: type[FieldElement] = FieldElement) -> 'Polynomial':
        return cls([], field=field)

    @classmethod
    def one(cls, field: type[FieldElement] = FieldElement) -> 'Polynomial':
        return cls([1], field=field)

    @classmethod
    def monomial(cls, degree: int, coeff=1, field: type[FieldElement] | None = None) -> 'Polynomial':
        """coeff * x^degree."""
        if degree < 0:
            raise ValueError(f"Monomial degree must be non-negative, got {degree}")
        if field is None:
            field = type(coeff) if isinstance(coeff, FieldElement) else FieldElement
        return cls([0] * degree + [coeff], field=field)

    @classmethod
    def random(cls, degree: int, constant=None, rng=None,
               field: type[FieldElement] | None = None) -> 'Polynomial':
        """Random polynomial of exactly the given degree.

        If constant is given, p(0) = constant (a secret sharing dealer
        polynomial). The leading coefficient is always non-zero, except that a
        degree-0 polynomial is just the constant itself, so random(0, constant=0)
        is the zero polynomial.
        """
        if degree < 0:
            raise ValueError(f"Degree must be non-negative, got {degree}")
        if field is None:
            field = type(constant) if isinstance(constant, FieldElement) else FieldElement
        coeffs = [field.random(rng) for _ in range(degree)]
        coeffs.append(field.random_nonzero(rng))
        if constant is not None:
            coeffs[0] = constant
        return cls(coeffs, field=field)

    def copy(self) -> 'Polynomial':
        return Polynomial(self.coefficients, field=self.field)

    # Inspection

    def is_zero(self) -> bool:
        return self.degree == -1

    def leading_coefficient(self) -> FieldElement | None:
        if self.is_zero():
            return None
        return self.field(self.coefficients[self.degree].value)

    def coefficient(self, i: int) -> FieldElement:
        """Coefficient of x^i; zero outside 0..degree."""
        if 0 <= i <= self.degree:
            return self.field(self.coefficients[i].value)
        return self.field.zero()

    # Arithmetic

    def add(self, other: 'Polynomial') -> 'Polynomial':
        other = self._check(other)
        n = max(self.degree, other.degree) + 1
        return Polynomial([self.coefficient(i) + other.coefficient(i) for i in range(n)],
                          field=self.field)

    def subtract(self, other: 'Polynomial') -> 'Polynomial':
        other = self._check(other)
        n = max(self.degree, other.degree) + 1
        return Polynomial([self.coefficient(i) - other.coefficient(i) for i in range(n)],
                          field=self.field)

    def negate(self) -> 'Polynomial':
        return Polynomial([-c for c in self.coefficients], field=self.field)

    def multiply(self, other: 'Polynomial') -> 'Polynomial':
        """Schoolbook convolution, O(n*m) field multiplications."""
        other = self._check(other)
        if self.is_zero() or other.is_zero():
            return Polynomial.zero(self.field)
        product = [self.field.zero() for _ in range(self.degree + other.degree + 1)]
        for i, a in enumerate(self.coefficients):
            if not a:
                continue
            for j, b in enumerate(other.coefficients):
                product[i + j] = product[i + j] + a * b
        return Polynomial(product, field=self.field)

    def scalar_mul(self, scalar) -> 'Polynomial':
        scalar = self.field.coerce(scalar)
        return Polynomial([c * scalar for c in self.coefficients], field=self.field)

    def scalar_div(self, scalar) -> 'Polynomial':
        """Multiply by scalar^{-1}. Raises DivisionByZero for a zero scalar."""
        scalar = self.field.coerce(scalar)
        return self.scalar_mul(scalar.inverse())

    def div_rem(self, divisor: 'Polynomial') -> tuple['Polynomial', 'Polynomial']:
        """Schoolbook long division: returns (quotient, remainder).

        Each step cancels the remainder's leading term with a scaled, shifted
        copy of the divisor, until deg(remainder) < deg(divisor).
        """
        divisor = self._check(divisor)
        if divisor.is_zero():
            raise DivisionByZeroPolynomial("Division by zero polynomial")
        if self.degree < divisor.degree:
            return Polynomial.zero(self.field), self.copy()

        rem = [self.field(c.value) for c in self.coefficients]
        quotient = [self.field.zero() for _ in range(self.degree - divisor.degree + 1)]
        lead_inv = divisor.coefficients[divisor.degree].inverse()

        while len(rem) - 1 >= divisor.degree:
            shift = len(rem) - 1 - divisor.degree
            ratio = rem[-1] * lead_inv
            quotient[shift] = ratio
            for i, c in enumerate(divisor.coefficients):
                rem[i + shift] = rem[i + shift] - ratio * c
            # leading term is now exactly zero
            while rem and not rem[-1]:
                rem.pop()

        return Polynomial(quotient, field=self.field), Polynomial(rem, field=self.field)

    def divide(self, divisor: 'Polynomial') -> 'Polynomial':
        """Exact division. Raises InexactDivision if the remainder is non-zero."""
        quotient, remainder = self.div_rem(divisor)
        if not remainder.is_zero():
            raise InexactDivision(remainder)
        return quotient

    def remainder(self, divisor: 'Polynomial') -> 'Polynomial':
        return self.div_rem(divisor)[1]

    def evaluate(self, x) -> FieldElement:
        """Evaluate polynomial at x using Horner's method."""
        x = self.field.coerce(x)
        result = self.field.zero()
        for coeff in reversed(self.coefficients):
            result = result * x + coeff
        return result

    def compose(self, q: 'Polynomial') -> 'Polynomial':
        """Return p(q(x)).

        Horner's scheme with polynomial arithmetic: acc = acc * q + c_i from the
        top coefficient down. That is deg(p) polynomial multiplications whose
        operands grow up to degree deg(p) * deg(q), each schoolbook quadratic,
        so expect roughly O(deg(p)^2 * deg(q)^2) field operations.
        """
        q = self._check(q)
        result = Polynomial.zero(self.field)
        for coeff in reversed(self.coefficients):
            result = result.multiply(q).add(Polynomial([coeff], field=self.field))
        return result

    def __call__(self, arg):
        """p(x) evaluates at a scalar; p(q) composes with a polynomial."""
        if isinstance(arg, Polynomial):
            return self.compose(arg)
        return self.evaluate(arg)

    # In-place variants

    def add_assign(self, other):
        self._replace(self + other)

    def sub_assign(self, other):
        self._replace(self - other)

    def mul_assign(self, other):
        self._replace(self * other)

    def div_assign(self, other):
        self._replace(self / other)

    def rem_assign(self, divisor: 'Polynomial'):
        self._replace(self.remainder(divisor))

    # Operators

    def __add__(self, other):
        if not (isinstance(other, Polynomial) or _is_scalar(other)):
            return NotImplemented
        return self.add(self._promote(other))

    def __radd__(self, other):
        if not _is_scalar(other):
            return NotImplemented
        return self._promote(other).add(self)

    def __sub__(self, other):
        if not (isinstance(other, Polynomial) or _is_scalar(other)):
            return NotImplemented
        return self.subtract(self._promote(other))

    def __rsub__(self, other):
        if not _is_scalar(other):
            return NotImplemented
        return self._promote(other).subtract(self)

    def __mul__(self, other):
        if isinstance(other, Polynomial):
            return self.multiply(other)
        if _is_scalar(other):
            return self.scalar_mul(other)
        return NotImplemented

    def __rmul__(self, other):
        if _is_scalar(other):
            return self.scalar_mul(other)
        return NotImplemented

    def __truediv__(self, other):
        if isinstance(other, Polynomial):
            return self.divide(other)
        if _is_scalar(other):
            return self.scalar_div(other)
        return NotImplemented

    def __floordiv__(self, other):
        if not isinstance(other, Polynomial):
            return NotImplemented
        return self.div_rem(other)[0]

    def __mod__(self, other):
        if not isinstance(other, Polynomial):
            return NotImplemented
        return self.remainder(other)

    def __divmod__(self, other):
        if not isinstance(other, Polynomial):
            return NotImplemented
        return self.div_rem(other)

    def __neg__(self):
        return self.negate()

    def __eq__(self, other):
        if not isinstance(other, Polynomial):
            return NotImplemented
        if other.field.MODULUS != self.field.MODULUS or other.degree != self.degree:
            return False
        return all(a == b for a, b in zip(self.coefficients, other.coefficients))

    __hash__ = None

    def __repr__(self):
        return f"Polynomial({self.coefficients!r})"

    def __str__(self):
        if self.is_zero():
            return "0"
        terms = []
        for i in range(self.degree, -1, -1):
            c = self.coefficients[i]
            if not c:
                continue
            if i == 0:
                terms.append(str(c))
                continue
            coeff = "" if c.value == 1 else str(c)
            terms.append(f"{coeff}x" if i == 1 else f"{coeff}x^{i}")
        return " + ".join(terms)
