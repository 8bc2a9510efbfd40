"""Finite field arithmetic over F_p for primes p below 2^64.

The default field uses p = 2^64 - 2^32 + 1. Every other modulus gets its own
FieldElement subclass from field(p), so elements of different fields never mix
silently: combining them raises ModulusMismatch.
"""

import functools
import hmac
import logging

from fieldpoly.errors import DivisionByZero, ModulusMismatch
from fieldpoly.rng import get_rng

logger = logging.getLogger(__name__)

PRIME = (1 << 64) - (1 << 32) + 1  # 2^64 - 2^32 + 1

U64_MAX = (1 << 64) - 1
I128_MIN = -(1 << 127)
I128_MAX = (1 << 127) - 1
ENCODED_SIZE = 8  # bytes, big-endian

# Deterministic Miller-Rabin witnesses, exact for n < 3.3 * 10^24.
_MR_BASES = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37)


def is_prime(n: int) -> bool:
    """Deterministic Miller-Rabin primality test (exact for 64-bit n)."""
    if n < 2:
        return False
    for p in _MR_BASES:
        if n % p == 0:
            return n == p
    d, s = n - 1, 0
    while d % 2 == 0:
        d //= 2
        s += 1
    for a in _MR_BASES:
        x = pow(a, d, n)
        if x == 1 or x == n - 1:
            continue
        for _ in range(s - 1):
            x = x * x % n
            if x == n - 1:
                break
        else:
            return False
    return True


def _is_scalar(x) -> bool:
    return isinstance(x, (FieldElement, int))


class FieldElement:
    """Element of the finite field F_p, p = MODULUS.

    MODULUS is assumed prime and never checked here; a composite modulus gives
    wrong inverses rather than an error. Use field(p, check_prime=True) to
    validate it once up front.
    """

    __slots__ = ('value',)

    MODULUS = PRIME
    _NAME = 'F'

    def __init__(self, value: int):
        if not isinstance(value, int):
            raise TypeError(f"Field elements are built from ints, got {type(value).__name__}")
        self.value = value % self.MODULUS

    @classmethod
    def coerce(cls, other) -> 'FieldElement':
        """Bring an int or an element of this same field into the field."""
        if isinstance(other, FieldElement):
            if other.MODULUS != cls.MODULUS:
                raise ModulusMismatch(cls.MODULUS, other.MODULUS)
            return other
        if isinstance(other, int):
            return cls(other)
        raise TypeError(f"Expected a field element or int, got {type(other).__name__}")

    def _coerce(self, other) -> 'FieldElement':
        return self.coerce(other)

    # Named operations

    def add(self, other) -> 'FieldElement':
        other = self._coerce(other)
        return type(self)(self.value + other.value)

    def subtract(self, other) -> 'FieldElement':
        other = self._coerce(other)
        return type(self)(self.value + self.MODULUS - other.value)

    def multiply(self, other) -> 'FieldElement':
        other = self._coerce(other)
        return type(self)(self.value * other.value)

    def divide(self, other) -> 'FieldElement':
        """a * b^{-1}. Raises DivisionByZero if b is zero."""
        return self.multiply(self._coerce(other).inverse())

    def negate(self) -> 'FieldElement':
        return type(self)(self.MODULUS - self.value)

    def pow(self, exp) -> 'FieldElement':
        """Square-and-multiply exponentiation; a^0 = 1 for every a, including 0."""
        if isinstance(exp, FieldElement):
            exp = exp.value
        if exp < 0:
            return self.inverse().pow(-exp)
        return type(self)(pow(self.value, exp, self.MODULUS))

    def inverse(self) -> 'FieldElement':
        """Multiplicative inverse via Fermat's little theorem: a^{p-2} mod p."""
        if self.value == 0:
            raise DivisionByZero("Cannot invert zero")
        return type(self)(pow(self.value, self.MODULUS - 2, self.MODULUS))

    # In-place variants: replace this element's value, return None.

    def add_assign(self, other):
        self.value = self.add(other).value

    def sub_assign(self, other):
        self.value = self.subtract(other).value

    def mul_assign(self, other):
        self.value = self.multiply(other).value

    def div_assign(self, other):
        self.value = self.divide(other).value

    # Operators

    def __add__(self, other):
        if not _is_scalar(other):
            return NotImplemented
        return self.add(other)

    def __radd__(self, other):
        if isinstance(other, int):
            return type(self)(other).add(self)
        return NotImplemented

    def __sub__(self, other):
        if not _is_scalar(other):
            return NotImplemented
        return self.subtract(other)

    def __rsub__(self, other):
        if isinstance(other, int):
            return type(self)(other).subtract(self)
        return NotImplemented

    def __mul__(self, other):
        if not _is_scalar(other):
            return NotImplemented
        return self.multiply(other)

    def __rmul__(self, other):
        if isinstance(other, int):
            return type(self)(other).multiply(self)
        return NotImplemented

    def __truediv__(self, other):
        if not _is_scalar(other):
            return NotImplemented
        return self.divide(other)

    def __rtruediv__(self, other):
        if isinstance(other, int):
            return type(self)(other).divide(self)
        return NotImplemented

    def __neg__(self):
        return self.negate()

    def __pow__(self, exp):
        return self.pow(exp)

    def __eq__(self, other):
        """Constant-time comparison of the fixed-width encodings."""
        if isinstance(other, int):
            other = type(self)(other)
        elif not isinstance(other, FieldElement):
            return NotImplemented
        elif other.MODULUS != self.MODULUS:
            return False
        return hmac.compare_digest(self.to_bytes(), other.to_bytes())

    def __hash__(self):
        return hash(self.value)

    def __repr__(self):
        return f"{self._NAME}({self.value})"

    def __str__(self):
        return str(self.value)

    def __bool__(self):
        return self.value != 0

    def __int__(self):
        return self.value

    # Conversions

    def to_u64(self) -> int:
        return self.value

    @classmethod
    def from_u64(cls, n: int) -> 'FieldElement':
        if not 0 <= n <= U64_MAX:
            raise ValueError(f"{n} does not fit in an unsigned 64-bit integer")
        return cls(n)

    @classmethod
    def from_i128(cls, n: int) -> 'FieldElement':
        """Map a signed 128-bit integer into [0, p-1]; negatives wrap around."""
        if not I128_MIN <= n <= I128_MAX:
            raise ValueError(f"{n} does not fit in a signed 128-bit integer")
        return cls(((n % cls.MODULUS) + cls.MODULUS) % cls.MODULUS)

    def to_bytes(self) -> bytes:
        """Fixed 8-byte big-endian encoding of value."""
        return self.value.to_bytes(ENCODED_SIZE, 'big')

    @classmethod
    def from_bytes(cls, data: bytes) -> 'FieldElement':
        if len(data) != ENCODED_SIZE:
            raise ValueError(f"Expected {ENCODED_SIZE} bytes, got {len(data)}")
        return cls(int.from_bytes(data, 'big'))

    # Constructors

    @classmethod
    def random(cls, rng=None) -> 'FieldElement':
        """Return a uniformly random field element (may be zero).

        rng is any object with randbelow(n); defaults to the global source.
        """
        source = rng if rng is not None else get_rng()
        return cls(source.randbelow(cls.MODULUS))

    @classmethod
    def random_nonzero(cls, rng=None) -> 'FieldElement':
        """Return a random non-zero field element."""
        source = rng if rng is not None else get_rng()
        return cls(source.randbelow(cls.MODULUS - 1) + 1)

    @classmethod
    def zero(cls) -> 'FieldElement':
        return cls(0)

    @classmethod
    def one(cls) -> 'FieldElement':
        return cls(1)


@functools.cache
def _field_class(modulus: int) -> type[FieldElement]:
    name = f'GF{modulus}'
    cls = type(name, (FieldElement,), {'__slots__': (), 'MODULUS': modulus, '_NAME': name})
    logger.debug("Created field class %s", name)
    return cls


def field(modulus: int, check_prime: bool = False) -> type[FieldElement]:
    """Return the FieldElement class for F_modulus.

    Classes are cached, so field(17) is field(17). Primality of modulus is the
    caller's responsibility unless check_prime is set.
    """
    if isinstance(modulus, bool) or not isinstance(modulus, int):
        raise TypeError(f"Modulus must be an int, got {type(modulus).__name__}")
    if not 2 <= modulus <= U64_MAX:
        raise ValueError(f"Modulus must be in [2, 2^64), got {modulus}")
    if check_prime and not is_prime(modulus):
        raise ValueError(f"Modulus {modulus} is not prime")
    if modulus == PRIME:
        return FieldElement
    return _field_class(modulus)
