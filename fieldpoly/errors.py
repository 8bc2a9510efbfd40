"""Exceptions raised by field and polynomial arithmetic."""


class FieldError(ArithmeticError):
    """Base class for fieldpoly errors."""


class DivisionByZero(FieldError, ZeroDivisionError):
    """Inverting or dividing by the zero field element."""


class DivisionByZeroPolynomial(FieldError, ZeroDivisionError):
    """Dividing by the zero polynomial."""


class InexactDivision(FieldError):
    """Exact polynomial division left a nonzero remainder."""

    def __init__(self, remainder):
        super().__init__(f"Polynomial division has nonzero remainder {remainder!r}")
        self.remainder = remainder


class ModulusMismatch(FieldError, TypeError):
    """Operands belong to fields with different moduli."""

    def __init__(self, left: int, right: int):
        super().__init__(f"Cannot mix elements of F_{left} and F_{right}")
        self.left = left
        self.right = right
