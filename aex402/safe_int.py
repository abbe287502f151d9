"""Checked integer wrapper for fixed-point pool math.

On-chain balances are u64 but the program multiplies them in u128, so the
wrapper never bounds intermediate values; it only refuses the operations
that would silently produce garbage:
- Division by zero raises DivisionByZero
- Subtraction below zero raises Underflow
- to_u64() validates that a token amount fits the on-chain u64

Usage pattern:
    from aex402.safe_int import S

    def grow(d: int, ann: int) -> int:
        sd, sa = S(d), S(ann)
        return ((sd * sa) // (sa - 1)).value
"""

from __future__ import annotations

from aex402.errors import AeX402Error

U8_MAX = 2**8 - 1
U64_MAX = 2**64 - 1
I64_MIN = -(2**63)
I64_MAX = 2**63 - 1


class SafeIntError(AeX402Error, ArithmeticError):
    """Base class for SafeInt arithmetic errors."""

    pass


class DivisionByZero(SafeIntError):
    """Division by zero."""

    pass


class Underflow(SafeIntError):
    """Subtraction would produce a negative result."""

    pass


class WidthOverflow(SafeIntError):
    """Value does not fit the requested unsigned width."""

    pass


class SafeInt:
    """Non-negative integer with checked subtraction and division.

    Attributes:
        value: The underlying Python int (read-only)
    """

    __slots__ = ("_value",)
    _value: int

    def __init__(self, value: int | SafeInt) -> None:
        if isinstance(value, SafeInt):
            self._value = value._value
        elif isinstance(value, int) and not isinstance(value, bool):
            self._value = value
        else:
            raise TypeError(f"SafeInt requires int, got {type(value).__name__}")

    @property
    def value(self) -> int:
        return self._value

    def __repr__(self) -> str:
        return f"SafeInt({self._value})"

    def __hash__(self) -> int:
        return hash(self._value)

    def __add__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value + _extract_value(other))

    __radd__ = __add__

    def __sub__(self, other: SafeInt | int) -> SafeInt:
        """Subtract other from self.

        Raises:
            Underflow: If result would be negative
        """
        other_val = _extract_value(other)
        result = self._value - other_val
        if result < 0:
            raise Underflow(f"Underflow: {self._value} - {other_val} = {result}")
        return SafeInt(result)

    def __mul__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value * _extract_value(other))

    __rmul__ = __mul__

    def __floordiv__(self, other: SafeInt | int) -> SafeInt:
        """Truncating division, matching the program's u128 `/`.

        Raises:
            DivisionByZero: If other is zero
        """
        other_val = _extract_value(other)
        if other_val == 0:
            raise DivisionByZero(f"Division by zero: {self._value} // 0")
        return SafeInt(self._value // other_val)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SafeInt):
            return self._value == other._value
        if isinstance(other, int):
            return self._value == other
        return NotImplemented

    def __lt__(self, other: SafeInt | int) -> bool:
        return self._value < _extract_value(other)

    def __le__(self, other: SafeInt | int) -> bool:
        return self._value <= _extract_value(other)

    def __gt__(self, other: SafeInt | int) -> bool:
        return self._value > _extract_value(other)

    def __ge__(self, other: SafeInt | int) -> bool:
        return self._value >= _extract_value(other)

    def __int__(self) -> int:
        return self._value

    def __index__(self) -> int:
        return self._value

    def checked_sub(self, other: SafeInt | int) -> SafeInt | None:
        """Subtract, returning None on underflow instead of raising."""
        result = self._value - _extract_value(other)
        if result < 0:
            return None
        return SafeInt(result)

    def abs_diff(self, other: SafeInt | int) -> int:
        """Distance between two values, used by the Newton convergence checks."""
        return abs(self._value - _extract_value(other))

    def to_u64(self) -> int:
        """Convert to int, validating it fits an on-chain u64.

        Raises:
            WidthOverflow: If value is negative or exceeds 2^64-1
        """
        if self._value < 0:
            raise WidthOverflow(f"Negative value cannot be u64: {self._value}")
        if self._value > U64_MAX:
            raise WidthOverflow(f"Value exceeds u64 max: {self._value}")
        return self._value

    def is_u64(self) -> bool:
        return 0 <= self._value <= U64_MAX


def _extract_value(x: SafeInt | int) -> int:
    if isinstance(x, SafeInt):
        return x._value
    return x


S = SafeInt
