"""Tests for SafeInt checked arithmetic wrapper."""

import pytest

from aex402.safe_int import (
    U64_MAX,
    DivisionByZero,
    S,
    SafeInt,
    SafeIntError,
    Underflow,
    WidthOverflow,
)


class TestSafeIntConstruction:
    """Tests for SafeInt construction."""

    def test_from_int(self):
        assert SafeInt(42).value == 42

    def test_from_safeint(self):
        assert SafeInt(SafeInt(42)).value == 42

    def test_from_large(self):
        """Intermediate values may exceed u128."""
        assert SafeInt(10**50).value == 10**50

    def test_from_invalid_type_raises(self):
        with pytest.raises(TypeError):
            SafeInt("42")  # type: ignore
        with pytest.raises(TypeError):
            SafeInt(3.14)  # type: ignore
        with pytest.raises(TypeError):
            SafeInt(True)

    def test_alias_s(self):
        assert S is SafeInt


class TestSafeIntArithmetic:
    """Tests for SafeInt arithmetic operations."""

    def test_add(self):
        assert (S(10) + S(5)).value == 15
        assert (S(10) + 5).value == 15
        assert (5 + S(10)).value == 15

    def test_sub(self):
        assert (S(10) - 3).value == 7
        assert (S(10) - 10).value == 0

    def test_sub_underflow_raises(self):
        """Subtraction below zero raises instead of going negative."""
        with pytest.raises(Underflow):
            S(5) - 10

    def test_mul(self):
        assert (S(10**20) * 10**20).value == 10**40
        assert (3 * S(4)).value == 12

    def test_floordiv_truncates(self):
        assert (S(10) // 3).value == 3
        assert (S(2) // S(3)).value == 0

    def test_floordiv_by_zero_raises(self):
        with pytest.raises(DivisionByZero):
            S(10) // 0
        with pytest.raises(DivisionByZero):
            S(10) // S(0)

    def test_errors_share_base(self):
        with pytest.raises(SafeIntError):
            S(0) - 1
        with pytest.raises(ArithmeticError):
            S(1) // 0


class TestSafeIntHelpers:
    """Tests for comparison and convergence helpers."""

    def test_comparisons_with_int(self):
        assert S(5) == 5
        assert S(5) == S(5)
        assert S(4) < 5
        assert S(6) >= S(6)
        assert S(7) > 6

    def test_checked_sub(self):
        assert S(10).checked_sub(4) == S(6)
        assert S(4).checked_sub(10) is None

    def test_abs_diff(self):
        assert S(10).abs_diff(12) == 2
        assert S(12).abs_diff(S(10)) == 2

    def test_int_conversion(self):
        assert int(S(9)) == 9
        assert [0, 1, 2][S(1)] == 1


class TestSafeIntWidth:
    """Tests for storage width validation."""

    def test_to_u64(self):
        assert S(U64_MAX).to_u64() == U64_MAX

    def test_to_u64_overflow(self):
        with pytest.raises(WidthOverflow):
            S(U64_MAX + 1).to_u64()

    def test_negative_rejected(self):
        with pytest.raises(WidthOverflow):
            S(-1).to_u64()

    def test_is_u64(self):
        assert S(0).is_u64()
        assert not S(U64_MAX + 1).is_u64()
