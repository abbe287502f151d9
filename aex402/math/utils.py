"""Integer square root and slippage/imbalance helpers."""

from __future__ import annotations

from aex402.constants import FEE_DENOMINATOR


def isqrt(n: int) -> int:
    """Floor of the square root of n, by Newton's method on integers.

    Iterates y = (x + n // x) // 2 from (n + 1) // 2 while it keeps decreasing;
    the first non-decreasing step means x is the floor root.

    Raises:
        ValueError: If n is negative
    """
    if n < 0:
        raise ValueError(f"isqrt of negative number: {n}")
    if n == 0:
        return 0
    if n <= 3:
        return 1

    x = n
    y = (x + 1) // 2
    while y < x:
        x = y
        y = (x + n // x) // 2
    return x


def calc_min_output(expected_output: int, slippage_bps: int) -> int:
    """Minimum acceptable output for a slippage tolerance in basis points.

    Raises:
        ValueError: If slippage_bps is outside [0, 10000]
    """
    if not 0 <= slippage_bps <= FEE_DENOMINATOR:
        raise ValueError(f"slippage_bps must be in [0, {FEE_DENOMINATOR}], got {slippage_bps}")
    return expected_output * (FEE_DENOMINATOR - slippage_bps) // FEE_DENOMINATOR


def check_imbalance(bal0: int, bal1: int, max_imbalance_ratio: float = 10.0) -> bool:
    """True if the larger balance is at most max_imbalance_ratio times the smaller.

    A pool with an empty side is never acceptable. Display-only float ratio.
    """
    if bal0 == 0 or bal1 == 0:
        return False
    if bal0 > bal1:
        ratio = bal0 / bal1
    else:
        ratio = bal1 / bal0
    return ratio <= max_imbalance_ratio
