"""StableSwap pool math.

Newton-Raphson solvers for the invariant D and the counterparty balance Y,
plus the swap and liquidity simulations built on them.

IMPORTANT: Every step uses truncating integer division in exactly the order
the on-chain program uses (two sequential divisions for D^3 / 4xy, etc.).
Rational or float arithmetic drifts from the program after a few iterations.
All token-moving results are MathResult values; only the display-only price
impact is a float.
"""

from __future__ import annotations

import functools
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import ParamSpec, TypeVar

import structlog

from aex402.constants import FEE_DENOMINATOR, NEWTON_ITERATIONS, PRECISION
from aex402.safe_int import S, SafeInt, SafeIntError

from .result import MathResult
from .utils import isqrt

logger = structlog.get_logger()

P = ParamSpec("P")
T = TypeVar("T")


def _guarded(func: Callable[P, MathResult[T]]) -> Callable[P, MathResult[T]]:
    """Turn SafeInt underflow / division-by-zero into a domain violation result."""

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> MathResult[T]:
        try:
            return func(*args, **kwargs)
        except SafeIntError as err:
            logger.debug("stableswap_domain_violation", function=func.__name__, error=str(err))
            return MathResult.domain_violation(f"{func.__name__}: {err}")

    return wrapper


@dataclass(frozen=True)
class SwapSimulation:
    """Detailed swap quote.

    Attributes:
        amount_out: Output after fee
        fee: Fee withheld from the gross output
        price_impact: 1 - effective_price / spot_price (display only)
    """

    amount_out: int
    fee: int
    price_impact: float


# =============================================================================
# Invariant
# =============================================================================


@_guarded
def calc_d(x: int, y: int, amp: int) -> MathResult[int]:
    """Calculate the 2-token StableSwap invariant D.

    Solves A*4*(x+y) + D = A*4*D + D^3/(4xy) by Newton iteration starting
    from D = x + y, stopping once |D_new - D_prev| <= 1.

    Args:
        x: Token 0 balance
        y: Token 1 balance
        amp: Amplification coefficient A

    Returns:
        D (0 for an empty pool); CONVERGENCE_FAILURE after 255 iterations;
        DOMAIN_VIOLATION if exactly one side is empty
    """
    if x + y == 0:
        return MathResult.with_value(0)
    if x == 0 or y == 0:
        return MathResult.domain_violation("calc_d: one-sided pool has no invariant")

    sx, sy = S(x), S(y)
    s = S(x + y)
    ann = S(amp) * 4
    d = s

    for _ in range(NEWTON_ITERATIONS):
        # d_p = d^3 / (4xy), as two divisions to stay inside u128 on-chain
        d_p = (d * d) // (sx * 2)
        d_p = (d_p * d) // (sy * 2)

        d_prev = d
        numerator = (ann * s + d_p * 2) * d
        denominator = (ann - 1) * d + d_p * 3
        d = numerator // denominator

        if d.abs_diff(d_prev) <= 1:
            return MathResult.with_value(d.value)

    logger.warning("calc_d_did_not_converge", x=x, y=y, amp=amp)
    return MathResult.did_not_converge(
        f"calc_d did not converge after {NEWTON_ITERATIONS} iterations"
    )


@_guarded
def calc_d_n(balances: Sequence[int], amp: int) -> MathResult[int]:
    """Calculate the N-token StableSwap invariant D.

    Same iteration as calc_d with ann = A * n^n and the product term built
    one balance at a time: d_p = d_p * D / (n * b_i).
    """
    n = len(balances)
    total = sum(balances)
    if total == 0:
        return MathResult.with_value(0)
    if any(b == 0 for b in balances):
        return MathResult.domain_violation("calc_d_n: every balance must be non-zero")

    s = S(total)
    ann = S(amp) * n**n
    d = s

    for _ in range(NEWTON_ITERATIONS):
        d_p = d
        for bal in balances:
            d_p = (d_p * d) // (S(bal) * n)

        d_prev = d
        numerator = (ann * s + d_p * n) * d
        denominator = (ann - 1) * d + d_p * (n + 1)
        d = numerator // denominator

        if d.abs_diff(d_prev) <= 1:
            return MathResult.with_value(d.value)

    logger.warning("calc_d_n_did_not_converge", n_tokens=n, amp=amp)
    return MathResult.did_not_converge(
        f"calc_d_n did not converge after {NEWTON_ITERATIONS} iterations"
    )


# =============================================================================
# Counterparty balance
# =============================================================================


def _solve_y(c: SafeInt, b: SafeInt, d: SafeInt, label: str) -> MathResult[int]:
    """Newton iteration y = (y^2 + c) / (2y + b - D) from y = D."""
    y = d
    for _ in range(NEWTON_ITERATIONS):
        y_prev = y

        denominator = (y * 2 + b).checked_sub(d)
        if denominator is None or denominator == 0:
            logger.warning(f"{label}_non_positive_denominator", y=y.value, d=d.value)
            return MathResult.did_not_converge(f"{label}: non-positive denominator")

        y = (y * y + c) // denominator

        if y.abs_diff(y_prev) <= 1:
            return MathResult.with_value(y.value)

    logger.warning(f"{label}_did_not_converge", d=d.value)
    return MathResult.did_not_converge(
        f"{label} did not converge after {NEWTON_ITERATIONS} iterations"
    )


@_guarded
def calc_y(x_new: int, d: int, amp: int) -> MathResult[int]:
    """Solve for the output-token balance of a 2-token pool.

    Args:
        x_new: Input-token balance after the deposit
        d: Pool invariant to preserve
        amp: Amplification coefficient A

    Returns:
        The new output-token balance
    """
    if x_new == 0:
        return MathResult.domain_violation("calc_y: input balance must be non-zero")

    sd = S(d)
    ann = S(amp) * 4

    # c = d^3 / (4 * x_new * ann)
    c = (sd * sd) // (S(x_new) * 2)
    c = (c * sd) // (ann * 2)

    b = S(x_new) + sd // ann

    return _solve_y(c, b, sd, "calc_y")


@_guarded
def calc_y_n(
    x_new: int,
    balances: Sequence[int],
    input_idx: int,
    output_idx: int,
    d: int,
    amp: int,
) -> MathResult[int]:
    """Solve for the output-token balance of an N-token pool.

    With S' and P the sum and product of every post-swap balance except the
    output, the invariant reduces to y^2 + (b - D) y = c where
    b = S' + D/ann and c = D^(n+1) / (n^n * P * ann). c is accumulated one
    factor at a time: c = D, then c = c*D/(n*x_j) per non-output balance,
    then c = c*D/(n*ann). That is n factors of D and n factors of n.

    Args:
        x_new: New balance of the input token
        balances: Balances before the swap
        input_idx: Index of the input token
        output_idx: Index of the output token
        d: Pool invariant
        amp: Amplification coefficient A

    Returns:
        The new output-token balance
    """
    n = len(balances)
    if not (0 <= input_idx < n and 0 <= output_idx < n):
        return MathResult.domain_violation(
            f"calc_y_n: token index out of range for {n} tokens"
        )
    if input_idx == output_idx:
        return MathResult.domain_violation("calc_y_n: cannot swap token with itself")

    sd = S(d)
    ann = S(amp) * n**n

    sum_others = S(0)
    c = sd
    for i, bal in enumerate(balances):
        if i == output_idx:
            continue
        x = x_new if i == input_idx else bal
        if x == 0:
            return MathResult.domain_violation(f"calc_y_n: balance {i} must be non-zero")
        sum_others = sum_others + x
        c = (c * sd) // (S(x) * n)
    c = (c * sd) // (ann * n)

    b = sum_others + sd // ann

    return _solve_y(c, b, sd, "calc_y_n")


# =============================================================================
# Swap simulation
# =============================================================================


def _gross_swap_out(bal_in: int, bal_out: int, amount_in: int, amp: int) -> MathResult[int]:
    """Output before fee: bal_out - calc_y(bal_in + amount_in, D)."""
    d = calc_d(bal_in, bal_out, amp)
    if d.is_error:
        return d

    new_bal_out = calc_y(bal_in + amount_in, d.unwrap(), amp)
    if new_bal_out.is_error:
        return new_bal_out

    gross = S(bal_out).checked_sub(new_bal_out.unwrap())
    if gross is None:
        logger.warning(
            "swap_output_underflow",
            bal_out=bal_out,
            new_bal_out=new_bal_out.value,
        )
        return MathResult.domain_violation("swap output exceeds pool balance")
    if not gross.is_u64():
        logger.warning("swap_output_exceeds_u64", gross=gross.value)
        return MathResult.domain_violation("swap output does not fit u64")
    return MathResult.with_value(gross.value)


def _split_fee(gross: int, fee_bps: int) -> tuple[int, int]:
    fee = gross * fee_bps // FEE_DENOMINATOR
    return gross - fee, fee


def _check_fee_bps(fee_bps: int) -> MathResult[int] | None:
    if not 0 <= fee_bps <= FEE_DENOMINATOR:
        return MathResult.domain_violation(
            f"fee_bps must be in [0, {FEE_DENOMINATOR}], got {fee_bps}"
        )
    return None


def simulate_swap(
    bal_in: int,
    bal_out: int,
    amount_in: int,
    amp: int,
    fee_bps: int,
) -> MathResult[int]:
    """Simulate a 2-token swap and return the output after fee.

    Algorithm:
        1. D = calc_d(bal_in, bal_out)
        2. new_bal_out = calc_y(bal_in + amount_in, D)
        3. gross = bal_out - new_bal_out (DOMAIN_VIOLATION on underflow, never clamped)
        4. out = gross - gross * fee_bps / 10000

    Args:
        bal_in: Input token balance
        bal_out: Output token balance
        amount_in: Amount being swapped in
        amp: Amplification coefficient
        fee_bps: Fee in basis points

    Returns:
        Output amount after fee
    """
    invalid = _check_fee_bps(fee_bps)
    if invalid is not None:
        return invalid

    gross = _gross_swap_out(bal_in, bal_out, amount_in, amp)
    if gross.is_error:
        return gross

    amount_out, _ = _split_fee(gross.unwrap(), fee_bps)
    return MathResult.with_value(amount_out)


def simulate_swap_detailed(
    bal_in: int,
    bal_out: int,
    amount_in: int,
    amp: int,
    fee_bps: int,
) -> MathResult[SwapSimulation]:
    """Simulate a 2-token swap, also reporting the fee and price impact.

    price_impact = 1 - (amount_out / amount_in) / (bal_out / bal_in), computed in
    floats for display. A zero amount_in has no impact (0.0).
    """
    invalid = _check_fee_bps(fee_bps)
    if invalid is not None:
        return MathResult.domain_violation(invalid.error_detail)
    if bal_in == 0 or bal_out == 0:
        return MathResult.domain_violation("spot price undefined for an empty pool side")

    gross = _gross_swap_out(bal_in, bal_out, amount_in, amp)
    if gross.is_error:
        return MathResult.with_error(gross.error, gross.error_detail)  # type: ignore[arg-type]

    amount_out, fee = _split_fee(gross.unwrap(), fee_bps)

    if amount_in == 0:
        price_impact = 0.0
    else:
        spot_price = bal_out / bal_in
        effective_price = amount_out / amount_in
        price_impact = 1.0 - effective_price / spot_price

    return MathResult.with_value(SwapSimulation(amount_out=amount_out, fee=fee, price_impact=price_impact))


def calc_price_impact(
    bal_in: int,
    bal_out: int,
    amount_in: int,
    amp: int,
    fee_bps: int,
) -> MathResult[float]:
    """Simplified price impact 1 - amount_out / amount_in (assumes 1:1 tokens)."""
    amount_out = simulate_swap(bal_in, bal_out, amount_in, amp, fee_bps)
    if amount_out.is_error:
        return MathResult.with_error(amount_out.error, amount_out.error_detail)  # type: ignore[arg-type]
    if amount_in == 0:
        return MathResult.with_value(0.0)
    return MathResult.with_value(1.0 - amount_out.unwrap() / amount_in)


# =============================================================================
# Liquidity
# =============================================================================


@_guarded
def calc_lp_tokens(
    amt0: int,
    amt1: int,
    bal0: int,
    bal1: int,
    lp_supply: int,
    amp: int,
) -> MathResult[int]:
    """LP tokens minted for a 2-token deposit.

    The first deposit mints the geometric mean isqrt(amt0 * amt1). Later
    deposits mint lp_supply * (D1 - D0) / D0. A mint that does not fit
    the u64 LP supply is a domain violation.

    Args:
        amt0: Amount of token 0 to deposit
        amt1: Amount of token 1 to deposit
        bal0: Current token 0 balance
        bal1: Current token 1 balance
        lp_supply: Current LP token supply
        amp: Amplification coefficient

    Returns:
        LP tokens to mint
    """
    if lp_supply == 0:
        minted = S(isqrt(amt0 * amt1)).to_u64()
        if minted == 0 and (amt0 > 0 or amt1 > 0):
            return MathResult.domain_violation("initial deposit mints zero LP tokens")
        return MathResult.with_value(minted)

    d0 = calc_d(bal0, bal1, amp)
    if d0.is_error:
        return d0
    d1 = calc_d(bal0 + amt0, bal1 + amt1, amp)
    if d1.is_error:
        return d1

    if d0.unwrap() == 0:
        return MathResult.domain_violation("calc_lp_tokens: pool invariant is zero")

    minted = (S(lp_supply) * (S(d1.unwrap()) - d0.unwrap())) // d0.unwrap()
    return MathResult.with_value(minted.to_u64())


def calc_withdraw(
    lp_amount: int,
    bal0: int,
    bal1: int,
    lp_supply: int,
) -> MathResult[tuple[int, int]]:
    """Proportional (amount0, amount1) returned for burning lp_amount."""
    if lp_supply == 0:
        return MathResult.domain_violation("calc_withdraw: LP supply is zero")

    amount0 = bal0 * lp_amount // lp_supply
    amount1 = bal1 * lp_amount // lp_supply
    return MathResult.with_value((amount0, amount1))


def calc_virtual_price(bal0: int, bal1: int, lp_supply: int, amp: int) -> MathResult[int]:
    """LP token value relative to the underlying, D * 1e18 / lp_supply."""
    if lp_supply == 0:
        return MathResult.domain_violation("calc_virtual_price: LP supply is zero")

    d = calc_d(bal0, bal1, amp)
    if d.is_error:
        return d
    return MathResult.with_value(d.unwrap() * PRECISION // lp_supply)
