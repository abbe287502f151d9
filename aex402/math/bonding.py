"""Linear bonding curve used by virtual pools before graduation.

price(t) = base_price + slope * t / SCALE, t = cumulative tokens sold.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from aex402.constants import BONDING_SCALE, FEE_DENOMINATOR

from .result import MathResult
from .utils import isqrt

logger = structlog.get_logger()


@dataclass(frozen=True)
class BuySimulation:
    """Quote for buying virtual-pool tokens with SOL."""

    tokens_out: int
    new_price: int
    price_impact: float
    fee: int


@dataclass(frozen=True)
class SellSimulation:
    """Quote for selling virtual-pool tokens back to the curve."""

    sol_out: int
    new_price: int
    price_impact: float
    fee: int


def calc_bonding_price(base_price: int, slope: int, tokens_sold: int) -> int:
    """Spot price on the curve after tokens_sold tokens."""
    return base_price + slope * tokens_sold // BONDING_SCALE


def calc_bonding_buy_tokens(
    sol_in: int,
    base_price: int,
    slope: int,
    tokens_sold: int,
) -> MathResult[int]:
    """Tokens received for sol_in SOL.

    Integrating the price over [t0, t0 + delta] and solving the quadratic
    for delta gives

        delta = (isqrt(p^2 + 2 * slope * sol_in / SCALE) - p) * SCALE / slope

    with p the current price. A flat curve (slope == 0) is a plain division.

    Args:
        sol_in: SOL spent (lamports)
        base_price: Curve base price
        slope: Curve slope
        tokens_sold: Tokens sold so far

    Returns:
        Tokens out; DOMAIN_VIOLATION if the price is zero on a flat curve
    """
    price = calc_bonding_price(base_price, slope, tokens_sold)

    if slope == 0:
        if price == 0:
            return MathResult.domain_violation("bonding buy: zero price on a flat curve")
        return MathResult.with_value(sol_in * BONDING_SCALE // price)

    discriminant = price * price + 2 * slope * sol_in // BONDING_SCALE
    tokens_out = (isqrt(discriminant) - price) * BONDING_SCALE // slope

    if tokens_out < 0:
        logger.warning(
            "bonding_buy_negative_output",
            sol_in=sol_in,
            base_price=base_price,
            slope=slope,
            tokens_sold=tokens_sold,
        )
        return MathResult.domain_violation("bonding buy: negative token output")
    return MathResult.with_value(tokens_out)


def calc_bonding_sell_sol(
    token_amount: int,
    base_price: int,
    slope: int,
    tokens_sold: int,
) -> MathResult[int]:
    """SOL returned for selling token_amount tokens back to the curve.

    The integral over [tokens_sold - token_amount, tokens_sold] is
    base * delta + slope * (t1^2 - t0^2) / (2 * SCALE), then scaled down
    by SCALE.
    """
    if token_amount > tokens_sold:
        return MathResult.domain_violation(
            f"bonding sell: {token_amount} exceeds {tokens_sold} tokens sold"
        )

    t0 = tokens_sold - token_amount
    t1 = tokens_sold

    base_part = base_price * token_amount
    slope_part = slope * (t1 * t1 - t0 * t0) // (2 * BONDING_SCALE)

    return MathResult.with_value((base_part + slope_part) // BONDING_SCALE)


def _relative_change(old: int, new: int) -> float:
    if old == 0:
        return 0.0
    return abs(new - old) / old


def simulate_bonding_buy(
    sol_in: int,
    base_price: int,
    slope: int,
    tokens_sold: int,
    fee_bps: int,
) -> MathResult[BuySimulation]:
    """Buy quote with the fee taken from the SOL going in."""
    if not 0 <= fee_bps <= FEE_DENOMINATOR:
        return MathResult.domain_violation(f"fee_bps out of range: {fee_bps}")

    fee = sol_in * fee_bps // FEE_DENOMINATOR
    tokens = calc_bonding_buy_tokens(sol_in - fee, base_price, slope, tokens_sold)
    if tokens.is_error:
        return MathResult.with_error(tokens.error, tokens.error_detail)  # type: ignore[arg-type]

    old_price = calc_bonding_price(base_price, slope, tokens_sold)
    new_price = calc_bonding_price(base_price, slope, tokens_sold + tokens.unwrap())

    return MathResult.with_value(
        BuySimulation(
            tokens_out=tokens.unwrap(),
            new_price=new_price,
            price_impact=_relative_change(old_price, new_price),
            fee=fee,
        )
    )


def simulate_bonding_sell(
    token_amount: int,
    base_price: int,
    slope: int,
    tokens_sold: int,
    fee_bps: int,
) -> MathResult[SellSimulation]:
    """Sell quote with the fee taken from the SOL coming out."""
    if not 0 <= fee_bps <= FEE_DENOMINATOR:
        return MathResult.domain_violation(f"fee_bps out of range: {fee_bps}")

    gross = calc_bonding_sell_sol(token_amount, base_price, slope, tokens_sold)
    if gross.is_error:
        return MathResult.with_error(gross.error, gross.error_detail)  # type: ignore[arg-type]

    fee = gross.unwrap() * fee_bps // FEE_DENOMINATOR
    old_price = calc_bonding_price(base_price, slope, tokens_sold)
    new_price = calc_bonding_price(base_price, slope, tokens_sold - token_amount)

    return MathResult.with_value(
        SellSimulation(
            sol_out=gross.unwrap() - fee,
            new_price=new_price,
            price_impact=_relative_change(old_price, new_price),
            fee=fee,
        )
    )
