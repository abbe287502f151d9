"""Pool analytics and caller-layer simulations.

Combines decoded Pool records with the math engine. No I/O: callers fetch
and decode the account, then pass the Pool and the current unix time.

Pausing is enforced here, not in aex402.math: the pool_simulate_* helpers
refuse a paused pool, while the raw math functions stay pause-agnostic.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import structlog

from aex402.accounts.types import CandleDecoded, Pool
from aex402.config import DEFAULT_CONFIG, SdkConfig
from aex402.math.result import MathResult
from aex402.math.stableswap import (
    calc_lp_tokens,
    calc_price_impact,
    calc_virtual_price,
    calc_withdraw,
    simulate_swap_detailed,
)
from aex402.math.utils import calc_min_output, check_imbalance

logger = structlog.get_logger()


class SwapDirection(Enum):
    TOKEN0_TO_TOKEN1 = "token0_to_token1"
    TOKEN1_TO_TOKEN0 = "token1_to_token0"


class CandleType(Enum):
    HOURLY = "hourly"
    DAILY = "daily"


@dataclass(frozen=True)
class PoolStats:
    """Snapshot statistics of a 2-token pool.

    Attributes:
        tvl0, tvl1: Pool balances
        volume: vol0 + vol1 (cumulative, in raw token units)
        swap_count: Number of trades
        fee_bps: Swap fee
        amp: Amp in effect at the snapshot time
        virtual_price: LP value (1e18 scale), or the reason it is undefined
        paused: Whether the pool is paused
        balanced: Larger balance is within the configured ratio of the smaller
    """

    tvl0: int
    tvl1: int
    volume: int
    swap_count: int
    fee_bps: int
    amp: int
    virtual_price: MathResult[int]
    paused: bool
    balanced: bool


@dataclass(frozen=True)
class SwapQuote:
    """Swap simulation against a decoded pool.

    Attributes:
        amount_out: Expected output after fee
        fee: Fee withheld
        price_impact: Display-only price impact
        min_out: amount_out less the slippage tolerance, for the swap instruction
    """

    amount_out: int
    fee: int
    price_impact: float
    min_out: int


def _oriented(pool: Pool, direction: SwapDirection) -> tuple[int, int]:
    if direction is SwapDirection.TOKEN0_TO_TOKEN1:
        return pool.bal0, pool.bal1
    return pool.bal1, pool.bal0


def _paused(pool: Pool, operation: str) -> MathResult | None:
    if pool.paused:
        logger.debug("pool_paused", operation=operation, authority=str(pool.authority))
        return MathResult.domain_violation("pool paused")
    return None


def pool_stats(pool: Pool, now: int, config: SdkConfig = DEFAULT_CONFIG) -> PoolStats:
    amp = pool.current_amp(now)
    return PoolStats(
        tvl0=pool.bal0,
        tvl1=pool.bal1,
        volume=pool.vol0 + pool.vol1,
        swap_count=pool.trade_count,
        fee_bps=pool.fee_bps,
        amp=amp,
        virtual_price=calc_virtual_price(pool.bal0, pool.bal1, pool.lp_supply, amp),
        paused=pool.paused,
        balanced=check_imbalance(pool.bal0, pool.bal1, config.max_imbalance_ratio),
    )


def decoded_candles(pool: Pool, candle_type: CandleType) -> tuple[CandleDecoded, ...]:
    """Expand the pool's hourly or daily candles into absolute OHLCV values."""
    if candle_type is CandleType.HOURLY:
        candles = pool.hourly_candles
    else:
        candles = pool.daily_candles
    return tuple(candle.decode() for candle in candles)


def pool_price_impact(
    pool: Pool,
    amount_in: int,
    direction: SwapDirection,
    now: int,
) -> MathResult[float]:
    """Simplified price impact (1 - out/in) of swapping amount_in at time `now`."""
    bal_in, bal_out = _oriented(pool, direction)
    return calc_price_impact(bal_in, bal_out, amount_in, pool.current_amp(now), pool.fee_bps)


def pool_simulate_swap(
    pool: Pool,
    amount_in: int,
    direction: SwapDirection,
    now: int,
    slippage_bps: int | None = None,
    config: SdkConfig = DEFAULT_CONFIG,
) -> MathResult[SwapQuote]:
    """Quote a swap against a decoded pool.

    Uses the amp in effect at `now`. min_out applies slippage_bps, or the
    config's default_slippage_bps when omitted.

    Returns:
        The quote; DOMAIN_VIOLATION "pool paused" for a paused pool; or the
        underlying math failure
    """
    paused = _paused(pool, "swap")
    if paused is not None:
        return paused

    bal_in, bal_out = _oriented(pool, direction)
    simulation = simulate_swap_detailed(
        bal_in, bal_out, amount_in, pool.current_amp(now), pool.fee_bps
    )
    if simulation.is_error:
        return MathResult.with_error(simulation.error, simulation.error_detail)  # type: ignore[arg-type]

    sim = simulation.unwrap()
    if slippage_bps is None:
        slippage_bps = config.default_slippage_bps

    return MathResult.with_value(
        SwapQuote(
            amount_out=sim.amount_out,
            fee=sim.fee,
            price_impact=sim.price_impact,
            min_out=calc_min_output(sim.amount_out, slippage_bps),
        )
    )


def pool_simulate_add_liquidity(
    pool: Pool, amount0: int, amount1: int, now: int
) -> MathResult[int]:
    """LP tokens minted for depositing (amount0, amount1) at time `now`."""
    paused = _paused(pool, "add_liquidity")
    if paused is not None:
        return paused
    return calc_lp_tokens(
        amount0, amount1, pool.bal0, pool.bal1, pool.lp_supply, pool.current_amp(now)
    )


def pool_simulate_remove_liquidity(pool: Pool, lp_amount: int) -> MathResult[tuple[int, int]]:
    paused = _paused(pool, "remove_liquidity")
    if paused is not None:
        return paused
    return calc_withdraw(lp_amount, pool.bal0, pool.bal1, pool.lp_supply)
