"""Decoded on-chain account records.

Read-only snapshots of program state. Records are built only by the codec
in aex402.accounts.parsing and never mutated; cross-references between
records (UserFarm.farm, LotteryEntry.lottery) are plain pubkey values.
"""

from __future__ import annotations

from dataclasses import dataclass

from solders.pubkey import Pubkey

from aex402.constants import CONFIDENCE_SCALE, PRICE_SCALE
from aex402.math.amp import get_current_amp


@dataclass(frozen=True)
class CandleDecoded:
    """OHLCV values expanded from a delta-encoded candle (prices scaled 1e6)."""

    open: int
    high: int
    low: int
    close: int
    volume: int


@dataclass(frozen=True)
class Candle:
    """Delta-encoded OHLCV candle, 12 bytes on-chain.

    Attributes:
        open: Opening price (u32, scaled 1e6)
        high_d: High as unsigned delta above open
        low_d: Low as unsigned delta below open
        close_d: Close as signed delta from open
        volume: Volume in 1e9 units
    """

    open: int
    high_d: int
    low_d: int
    close_d: int
    volume: int

    def decode(self) -> CandleDecoded:
        return CandleDecoded(
            open=self.open,
            high=self.open + self.high_d,
            low=self.open - self.low_d,
            close=self.open + self.close_d,
            volume=self.volume,
        )


@dataclass(frozen=True)
class Pool:
    """2-token StableSwap pool with on-chain OHLCV analytics.

    Attributes:
        authority: Pool admin
        mint0, mint1: Token mints
        vault0, vault1: Token vaults owned by the pool PDA
        lp_mint: LP token mint
        amp: Stored amplification (see current_amp for ramping)
        init_amp: Amp at ramp start
        target_amp: Amp at ramp stop
        ramp_start, ramp_stop: Ramp window (unix seconds)
        fee_bps: Swap fee in basis points
        admin_fee_pct: Share of the swap fee kept as admin fee
        bal0, bal1: Pool balances
        lp_supply: Outstanding LP tokens
        admin_fee0, admin_fee1: Accrued admin fees
        vol0, vol1: Cumulative volume per token
        paused: Swap/liquidity gate, enforced by callers
        pending_auth, auth_time: Pending authority transfer
        pending_amp, amp_time: Committed amp change
        trade_count, trade_sum: Trade counters
        max_price, min_price: Price extremes (u32, scaled 1e6)
        hour_slot, day_slot: Current candle slots
        hour_idx, day_idx: Ring-buffer positions of the current candles
        bloom: 128-byte trader bloom filter
        hourly_candles: 24 hourly candles
        daily_candles: 7 daily candles
    """

    authority: Pubkey
    mint0: Pubkey
    mint1: Pubkey
    vault0: Pubkey
    vault1: Pubkey
    lp_mint: Pubkey
    amp: int
    init_amp: int
    target_amp: int
    ramp_start: int
    ramp_stop: int
    fee_bps: int
    admin_fee_pct: int
    bal0: int
    bal1: int
    lp_supply: int
    admin_fee0: int
    admin_fee1: int
    vol0: int
    vol1: int
    paused: bool
    bump: int
    vault0_bump: int
    vault1_bump: int
    lp_mint_bump: int
    pending_auth: Pubkey
    auth_time: int
    pending_amp: int
    amp_time: int
    trade_count: int
    trade_sum: int
    max_price: int
    min_price: int
    hour_slot: int
    day_slot: int
    hour_idx: int
    day_idx: int
    bloom: bytes
    hourly_candles: tuple[Candle, ...]
    daily_candles: tuple[Candle, ...]

    def current_amp(self, now: int) -> int:
        """Effective amp at unix time `now`, following any active ramp."""
        return get_current_amp(self.init_amp, self.target_amp, self.ramp_start, self.ramp_stop, now)


@dataclass(frozen=True)
class NPool:
    """N-token (2-8) StableSwap pool.

    Per-token tuples hold exactly n_tokens entries.
    """

    authority: Pubkey
    n_tokens: int
    paused: bool
    bump: int
    amp: int
    fee_bps: int
    admin_fee_pct: int
    lp_supply: int
    mints: tuple[Pubkey, ...]
    vaults: tuple[Pubkey, ...]
    lp_mint: Pubkey
    balances: tuple[int, ...]
    admin_fees: tuple[int, ...]
    total_volume: int
    trade_count: int
    last_trade_slot: int


@dataclass(frozen=True)
class Farm:
    """LP staking farm. acc_reward is a 1e12-scaled accumulator."""

    pool: Pubkey
    reward_mint: Pubkey
    reward_rate: int
    start_time: int
    end_time: int
    total_staked: int
    acc_reward: int
    last_update: int


@dataclass(frozen=True)
class UserFarm:
    owner: Pubkey
    farm: Pubkey
    staked: int
    reward_debt: int
    lock_end: int


@dataclass(frozen=True)
class Lottery:
    """LP lottery. winning_ticket is meaningful only once drawn."""

    pool: Pubkey
    authority: Pubkey
    lottery_vault: Pubkey
    ticket_price: int
    total_tickets: int
    prize_pool: int
    end_time: int
    winning_ticket: int
    drawn: bool
    claimed: bool


@dataclass(frozen=True)
class LotteryEntry:
    owner: Pubkey
    lottery: Pubkey
    ticket_start: int
    ticket_count: int

    def holds(self, ticket: int) -> bool:
        """True if `ticket` falls inside this entry's ticket range."""
        return self.ticket_start <= ticket < self.ticket_start + self.ticket_count


@dataclass(frozen=True)
class Unrecognized:
    """Account that did not decode as any supported record.

    Attributes:
        discriminator: First 8 bytes of the buffer (shorter if the buffer is)
        kind: Account type registered for this magic (e.g. "registry", or
            "pool" for a truncated pool buffer), or None if the magic is unknown
    """

    discriminator: bytes
    kind: str | None = None


@dataclass(frozen=True)
class TwapResult:
    """Oracle answer packed into the u64 returned by get_twap.

    Attributes:
        price: Time-weighted price (scaled 1e6)
        samples: Number of candles averaged
        confidence: 0-10000, where 10000 is 100%
    """

    price: int
    samples: int
    confidence: int

    def price_as_float(self) -> float:
        return self.price / PRICE_SCALE

    def confidence_percent(self) -> float:
        return self.confidence * 100 / CONFIDENCE_SCALE
