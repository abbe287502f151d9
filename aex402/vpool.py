"""Virtual pool bookkeeping.

Virtual pools trade on a linear bonding curve (aex402.math.bonding) until
they raise enough SOL to graduate into a real StableSwap pool. Each pool
lives in a slot of the global virtual-pool account, and slots move through
a one-way lifecycle:

    FREE -> ACTIVE -> GRADUATED -> FLUSHED
               \\_________________/^

ACTIVE may also go straight to FLUSHED when a pool is abandoned.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from types import MappingProxyType

from solders.pubkey import Pubkey

from aex402.constants import BONDING_SCALE, VPOOL_STALE_SECONDS
from aex402.errors import InvalidSlotTransition
from aex402.math.bonding import calc_bonding_price


class SlotStatus(IntEnum):
    FREE = 0
    ACTIVE = 1
    GRADUATED = 2
    FLUSHED = 3

    @classmethod
    def from_value(cls, value: int) -> SlotStatus:
        """Map a stored status byte to a SlotStatus; unknown values read as FREE."""
        try:
            return cls(value)
        except ValueError:
            return cls.FREE


_TRANSITIONS = MappingProxyType(
    {
        SlotStatus.FREE: frozenset({SlotStatus.ACTIVE}),
        SlotStatus.ACTIVE: frozenset({SlotStatus.GRADUATED, SlotStatus.FLUSHED}),
        SlotStatus.GRADUATED: frozenset({SlotStatus.FLUSHED}),
        SlotStatus.FLUSHED: frozenset(),
    }
)


def can_transition(current: SlotStatus, target: SlotStatus) -> bool:
    """True if a slot may move from `current` to `target` in one step."""
    return target in _TRANSITIONS[current]


def transition(current: SlotStatus, target: SlotStatus) -> SlotStatus:
    """Return `target` if the move is legal.

    Raises:
        InvalidSlotTransition: If the move goes backwards or skips a stage
    """
    if not can_transition(current, target):
        raise InvalidSlotTransition(f"Cannot move slot from {current.name} to {target.name}")
    return target


@dataclass(frozen=True)
class GlobalHeader:
    """Header of the global virtual-pool account."""

    discriminator: bytes
    num_slots: int
    next_pool_id: int
    fee_balance: int
    total_volume: int
    active_pools: int
    graduated_count: int
    flushed_count: int


@dataclass(frozen=True)
class VPoolHolder:
    wallet_hash: bytes
    balance: int


@dataclass(frozen=True)
class VPoolSlot:
    """One virtual pool.

    Attributes:
        slot_index: Position in the global account
        status: Lifecycle stage
        pool_id: Monotonic pool id (seeds the mint and claim PDAs)
        creator: Pool creator
        name, symbol, uri: Token metadata
        base_price, slope: Bonding curve parameters
        total_supply: Token supply minted at graduation
        tokens_sold: Cumulative tokens sold, only grows until graduation
        sol_raised: SOL currently held by the curve
        total_buy_sol, total_sell_sol: Cumulative SOL bought / sold
        created_at, last_trade_at: Unix timestamps
        real_pool, real_mint: Graduated pool and mint (default pubkey before)
        creator_unclaimed, creator_last_claim: Creator fee accounting
        graduation_triggerer: Wallet that triggered graduation
        holder_count: Distinct holders
        mint_bump: Mint PDA bump
        hash_positions: Holder table positions
    """

    slot_index: int
    status: SlotStatus
    pool_id: int
    creator: Pubkey
    name: str
    symbol: str
    uri: str
    base_price: int
    slope: int
    total_supply: int
    tokens_sold: int
    sol_raised: int
    total_buy_sol: int
    total_sell_sol: int
    created_at: int
    last_trade_at: int
    real_pool: Pubkey
    real_mint: Pubkey
    creator_unclaimed: int
    creator_last_claim: int
    graduation_triggerer: Pubkey
    holder_count: int
    mint_bump: int
    hash_positions: tuple[int, ...] = ()

    @property
    def current_price(self) -> int:
        return calc_bonding_price(self.base_price, self.slope, self.tokens_sold)


@dataclass(frozen=True)
class VPoolClaimPDA:
    """Per-wallet creator-fee claim record for a virtual pool."""

    discriminator: bytes
    pool_id: int
    wallet: Pubkey
    unclaimed: int
    claimed: int
    last_claim: int


@dataclass(frozen=True)
class VPoolStats:
    """Display statistics for a virtual pool.

    Attributes:
        current_price: Bonding curve spot price
        market_cap_sol: current_price * total_supply / 1e9
        graduation_progress: sol_raised / graduation_target, capped at 1.0
        can_graduate: ACTIVE and sol_raised has reached the target
        graduation_target: SOL needed to graduate
        churn_ratio: total_sell_sol / total_buy_sol (0.0 before any buy)
        age_seconds: Seconds since creation
        is_stale: No trade within the staleness window
    """

    current_price: int
    market_cap_sol: int
    graduation_progress: float
    can_graduate: bool
    graduation_target: int
    churn_ratio: float
    age_seconds: int
    is_stale: bool


def vpool_stats(
    slot: VPoolSlot,
    now: int,
    graduation_target: int,
    stale_after: int = VPOOL_STALE_SECONDS,
) -> VPoolStats:
    """Compute display statistics for a slot at unix time `now`."""
    price = slot.current_price

    if graduation_target > 0:
        progress = min(1.0, slot.sol_raised / graduation_target)
    else:
        progress = 1.0

    if slot.total_buy_sol > 0:
        churn = slot.total_sell_sol / slot.total_buy_sol
    else:
        churn = 0.0

    last_activity = slot.last_trade_at or slot.created_at

    return VPoolStats(
        current_price=price,
        market_cap_sol=price * slot.total_supply // BONDING_SCALE,
        graduation_progress=progress,
        can_graduate=slot.status is SlotStatus.ACTIVE and slot.sol_raised >= graduation_target,
        graduation_target=graduation_target,
        churn_ratio=churn,
        age_seconds=max(0, now - slot.created_at),
        is_stale=now - last_activity > stale_after,
    )
