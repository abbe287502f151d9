"""Pydantic models for instruction arguments.

Every model is frozen and strict: integers must be real ints (not bools or
strings) within the on-chain field width, so an out-of-range argument fails
at construction with pydantic.ValidationError instead of being truncated
when packed.
"""

from enum import IntEnum
from typing import Annotated

from pydantic import BaseModel, Field

from aex402.constants import FEE_DENOMINATOR, MAX_AMP, MAX_TOKENS, MIN_AMP, MIN_TOKENS
from aex402.safe_int import I64_MAX, I64_MIN, U8_MAX, U64_MAX

# On-chain integer widths
U8 = Annotated[int, Field(ge=0, le=U8_MAX)]
U64 = Annotated[int, Field(ge=0, le=U64_MAX)]
I64 = Annotated[int, Field(ge=I64_MIN, le=I64_MAX)]

# Narrower protocol ranges
Amp = Annotated[int, Field(ge=MIN_AMP, le=MAX_AMP)]
FeeBps = Annotated[int, Field(ge=0, le=FEE_DENOMINATOR)]
TokenIndex = Annotated[int, Field(ge=0, lt=MAX_TOKENS)]


class TwapWindow(IntEnum):
    """Time windows for TWAP oracle queries."""

    HOUR_1 = 0
    HOUR_4 = 1
    HOUR_24 = 2
    DAY_7 = 3


class InstructionArgs(BaseModel):
    """Base class for instruction argument models."""

    model_config = {"frozen": True, "extra": "forbid", "strict": True}


# Pool creation


class CreatePoolArgs(InstructionArgs):
    amp: Amp
    bump: U8


class CreateNPoolArgs(InstructionArgs):
    amp: Amp
    n_tokens: Annotated[int, Field(ge=MIN_TOKENS, le=MAX_TOKENS)]
    bump: U8


# Swaps


class SwapArgs(InstructionArgs):
    """Generic 2-token swap. from_token/to_token are token indices (0 or 1)."""

    from_token: Annotated[int, Field(ge=0, le=1)]
    to_token: Annotated[int, Field(ge=0, le=1)]
    amount_in: U64
    min_out: U64
    deadline: I64


class SwapSimpleArgs(InstructionArgs):
    """Arguments of the fixed-direction swaps (swap_t0_t1, swap_t1_t0)."""

    amount_in: U64
    min_out: U64


class SwapNArgs(InstructionArgs):
    from_idx: TokenIndex
    to_idx: TokenIndex
    amount_in: U64
    min_out: U64


# Liquidity


class AddLiqArgs(InstructionArgs):
    amount0: U64
    amount1: U64
    min_lp: U64


class AddLiq1Args(InstructionArgs):
    """Single-sided deposit."""

    amount_in: U64
    min_lp: U64


class RemLiqArgs(InstructionArgs):
    lp_amount: U64
    min0: U64
    min1: U64


# Admin


class SetPauseArgs(InstructionArgs):
    paused: bool


class UpdateFeeArgs(InstructionArgs):
    fee_bps: FeeBps


class CommitAmpArgs(InstructionArgs):
    target_amp: Amp


class RampAmpArgs(InstructionArgs):
    """Ramp to target_amp over duration seconds."""

    target_amp: Amp
    duration: I64


# Farming


class CreateFarmArgs(InstructionArgs):
    reward_rate: U64
    start_time: I64
    end_time: I64


class StakeArgs(InstructionArgs):
    """Used by both stake_lp and unstake_lp."""

    amount: U64


class LockLpArgs(InstructionArgs):
    amount: U64
    duration: I64


# Lottery


class CreateLotteryArgs(InstructionArgs):
    ticket_price: U64
    end_time: I64


class EnterLotteryArgs(InstructionArgs):
    ticket_count: U64


class DrawLotteryArgs(InstructionArgs):
    random_seed: U64


# Oracle


class GetTwapArgs(InstructionArgs):
    window: TwapWindow
