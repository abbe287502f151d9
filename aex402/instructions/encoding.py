"""Instruction payload encoding.

A payload is the instruction's 8-byte discriminator followed by its
arguments, packed little-endian with no padding.
"""

from __future__ import annotations

from types import MappingProxyType

from construct import Const, Flag, Int8ul, Int64sl, Int64ul, Struct

from .args import (
    AddLiq1Args,
    AddLiqArgs,
    CommitAmpArgs,
    CreateFarmArgs,
    CreateLotteryArgs,
    CreateNPoolArgs,
    CreatePoolArgs,
    DrawLotteryArgs,
    EnterLotteryArgs,
    GetTwapArgs,
    InstructionArgs,
    LockLpArgs,
    RampAmpArgs,
    RemLiqArgs,
    SetPauseArgs,
    StakeArgs,
    SwapArgs,
    SwapNArgs,
    SwapSimpleArgs,
    UpdateFeeArgs,
)
from .discriminators import DISCRIMINATORS, discriminator


def _payload(name: str, *fields) -> Struct:
    return Struct("discriminator" / Const(discriminator(name)), *fields)


_SWAP_SIMPLE = ("amount_in" / Int64ul, "min_out" / Int64ul)
_STAKE = ("amount" / Int64ul,)

# name -> (argument model, payload layout)
PAYLOADS = MappingProxyType(
    {
        "create_pool": (CreatePoolArgs, _payload("create_pool", "amp" / Int64ul, "bump" / Int8ul)),
        "create_npool": (
            CreateNPoolArgs,
            _payload("create_npool", "amp" / Int64ul, "n_tokens" / Int8ul, "bump" / Int8ul),
        ),
        "swap": (
            SwapArgs,
            _payload(
                "swap",
                "from_token" / Int8ul,
                "to_token" / Int8ul,
                "amount_in" / Int64ul,
                "min_out" / Int64ul,
                "deadline" / Int64sl,
            ),
        ),
        "swap_t0_t1": (SwapSimpleArgs, _payload("swap_t0_t1", *_SWAP_SIMPLE)),
        "swap_t1_t0": (SwapSimpleArgs, _payload("swap_t1_t0", *_SWAP_SIMPLE)),
        "swap_n": (
            SwapNArgs,
            _payload(
                "swap_n",
                "from_idx" / Int8ul,
                "to_idx" / Int8ul,
                "amount_in" / Int64ul,
                "min_out" / Int64ul,
            ),
        ),
        "add_liquidity": (
            AddLiqArgs,
            _payload(
                "add_liquidity", "amount0" / Int64ul, "amount1" / Int64ul, "min_lp" / Int64ul
            ),
        ),
        "add_liquidity_1": (
            AddLiq1Args,
            _payload("add_liquidity_1", "amount_in" / Int64ul, "min_lp" / Int64ul),
        ),
        "remove_liquidity": (
            RemLiqArgs,
            _payload("remove_liquidity", "lp_amount" / Int64ul, "min0" / Int64ul, "min1" / Int64ul),
        ),
        "set_pause": (SetPauseArgs, _payload("set_pause", "paused" / Flag)),
        "update_fee": (UpdateFeeArgs, _payload("update_fee", "fee_bps" / Int64ul)),
        "commit_amp": (CommitAmpArgs, _payload("commit_amp", "target_amp" / Int64ul)),
        "ramp_amp": (
            RampAmpArgs,
            _payload("ramp_amp", "target_amp" / Int64ul, "duration" / Int64sl),
        ),
        "create_farm": (
            CreateFarmArgs,
            _payload(
                "create_farm",
                "reward_rate" / Int64ul,
                "start_time" / Int64sl,
                "end_time" / Int64sl,
            ),
        ),
        "stake_lp": (StakeArgs, _payload("stake_lp", *_STAKE)),
        "unstake_lp": (StakeArgs, _payload("unstake_lp", *_STAKE)),
        "lock_lp": (LockLpArgs, _payload("lock_lp", "amount" / Int64ul, "duration" / Int64sl)),
        "create_lottery": (
            CreateLotteryArgs,
            _payload("create_lottery", "ticket_price" / Int64ul, "end_time" / Int64sl),
        ),
        "enter_lottery": (EnterLotteryArgs, _payload("enter_lottery", "ticket_count" / Int64ul)),
        "draw_lottery": (DrawLotteryArgs, _payload("draw_lottery", "random_seed" / Int64ul)),
        "get_twap": (GetTwapArgs, _payload("get_twap", "window" / Int8ul)),
    }
)


def encode_instruction_data(name: str, args: InstructionArgs | None = None) -> bytes:
    """Encode the payload of instruction `name`.

    Instructions without arguments (init_t0_vault, withdraw_fee, claim_farm,
    ...) encode to their bare discriminator and must be called without args.

    Args:
        name: Instruction name, a key of DISCRIMINATORS
        args: Argument model matching the instruction

    Returns:
        Payload bytes

    Raises:
        KeyError: If the instruction is unknown
        TypeError: If args is missing, unexpected, or of the wrong model
    """
    if name not in DISCRIMINATORS:
        raise KeyError(f"Unknown instruction: {name!r}")

    entry = PAYLOADS.get(name)
    if entry is None:
        if args is not None:
            raise TypeError(f"{name} takes no arguments, got {type(args).__name__}")
        return DISCRIMINATORS[name]

    args_type, layout = entry
    if not isinstance(args, args_type):
        raise TypeError(f"{name} expects {args_type.__name__}, got {type(args).__name__}")
    return layout.build(args.model_dump())


def payload_size(name: str) -> int:
    """Byte length of the payload of instruction `name`."""
    entry = PAYLOADS.get(name)
    if entry is None:
        return len(discriminator(name))
    return entry[1].sizeof()
