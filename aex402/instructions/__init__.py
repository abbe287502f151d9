"""Instruction payloads and builders.

Independent of the pool math: argument models are validated by pydantic,
packed by construct and wrapped in solders instructions.
"""

from . import builders
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
    TwapWindow,
    UpdateFeeArgs,
)
from .discriminators import DISCRIMINATORS, discriminator
from .encoding import PAYLOADS, encode_instruction_data, payload_size

__all__ = [
    # Discriminators
    "DISCRIMINATORS",
    "discriminator",
    # Encoding
    "PAYLOADS",
    "encode_instruction_data",
    "payload_size",
    "builders",
    # Arguments
    "InstructionArgs",
    "TwapWindow",
    "CreatePoolArgs",
    "CreateNPoolArgs",
    "SwapArgs",
    "SwapSimpleArgs",
    "SwapNArgs",
    "AddLiqArgs",
    "AddLiq1Args",
    "RemLiqArgs",
    "SetPauseArgs",
    "UpdateFeeArgs",
    "CommitAmpArgs",
    "RampAmpArgs",
    "CreateFarmArgs",
    "StakeArgs",
    "LockLpArgs",
    "CreateLotteryArgs",
    "EnterLotteryArgs",
    "DrawLotteryArgs",
    "GetTwapArgs",
]
