"""AeX402 SDK - Python client support for the AeX402 StableSwap program."""

from aex402.accounts import Pool, decode_account
from aex402.config import DEFAULT_CONFIG, SdkConfig
from aex402.errors import AeX402Error, ProgramError
from aex402.math import MathError, MathResult, calc_d, calc_y, simulate_swap

__version__ = "0.1.0"
__all__ = [
    "AeX402Error",
    "DEFAULT_CONFIG",
    "MathError",
    "MathResult",
    "Pool",
    "ProgramError",
    "SdkConfig",
    "calc_d",
    "calc_y",
    "decode_account",
    "simulate_swap",
    "__version__",
]
