"""Protocol constants for the AeX402 program.

Centralizes program ids, pool parameters, account sizes and account magic tags.
"""

from __future__ import annotations

from types import MappingProxyType

# AeX402 program id (devnet and mainnet)
PROGRAM_ID = "3AMM53MsJZy2Jvf7PeHHga3bsGjWV4TSaYz29WUtcdje"

TOKEN_PROGRAM_ID = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"
TOKEN_2022_PROGRAM_ID = "TokenzQdBNbLqP5VEhdkAS6EPFLC1PHnBqCXEpPxuEb"
SYSTEM_PROGRAM_ID = "11111111111111111111111111111111"

# Pool parameters
MIN_AMP = 1
MAX_AMP = 100_000
NEWTON_ITERATIONS = 255
MIN_TOKENS = 2
MAX_TOKENS = 8

# Fixed-point denominators
FEE_DENOMINATOR = 10_000
PRECISION = 10**18
BONDING_SCALE = 10**9
PRICE_SCALE = 10**6  # candle and TWAP prices
CONFIDENCE_SCALE = 10_000  # TWAP confidence, 10000 == 100%

# Allocated account sizes
POOL_SIZE = 1024
NPOOL_SIZE = 2048
FARM_SIZE = 120
USER_FARM_SIZE = 96
LOTTERY_SIZE = 152
LOTTERY_ENTRY_SIZE = 88

# Minimum buffer length accepted by the decoder for each record
POOL_MIN_SIZE = 900
NPOOL_MIN_SIZE = 800
FARM_MIN_SIZE = FARM_SIZE
USER_FARM_MIN_SIZE = USER_FARM_SIZE
LOTTERY_MIN_SIZE = LOTTERY_SIZE
LOTTERY_ENTRY_MIN_SIZE = LOTTERY_ENTRY_SIZE

# On-chain analytics
BLOOM_SIZE = 128
OHLCV_24H = 24
OHLCV_7D = 7
CANDLE_SIZE = 12

DISCRIMINATOR_SIZE = 8


def _validate_magic(name: str, tag: str) -> bytes:
    """Encode an account magic tag, rejecting anything but 8 ASCII bytes.

    Raises:
        ValueError: If the tag is not exactly 8 ASCII characters
    """
    if len(tag) != DISCRIMINATOR_SIZE or not tag.isascii():
        raise ValueError(f"Invalid {name} magic: {tag!r} (must be 8 ASCII chars)")
    return tag.encode("ascii")


# Account discriminators: ASCII magic headers, validated at import time
POOL_MAGIC = _validate_magic("POOL", "POOLSWAP")
NPOOL_MAGIC = _validate_magic("NPOOL", "NPOOLSWA")
FARM_MAGIC = _validate_magic("FARM", "FARMSWAP")
USER_FARM_MAGIC = _validate_magic("UFARM", "UFARMSWA")
LOTTERY_MAGIC = _validate_magic("LOTTERY", "LOTTERY!")
LOTTERY_ENTRY_MAGIC = _validate_magic("LOTENTRY", "LOTENTRY")

ACCOUNT_MAGICS = MappingProxyType(
    {
        "pool": POOL_MAGIC,
        "npool": NPOOL_MAGIC,
        "farm": FARM_MAGIC,
        "user_farm": USER_FARM_MAGIC,
        "lottery": LOTTERY_MAGIC,
        "lottery_entry": LOTTERY_ENTRY_MAGIC,
        "registry": _validate_magic("REGISTRY", "REGISTRY"),
        "ml_brain": _validate_magic("MLBRAIN", "MLBRAIN!"),
        "cl_pool": _validate_magic("CLPOOL", "CLPOOL!!"),
        "cl_position": _validate_magic("CLPOS", "CLPOSIT!"),
        "orderbook": _validate_magic("BOOK", "ORDERBOK"),
        "ai_fee": _validate_magic("AIFEE", "AIFEE!!!"),
        "transfer_hook_meta": _validate_magic("THMETA", "THMETA!!"),
        "gov_proposal": _validate_magic("GOVPROP", "GOVPROP!"),
        "gov_vote": _validate_magic("GOVVOTE", "GOVVOTE!"),
        "vpool_global": _validate_magic("GPOOLS", "GPVOOLS!"),
        "vpool_claim": _validate_magic("VPCLAIM", "VPCLAIM!"),
        "farm_state": _validate_magic("FARMSTATE", "FARMSTAT"),
    }
)

# Virtual pools
VPOOL_STALE_SECONDS = 86_400
