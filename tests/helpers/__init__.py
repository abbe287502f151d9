"""Test helpers module for shared test utilities.

- constants: Deterministic pubkeys and common amounts
- factories: Record factory functions with overridable defaults
"""

from tests.helpers.constants import (
    AMP,
    AUTHORITY,
    BALANCE,
    FARM_ADDRESS,
    FEE_BPS,
    LP_MINT,
    MINT_A,
    MINT_B,
    ONE_TOKEN,
    POOL_ADDRESS,
    USER,
    VAULT_A,
    VAULT_B,
    pubkey,
)
from tests.helpers.factories import (
    make_candle,
    make_farm,
    make_lottery,
    make_lottery_entry,
    make_npool,
    make_pool,
    make_user_farm,
    make_vpool_slot,
)

__all__ = [
    # Constants
    "AMP",
    "AUTHORITY",
    "BALANCE",
    "FARM_ADDRESS",
    "FEE_BPS",
    "LP_MINT",
    "MINT_A",
    "MINT_B",
    "ONE_TOKEN",
    "POOL_ADDRESS",
    "USER",
    "VAULT_A",
    "VAULT_B",
    "pubkey",
    # Factories
    "make_candle",
    "make_pool",
    "make_npool",
    "make_farm",
    "make_user_farm",
    "make_lottery",
    "make_lottery_entry",
    "make_vpool_slot",
]
