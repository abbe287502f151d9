"""Program-derived address helpers.

Seeds are fixed by the program; the hashing and off-curve search are done
by solders. Every helper returns (address, bump).
"""

from __future__ import annotations

from construct import Int32ul
from solders.pubkey import Pubkey

from aex402.config import DEFAULT_CONFIG


def _program(program_id: Pubkey | None) -> Pubkey:
    if program_id is not None:
        return program_id
    return Pubkey.from_string(DEFAULT_CONFIG.program_id)


def _pool_id_seed(pool_id: int) -> bytes:
    return Int32ul.build(pool_id)


def derive_pool_pda(
    mint0: Pubkey, mint1: Pubkey, program_id: Pubkey | None = None
) -> tuple[Pubkey, int]:
    """Pool PDA from its two mints. Mint order matters."""
    return Pubkey.find_program_address([b"pool", bytes(mint0), bytes(mint1)], _program(program_id))


def derive_farm_pda(pool: Pubkey, program_id: Pubkey | None = None) -> tuple[Pubkey, int]:
    return Pubkey.find_program_address([b"farm", bytes(pool)], _program(program_id))


def derive_user_farm_pda(
    farm: Pubkey, user: Pubkey, program_id: Pubkey | None = None
) -> tuple[Pubkey, int]:
    return Pubkey.find_program_address(
        [b"user_farm", bytes(farm), bytes(user)], _program(program_id)
    )


def derive_lottery_pda(pool: Pubkey, program_id: Pubkey | None = None) -> tuple[Pubkey, int]:
    return Pubkey.find_program_address([b"lottery", bytes(pool)], _program(program_id))


def derive_lottery_entry_pda(
    lottery: Pubkey, user: Pubkey, program_id: Pubkey | None = None
) -> tuple[Pubkey, int]:
    return Pubkey.find_program_address(
        [b"lottery_entry", bytes(lottery), bytes(user)], _program(program_id)
    )


def derive_global_vpool_pda(program_id: Pubkey | None = None) -> tuple[Pubkey, int]:
    """The single account holding every virtual-pool slot."""
    return Pubkey.find_program_address([b"global_vpool"], _program(program_id))


def derive_vpool_mint_pda(pool_id: int, program_id: Pubkey | None = None) -> tuple[Pubkey, int]:
    """Token mint of a virtual pool, seeded by its u32 pool id (little-endian)."""
    return Pubkey.find_program_address([b"vpmint", _pool_id_seed(pool_id)], _program(program_id))


def derive_vpool_claim_pda(
    pool_id: int, wallet: Pubkey, program_id: Pubkey | None = None
) -> tuple[Pubkey, int]:
    return Pubkey.find_program_address(
        [b"vpclaim", _pool_id_seed(pool_id), bytes(wallet)], _program(program_id)
    )
