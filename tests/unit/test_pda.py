"""Tests for program-derived addresses."""

from solders.pubkey import Pubkey

from aex402 import pda
from aex402.constants import PROGRAM_ID
from tests.helpers import FARM_ADDRESS, MINT_A, MINT_B, POOL_ADDRESS, USER, pubkey

PROGRAM = Pubkey.from_string(PROGRAM_ID)


class TestDerivation:
    def test_pool_seeds(self):
        expected = Pubkey.find_program_address([b"pool", bytes(MINT_A), bytes(MINT_B)], PROGRAM)
        assert pda.derive_pool_pda(MINT_A, MINT_B) == expected

    def test_deterministic(self):
        assert pda.derive_farm_pda(POOL_ADDRESS) == pda.derive_farm_pda(POOL_ADDRESS)

    def test_mint_order_matters(self):
        assert pda.derive_pool_pda(MINT_A, MINT_B)[0] != pda.derive_pool_pda(MINT_B, MINT_A)[0]

    def test_off_curve(self):
        address, bump = pda.derive_lottery_pda(POOL_ADDRESS)
        assert not address.is_on_curve()
        assert 0 <= bump <= 255

    def test_user_farm(self):
        expected = Pubkey.find_program_address([b"user_farm", bytes(FARM_ADDRESS), bytes(USER)], PROGRAM)
        assert pda.derive_user_farm_pda(FARM_ADDRESS, USER) == expected

    def test_vpool_pool_id_little_endian(self):
        expected = Pubkey.find_program_address([b"vpmint", (7).to_bytes(4, "little")], PROGRAM)
        assert pda.derive_vpool_mint_pda(7) == expected

    def test_vpool_claim_distinct_per_wallet(self):
        a = pda.derive_vpool_claim_pda(7, USER)[0]
        b = pda.derive_vpool_claim_pda(7, pubkey(99))[0]
        assert a != b

    def test_program_override(self):
        other = pubkey(200)
        assert pda.derive_global_vpool_pda(other) != pda.derive_global_vpool_pda()
        assert pda.derive_global_vpool_pda(other) == Pubkey.find_program_address([b"global_vpool"], other)
