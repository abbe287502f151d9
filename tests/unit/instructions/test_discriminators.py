"""Tests for the instruction discriminator table."""

import pytest

from aex402.instructions import DISCRIMINATORS, discriminator


class TestDiscriminatorTable:
    def test_all_eight_bytes(self):
        assert all(len(tag) == 8 for tag in DISCRIMINATORS.values())

    def test_unique(self):
        assert len(set(DISCRIMINATORS.values())) == len(DISCRIMINATORS)

    def test_immutable(self):
        with pytest.raises(TypeError):
            DISCRIMINATORS["swap"] = bytes(8)  # type: ignore[index]

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("create_pool", "f9e3a7c8d1e4b9f2"),
            ("swap", "c88775e1919ec682"),
            ("swap_t0_t1", "2a4ef1e0b7f22a64"),
            ("add_liquidity", "a9e5d1b3f8c4e7a2"),
            ("remove_liquidity", "02f9c5752cbc542e"),
            ("set_pause", "c96e0d7e2b7675e0"),
            ("get_twap", "0174656761707774"),
            ("create_lottery", "3c79726574746f6c"),
            ("flash_loan", "616f6c6873616c66"),
        ],
    )
    def test_known_values(self, name, expected):
        """Tags match the deployed program byte for byte."""
        assert discriminator(name) == bytes.fromhex(expected)

    def test_covers_every_instruction_family(self):
        for name in ("create_npool", "swap_n", "stake_lp", "claim_lottery", "vpool_buy", "cl_swap"):
            assert name in DISCRIMINATORS

    def test_unknown_raises_key_error(self):
        with pytest.raises(KeyError, match="not_an_instruction"):
            discriminator("not_an_instruction")
