"""Instruction discriminators.

Every instruction payload starts with an 8-byte tag identifying the
handler. The values are fixed by the deployed program.
"""

from __future__ import annotations

from types import MappingProxyType

DISCRIMINATOR_SIZE = 8

_HEX = {
    # Pool creation
    "create_pool": "f9e3a7c8d1e4b9f2",
    "create_npool": "1b7cc5e5bc339c27",
    "init_t0_vault": "9f4a3e0f0d3b8c5e",
    "init_t1_vault": "8a5e2d3b1c9f4e7a",
    "init_lp_mint": "f2e7b8c5a3e9d1f4",
    # Swaps
    "swap": "c88775e1919ec682",
    "swap_t0_t1": "2a4ef1e0b7f22a64",
    "swap_t1_t0": "c8c475ac1b130e3a",
    "swap_n": "f8e5d9b2c7e3a8f1",
    "migrate_t0_t1": "d5e9b7c3a8f1e4d2",
    "migrate_t1_t0": "b83d392694778818",
    # Liquidity
    "add_liquidity": "a9e5d1b3f8c4e7a2",
    "add_liquidity_1": "e6122e3c4e8bc951",
    "add_liquidity_n": "f6e4e9b1a8c2f7e3",
    "remove_liquidity": "02f9c5752cbc542e",
    "remove_liquidity_n": "b4b1e9d7c5a2e8b3",
    # Admin
    "set_pause": "c96e0d7e2b7675e0",
    "update_fee": "4a1f9d7c5b2e3a8f",
    "withdraw_fee": "f8e7b1c8a2d3e5f9",
    "commit_amp": "c4e2b8a5f7e3d9c1",
    "ramp_amp": "6a8e2d7b3f5e1c9a",
    "stop_ramp": "5310a215bb27943c",
    "init_auth_transfer": "f4f8e1b3c9a7e2f5",
    "complete_auth_transfer": "f5e1e9b7a4d2e8f6",
    "cancel_auth_transfer": "f6e8b2d5c1a9e3f7",
    # Farming
    "create_farm": "5c5d1a2f8e0c7b6d",
    "stake_lp": "f7e2b9b3a7e1d4f8",
    "unstake_lp": "bcf8344e65bf6641",
    "claim_farm": "9becd6e0b7627507",
    "lock_lp": "ec8c025f0183fbfe",
    "claim_unlocked_lp": "1e8be85cf49385ca",
    # Lottery
    "create_lottery": "3c79726574746f6c",
    "enter_lottery": "fc48ef4e3a3895e7",
    "draw_lottery": "11bc7c4d5a226113",
    "claim_lottery": "f43c9f153f5e7b7e",
    # Registry
    "init_registry": "180760f5d4c3b2a1",
    "register_pool": "291807f6e5d4c3b2",
    "unregister_pool": "30291807f6e5d4c3",
    # Oracle
    "get_twap": "0174656761707774",
    "set_oracle": "040302016c63726f",
    # Circuit breaker / rate limiting
    "set_circuit_breaker": "01cb01cb01cb01cb",
    "reset_circuit_breaker": "02cb02cb02cb02cb",
    "set_rate_limit": "6c72016c72016c72",
    # Governance
    "gov_propose": "0070726f70766f67",
    "gov_vote": "0065746f76766f67",
    "gov_execute": "63657865766f6700",
    "gov_cancel": "6c636e63766f6700",
    # Orderbook
    "init_book": "6b6f6f6274696e69",
    "place_order": "64726f6563616c70",
    "cancel_order": "726f6c65636e6163",
    "fill_order": "6564726f6c6c6966",
    # Concentrated liquidity
    "init_cl_pool": "01016c6f6f706c63",
    "cl_mint": "0101746e696d6c63",
    "cl_burn": "01016e7275626c63",
    "cl_collect": "63656c6c6f636c63",
    "cl_swap": "0101706177736c63",
    # Flash loans / multi-hop
    "flash_loan": "616f6c6873616c66",
    "flash_repay": "7065726873616c66",
    "multihop": "706f6869746c756d",
    # ML brain
    "init_ml": "72626c6d74696e69",
    "config_ml": "6172626c6d676663",
    "train_ml": "006c6d6e69617274",
    "apply_ml": "006c6d796c707061",
    "log_ml": "6174736c6d676f6c",
    # Transfer hook
    "transfer_hook_execute": "692565c54bfb661a",
    "transfer_hook_init": "2b220d31a758ebeb",
    # Virtual pools
    "vpool_init_global": "626f6c6774696e69",
    "vpool_create": "6574616572637076",
    "vpool_buy": "0000007975627076",
    "vpool_sell": "00006c6c65737076",
    "vpool_graduate": "0000646172677076",
    "vpool_claim": "006d69616c637076",
    "vpool_flush": "006873756c667076",
    "claim_creator_fees": "7472636d69616c63",
}

DISCRIMINATORS = MappingProxyType({name: bytes.fromhex(tag) for name, tag in _HEX.items()})


def discriminator(name: str) -> bytes:
    """Look up the 8-byte discriminator of an instruction by name.

    Raises:
        KeyError: If the instruction is unknown
    """
    try:
        return DISCRIMINATORS[name]
    except KeyError:
        raise KeyError(f"Unknown instruction: {name!r}") from None


def _validate_table() -> None:
    seen: dict[bytes, str] = {}
    for name, tag in DISCRIMINATORS.items():
        if len(tag) != DISCRIMINATOR_SIZE:
            raise ValueError(f"Discriminator for {name} is {len(tag)} bytes")
        if tag in seen:
            raise ValueError(f"Discriminator for {name} duplicates {seen[tag]}")
        seen[tag] = name


_validate_table()
