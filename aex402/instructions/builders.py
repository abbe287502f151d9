"""Transaction instruction builders.

Each builder returns a solders Instruction with the payload from
encoding.encode_instruction_data and the account list the program expects,
in order. Builders accept an optional program_id / token_program override;
by default they use DEFAULT_CONFIG.
"""

from __future__ import annotations

from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey

from aex402.config import DEFAULT_CONFIG
from aex402.constants import SYSTEM_PROGRAM_ID

from .args import (
    AddLiq1Args,
    AddLiqArgs,
    CommitAmpArgs,
    CreateFarmArgs,
    CreateLotteryArgs,
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
from .encoding import encode_instruction_data

SYSTEM_PROGRAM = Pubkey.from_string(SYSTEM_PROGRAM_ID)


def _writable(pubkey: Pubkey) -> AccountMeta:
    return AccountMeta(pubkey=pubkey, is_signer=False, is_writable=True)


def _readonly(pubkey: Pubkey) -> AccountMeta:
    return AccountMeta(pubkey=pubkey, is_signer=False, is_writable=False)


def _signer(pubkey: Pubkey, writable: bool = False) -> AccountMeta:
    return AccountMeta(pubkey=pubkey, is_signer=True, is_writable=writable)


def _program(program_id: Pubkey | None) -> Pubkey:
    if program_id is not None:
        return program_id
    return Pubkey.from_string(DEFAULT_CONFIG.program_id)


def _token_program(token_program: Pubkey | None) -> AccountMeta:
    if token_program is None:
        token_program = Pubkey.from_string(DEFAULT_CONFIG.token_program_id)
    return _readonly(token_program)


def _build(
    name: str,
    accounts: list[AccountMeta],
    args: InstructionArgs | None = None,
    program_id: Pubkey | None = None,
) -> Instruction:
    return Instruction(_program(program_id), encode_instruction_data(name, args), accounts)


# =============================================================================
# Pool creation
# =============================================================================


def create_pool(
    pool: Pubkey,
    mint0: Pubkey,
    mint1: Pubkey,
    authority: Pubkey,
    args: CreatePoolArgs,
    program_id: Pubkey | None = None,
) -> Instruction:
    accounts = [
        _writable(pool),
        _readonly(mint0),
        _readonly(mint1),
        _signer(authority, writable=True),
        _readonly(SYSTEM_PROGRAM),
    ]
    return _build("create_pool", accounts, args, program_id)


def _init_pool_account(
    name: str, pool: Pubkey, account: Pubkey, authority: Pubkey, program_id: Pubkey | None
) -> Instruction:
    accounts = [
        _writable(pool),
        _readonly(account),
        _signer(authority),
        _readonly(SYSTEM_PROGRAM),
    ]
    return _build(name, accounts, program_id=program_id)


def init_t0_vault(
    pool: Pubkey, vault: Pubkey, authority: Pubkey, program_id: Pubkey | None = None
) -> Instruction:
    return _init_pool_account("init_t0_vault", pool, vault, authority, program_id)


def init_t1_vault(
    pool: Pubkey, vault: Pubkey, authority: Pubkey, program_id: Pubkey | None = None
) -> Instruction:
    return _init_pool_account("init_t1_vault", pool, vault, authority, program_id)


def init_lp_mint(
    pool: Pubkey, lp_mint: Pubkey, authority: Pubkey, program_id: Pubkey | None = None
) -> Instruction:
    return _init_pool_account("init_lp_mint", pool, lp_mint, authority, program_id)


# =============================================================================
# Swaps
# =============================================================================


def _swap_accounts(
    pool: Pubkey,
    vault_a: Pubkey,
    vault_b: Pubkey,
    user_token_a: Pubkey,
    user_token_b: Pubkey,
    user: Pubkey,
    token_program: Pubkey | None,
) -> list[AccountMeta]:
    return [
        _writable(pool),
        _writable(vault_a),
        _writable(vault_b),
        _writable(user_token_a),
        _writable(user_token_b),
        _signer(user),
        _token_program(token_program),
    ]


def swap(
    pool: Pubkey,
    vault0: Pubkey,
    vault1: Pubkey,
    user_token0: Pubkey,
    user_token1: Pubkey,
    user: Pubkey,
    args: SwapArgs,
    token_program: Pubkey | None = None,
    program_id: Pubkey | None = None,
) -> Instruction:
    accounts = _swap_accounts(pool, vault0, vault1, user_token0, user_token1, user, token_program)
    return _build("swap", accounts, args, program_id)


def swap_t0_t1(
    pool: Pubkey,
    vault0: Pubkey,
    vault1: Pubkey,
    user_token0: Pubkey,
    user_token1: Pubkey,
    user: Pubkey,
    args: SwapSimpleArgs,
    token_program: Pubkey | None = None,
    program_id: Pubkey | None = None,
) -> Instruction:
    accounts = _swap_accounts(pool, vault0, vault1, user_token0, user_token1, user, token_program)
    return _build("swap_t0_t1", accounts, args, program_id)


def swap_t1_t0(
    pool: Pubkey,
    vault0: Pubkey,
    vault1: Pubkey,
    user_token0: Pubkey,
    user_token1: Pubkey,
    user: Pubkey,
    args: SwapSimpleArgs,
    token_program: Pubkey | None = None,
    program_id: Pubkey | None = None,
) -> Instruction:
    accounts = _swap_accounts(pool, vault0, vault1, user_token0, user_token1, user, token_program)
    return _build("swap_t1_t0", accounts, args, program_id)


def swap_n(
    pool: Pubkey,
    vault_in: Pubkey,
    vault_out: Pubkey,
    user_token_in: Pubkey,
    user_token_out: Pubkey,
    user: Pubkey,
    args: SwapNArgs,
    token_program: Pubkey | None = None,
    program_id: Pubkey | None = None,
) -> Instruction:
    accounts = _swap_accounts(
        pool, vault_in, vault_out, user_token_in, user_token_out, user, token_program
    )
    return _build("swap_n", accounts, args, program_id)


# =============================================================================
# Liquidity
# =============================================================================


def add_liquidity(
    pool: Pubkey,
    vault0: Pubkey,
    vault1: Pubkey,
    lp_mint: Pubkey,
    user_token0: Pubkey,
    user_token1: Pubkey,
    user_lp: Pubkey,
    user: Pubkey,
    args: AddLiqArgs,
    token_program: Pubkey | None = None,
    program_id: Pubkey | None = None,
) -> Instruction:
    accounts = [
        _writable(pool),
        _writable(vault0),
        _writable(vault1),
        _writable(lp_mint),
        _writable(user_token0),
        _writable(user_token1),
        _writable(user_lp),
        _signer(user),
        _token_program(token_program),
    ]
    return _build("add_liquidity", accounts, args, program_id)


def add_liquidity_1(
    pool: Pubkey,
    vault_in: Pubkey,
    lp_mint: Pubkey,
    user_token_in: Pubkey,
    user_lp: Pubkey,
    user: Pubkey,
    args: AddLiq1Args,
    token_program: Pubkey | None = None,
    program_id: Pubkey | None = None,
) -> Instruction:
    accounts = [
        _writable(pool),
        _writable(vault_in),
        _writable(lp_mint),
        _writable(user_token_in),
        _writable(user_lp),
        _signer(user),
        _token_program(token_program),
    ]
    return _build("add_liquidity_1", accounts, args, program_id)


def remove_liquidity(
    pool: Pubkey,
    vault0: Pubkey,
    vault1: Pubkey,
    lp_mint: Pubkey,
    user_token0: Pubkey,
    user_token1: Pubkey,
    user_lp: Pubkey,
    user: Pubkey,
    args: RemLiqArgs,
    token_program: Pubkey | None = None,
    program_id: Pubkey | None = None,
) -> Instruction:
    accounts = [
        _writable(pool),
        _writable(vault0),
        _writable(vault1),
        _writable(lp_mint),
        _writable(user_token0),
        _writable(user_token1),
        _writable(user_lp),
        _signer(user),
        _token_program(token_program),
    ]
    return _build("remove_liquidity", accounts, args, program_id)


# =============================================================================
# Admin
# =============================================================================


def _pool_admin(
    name: str,
    pool: Pubkey,
    authority: Pubkey,
    args: InstructionArgs | None = None,
    program_id: Pubkey | None = None,
) -> Instruction:
    return _build(name, [_writable(pool), _signer(authority)], args, program_id)


def set_pause(
    pool: Pubkey, authority: Pubkey, paused: bool, program_id: Pubkey | None = None
) -> Instruction:
    return _pool_admin("set_pause", pool, authority, SetPauseArgs(paused=paused), program_id)


def update_fee(
    pool: Pubkey, authority: Pubkey, args: UpdateFeeArgs, program_id: Pubkey | None = None
) -> Instruction:
    return _pool_admin("update_fee", pool, authority, args, program_id)


def commit_amp(
    pool: Pubkey, authority: Pubkey, args: CommitAmpArgs, program_id: Pubkey | None = None
) -> Instruction:
    return _pool_admin("commit_amp", pool, authority, args, program_id)


def ramp_amp(
    pool: Pubkey, authority: Pubkey, args: RampAmpArgs, program_id: Pubkey | None = None
) -> Instruction:
    return _pool_admin("ramp_amp", pool, authority, args, program_id)


def stop_ramp(pool: Pubkey, authority: Pubkey, program_id: Pubkey | None = None) -> Instruction:
    return _pool_admin("stop_ramp", pool, authority, program_id=program_id)


def withdraw_fee(
    pool: Pubkey,
    vault0: Pubkey,
    vault1: Pubkey,
    dest0: Pubkey,
    dest1: Pubkey,
    authority: Pubkey,
    token_program: Pubkey | None = None,
    program_id: Pubkey | None = None,
) -> Instruction:
    accounts = [
        _writable(pool),
        _writable(vault0),
        _writable(vault1),
        _writable(dest0),
        _writable(dest1),
        _signer(authority),
        _token_program(token_program),
    ]
    return _build("withdraw_fee", accounts, program_id=program_id)


def init_auth_transfer(
    pool: Pubkey, authority: Pubkey, new_authority: Pubkey, program_id: Pubkey | None = None
) -> Instruction:
    accounts = [_writable(pool), _signer(authority), _readonly(new_authority)]
    return _build("init_auth_transfer", accounts, program_id=program_id)


def complete_auth_transfer(
    pool: Pubkey, new_authority: Pubkey, program_id: Pubkey | None = None
) -> Instruction:
    return _pool_admin("complete_auth_transfer", pool, new_authority, program_id=program_id)


def cancel_auth_transfer(
    pool: Pubkey, authority: Pubkey, program_id: Pubkey | None = None
) -> Instruction:
    return _pool_admin("cancel_auth_transfer", pool, authority, program_id=program_id)


# =============================================================================
# Farming
# =============================================================================


def create_farm(
    farm: Pubkey,
    pool: Pubkey,
    reward_mint: Pubkey,
    authority: Pubkey,
    args: CreateFarmArgs,
    program_id: Pubkey | None = None,
) -> Instruction:
    accounts = [
        _writable(farm),
        _readonly(pool),
        _readonly(reward_mint),
        _signer(authority, writable=True),
        _readonly(SYSTEM_PROGRAM),
    ]
    return _build("create_farm", accounts, args, program_id)


def _stake_accounts(
    user_position: Pubkey,
    farm: Pubkey,
    user_lp: Pubkey,
    lp_vault: Pubkey,
    user: Pubkey,
    token_program: Pubkey | None,
) -> list[AccountMeta]:
    return [
        _writable(user_position),
        _writable(farm),
        _writable(user_lp),
        _writable(lp_vault),
        _signer(user),
        _token_program(token_program),
    ]


def stake_lp(
    user_position: Pubkey,
    farm: Pubkey,
    user_lp: Pubkey,
    lp_vault: Pubkey,
    user: Pubkey,
    args: StakeArgs,
    token_program: Pubkey | None = None,
    program_id: Pubkey | None = None,
) -> Instruction:
    accounts = _stake_accounts(user_position, farm, user_lp, lp_vault, user, token_program)
    return _build("stake_lp", accounts, args, program_id)


def unstake_lp(
    user_position: Pubkey,
    farm: Pubkey,
    user_lp: Pubkey,
    lp_vault: Pubkey,
    user: Pubkey,
    args: StakeArgs,
    token_program: Pubkey | None = None,
    program_id: Pubkey | None = None,
) -> Instruction:
    accounts = _stake_accounts(user_position, farm, user_lp, lp_vault, user, token_program)
    return _build("unstake_lp", accounts, args, program_id)


def claim_farm(
    user_position: Pubkey,
    farm: Pubkey,
    pool: Pubkey,
    reward_vault: Pubkey,
    user_reward: Pubkey,
    user: Pubkey,
    token_program: Pubkey | None = None,
    program_id: Pubkey | None = None,
) -> Instruction:
    accounts = [
        _writable(user_position),
        _writable(farm),
        _readonly(pool),
        _writable(reward_vault),
        _writable(user_reward),
        _signer(user),
        _token_program(token_program),
    ]
    return _build("claim_farm", accounts, program_id=program_id)


def lock_lp(
    user_position: Pubkey,
    farm: Pubkey,
    user: Pubkey,
    args: LockLpArgs,
    program_id: Pubkey | None = None,
) -> Instruction:
    accounts = [_writable(user_position), _readonly(farm), _signer(user), _readonly(SYSTEM_PROGRAM)]
    return _build("lock_lp", accounts, args, program_id)


def claim_unlocked_lp(
    user_position: Pubkey, farm: Pubkey, user: Pubkey, program_id: Pubkey | None = None
) -> Instruction:
    accounts = [_writable(user_position), _readonly(farm), _signer(user), _readonly(SYSTEM_PROGRAM)]
    return _build("claim_unlocked_lp", accounts, program_id=program_id)


# =============================================================================
# Lottery
# =============================================================================


def create_lottery(
    lottery: Pubkey,
    pool: Pubkey,
    lottery_vault: Pubkey,
    authority: Pubkey,
    args: CreateLotteryArgs,
    program_id: Pubkey | None = None,
) -> Instruction:
    accounts = [
        _writable(lottery),
        _readonly(pool),
        _readonly(lottery_vault),
        _signer(authority, writable=True),
        _readonly(SYSTEM_PROGRAM),
    ]
    return _build("create_lottery", accounts, args, program_id)


def enter_lottery(
    lottery: Pubkey,
    user_entry: Pubkey,
    user: Pubkey,
    user_lp: Pubkey,
    lottery_vault: Pubkey,
    args: EnterLotteryArgs,
    token_program: Pubkey | None = None,
    program_id: Pubkey | None = None,
) -> Instruction:
    accounts = [
        _writable(lottery),
        _writable(user_entry),
        _signer(user),
        _writable(user_lp),
        _writable(lottery_vault),
        _token_program(token_program),
    ]
    return _build("enter_lottery", accounts, args, program_id)


def draw_lottery(
    lottery: Pubkey,
    authority: Pubkey,
    recent_slothashes: Pubkey,
    args: DrawLotteryArgs,
    program_id: Pubkey | None = None,
) -> Instruction:
    accounts = [_writable(lottery), _signer(authority), _readonly(recent_slothashes)]
    return _build("draw_lottery", accounts, args, program_id)


def claim_lottery(
    lottery: Pubkey,
    user_entry: Pubkey,
    user: Pubkey,
    user_lp: Pubkey,
    lottery_vault: Pubkey,
    pool: Pubkey,
    token_program: Pubkey | None = None,
    program_id: Pubkey | None = None,
) -> Instruction:
    accounts = [
        _writable(lottery),
        _writable(user_entry),
        _signer(user),
        _writable(user_lp),
        _writable(lottery_vault),
        _readonly(pool),
        _token_program(token_program),
    ]
    return _build("claim_lottery", accounts, program_id=program_id)


# =============================================================================
# Oracle
# =============================================================================


def get_twap(pool: Pubkey, window: TwapWindow, program_id: Pubkey | None = None) -> Instruction:
    return _build("get_twap", [_readonly(pool)], GetTwapArgs(window=window), program_id)
