"""Binary layouts of the program's accounts.

All integers are little-endian. u64 fields parse as unsigned Python ints,
i64 fields as signed. Each layout starts with the record's 8-byte ASCII
magic, so building a record writes the right discriminator.
"""

from __future__ import annotations

from construct import (
    Adapter,
    Array,
    Bytes,
    Const,
    Construct,
    Flag,
    Int8ul,
    Int16sl,
    Int16ul,
    Int32ul,
    Int64sl,
    Int64ul,
    Padding,
    Struct,
)
from solders.pubkey import Pubkey

from aex402.constants import (
    BLOOM_SIZE,
    CANDLE_SIZE,
    FARM_MAGIC,
    FARM_SIZE,
    LOTTERY_ENTRY_MAGIC,
    LOTTERY_ENTRY_SIZE,
    LOTTERY_MAGIC,
    LOTTERY_SIZE,
    MAX_TOKENS,
    NPOOL_MAGIC,
    NPOOL_SIZE,
    OHLCV_7D,
    OHLCV_24H,
    POOL_MAGIC,
    POOL_SIZE,
    USER_FARM_MAGIC,
    USER_FARM_SIZE,
)

from .types import Candle


class PubkeyAdapter(Adapter):
    def _decode(self, obj, context, path):
        return Pubkey.from_bytes(obj)

    def _encode(self, obj, context, path):
        return bytes(obj)


class CandleAdapter(Adapter):
    def _decode(self, obj, context, path):
        return Candle(
            open=obj.open,
            high_d=obj.high_d,
            low_d=obj.low_d,
            close_d=obj.close_d,
            volume=obj.volume,
        )

    def _encode(self, obj, context, path):
        return dict(
            open=obj.open,
            high_d=obj.high_d,
            low_d=obj.low_d,
            close_d=obj.close_d,
            volume=obj.volume,
        )


PUBKEY = PubkeyAdapter(Bytes(32))

CANDLE_LAYOUT = CandleAdapter(
    Struct(
        "open" / Int32ul,
        "high_d" / Int16ul,
        "low_d" / Int16ul,
        "close_d" / Int16sl,
        "volume" / Int16ul,
    )
)

POOL_LAYOUT = Struct(
    "discriminator" / Const(POOL_MAGIC),
    "authority" / PUBKEY,
    "mint0" / PUBKEY,
    "mint1" / PUBKEY,
    "vault0" / PUBKEY,
    "vault1" / PUBKEY,
    "lp_mint" / PUBKEY,
    "amp" / Int64ul,
    "init_amp" / Int64ul,
    "target_amp" / Int64ul,
    "ramp_start" / Int64sl,
    "ramp_stop" / Int64sl,
    "fee_bps" / Int64ul,
    "admin_fee_pct" / Int64ul,
    "bal0" / Int64ul,
    "bal1" / Int64ul,
    "lp_supply" / Int64ul,
    "admin_fee0" / Int64ul,
    "admin_fee1" / Int64ul,
    "vol0" / Int64ul,
    "vol1" / Int64ul,
    "paused" / Flag,
    "bump" / Int8ul,
    "vault0_bump" / Int8ul,
    "vault1_bump" / Int8ul,
    "lp_mint_bump" / Int8ul,
    Padding(3),
    "pending_auth" / PUBKEY,
    "auth_time" / Int64sl,
    "pending_amp" / Int64ul,
    "amp_time" / Int64sl,
    "trade_count" / Int64ul,
    "trade_sum" / Int64ul,
    "max_price" / Int32ul,
    "min_price" / Int32ul,
    "hour_slot" / Int32ul,
    "day_slot" / Int32ul,
    "hour_idx" / Int8ul,
    "day_idx" / Int8ul,
    Padding(6),
    "bloom" / Bytes(BLOOM_SIZE),
    "hourly_candles" / Array(OHLCV_24H, CANDLE_LAYOUT),
    "daily_candles" / Array(OHLCV_7D, CANDLE_LAYOUT),
)

NPOOL_LAYOUT = Struct(
    "discriminator" / Const(NPOOL_MAGIC),
    "authority" / PUBKEY,
    "n_tokens" / Int8ul,
    "paused" / Flag,
    "bump" / Int8ul,
    Padding(5),
    "amp" / Int64ul,
    "fee_bps" / Int64ul,
    "admin_fee_pct" / Int64ul,
    "lp_supply" / Int64ul,
    "mints" / Array(MAX_TOKENS, PUBKEY),
    "vaults" / Array(MAX_TOKENS, PUBKEY),
    "lp_mint" / PUBKEY,
    "balances" / Array(MAX_TOKENS, Int64ul),
    "admin_fees" / Array(MAX_TOKENS, Int64ul),
    "total_volume" / Int64ul,
    "trade_count" / Int64ul,
    "last_trade_slot" / Int64ul,
)

FARM_LAYOUT = Struct(
    "discriminator" / Const(FARM_MAGIC),
    "pool" / PUBKEY,
    "reward_mint" / PUBKEY,
    "reward_rate" / Int64ul,
    "start_time" / Int64sl,
    "end_time" / Int64sl,
    "total_staked" / Int64ul,
    "acc_reward" / Int64ul,
    "last_update" / Int64sl,
)

USER_FARM_LAYOUT = Struct(
    "discriminator" / Const(USER_FARM_MAGIC),
    "owner" / PUBKEY,
    "farm" / PUBKEY,
    "staked" / Int64ul,
    "reward_debt" / Int64ul,
    "lock_end" / Int64sl,
)

LOTTERY_LAYOUT = Struct(
    "discriminator" / Const(LOTTERY_MAGIC),
    "pool" / PUBKEY,
    "authority" / PUBKEY,
    "lottery_vault" / PUBKEY,
    "ticket_price" / Int64ul,
    "total_tickets" / Int64ul,
    "prize_pool" / Int64ul,
    "end_time" / Int64sl,
    "winning_ticket" / Int64ul,
    "drawn" / Flag,
    "claimed" / Flag,
)

LOTTERY_ENTRY_LAYOUT = Struct(
    "discriminator" / Const(LOTTERY_ENTRY_MAGIC),
    "owner" / PUBKEY,
    "lottery" / PUBKEY,
    "ticket_start" / Int64ul,
    "ticket_count" / Int64ul,
)

# get_twap return value, read from the u64's little-endian bytes
TWAP_RESULT_LAYOUT = Struct(
    "price" / Int32ul,
    "samples" / Int16ul,
    "confidence" / Int16ul,
)


def _validate_size(name: str, layout: Construct, allocated: int) -> None:
    """Check a layout fits the bytes the program allocates for it.

    Raises:
        ValueError: If the layout is larger than the allocation
    """
    size = layout.sizeof()
    if size > allocated:
        raise ValueError(f"{name} layout is {size} bytes, only {allocated} allocated")


if CANDLE_LAYOUT.sizeof() != CANDLE_SIZE:
    raise ValueError(f"Candle layout must be {CANDLE_SIZE} bytes")

_validate_size("Pool", POOL_LAYOUT, POOL_SIZE)
_validate_size("NPool", NPOOL_LAYOUT, NPOOL_SIZE)
_validate_size("Farm", FARM_LAYOUT, FARM_SIZE)
_validate_size("UserFarm", USER_FARM_LAYOUT, USER_FARM_SIZE)
_validate_size("Lottery", LOTTERY_LAYOUT, LOTTERY_SIZE)
_validate_size("LotteryEntry", LOTTERY_ENTRY_LAYOUT, LOTTERY_ENTRY_SIZE)
