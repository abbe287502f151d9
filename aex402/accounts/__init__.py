"""On-chain account records and their binary codec."""

from .parsing import (
    Account,
    decode_account,
    decode_twap_result,
    encode_farm,
    encode_lottery,
    encode_lottery_entry,
    encode_npool,
    encode_pool,
    encode_user_farm,
    parse_farm,
    parse_lottery,
    parse_lottery_entry,
    parse_npool,
    parse_pool,
    parse_user_farm,
)
from .types import (
    Candle,
    CandleDecoded,
    Farm,
    Lottery,
    LotteryEntry,
    NPool,
    Pool,
    TwapResult,
    Unrecognized,
    UserFarm,
)

__all__ = [
    # Records
    "Account",
    "Candle",
    "CandleDecoded",
    "Pool",
    "NPool",
    "Farm",
    "UserFarm",
    "Lottery",
    "LotteryEntry",
    "Unrecognized",
    "TwapResult",
    # Decoding
    "decode_account",
    "decode_twap_result",
    "parse_pool",
    "parse_npool",
    "parse_farm",
    "parse_user_farm",
    "parse_lottery",
    "parse_lottery_entry",
    # Encoding
    "encode_pool",
    "encode_npool",
    "encode_farm",
    "encode_user_farm",
    "encode_lottery",
    "encode_lottery_entry",
]
