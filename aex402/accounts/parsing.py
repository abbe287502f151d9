"""Account codec.

Each parse_* function follows the same three steps:
1. Length check against the record's minimum size
2. Discriminator check against the record's ASCII magic
3. Fixed-offset field extraction through the construct layout

A buffer failing any step is simply not that record: the parser logs at
debug level and returns None. decode_account dispatches on the magic and
returns the matching one, or Unrecognized.

The encode_* helpers are the inverse, producing buffers padded to the
record's minimum size. They exist for fixtures and tests; the program
itself is the only real writer of these accounts.
"""

from __future__ import annotations

from dataclasses import fields
from typing import Any, TypeVar, Union

import structlog
from construct import ConstructError, Struct
from solders.pubkey import Pubkey

from aex402.constants import (
    ACCOUNT_MAGICS,
    DISCRIMINATOR_SIZE,
    FARM_MAGIC,
    FARM_MIN_SIZE,
    LOTTERY_ENTRY_MAGIC,
    LOTTERY_ENTRY_MIN_SIZE,
    LOTTERY_MAGIC,
    LOTTERY_MIN_SIZE,
    MAX_TOKENS,
    MIN_TOKENS,
    NPOOL_MAGIC,
    NPOOL_MIN_SIZE,
    POOL_MAGIC,
    POOL_MIN_SIZE,
    USER_FARM_MAGIC,
    USER_FARM_MIN_SIZE,
)
from aex402.safe_int import U64_MAX

from .layouts import (
    FARM_LAYOUT,
    LOTTERY_ENTRY_LAYOUT,
    LOTTERY_LAYOUT,
    NPOOL_LAYOUT,
    POOL_LAYOUT,
    TWAP_RESULT_LAYOUT,
    USER_FARM_LAYOUT,
)
from .types import (
    Farm,
    Lottery,
    LotteryEntry,
    NPool,
    Pool,
    TwapResult,
    Unrecognized,
    UserFarm,
)

logger = structlog.get_logger()

R = TypeVar("R")

Account = Union[Pool, NPool, Farm, UserFarm, Lottery, LotteryEntry, Unrecognized]

_KIND_BY_MAGIC = {magic: kind for kind, magic in ACCOUNT_MAGICS.items()}


def _parse_layout(
    data: bytes,
    layout: Struct,
    magic: bytes,
    min_size: int,
    record: str,
) -> Any | None:
    """Run the length, discriminator and layout steps; None if any fails."""
    if len(data) < min_size:
        logger.debug("account_too_short", record=record, size=len(data), min_size=min_size)
        return None

    discriminator = bytes(data[:DISCRIMINATOR_SIZE])
    if discriminator != magic:
        logger.debug(
            "account_discriminator_mismatch",
            record=record,
            expected=magic,
            actual=discriminator,
        )
        return None

    try:
        return layout.parse(bytes(data))
    except ConstructError as err:
        logger.debug("account_layout_error", record=record, size=len(data), error=str(err))
        return None


def _to_record(cls: type[R], container: Any, **overrides: Any) -> R:
    """Build a record dataclass from a parsed container.

    Parsed arrays become tuples so records stay hashable and immutable.
    """
    values = {}
    for field in fields(cls):  # type: ignore[arg-type]
        if field.name in overrides:
            values[field.name] = overrides[field.name]
            continue
        value = container[field.name]
        if isinstance(value, list):
            value = tuple(value)
        values[field.name] = value
    return cls(**values)


def _build(layout: Struct, record: Any, min_size: int, **overrides: Any) -> bytes:
    values = {field.name: getattr(record, field.name) for field in fields(record)}
    values.update(overrides)
    data = layout.build(values)
    return data + bytes(max(0, min_size - len(data)))


# =============================================================================
# Parsers
# =============================================================================


def parse_pool(data: bytes) -> Pool | None:
    """Parse a 2-token pool account (minimum 900 bytes, magic POOLSWAP)."""
    container = _parse_layout(data, POOL_LAYOUT, POOL_MAGIC, POOL_MIN_SIZE, "pool")
    if container is None:
        return None
    return _to_record(Pool, container)


def parse_npool(data: bytes) -> NPool | None:
    """Parse an N-token pool account (minimum 800 bytes, magic NPOOLSWA).

    The per-token arrays are stored with room for 8 tokens. Only the first
    n_tokens entries are real; the rest are dropped.
    A token count outside 2..8 does not describe a pool and yields None.
    """
    container = _parse_layout(data, NPOOL_LAYOUT, NPOOL_MAGIC, NPOOL_MIN_SIZE, "npool")
    if container is None:
        return None

    n = container.n_tokens
    if not MIN_TOKENS <= n <= MAX_TOKENS:
        logger.debug("npool_token_count_out_of_range", n_tokens=n)
        return None

    return _to_record(
        NPool,
        container,
        mints=tuple(container.mints[:n]),
        vaults=tuple(container.vaults[:n]),
        balances=tuple(container.balances[:n]),
        admin_fees=tuple(container.admin_fees[:n]),
    )


def parse_farm(data: bytes) -> Farm | None:
    container = _parse_layout(data, FARM_LAYOUT, FARM_MAGIC, FARM_MIN_SIZE, "farm")
    if container is None:
        return None
    return _to_record(Farm, container)


def parse_user_farm(data: bytes) -> UserFarm | None:
    container = _parse_layout(
        data, USER_FARM_LAYOUT, USER_FARM_MAGIC, USER_FARM_MIN_SIZE, "user_farm"
    )
    if container is None:
        return None
    return _to_record(UserFarm, container)


def parse_lottery(data: bytes) -> Lottery | None:
    container = _parse_layout(data, LOTTERY_LAYOUT, LOTTERY_MAGIC, LOTTERY_MIN_SIZE, "lottery")
    if container is None:
        return None
    return _to_record(Lottery, container)


def parse_lottery_entry(data: bytes) -> LotteryEntry | None:
    container = _parse_layout(
        data,
        LOTTERY_ENTRY_LAYOUT,
        LOTTERY_ENTRY_MAGIC,
        LOTTERY_ENTRY_MIN_SIZE,
        "lottery_entry",
    )
    if container is None:
        return None
    return _to_record(LotteryEntry, container)


_PARSERS = {
    POOL_MAGIC: parse_pool,
    NPOOL_MAGIC: parse_npool,
    FARM_MAGIC: parse_farm,
    USER_FARM_MAGIC: parse_user_farm,
    LOTTERY_MAGIC: parse_lottery,
    LOTTERY_ENTRY_MAGIC: parse_lottery_entry,
}


def decode_account(data: bytes) -> Account:
    """Decode raw account bytes into whichever record they hold.

    Dispatches on the 8-byte magic. Anything that does not decode, because
    the magic is unknown, unsupported, or the buffer is truncated, comes
    back as Unrecognized rather than raising.

    Args:
        data: Raw account data

    Returns:
        Pool, NPool, Farm, UserFarm, Lottery, LotteryEntry or Unrecognized
    """
    discriminator = bytes(data[:DISCRIMINATOR_SIZE])
    kind = _KIND_BY_MAGIC.get(discriminator)

    parser = _PARSERS.get(discriminator)
    if parser is not None:
        record = parser(data)
        if record is not None:
            return record

    logger.debug("account_unrecognized", discriminator=discriminator, kind=kind, size=len(data))
    return Unrecognized(discriminator=discriminator, kind=kind)


def decode_twap_result(encoded: int) -> TwapResult:
    """Unpack the u64 returned by the get_twap instruction.

    Little-endian: price as u32 in bytes 0-3, samples as u16 in bytes 4-5,
    confidence as u16 in bytes 6-7.

    Raises:
        ValueError: If encoded is not a u64
    """
    if not 0 <= encoded <= U64_MAX:
        raise ValueError(f"TWAP result must be a u64, got {encoded}")
    container = TWAP_RESULT_LAYOUT.parse(encoded.to_bytes(8, "little"))
    return _to_record(TwapResult, container)


# =============================================================================
# Encoders
# =============================================================================


def encode_pool(pool: Pool) -> bytes:
    return _build(POOL_LAYOUT, pool, POOL_MIN_SIZE)


def encode_npool(npool: NPool) -> bytes:
    """Encode an N-token pool, zero-filling the unused token slots."""
    pad = MAX_TOKENS - npool.n_tokens
    return _build(
        NPOOL_LAYOUT,
        npool,
        NPOOL_MIN_SIZE,
        mints=list(npool.mints) + [Pubkey.default()] * pad,
        vaults=list(npool.vaults) + [Pubkey.default()] * pad,
        balances=list(npool.balances) + [0] * pad,
        admin_fees=list(npool.admin_fees) + [0] * pad,
    )


def encode_farm(farm: Farm) -> bytes:
    return _build(FARM_LAYOUT, farm, FARM_MIN_SIZE)


def encode_user_farm(user_farm: UserFarm) -> bytes:
    return _build(USER_FARM_LAYOUT, user_farm, USER_FARM_MIN_SIZE)


def encode_lottery(lottery: Lottery) -> bytes:
    return _build(LOTTERY_LAYOUT, lottery, LOTTERY_MIN_SIZE)


def encode_lottery_entry(entry: LotteryEntry) -> bytes:
    return _build(LOTTERY_ENTRY_LAYOUT, entry, LOTTERY_ENTRY_MIN_SIZE)
