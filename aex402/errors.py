"""AeX402 error classes.

Exceptions here signal programmer errors (bad arguments, illegal state
transitions). Expected pool-state failures travel as MathResult values instead.
ProgramError maps the on-chain program's numeric error codes.
"""

from __future__ import annotations

from enum import Enum


class AeX402Error(Exception):
    """Base error for the AeX402 SDK."""

    pass


class MathResultError(AeX402Error):
    """unwrap() was called on a failed MathResult."""

    pass


class InvalidSlotTransition(AeX402Error):
    """Virtual pool slot status moved backwards or skipped a stage."""

    pass


class ProgramError(Enum):
    """Error codes returned by the on-chain program (6000-6030)."""

    PAUSED = (6000, "Pool is paused")
    INVALID_AMP = (6001, "Invalid amplification coefficient")
    MATH_OVERFLOW = (6002, "Math overflow")
    ZERO_AMOUNT = (6003, "Zero amount")
    SLIPPAGE_EXCEEDED = (6004, "Slippage exceeded")
    INVALID_INVARIANT = (6005, "Invalid invariant or PDA mismatch")
    INSUFFICIENT_LIQUIDITY = (6006, "Insufficient liquidity")
    VAULT_MISMATCH = (6007, "Vault mismatch")
    EXPIRED = (6008, "Expired or ended")
    ALREADY_INITIALIZED = (6009, "Already initialized")
    UNAUTHORIZED = (6010, "Unauthorized")
    RAMP_CONSTRAINT = (6011, "Ramp constraint violated")
    LOCKED = (6012, "Tokens are locked")
    FARMING_ERROR = (6013, "Farming error")
    INVALID_OWNER = (6014, "Invalid account owner")
    INVALID_DISCRIMINATOR = (6015, "Invalid account discriminator")
    CPI_FAILED = (6016, "CPI call failed")
    FULL = (6017, "Orderbook/registry is full")
    CIRCUIT_BREAKER = (6018, "Circuit breaker triggered")
    ORACLE_ERROR = (6019, "Oracle price validation failed")
    RATE_LIMIT = (6020, "Rate limit exceeded")
    GOVERNANCE_ERROR = (6021, "Governance error")
    ORDER_ERROR = (6022, "Orderbook error")
    TICK_ERROR = (6023, "Invalid tick")
    RANGE_ERROR = (6024, "Invalid price range")
    FLASH_ERROR = (6025, "Flash loan error")
    COOLDOWN = (6026, "Cooldown period not elapsed")
    MEV_PROTECTION = (6027, "MEV protection triggered")
    STALE_DATA = (6028, "Stale data")
    BIAS_ERROR = (6029, "ML bias error")
    DURATION_ERROR = (6030, "Invalid duration")

    def __init__(self, code: int, message: str) -> None:
        self.code = code
        self.message = message

    @classmethod
    def from_code(cls, code: int) -> ProgramError | None:
        """Look up an error by its numeric code, or None if unknown."""
        return _BY_CODE.get(code)


_BY_CODE = {err.code: err for err in ProgramError}
