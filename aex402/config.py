"""SDK configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass

from aex402.constants import PROGRAM_ID, TOKEN_PROGRAM_ID


@dataclass(frozen=True)
class SdkConfig:
    """Centralized configuration for the SDK helpers.

    Math functions take their parameters explicitly; this only feeds the
    defaults of the PDA helpers, instruction builders and analytics.

    Attributes:
        program_id: AeX402 program id (base-58)
        token_program_id: SPL token program used by transfer instructions
        default_slippage_bps: Slippage tolerance for min-output helpers (default: 50)
        max_imbalance_ratio: Largest bal0/bal1 ratio accepted by check_imbalance
    """

    program_id: str = PROGRAM_ID
    token_program_id: str = TOKEN_PROGRAM_ID
    default_slippage_bps: int = 50
    max_imbalance_ratio: float = 10.0

    @classmethod
    def from_env(cls) -> SdkConfig:
        """Build a config from environment variables with sensible defaults.

        - AEX402_PROGRAM_ID: program id override
        - AEX402_SLIPPAGE_BPS: default slippage in basis points
        - AEX402_MAX_IMBALANCE: maximum balance ratio
        """
        default = cls()
        return cls(
            program_id=os.environ.get("AEX402_PROGRAM_ID", default.program_id),
            default_slippage_bps=int(
                os.environ.get("AEX402_SLIPPAGE_BPS", str(default.default_slippage_bps))
            ),
            max_imbalance_ratio=float(
                os.environ.get("AEX402_MAX_IMBALANCE", str(default.max_imbalance_ratio))
            ),
        )


DEFAULT_CONFIG = SdkConfig()
