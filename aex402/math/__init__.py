"""Fixed-point pool math.

Everything here is pure integer arithmetic that reproduces the on-chain
program bit for bit:
- StableSwap invariant and swap solvers (2-token and N-token)
- Liquidity and virtual-price helpers
- Amplification ramping
- Virtual-pool bonding curve
"""

# Amp ramp
from .amp import get_current_amp

# Bonding curve
from .bonding import (
    BuySimulation,
    SellSimulation,
    calc_bonding_buy_tokens,
    calc_bonding_price,
    calc_bonding_sell_sol,
    simulate_bonding_buy,
    simulate_bonding_sell,
)

# Result types
from .result import MathError, MathResult

# StableSwap
from .stableswap import (
    SwapSimulation,
    calc_d,
    calc_d_n,
    calc_lp_tokens,
    calc_price_impact,
    calc_virtual_price,
    calc_withdraw,
    calc_y,
    calc_y_n,
    simulate_swap,
    simulate_swap_detailed,
)

# Utilities
from .utils import calc_min_output, check_imbalance, isqrt

__all__ = [
    # Result types
    "MathError",
    "MathResult",
    # StableSwap
    "SwapSimulation",
    "calc_d",
    "calc_d_n",
    "calc_y",
    "calc_y_n",
    "simulate_swap",
    "simulate_swap_detailed",
    "calc_price_impact",
    "calc_lp_tokens",
    "calc_withdraw",
    "calc_virtual_price",
    # Amp ramp
    "get_current_amp",
    # Bonding curve
    "BuySimulation",
    "SellSimulation",
    "calc_bonding_price",
    "calc_bonding_buy_tokens",
    "calc_bonding_sell_sol",
    "simulate_bonding_buy",
    "simulate_bonding_sell",
    # Utilities
    "isqrt",
    "calc_min_output",
    "check_imbalance",
]
