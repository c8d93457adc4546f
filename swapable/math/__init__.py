"""Pool arithmetic."""

from swapable.math.cpmm import (
    compute_burn,
    compute_initial_shares,
    compute_liquidity,
    compute_swap_output,
    to_ledger_amount,
)

__all__ = [
    "compute_burn",
    "compute_initial_shares",
    "compute_liquidity",
    "compute_swap_output",
    "to_ledger_amount",
]
