"""Constant product market maker arithmetic.

The pool keeps reserve_x * reserve_y = k across swaps. Shares represent a
pro-rata claim on both reserves.

All functions compute exact Decimal results in a high-precision context.
Callers convert to ledger amounts with to_ledger_amount(), which floors so
that rounding always favours the pool. No trading fee is deducted.
"""

from __future__ import annotations

import decimal
from decimal import ROUND_FLOOR, Decimal

from swapable.constants import SHARES_SCALE

# 78 digits of precision, enough for products of two uint64 amounts
DECIMAL_HIGH_PREC_CONTEXT = decimal.Context(prec=78)


def compute_initial_shares(input_x: int, input_y: int) -> Decimal:
    """Shares issued when a pool is created.

    Formula: shares = SHARES_SCALE * sqrt(input_x * input_y)

    Example:
        >>> compute_initial_shares(10, 10)
        Decimal('10000000')
    """
    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
        return SHARES_SCALE * (Decimal(input_x) * Decimal(input_y)).sqrt()


def compute_liquidity(
    input_x: int,
    input_y: int,
    supply: int,
    reserve_x: int,
    reserve_y: int,
) -> Decimal:
    """Shares issued for a liquidity contribution.

    Formula: liquidity = min(input_x * supply / reserve_x, input_y * supply / reserve_y)

    Raises:
        ValueError: If either reserve is not positive
    """
    if reserve_x <= 0 or reserve_y <= 0:
        raise ValueError(f"Reserves must be positive: ({reserve_x}, {reserve_y})")

    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
        from_x = Decimal(input_x) * supply / reserve_x
        from_y = Decimal(input_y) * supply / reserve_y
        return min(from_x, from_y)


def compute_burn(
    input_shares: int,
    supply: int,
    reserve_x: int,
    reserve_y: int,
) -> tuple[Decimal, Decimal]:
    """Reserves released when shares are burnt.

    Inverse of compute_liquidity() for contributions matching the pool ratio:
        out_x = input_shares * reserve_x / supply
        out_y = input_shares * reserve_y / supply

    Raises:
        ValueError: If supply is not positive or input_shares exceeds it
    """
    if supply <= 0:
        raise ValueError(f"Supply must be positive: {supply}")
    if input_shares > supply:
        raise ValueError(f"Cannot burn {input_shares} shares out of {supply}")

    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
        out_x = Decimal(input_shares) * reserve_x / supply
        out_y = Decimal(input_shares) * reserve_y / supply
        return out_x, out_y


def compute_swap_output(input_x: int, reserve_x: int, reserve_y: int) -> Decimal:
    """Output of the paired asset for `input_x` sold into the pool.

    Formula: output_y = reserve_y - k / (reserve_x + input_x), k = reserve_x * reserve_y

    For any positive input and reserves, 0 < output_y < reserve_y.

    Example:
        >>> round(compute_swap_output(1, 10, 10), 4)
        Decimal('0.9091')

    Raises:
        ValueError: If the input or either reserve is not positive
    """
    if input_x <= 0:
        raise ValueError(f"Input must be positive: {input_x}")
    if reserve_x <= 0 or reserve_y <= 0:
        raise ValueError(f"Reserves must be positive: ({reserve_x}, {reserve_y})")

    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
        k = Decimal(reserve_x) * reserve_y
        return reserve_y - k / (reserve_x + input_x)


def to_ledger_amount(value: Decimal) -> int:
    """Floor a computed quantity to an integer ledger amount."""
    return int(value.to_integral_value(rounding=ROUND_FLOOR))


__all__ = [
    "DECIMAL_HIGH_PREC_CONTEXT",
    "compute_burn",
    "compute_initial_shares",
    "compute_liquidity",
    "compute_swap_output",
    "to_ledger_amount",
]
