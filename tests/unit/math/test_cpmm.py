"""Tests for constant product arithmetic."""

from decimal import Decimal

import pytest

from swapable.math.cpmm import (
    compute_burn,
    compute_initial_shares,
    compute_liquidity,
    compute_swap_output,
    to_ledger_amount,
)


class TestInitialShares:
    def test_square_inputs(self):
        """x=10, y=10 issues 1_000_000 * sqrt(100) shares."""
        assert compute_initial_shares(10, 10) == Decimal(10_000_000)

    def test_irrational_root_floors(self):
        shares = compute_initial_shares(2, 1)
        assert to_ledger_amount(shares) == 1_414_213

    def test_large_amounts_are_exact(self):
        amount = 10**18
        assert compute_initial_shares(amount, amount) == Decimal(10**24)


class TestLiquidity:
    def test_matching_ratio(self):
        """supply=10M, reserves 10/10, input 5/5 issues 5M shares."""
        assert compute_liquidity(5, 5, 10_000_000, 10, 10) == Decimal(5_000_000)

    def test_unbalanced_deposit_uses_smaller_side(self):
        assert compute_liquidity(5, 1, 10_000_000, 10, 10) == Decimal(1_000_000)

    def test_requires_reserves(self):
        with pytest.raises(ValueError, match="Reserves must be positive"):
            compute_liquidity(5, 5, 10_000_000, 0, 10)


class TestBurn:
    def test_inverse_of_liquidity(self):
        """Burning the shares just issued returns the deposit."""
        liquidity = to_ledger_amount(compute_liquidity(5, 5, 10_000_000, 10, 10))
        out_x, out_y = compute_burn(liquidity, 15_000_000, 15, 15)
        assert (out_x, out_y) == (Decimal(5), Decimal(5))

    def test_inverse_within_rounding(self):
        supply, reserve_x, reserve_y = 1_000_000, 3_000, 7_000
        liquidity = to_ledger_amount(compute_liquidity(300, 700, supply, reserve_x, reserve_y))
        out_x, out_y = compute_burn(liquidity, supply + liquidity, reserve_x + 300, reserve_y + 700)
        assert abs(out_x - 300) < 1
        assert abs(out_y - 700) < 1

    def test_rejects_more_than_supply(self):
        with pytest.raises(ValueError, match="Cannot burn"):
            compute_burn(11, 10, 5, 5)

    def test_requires_supply(self):
        with pytest.raises(ValueError, match="Supply must be positive"):
            compute_burn(0, 0, 5, 5)


class TestSwapOutput:
    def test_reference_values(self):
        """k=100, output = 10 - 100/11."""
        output = compute_swap_output(1, 10, 10)
        assert round(output, 4) == Decimal("0.9091")

    @pytest.mark.parametrize(
        "input_x,reserve_x,reserve_y",
        [(1, 10, 10), (9, 10, 10), (1, 1_000_000, 3), (10**12, 10**6, 10**18)],
    )
    def test_output_is_within_reserve(self, input_x, reserve_x, reserve_y):
        output = compute_swap_output(input_x, reserve_x, reserve_y)
        assert 0 < output < reserve_y

    def test_constant_product_is_preserved(self):
        output = compute_swap_output(1_000, 1_000_000, 1_000_000)
        k_after = (1_000_000 + 1_000) * (1_000_000 - output)
        assert abs(k_after - Decimal(10**12)) < Decimal("1e-40")

    def test_rejects_zero_input(self):
        with pytest.raises(ValueError, match="Input must be positive"):
            compute_swap_output(0, 10, 10)


class TestToLedgerAmount:
    @pytest.mark.parametrize(
        "value,expected",
        [(Decimal("0.9999"), 0), (Decimal("999.000999"), 999), (Decimal(5), 5)],
    )
    def test_floors(self, value, expected):
        assert to_ledger_amount(value) == expected
