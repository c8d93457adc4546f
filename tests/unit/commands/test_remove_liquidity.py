"""Tests for the RemoveLiquidity command."""

import pytest

from swapable.commands import RemoveLiquidity, can_execute, execute
from swapable.errors import MissingArgument, OperationForbidden
from swapable.models import AssetSupplyChangeTransaction, SupplyChangeAction
from tests.helpers import (
    POOL_ID,
    PROVIDER,
    SHARES_ASSET_ID,
    TARGET,
    X_NONCE,
    Y_NONCE,
    make_account,
    make_context,
    make_identifier,
    make_snapshot,
)

# Pool state right after adding 5/5 to a 10/10 pool
POST_ADD = {"supply": 15_000_000, "reserve_x": 15, "reserve_y": 15}


def make_remove_liquidity(shares=5_000_000, snapshot=None, **arguments) -> RemoveLiquidity:
    arguments = {"provider": make_account(PROVIDER), "input_shares": shares, **arguments}
    return RemoveLiquidity(
        make_context(PROVIDER, arguments), make_identifier(POOL_ID, TARGET), snapshot
    )


def held(shares: int = 5_000_000, **kwargs):
    return make_snapshot(**{**POST_ADD, **kwargs}, holdings={PROVIDER: shares})


class TestRemoveLiquidityAllowance:
    """Tests for RemoveLiquidity allowance."""

    def test_missing_shares(self):
        command = RemoveLiquidity(
            make_context(PROVIDER, {"provider": make_account(PROVIDER)}),
            make_identifier(POOL_ID, TARGET),
        )
        with pytest.raises(MissingArgument, match="input_shares"):
            can_execute(command, make_account(PROVIDER))

    def test_requires_snapshot(self):
        assert not can_execute(make_remove_liquidity(), make_account(PROVIDER))

    def test_requires_known_pair(self):
        snapshot = make_snapshot(**POST_ADD, holdings={PROVIDER: 5_000_000}, with_pair=False)
        result = can_execute(make_remove_liquidity(snapshot=snapshot), make_account(PROVIDER))
        assert not result
        assert "pair" in result.message

    def test_allowed_up_to_holdings(self):
        command = make_remove_liquidity(snapshot=held(5_000_000))
        assert can_execute(command, make_account(PROVIDER))

    def test_denied_above_holdings(self):
        command = make_remove_liquidity(shares=5_000_001, snapshot=held(5_000_000))
        result = can_execute(command, make_account(PROVIDER))
        assert not result
        assert "holds 5000000" in result.message

    def test_denied_for_zero_shares(self):
        assert not can_execute(make_remove_liquidity(shares=0, snapshot=held()), make_account(PROVIDER))

    def test_denied_when_nothing_released(self):
        """Burning a dust amount of shares releases no reserves."""
        command = make_remove_liquidity(shares=1, snapshot=held())
        result = can_execute(command, make_account(PROVIDER))
        assert not result
        assert "no reserves" in result.message


class TestRemoveLiquidityTransactions:
    """Tests for the RemoveLiquidity contract content."""

    @pytest.fixture
    def contract(self):
        return execute(make_remove_liquidity(snapshot=held()), make_account(PROVIDER))

    def test_four_operations_and_signers(self, contract):
        """Debits are signed by whoever is debited."""
        signers = [e.signer.address for e in contract.transactions]
        assert signers == [PROVIDER, TARGET, TARGET, PROVIDER]

    def test_shares_returned_then_burnt(self, contract):
        returned = contract.transactions[0].transaction
        assert returned.recipient_address == TARGET
        assert [(a.asset_id, a.amount) for a in returned.assets] == [(SHARES_ASSET_ID, 5_000_000)]

        burn = contract.transactions[1].transaction
        assert isinstance(burn, AssetSupplyChangeTransaction)
        assert burn.action == SupplyChangeAction.DECREASE
        assert burn.delta == 5_000_000

    def test_inverse_of_add_liquidity(self, contract):
        """Burning the shares minted for 5/5 returns 5/5."""
        tx = contract.transactions[2].transaction
        assert tx.recipient_address == PROVIDER
        assert [(a.asset_id, a.amount) for a in tx.assets] == [
            (make_identifier(X_NONCE).asset_id, 5),
            (make_identifier(Y_NONCE).asset_id, 5),
        ]

    def test_execution_proof(self, contract):
        assert contract.messages == [f"Swapable(v2):remove-liquidity:{POOL_ID}:{SHARES_ASSET_ID}:5:5"]


class TestRemoveLiquidityWithoutState:
    """Building bypasses allowance; missing state must still fail closed."""

    def test_build_without_snapshot(self):
        command = make_remove_liquidity()
        with pytest.raises(OperationForbidden, match="unavailable"):
            command.build_transactions(command.parse_arguments())

    def test_build_without_pair(self):
        command = make_remove_liquidity(snapshot=held(with_pair=False))
        with pytest.raises(OperationForbidden, match="pair"):
            command.build_transactions(command.parse_arguments())
