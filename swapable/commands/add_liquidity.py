"""AddLiquidity: deposit paired assets in exchange for new pool shares."""

from __future__ import annotations

from pydantic import BaseModel

from swapable.commands.base import BaseCommand
from swapable.math.cpmm import compute_liquidity, to_ledger_amount
from swapable.models.assets import Account, AssetAmount
from swapable.models.options import AllowanceResult
from swapable.models.pool import PoolSnapshot
from swapable.models.transactions import (
    AssetSupplyChangeTransaction,
    EmbeddedTransaction,
    SupplyChangeAction,
)


class AddLiquidityArguments(BaseModel):
    provider: Account
    input_x: AssetAmount
    input_y: AssetAmount

    model_config = {"frozen": True}


class AddLiquidity(BaseCommand):
    """Adds liquidity to an existing pool.

    Anyone may add liquidity once the pool state is known. The shares
    issued are the smaller of the two pro-rata contributions, so an
    unbalanced deposit donates its excess to the pool.
    """

    name = "add-liquidity"
    arguments = ("provider", "input_x", "input_y")
    arguments_model = AddLiquidityArguments

    def _liquidity(self, snapshot: PoolSnapshot, args: AddLiquidityArguments) -> int:
        return to_ledger_amount(
            compute_liquidity(
                args.input_x.amount,
                args.input_y.amount,
                snapshot.shares_supply,
                snapshot.reserve_of(args.input_x.identifier),
                snapshot.reserve_of(args.input_y.identifier),
            )
        )

    def allowance(self, actor: Account, args: AddLiquidityArguments) -> AllowanceResult:
        snapshot = self.snapshot
        if snapshot is None:
            return AllowanceResult.denied("Pool state is unavailable")
        x_id = args.input_x.identifier.asset_id
        y_id = args.input_y.identifier.asset_id
        if x_id == y_id or not self.is_pool_pair(x_id, y_id):
            return AllowanceResult.denied("Inputs are not the pool's pair")
        if snapshot.reserve_of(x_id) <= 0 or snapshot.reserve_of(y_id) <= 0:
            return AllowanceResult.denied("Pool has no reserves")
        if self._liquidity(snapshot, args) <= 0:
            return AllowanceResult.denied("Contribution issues no shares")
        return AllowanceResult.allowed()

    def build_transactions(self, args: AddLiquidityArguments) -> list[EmbeddedTransaction]:
        target = self.target
        provider = args.provider
        input_x, input_y = args.input_x, args.input_y

        liquidity = self._liquidity(self.require_snapshot(), args)
        shares_id = self.identifier.asset_id
        x_id = input_x.identifier.asset_id
        y_id = input_y.identifier.asset_id

        return [
            self.signed_by(
                target,
                AssetSupplyChangeTransaction(
                    asset_id=shares_id,
                    action=SupplyChangeAction.INCREASE,
                    delta=liquidity,
                ),
            ),
            self.signed_by(target, self.transfer(provider, [(shares_id, liquidity)])),
            self.signed_by(
                provider,
                self.transfer(target, [(x_id, input_x.amount), (y_id, input_y.amount)]),
            ),
            self.signed_by(provider, self.transfer(target, message=self.proof(shares_id, x_id, y_id))),
        ]
