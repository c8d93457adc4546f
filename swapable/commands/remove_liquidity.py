"""RemoveLiquidity: burn pool shares against a pro-rata share of the reserves."""

from __future__ import annotations

from pydantic import BaseModel

from swapable.commands.base import BaseCommand
from swapable.errors import OperationForbidden
from swapable.math.cpmm import compute_burn, to_ledger_amount
from swapable.models.assets import Account
from swapable.models.options import AllowanceResult
from swapable.models.pool import PoolSnapshot
from swapable.models.transactions import (
    AssetSupplyChangeTransaction,
    EmbeddedTransaction,
    SupplyChangeAction,
)
from swapable.models.types import Amount


class RemoveLiquidityArguments(BaseModel):
    provider: Account
    input_shares: Amount

    model_config = {"frozen": True}


class RemoveLiquidity(BaseCommand):
    """Removes liquidity from a pool.

    The provider returns the shares to the target account, which burns
    them and releases out_x and out_y. Only shares the snapshot knows the
    provider holds can be removed.
    """

    name = "remove-liquidity"
    arguments = ("provider", "input_shares")
    arguments_model = RemoveLiquidityArguments

    def _outputs(
        self,
        snapshot: PoolSnapshot,
        pair: tuple[str, str],
        args: RemoveLiquidityArguments,
    ) -> tuple[str, int, str, int]:
        x_id, y_id = pair
        out_x, out_y = compute_burn(
            args.input_shares,
            snapshot.shares_supply,
            snapshot.reserve_of(x_id),
            snapshot.reserve_of(y_id),
        )
        return x_id, to_ledger_amount(out_x), y_id, to_ledger_amount(out_y)

    def allowance(self, actor: Account, args: RemoveLiquidityArguments) -> AllowanceResult:
        snapshot = self.snapshot
        if snapshot is None:
            return AllowanceResult.denied("Pool state is unavailable")
        pair = snapshot.pair
        if pair is None:
            return AllowanceResult.denied("Pool pair is unknown")
        if args.input_shares <= 0:
            return AllowanceResult.denied("No shares to remove")
        held = snapshot.shares_of(args.provider)
        if args.input_shares > held:
            return AllowanceResult.denied(f"Provider holds {held} shares")
        if args.input_shares > snapshot.shares_supply:
            return AllowanceResult.denied("Shares exceed the pool supply")
        _, out_x, _, out_y = self._outputs(snapshot, pair, args)
        if out_x <= 0 or out_y <= 0:
            return AllowanceResult.denied("Shares release no reserves")
        return AllowanceResult.allowed()

    def build_transactions(self, args: RemoveLiquidityArguments) -> list[EmbeddedTransaction]:
        target = self.target
        provider = args.provider
        shares_id = self.identifier.asset_id
        snapshot = self.require_snapshot()
        if snapshot.pair is None:
            raise OperationForbidden(f"Pool pair is unknown ({self.name})")
        x_id, out_x, y_id, out_y = self._outputs(snapshot, snapshot.pair, args)

        return [
            # Shares go back to the issuer before they can be burnt
            self.signed_by(provider, self.transfer(target, [(shares_id, args.input_shares)])),
            self.signed_by(
                target,
                AssetSupplyChangeTransaction(
                    asset_id=shares_id,
                    action=SupplyChangeAction.DECREASE,
                    delta=args.input_shares,
                ),
            ),
            self.signed_by(target, self.transfer(provider, [(x_id, out_x), (y_id, out_y)])),
            self.signed_by(
                provider,
                self.transfer(target, message=self.proof(shares_id, out_x, out_y)),
            ),
        ]
