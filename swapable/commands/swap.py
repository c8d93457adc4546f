"""Swap: sell one paired asset to the pool for the other."""

from __future__ import annotations

from pydantic import BaseModel, model_validator

from swapable.commands.base import BaseCommand
from swapable.math.cpmm import compute_swap_output, to_ledger_amount
from swapable.models.assets import Account, AssetAmount, AssetIdentifier
from swapable.models.options import AllowanceResult
from swapable.models.pool import PoolSnapshot
from swapable.models.transactions import EmbeddedTransaction


class SwapArguments(BaseModel):
    trader: Account
    input_x: AssetAmount
    output: AssetIdentifier

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _distinct_assets(self) -> SwapArguments:
        if self.input_x.identifier.asset_id == self.output.asset_id:
            raise ValueError("input_x and output must be different assets")
        return self


class Swap(BaseCommand):
    """Swaps input_x for the `output` asset at the constant product price.

    output_y = reserve_y - k / (reserve_x + input_x), with k = reserve_x * reserve_y.
    No trading fee is deducted.
    """

    name = "swap"
    arguments = ("trader", "input_x", "output")
    arguments_model = SwapArguments

    def _output_amount(self, snapshot: PoolSnapshot, args: SwapArguments) -> int:
        return to_ledger_amount(
            compute_swap_output(
                args.input_x.amount,
                snapshot.reserve_of(args.input_x.identifier),
                snapshot.reserve_of(args.output),
            )
        )

    def allowance(self, actor: Account, args: SwapArguments) -> AllowanceResult:
        snapshot = self.snapshot
        if snapshot is None:
            return AllowanceResult.denied("Pool state is unavailable")
        if not self.is_pool_pair(args.input_x.identifier.asset_id, args.output.asset_id):
            return AllowanceResult.denied("Assets are not the pool's pair")
        if args.input_x.amount <= 0:
            return AllowanceResult.denied("Input amount must be positive")
        if args.input_x.amount >= snapshot.reserve_of(args.input_x.identifier):
            return AllowanceResult.denied("Input amount exceeds the pool reserve")
        if snapshot.reserve_of(args.output) <= 0:
            return AllowanceResult.denied("Pool holds none of the output asset")
        if self._output_amount(snapshot, args) <= 0:
            return AllowanceResult.denied("Input amount buys nothing")
        return AllowanceResult.allowed()

    def build_transactions(self, args: SwapArguments) -> list[EmbeddedTransaction]:
        target = self.target
        trader = args.trader
        input_x = args.input_x
        output_y = self._output_amount(self.require_snapshot(), args)

        return [
            self.signed_by(
                trader,
                self.transfer(target, [(input_x.identifier.asset_id, input_x.amount)]),
            ),
            self.signed_by(target, self.transfer(trader, [(args.output.asset_id, output_y)])),
            self.signed_by(
                target,
                self.transfer(
                    target,
                    message=self.proof(self.identifier.asset_id, input_x.amount, output_y),
                ),
            ),
        ]
