"""CreatePool: issue the pool shares asset and seed the initial liquidity."""

from __future__ import annotations

from pydantic import BaseModel, model_validator

from swapable.commands.base import BaseCommand
from swapable.constants import POOL_ID_KEY_NAME, SHARES_DIVISIBILITY, X_ID_KEY_NAME, Y_ID_KEY_NAME
from swapable.keys import generate_uint64_key
from swapable.math.cpmm import compute_initial_shares, to_ledger_amount
from swapable.models.assets import Account, AssetAmount
from swapable.models.options import AllowanceResult
from swapable.models.transactions import (
    AccountAssetRestrictionTransaction,
    AccountMetadataTransaction,
    AssetDefinitionTransaction,
    AssetMetadataTransaction,
    AssetSupplyChangeTransaction,
    EmbeddedTransaction,
    RestrictionFlag,
    SupplyChangeAction,
)


class CreatePoolArguments(BaseModel):
    provider: Account
    input_x: AssetAmount
    input_y: AssetAmount

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _distinct_assets(self) -> CreatePoolArguments:
        if self.input_x.identifier.asset_id == self.input_y.identifier.asset_id:
            raise ValueError("input_x and input_y must be different assets")
        return self


class CreatePool(BaseCommand):
    """Creates an automated pool for the pair (x, y).

    Issues sqrt(x * y) shares with 6 decimal places to the provider, tags
    the shares asset and the target account with the pool metadata, and
    restricts the target account to the assets the pool deals in.

    Warning: the account restriction is network-wide. The target account
    can no longer receive any other asset once the contract settles.
    """

    name = "create-pool"
    arguments = ("provider", "input_x", "input_y")
    arguments_model = CreatePoolArguments

    def allowance(self, actor: Account, args: CreatePoolArguments) -> AllowanceResult:
        # Anyone may create a pool, the target still has to cosign.
        if to_ledger_amount(compute_initial_shares(args.input_x.amount, args.input_y.amount)) <= 0:
            return AllowanceResult.denied("Initial liquidity issues no shares")
        return AllowanceResult.allowed()

    def build_transactions(self, args: CreatePoolArguments) -> list[EmbeddedTransaction]:
        target = self.target
        provider = args.provider
        input_x, input_y = args.input_x, args.input_y

        shares = to_ledger_amount(compute_initial_shares(input_x.amount, input_y.amount))
        shares_id = self.identifier.asset_id
        x_id = input_x.identifier.asset_id
        y_id = input_y.identifier.asset_id

        return [
            self.signed_by(
                target,
                AccountMetadataTransaction(
                    target_address=target.address,
                    scoped_metadata_key=generate_uint64_key(POOL_ID_KEY_NAME),
                    value=self.identifier.id,
                ),
            ),
            self.signed_by(
                target,
                AssetDefinitionTransaction(
                    nonce=self.identifier.id,
                    asset_id=shares_id,
                    supply_mutable=True,
                    transferable=True,
                    restrictable=True,
                    divisibility=SHARES_DIVISIBILITY,
                    duration=0,
                ),
            ),
            self.signed_by(
                target,
                AssetSupplyChangeTransaction(
                    asset_id=shares_id,
                    action=SupplyChangeAction.INCREASE,
                    delta=shares,
                ),
            ),
            *(
                self.signed_by(
                    target,
                    AssetMetadataTransaction(
                        target_address=target.address,
                        scoped_metadata_key=generate_uint64_key(key_name),
                        target_asset_id=shares_id,
                        value=value,
                    ),
                )
                for key_name, value in (
                    (POOL_ID_KEY_NAME, self.identifier.id),
                    (X_ID_KEY_NAME, x_id),
                    (Y_ID_KEY_NAME, y_id),
                )
            ),
            self.signed_by(
                target,
                AccountAssetRestrictionTransaction(
                    flag=RestrictionFlag.ALLOW_INCOMING,
                    # x or y may be the fee asset itself
                    additions=list(
                        dict.fromkeys([shares_id, self.context.reader.fee_asset_id, x_id, y_id])
                    ),
                ),
            ),
            self.signed_by(target, self.transfer(provider, [(shares_id, shares)])),
            self.signed_by(
                provider,
                self.transfer(target, [(x_id, input_x.amount), (y_id, input_y.amount)]),
            ),
            self.signed_by(provider, self.transfer(target, message=self.proof(shares_id, x_id, y_id))),
        ]
