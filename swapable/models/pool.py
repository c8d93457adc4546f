"""Pool state as read from the ledger."""

from __future__ import annotations

from pydantic import BaseModel, Field

from swapable.models.assets import Account, AssetIdentifier
from swapable.models.types import Address, Amount, AssetNonce, LedgerAssetId


class PoolSnapshot(BaseModel):
    """Point-in-time view of a pool's ledger state.

    Fetched immediately before an online execution. The snapshot may be
    stale by the time a contract settles; nothing here revalidates it.

    Attributes:
        shares_supply: Current total supply of the pool shares asset
        reserves: Balances held by the target account, by ledger asset id
        holdings: Pool shares balance of known holders, by address
        x_asset_id: Paired asset x, as attached to the shares asset metadata
        y_asset_id: Paired asset y, as attached to the shares asset metadata
    """

    shares_supply: Amount = Field(alias="sharesSupply")
    reserves: dict[LedgerAssetId, Amount] = Field(default_factory=dict)
    holdings: dict[Address, Amount] = Field(default_factory=dict)
    x_asset_id: LedgerAssetId | None = Field(default=None, alias="xAssetId")
    y_asset_id: LedgerAssetId | None = Field(default=None, alias="yAssetId")

    model_config = {"frozen": True, "populate_by_name": True}

    def reserve_of(self, asset: AssetIdentifier | str) -> int:
        """Reserve of `asset` held by the pool, 0 if none."""
        asset_id = asset.asset_id if isinstance(asset, AssetIdentifier) else asset
        return self.reserves.get(asset_id, 0)

    def shares_of(self, account: Account) -> int:
        """Pool shares held by `account`, 0 if unknown."""
        return self.holdings.get(account.address, 0)

    @property
    def pair(self) -> tuple[str, str] | None:
        """(x, y) ledger asset ids when both are known."""
        if self.x_asset_id is None or self.y_asset_id is None:
            return None
        return self.x_asset_id, self.y_asset_id


class PoolInfo(BaseModel):
    """A published pool, as reconstructed from registry records and metadata."""

    target: Address
    pool_id: AssetNonce = Field(alias="poolId")
    shares_asset_id: LedgerAssetId = Field(alias="sharesAssetId")
    x_asset_id: LedgerAssetId = Field(alias="xAssetId")
    y_asset_id: LedgerAssetId = Field(alias="yAssetId")

    model_config = {"frozen": True, "populate_by_name": True}
