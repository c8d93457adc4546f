"""Pydantic models for accounts and digital assets."""

from __future__ import annotations

from pydantic import BaseModel, Field

from swapable.keys import derive_asset_id, derive_pool_nonce
from swapable.models.types import Address, Amount, AssetNonce, Hash256, PublicKey


class Account(BaseModel):
    """A ledger identity.

    Two accounts are the same identity when their addresses match; the
    public key is carried along when known (e.g. for signer display) but
    plays no part in authorization.
    """

    address: Address
    public_key: PublicKey | None = Field(default=None, alias="publicKey")

    model_config = {"frozen": True, "populate_by_name": True}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Account):
            return False
        return self.address == other.address

    def __hash__(self) -> int:
        return hash(self.address)

    def pretty(self) -> str:
        """Address in dash-separated groups of six."""
        return "-".join(self.address[i : i + 6] for i in range(0, len(self.address), 6))


class AssetSource(BaseModel):
    """The ledger network an asset or pool belongs to.

    Pools on different sources are never interchangeable.
    """

    source: Hash256 = Field(description="Network generation hash")

    model_config = {"frozen": True}


class AssetIdentifier(BaseModel):
    """Identifies a digital asset by its 4-byte nonce and its owner.

    Used both for pool shares (owner is the pool's target account) and for
    the paired currencies.
    """

    id: AssetNonce
    target: Account

    model_config = {"frozen": True}

    @property
    def asset_id(self) -> str:
        """The 64-bit ledger asset id derived from (id, target)."""
        return derive_asset_id(self.id, self.target.address)

    @classmethod
    def create_for_source(cls, name: str, target: Account, source: AssetSource) -> AssetIdentifier:
        """Create the deterministic identifier of pool `name` on `source`.

        Args:
            name: Pool name (e.g. "SWP:XYM")
            target: The pool's target account
            source: The network the pool lives on

        Returns:
            AssetIdentifier owned by `target`
        """
        nonce = derive_pool_nonce(name, target.address, source.source)
        return cls(id=nonce, target=target)


class AssetAmount(BaseModel):
    """An amount of a digital asset, in atomic units."""

    identifier: AssetIdentifier
    amount: Amount

    model_config = {"frozen": True}
