"""Pydantic models for ledger operations and unsigned contracts.

A pool command produces an ordered list of ledger operations, each paired
with the account that must sign it. The list is wrapped in a Contract: an
atomic batch whose operations settle together or not at all once every
required signer has cosigned it.

The wire encoding of contracts belongs to the ledger's own tooling; the
payload produced here is the canonical JSON form of the logical content.
"""

from datetime import datetime
from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, Field

from swapable.models.assets import Account
from swapable.models.types import Address, Amount, AssetNonce, LedgerAssetId, MetadataKey

# URI scheme used to share unsigned contracts with signers
TRANSACTION_URI_PREFIX = "web+symbol://transaction?data="


class SupplyChangeAction(str, Enum):
    """Direction of an asset supply change."""

    DECREASE = "decrease"
    INCREASE = "increase"


class RestrictionFlag(str, Enum):
    """Account asset restriction mode."""

    ALLOW_INCOMING = "allow_incoming"
    BLOCK_INCOMING = "block_incoming"


class LedgerAsset(BaseModel):
    """An amount of a ledger asset attached to a transfer."""

    asset_id: LedgerAssetId = Field(alias="assetId")
    amount: Amount

    model_config = {"frozen": True, "populate_by_name": True}


class AccountMetadataTransaction(BaseModel):
    """Attaches a metadata value to an account."""

    type: Literal["account_metadata"] = "account_metadata"
    target_address: Address = Field(alias="targetAddress")
    scoped_metadata_key: MetadataKey = Field(alias="scopedMetadataKey")
    value: str

    model_config = {"frozen": True, "populate_by_name": True}

    @property
    def value_size_delta(self) -> int:
        return len(self.value.encode())


class AssetDefinitionTransaction(BaseModel):
    """Defines a new asset owned by the signer."""

    type: Literal["asset_definition"] = "asset_definition"
    nonce: AssetNonce
    asset_id: LedgerAssetId = Field(alias="assetId")
    supply_mutable: bool = Field(default=True, alias="supplyMutable")
    transferable: bool = True
    restrictable: bool = True
    divisibility: int = Field(ge=0, le=6)
    # 0 means the asset never expires
    duration: int = Field(default=0, ge=0)

    model_config = {"frozen": True, "populate_by_name": True}


class AssetSupplyChangeTransaction(BaseModel):
    """Increases or decreases the supply of an asset held by its owner."""

    type: Literal["asset_supply_change"] = "asset_supply_change"
    asset_id: LedgerAssetId = Field(alias="assetId")
    action: SupplyChangeAction
    delta: Amount

    model_config = {"frozen": True, "populate_by_name": True}


class AssetMetadataTransaction(BaseModel):
    """Attaches a metadata value to an asset."""

    type: Literal["asset_metadata"] = "asset_metadata"
    target_address: Address = Field(alias="targetAddress")
    scoped_metadata_key: MetadataKey = Field(alias="scopedMetadataKey")
    target_asset_id: LedgerAssetId = Field(alias="targetAssetId")
    value: str

    model_config = {"frozen": True, "populate_by_name": True}

    @property
    def value_size_delta(self) -> int:
        return len(self.value.encode())


class AccountAssetRestrictionTransaction(BaseModel):
    """Restricts which assets the signer's account can receive."""

    type: Literal["account_asset_restriction"] = "account_asset_restriction"
    flag: RestrictionFlag = RestrictionFlag.ALLOW_INCOMING
    additions: list[LedgerAssetId] = Field(default_factory=list)
    deletions: list[LedgerAssetId] = Field(default_factory=list)

    model_config = {"frozen": True}


class TransferTransaction(BaseModel):
    """Transfers assets and/or a plain message from the signer to a recipient."""

    type: Literal["transfer"] = "transfer"
    recipient_address: Address = Field(alias="recipientAddress")
    assets: list[LedgerAsset] = Field(default_factory=list)
    message: str = ""

    model_config = {"frozen": True, "populate_by_name": True}


# Discriminated union: Pydantic will use the 'type' field to determine the model
Transaction = Annotated[
    AccountMetadataTransaction
    | AssetDefinitionTransaction
    | AssetSupplyChangeTransaction
    | AssetMetadataTransaction
    | AccountAssetRestrictionTransaction
    | TransferTransaction,
    Field(discriminator="type"),
]


class EmbeddedTransaction(BaseModel):
    """A ledger operation together with the account that must sign it."""

    signer: Account
    transaction: Transaction

    model_config = {"frozen": True}


class Contract(BaseModel):
    """An unsigned atomic batch of ledger operations ("digital contract").

    The order of `transactions` is the order of execution, and each entry
    keeps the signer it was built with. Reordering entries is safe only
    because signers travel with their operation.
    """

    network_type: int = Field(alias="networkType")
    deadline: datetime
    max_fee: Amount | None = Field(default=None, alias="maxFee")
    transactions: list[EmbeddedTransaction] = Field(min_length=1)
    cosignatures: list[str] = Field(default_factory=list)

    model_config = {"frozen": True, "populate_by_name": True}

    @property
    def signers(self) -> list[Account]:
        """Distinct required signers, in order of first appearance."""
        seen: list[Account] = []
        for embedded in self.transactions:
            if embedded.signer not in seen:
                seen.append(embedded.signer)
        return seen

    @property
    def is_signed(self) -> bool:
        return len(self.cosignatures) > 0

    @property
    def messages(self) -> list[str]:
        """Plain messages carried by transfers, in execution order."""
        return [
            embedded.transaction.message
            for embedded in self.transactions
            if isinstance(embedded.transaction, TransferTransaction) and embedded.transaction.message
        ]

    def to_payload(self) -> str:
        """Canonical JSON payload of this contract."""
        return self.model_dump_json(by_alias=True)

    def to_uri(self) -> str:
        """Shareable transaction URI wrapping the hex-encoded payload."""
        return TRANSACTION_URI_PREFIX + self.to_payload().encode().hex()

    @classmethod
    def from_uri(cls, uri: str) -> "Contract":
        """Parse a contract back from a transaction URI.

        Raises:
            ValueError: If the URI does not use the transaction scheme
        """
        if not uri.startswith(TRANSACTION_URI_PREFIX):
            raise ValueError(f"Not a transaction URI: {uri[:40]}")
        payload = bytes.fromhex(uri[len(TRANSACTION_URI_PREFIX) :]).decode()
        return cls.model_validate_json(payload)
