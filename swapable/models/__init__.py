"""Pydantic models for Swapable data structures."""

from swapable.models.assets import Account, AssetAmount, AssetIdentifier, AssetSource
from swapable.models.options import AllowanceResult, CommandOption, TransactionParameters
from swapable.models.pool import PoolInfo, PoolSnapshot
from swapable.models.transactions import (
    AccountAssetRestrictionTransaction,
    AccountMetadataTransaction,
    AssetDefinitionTransaction,
    AssetMetadataTransaction,
    AssetSupplyChangeTransaction,
    Contract,
    EmbeddedTransaction,
    LedgerAsset,
    RestrictionFlag,
    SupplyChangeAction,
    Transaction,
    TransferTransaction,
)
from swapable.models.types import Address, Amount, AssetNonce, LedgerAssetId, MetadataKey

__all__ = [
    # Types
    "Address",
    "Amount",
    "AssetNonce",
    "LedgerAssetId",
    "MetadataKey",
    # Assets
    "Account",
    "AssetAmount",
    "AssetIdentifier",
    "AssetSource",
    # Command inputs and outputs
    "AllowanceResult",
    "CommandOption",
    "TransactionParameters",
    # Pool state
    "PoolInfo",
    "PoolSnapshot",
    # Ledger operations
    "AccountAssetRestrictionTransaction",
    "AccountMetadataTransaction",
    "AssetDefinitionTransaction",
    "AssetMetadataTransaction",
    "AssetSupplyChangeTransaction",
    "Contract",
    "EmbeddedTransaction",
    "LedgerAsset",
    "RestrictionFlag",
    "SupplyChangeAction",
    "Transaction",
    "TransferTransaction",
]
