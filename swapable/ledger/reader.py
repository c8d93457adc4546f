"""Ledger adapter protocol and read models.

The Reader is the only way pool commands learn about ledger state. It
carries the network identity parameters and exposes async read accessors
for asset supply, account balances, metadata and transaction history.

Implementations raise LedgerReadError when a read cannot be served
(unknown asset, unreachable node, ...).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from swapable.config import NetworkType
from swapable.models.transactions import TransferTransaction


@dataclass(frozen=True)
class AssetInfo:
    """Supply and ownership of a ledger asset."""

    asset_id: str
    supply: int
    owner_address: str
    divisibility: int = 0


@dataclass(frozen=True)
class AccountInfo:
    """Balances held by a ledger account."""

    address: str
    balances: dict[str, int] = field(default_factory=dict)

    def balance_of(self, asset_id: str) -> int:
        """Balance of `asset_id`, 0 if the account holds none."""
        return self.balances.get(asset_id, 0)


@dataclass(frozen=True)
class MetadataEntry:
    """A metadata value attached to an account or an asset."""

    scoped_metadata_key: str
    source_address: str
    target_address: str
    value: str
    # None for account metadata
    target_asset_id: str | None = None


@dataclass(frozen=True)
class LedgerTransaction:
    """A confirmed ledger transaction.

    Aggregates carry their inner transactions in `inner`; plain transfers
    carry their content in `transfer`. Non-transfer operations are kept
    only as inner entries without a transfer payload.
    """

    hash: str
    height: int
    signer_address: str
    transfer: TransferTransaction | None = None
    inner: tuple[LedgerTransaction, ...] = ()

    @property
    def is_aggregate(self) -> bool:
        return len(self.inner) > 0


@dataclass(frozen=True)
class TransactionPage:
    """One page of a transaction search."""

    data: list[LedgerTransaction]
    page_number: int
    page_size: int

    @property
    def is_last(self) -> bool:
        return len(self.data) < self.page_size


class Reader(Protocol):
    """Protocol for ledger adapters.

    This allows swapping between a node-backed reader and the in-memory
    ledger used for offline computation and tests.
    """

    network_type: NetworkType
    generation_hash: str
    epoch_adjustment: int
    fee_asset_id: str

    async def get_asset_info(self, asset_id: str) -> AssetInfo:
        """Get supply and owner of an asset.

        Raises:
            LedgerReadError: If the asset is unknown or the read fails
        """
        ...

    async def get_account_info(self, address: str) -> AccountInfo:
        """Get balances of an account.

        Raises:
            LedgerReadError: If the account is unknown or the read fails
        """
        ...

    async def search_metadata(self, target_asset_id: str) -> list[MetadataEntry]:
        """Get all metadata entries attached to an asset."""
        ...

    async def search_transactions(
        self,
        address: str,
        page_number: int,
        page_size: int,
    ) -> TransactionPage:
        """Get one page of confirmed transactions involving `address`.

        Args:
            address: Account signing or receiving the transactions
            page_number: 1-based page number
            page_size: Maximum number of transactions per page
        """
        ...

    async def get_chain_height(self) -> int:
        """Get the current chain height."""
        ...
