"""Ledger adapters."""

from swapable.ledger.memory import InMemoryReader
from swapable.ledger.reader import (
    AccountInfo,
    AssetInfo,
    LedgerTransaction,
    MetadataEntry,
    Reader,
    TransactionPage,
)

__all__ = [
    "AccountInfo",
    "AssetInfo",
    "InMemoryReader",
    "LedgerTransaction",
    "MetadataEntry",
    "Reader",
    "TransactionPage",
]
