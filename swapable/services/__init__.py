"""Ledger scanning services used by the registry."""

from swapable.services.pools import PoolService, publish_prefix
from swapable.services.transactions import TransactionService

__all__ = ["PoolService", "TransactionService", "publish_prefix"]
