"""Transaction scanning: paging, aggregate flattening and transfer filters."""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from swapable.constants import DEFAULT_PAGE_SIZE
from swapable.ledger.reader import LedgerTransaction, Reader

logger = structlog.get_logger()


class TransactionService:
    """Reads confirmed transfers of an account.

    Args:
        reader: Ledger adapter
        page_size: Number of transactions requested per page
    """

    def __init__(self, reader: Reader, page_size: int = DEFAULT_PAGE_SIZE):
        if page_size <= 0:
            raise ValueError(f"page_size must be positive, got {page_size}")
        self.reader = reader
        self.page_size = page_size

    async def get_transactions(self, address: str) -> list[LedgerTransaction]:
        """All confirmed transactions involving `address`, page after page."""
        transactions: list[LedgerTransaction] = []
        page_number = 1
        while True:
            page = await self.reader.search_transactions(address, page_number, self.page_size)
            transactions.extend(page.data)
            if page.is_last:
                break
            page_number += 1

        logger.debug(
            "transactions_read",
            address=address,
            pages=page_number,
            transactions=len(transactions),
        )
        return transactions

    async def get_incoming_transfers(
        self,
        address: str,
        required_confirmations: int = 0,
    ) -> list[LedgerTransaction]:
        """Transfers carrying a message to `address`, with enough confirmations."""
        transactions = self.flatten_aggregate_transactions(await self.get_transactions(address))
        transactions = await self.filter_transactions_with_enough_confirmations(
            transactions, required_confirmations
        )
        return self.filter_eligible_incoming_transfers(transactions, address)

    async def get_outgoing_transfers(
        self,
        address: str,
        required_confirmations: int = 0,
    ) -> list[LedgerTransaction]:
        """Transfers carrying a message signed by `address`, with enough confirmations."""
        transactions = self.flatten_aggregate_transactions(await self.get_transactions(address))
        transactions = await self.filter_transactions_with_enough_confirmations(
            transactions, required_confirmations
        )
        return self.filter_eligible_outgoing_transfers(transactions, address)

    async def filter_transactions_with_enough_confirmations(
        self,
        transactions: list[LedgerTransaction],
        required_confirmations: int,
    ) -> list[LedgerTransaction]:
        if required_confirmations <= 0:
            return transactions
        height = await self.reader.get_chain_height()
        return [tx for tx in transactions if height - tx.height >= required_confirmations]

    @staticmethod
    def flatten_aggregate_transactions(
        transactions: Iterable[LedgerTransaction],
    ) -> list[LedgerTransaction]:
        """Replace aggregates by their inner transfers, keeping plain transfers."""
        flattened: list[LedgerTransaction] = []
        for tx in transactions:
            entries = tx.inner if tx.is_aggregate else (tx,)
            flattened.extend(TransactionService.filter_transfer_transactions(entries))
        return flattened

    @staticmethod
    def filter_transfer_transactions(
        transactions: Iterable[LedgerTransaction],
    ) -> list[LedgerTransaction]:
        return [tx for tx in transactions if tx.transfer is not None]

    @staticmethod
    def filter_eligible_incoming_transfers(
        transactions: Iterable[LedgerTransaction],
        recipient_address: str,
    ) -> list[LedgerTransaction]:
        return [
            tx
            for tx in TransactionService.filter_transfer_transactions(transactions)
            if tx.transfer is not None
            and tx.transfer.recipient_address == recipient_address
            and tx.transfer.message
        ]

    @staticmethod
    def filter_eligible_outgoing_transfers(
        transactions: Iterable[LedgerTransaction],
        sender_address: str,
    ) -> list[LedgerTransaction]:
        return [
            tx
            for tx in TransactionService.filter_transfer_transactions(transactions)
            if tx.signer_address == sender_address
            and tx.transfer is not None
            and tx.transfer.message
        ]
