"""Registry of published pools."""

from __future__ import annotations

from swapable.constants import REVISION
from swapable.ledger.reader import Reader
from swapable.models.assets import Account
from swapable.models.pool import PoolInfo
from swapable.services.pools import PoolService


class Registry:
    """Lists the pools that published themselves to a collector account.

    Args:
        reader: Ledger adapter
        account: The registry (collector) account
    """

    def __init__(self, reader: Reader, account: Account):
        self.reader = reader
        self.account = account

    async def get_pools(
        self,
        revision: int | None = None,
        required_confirmations: int = 0,
    ) -> list[PoolInfo]:
        """Pools published under `revision` (default: the current revision)."""
        service = PoolService(self.reader)
        return await service.get_pools(
            self.account.address,
            revision if revision is not None else REVISION,
            required_confirmations,
        )
