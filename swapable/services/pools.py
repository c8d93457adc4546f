"""Reconstruct published pools from registry records and asset metadata."""

from __future__ import annotations

import re

import structlog
from pydantic import ValidationError

from swapable.constants import (
    DEFAULT_PAGE_SIZE,
    POOL_ID_KEY_NAME,
    REVISION,
    STANDARD_NAME,
    X_ID_KEY_NAME,
    Y_ID_KEY_NAME,
)
from swapable.keys import derive_asset_id, generate_uint64_key
from swapable.ledger.reader import Reader
from swapable.models.pool import PoolInfo
from swapable.services.transactions import TransactionService

logger = structlog.get_logger()

_POOL_ID_PATTERN = re.compile(r"^[0-9a-fA-F]{8}$")


def publish_prefix(revision: int = REVISION) -> str:
    """Message prefix of Publish execution proofs for `revision`."""
    return f"{STANDARD_NAME}(v{revision}):publish:"


class PoolService:
    """Lists the pools published to a registry account.

    A pool is listed once per distinct shares asset, in order of first
    publication. Records whose pool metadata cannot be read back are
    skipped.
    """

    # Metadata key -> field of PoolInfo
    KNOWN_METADATA = {
        generate_uint64_key(POOL_ID_KEY_NAME): "pool_id",
        generate_uint64_key(X_ID_KEY_NAME): "x_asset_id",
        generate_uint64_key(Y_ID_KEY_NAME): "y_asset_id",
    }

    def __init__(self, reader: Reader, page_size: int = DEFAULT_PAGE_SIZE):
        self.reader = reader
        self.transactions = TransactionService(reader, page_size)

    async def get_pools(
        self,
        registry_address: str,
        revision: int = REVISION,
        required_confirmations: int = 0,
    ) -> list[PoolInfo]:
        prefix = publish_prefix(revision)
        transfers = await self.transactions.get_incoming_transfers(
            registry_address, required_confirmations
        )

        # (owner, pool id) of each publication, first occurrence wins
        published: dict[str, tuple[str, str]] = {}
        for tx in transfers:
            message = tx.transfer.message if tx.transfer is not None else ""
            if not message.startswith(prefix):
                continue
            pool_id = message[len(prefix) :]
            if not _POOL_ID_PATTERN.match(pool_id):
                logger.warning("publish_record_malformed", hash=tx.hash, message=message)
                continue
            shares_asset_id = derive_asset_id(pool_id, tx.signer_address)
            published.setdefault(shares_asset_id, (tx.signer_address, pool_id.lower()))

        pools: list[PoolInfo] = []
        for shares_asset_id, (owner, pool_id) in published.items():
            info = await self.get_info(owner, shares_asset_id, pool_id)
            if info is not None:
                pools.append(info)

        logger.info(
            "pools_listed",
            registry=registry_address,
            revision=revision,
            records=len(published),
            pools=len(pools),
        )
        return pools

    async def get_info(
        self,
        target_address: str,
        shares_asset_id: str,
        pool_id: str,
    ) -> PoolInfo | None:
        """Read back the pool metadata attached to a shares asset.

        Returns:
            PoolInfo, or None when the metadata is missing, malformed or
            names another pool
        """
        entries = await self.reader.search_metadata(shares_asset_id)
        fields: dict[str, str] = {}
        for entry in entries:
            field = self.KNOWN_METADATA.get(entry.scoped_metadata_key)
            if field is not None and entry.target_address == target_address:
                fields[field] = entry.value

        if fields.get("pool_id", "").lower() != pool_id:
            logger.warning(
                "pool_metadata_mismatch",
                shares_asset_id=shares_asset_id,
                expected=pool_id,
                found=fields.get("pool_id"),
            )
            return None

        try:
            return PoolInfo(target=target_address, shares_asset_id=shares_asset_id, **fields)
        except ValidationError as err:
            logger.warning(
                "pool_metadata_invalid",
                shares_asset_id=shares_asset_id,
                errors=err.error_count(),
            )
            return None
