"""In-process ledger implementing the Reader protocol.

Used for offline computation (the HTTP service seeds it from a posted
snapshot) and for tests. Contracts produced by pool commands can be
announced to it: every operation is applied to a copy of the ledger state,
which replaces the live state only when all of them succeed.
"""

from __future__ import annotations

import copy
import hashlib
from dataclasses import dataclass, field

import structlog

from swapable.config import DEFAULT_NETWORK_CONFIG, NetworkConfig
from swapable.errors import ContractRejected, LedgerReadError
from swapable.keys import derive_asset_id
from swapable.ledger.reader import (
    AccountInfo,
    AssetInfo,
    LedgerTransaction,
    MetadataEntry,
    TransactionPage,
)
from swapable.models.transactions import (
    AccountAssetRestrictionTransaction,
    AccountMetadataTransaction,
    AssetDefinitionTransaction,
    AssetMetadataTransaction,
    AssetSupplyChangeTransaction,
    Contract,
    RestrictionFlag,
    SupplyChangeAction,
    TransferTransaction,
)

logger = structlog.get_logger()


@dataclass
class _LedgerState:
    assets: dict[str, AssetInfo] = field(default_factory=dict)
    balances: dict[str, dict[str, int]] = field(default_factory=dict)
    metadata: list[MetadataEntry] = field(default_factory=list)
    # address -> (flag, asset ids)
    restrictions: dict[str, tuple[RestrictionFlag, set[str]]] = field(default_factory=dict)


class InMemoryReader:
    """Ledger double holding assets, balances, metadata and transactions.

    Track calls for assertions through `calls`.
    """

    def __init__(self, config: NetworkConfig = DEFAULT_NETWORK_CONFIG, height: int = 1):
        self.network_type = config.network_type
        self.generation_hash = config.generation_hash
        self.epoch_adjustment = config.epoch_adjustment
        self.fee_asset_id = config.fee_asset_id
        self.height = height
        self.transactions: list[LedgerTransaction] = []
        self.calls: list[tuple[str, str]] = []  # (method, key)
        self._state = _LedgerState()

    # Seeding

    def add_asset(
        self,
        asset_id: str,
        supply: int,
        owner_address: str,
        divisibility: int = 0,
    ) -> None:
        """Register an asset. Its supply is not credited to anyone."""
        self._state.assets[asset_id] = AssetInfo(asset_id, supply, owner_address, divisibility)

    def set_balance(self, address: str, asset_id: str, amount: int) -> None:
        self._state.balances.setdefault(address, {})[asset_id] = amount

    def add_metadata(self, entry: MetadataEntry) -> None:
        _upsert_metadata(self._state.metadata, entry)

    def set_chain_height(self, height: int) -> None:
        self.height = height

    # Reader protocol

    async def get_asset_info(self, asset_id: str) -> AssetInfo:
        self.calls.append(("get_asset_info", asset_id))
        try:
            return self._state.assets[asset_id]
        except KeyError:
            raise LedgerReadError(f"Unknown asset: {asset_id}") from None

    async def get_account_info(self, address: str) -> AccountInfo:
        self.calls.append(("get_account_info", address))
        return AccountInfo(address, dict(self._state.balances.get(address, {})))

    async def search_metadata(self, target_asset_id: str) -> list[MetadataEntry]:
        self.calls.append(("search_metadata", target_asset_id))
        return [e for e in self._state.metadata if e.target_asset_id == target_asset_id]

    async def search_transactions(
        self,
        address: str,
        page_number: int,
        page_size: int,
    ) -> TransactionPage:
        self.calls.append(("search_transactions", address))
        matching = [tx for tx in self.transactions if _involves(tx, address)]
        start = (page_number - 1) * page_size
        return TransactionPage(matching[start : start + page_size], page_number, page_size)

    async def get_chain_height(self) -> int:
        self.calls.append(("get_chain_height", ""))
        return self.height

    def account_metadata(self, address: str) -> list[MetadataEntry]:
        """Metadata attached to an account (not to one of its assets)."""
        return [
            e
            for e in self._state.metadata
            if e.target_address == address and e.target_asset_id is None
        ]

    # Settlement

    def announce(self, contract: Contract) -> LedgerTransaction:
        """Settle a contract atomically and record it as confirmed.

        Args:
            contract: Contract whose operations are applied in order

        Returns:
            The confirmed aggregate transaction

        Raises:
            ContractRejected: If any operation cannot be applied. The ledger
                state is left untouched.
        """
        staged = copy.deepcopy(self._state)
        for index, embedded in enumerate(contract.transactions):
            try:
                _apply(staged, embedded.signer.address, embedded.transaction)
            except ContractRejected as err:
                logger.warning(
                    "contract_rejected",
                    index=index,
                    operation=embedded.transaction.type,
                    reason=str(err),
                )
                raise

        self._state = staged
        self.height += 1

        tx_hash = hashlib.sha3_256(contract.to_payload().encode()).hexdigest().upper()
        inner = tuple(
            LedgerTransaction(
                hash=tx_hash,
                height=self.height,
                signer_address=embedded.signer.address,
                transfer=(
                    embedded.transaction
                    if isinstance(embedded.transaction, TransferTransaction)
                    else None
                ),
            )
            for embedded in contract.transactions
        )
        confirmed = LedgerTransaction(
            hash=tx_hash,
            height=self.height,
            signer_address=contract.signers[0].address,
            inner=inner,
        )
        self.transactions.append(confirmed)
        logger.debug(
            "contract_settled",
            hash=tx_hash,
            height=self.height,
            operations=len(inner),
        )
        return confirmed


def _involves(tx: LedgerTransaction, address: str) -> bool:
    entries = tx.inner if tx.is_aggregate else (tx,)
    for entry in entries:
        if entry.signer_address == address:
            return True
        if entry.transfer is not None and entry.transfer.recipient_address == address:
            return True
    return False


def _upsert_metadata(entries: list[MetadataEntry], entry: MetadataEntry) -> None:
    for i, existing in enumerate(entries):
        if (
            existing.scoped_metadata_key == entry.scoped_metadata_key
            and existing.target_address == entry.target_address
            and existing.target_asset_id == entry.target_asset_id
        ):
            entries[i] = entry
            return
    entries.append(entry)


def _credit(
    state: _LedgerState,
    address: str,
    asset_id: str,
    amount: int,
    restricted: bool = True,
) -> None:
    restriction = state.restrictions.get(address) if restricted else None
    if restriction is not None:
        flag, listed = restriction
        allowed = asset_id in listed if flag == RestrictionFlag.ALLOW_INCOMING else asset_id not in listed
        if not allowed:
            raise ContractRejected(f"{address} does not accept asset {asset_id}")
    balances = state.balances.setdefault(address, {})
    balances[asset_id] = balances.get(asset_id, 0) + amount


def _debit(state: _LedgerState, address: str, asset_id: str, amount: int) -> None:
    balances = state.balances.setdefault(address, {})
    held = balances.get(asset_id, 0)
    if held < amount:
        raise ContractRejected(f"Insufficient balance of {asset_id} for {address}: {held} < {amount}")
    balances[asset_id] = held - amount


def _owned_asset(state: _LedgerState, signer: str, asset_id: str) -> AssetInfo:
    asset = state.assets.get(asset_id)
    if asset is None:
        raise ContractRejected(f"Unknown asset: {asset_id}")
    if asset.owner_address != signer:
        raise ContractRejected(f"{signer} does not own asset {asset_id}")
    return asset


def _apply(state: _LedgerState, signer: str, tx) -> None:
    if isinstance(tx, AssetDefinitionTransaction):
        if tx.asset_id != derive_asset_id(tx.nonce, signer):
            raise ContractRejected(f"Asset id {tx.asset_id} does not match nonce {tx.nonce}")
        if tx.asset_id not in state.assets:
            state.assets[tx.asset_id] = AssetInfo(tx.asset_id, 0, signer, tx.divisibility)

    elif isinstance(tx, AssetSupplyChangeTransaction):
        asset = _owned_asset(state, signer, tx.asset_id)
        if tx.action == SupplyChangeAction.INCREASE:
            # Minting is not an incoming transfer
            _credit(state, signer, tx.asset_id, tx.delta, restricted=False)
            supply = asset.supply + tx.delta
        else:
            _debit(state, signer, tx.asset_id, tx.delta)
            supply = asset.supply - tx.delta
        state.assets[tx.asset_id] = AssetInfo(tx.asset_id, supply, signer, asset.divisibility)

    elif isinstance(tx, AssetMetadataTransaction):
        _owned_asset(state, signer, tx.target_asset_id)
        _upsert_metadata(
            state.metadata,
            MetadataEntry(
                scoped_metadata_key=tx.scoped_metadata_key,
                source_address=signer,
                target_address=tx.target_address,
                value=tx.value,
                target_asset_id=tx.target_asset_id,
            ),
        )

    elif isinstance(tx, AccountMetadataTransaction):
        _upsert_metadata(
            state.metadata,
            MetadataEntry(
                scoped_metadata_key=tx.scoped_metadata_key,
                source_address=signer,
                target_address=tx.target_address,
                value=tx.value,
            ),
        )

    elif isinstance(tx, AccountAssetRestrictionTransaction):
        flag, listed = state.restrictions.get(signer, (tx.flag, set()))
        if flag != tx.flag:
            raise ContractRejected(f"Restriction flag of {signer} is {flag.value}")
        listed = (listed | set(tx.additions)) - set(tx.deletions)
        state.restrictions[signer] = (flag, listed)

    elif isinstance(tx, TransferTransaction):
        for asset in tx.assets:
            _debit(state, signer, asset.asset_id, asset.amount)
            _credit(state, tx.recipient_address, asset.asset_id, asset.amount)

    else:
        raise ContractRejected(f"Unsupported operation: {type(tx).__name__}")
