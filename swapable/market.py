"""Automated pool orchestrator.

An AutomatedPool binds a pool name, a ledger reader and a target account.
It keeps the last synchronized pool state and dispatches named commands
through the execution state machine of swapable.commands.

Online entry points (execute, publish) refresh the pool state first;
offline ones (create, execute_offline, can_execute) use whatever state is
already held, possibly none.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

import structlog
from pydantic import TypeAdapter, ValidationError

from swapable import commands
from swapable.commands import CommandName, create_command, parse_command_name
from swapable.commands.base import Command
from swapable.constants import REVISION, STANDARD_NAME, X_ID_KEY_NAME, Y_ID_KEY_NAME
from swapable.context import Context
from swapable.keys import generate_uint64_key
from swapable.ledger.reader import AccountInfo, AssetInfo, Reader
from swapable.models.assets import Account, AssetAmount, AssetIdentifier, AssetSource
from swapable.models.options import AllowanceResult, CommandOption, TransactionParameters
from swapable.models.pool import PoolSnapshot
from swapable.models.types import LedgerAssetId
from swapable.models.transactions import Contract

logger = structlog.get_logger()

_ASSET_ID: TypeAdapter[str] = TypeAdapter(LedgerAssetId)

Arguments = Iterable[CommandOption] | Mapping[str, Any]


def _as_options(arguments: Arguments | None) -> list[CommandOption]:
    if arguments is None:
        return []
    if isinstance(arguments, Mapping):
        return [CommandOption(name=name, value=value) for name, value in arguments.items()]
    return list(arguments)


class AutomatedPool:
    """Orchestrates commands on one automated pool.

    Args:
        name: Pool name, e.g. "SWP:XYM"
        reader: Ledger adapter of the pool's network
        target: Account holding the reserves and issuing the shares
    """

    def __init__(self, name: str, reader: Reader, target: Account):
        self.name = name
        self.reader = reader
        self.target = target
        self.source = AssetSource(source=reader.generation_hash)
        self.identifier = AssetIdentifier.create_for_source(name, target, self.source)
        self.result: Contract | None = None

        self._asset_info: AssetInfo | None = None
        self._reserve_info: AccountInfo | None = None
        self._pair: tuple[str, str] | None = None
        self._snapshot: PoolSnapshot | None = None

    @property
    def snapshot(self) -> PoolSnapshot | None:
        """Last synchronized pool state, None until supply and reserves were read."""
        return self._snapshot

    async def synchronize(self, holders: Iterable[Account] = ()) -> bool:
        """Refresh the pool state from the ledger.

        Read failures of any kind are logged and leave the previously held
        values. Share balances are kept for the given `holders` only.

        Args:
            holders: Accounts whose shares balance should be read as well

        Returns:
            True, once every read was attempted
        """
        shares_id = self.identifier.asset_id
        log = logger.bind(pool=self.identifier.id, shares_asset_id=shares_id)

        try:
            self._asset_info = await self.reader.get_asset_info(shares_id)
        except Exception as err:
            log.warning("synchronize_failed", read="shares_asset", error=str(err), exc_info=True)

        try:
            self._reserve_info = await self.reader.get_account_info(self.target.address)
        except Exception as err:
            log.warning("synchronize_failed", read="reserves", error=str(err), exc_info=True)

        try:
            self._pair = await self._read_pair(shares_id) or self._pair
        except Exception as err:
            log.warning("synchronize_failed", read="metadata", error=str(err), exc_info=True)

        known = self._snapshot.holdings if self._snapshot is not None else {}
        holdings: dict[str, int] = {}
        for holder in holders:
            try:
                info = await self.reader.get_account_info(holder.address)
                holdings[holder.address] = info.balance_of(shares_id)
            except Exception as err:
                log.warning(
                    "synchronize_failed",
                    read="holder",
                    holder=holder.address,
                    error=str(err),
                    exc_info=True,
                )
                if holder.address in known:
                    holdings[holder.address] = known[holder.address]

        if self._asset_info is not None and self._reserve_info is not None:
            x_id, y_id = self._pair if self._pair is not None else (None, None)
            try:
                self._snapshot = PoolSnapshot(
                    shares_supply=self._asset_info.supply,
                    reserves=dict(self._reserve_info.balances),
                    holdings=holdings,
                    x_asset_id=x_id,
                    y_asset_id=y_id,
                )
            except ValidationError as err:
                log.warning("synchronize_failed", read="snapshot", errors=err.error_count())

        log.debug("pool_synchronized", available=self._snapshot is not None)
        return True

    async def _read_pair(self, shares_id: str) -> tuple[str, str] | None:
        """(x, y) ledger asset ids attached by the target to the shares asset.

        Raises:
            ValidationError: If a value is not a ledger asset id
        """
        entries = await self.reader.search_metadata(shares_id)
        values = {
            e.scoped_metadata_key: e.value
            for e in entries
            if e.target_address == self.target.address
        }
        x_id = values.get(generate_uint64_key(X_ID_KEY_NAME))
        y_id = values.get(generate_uint64_key(Y_ID_KEY_NAME))
        if x_id is None or y_id is None:
            return None
        return _ASSET_ID.validate_python(x_id), _ASSET_ID.validate_python(y_id)

    def create(
        self,
        provider: Account,
        x: AssetAmount,
        y: AssetAmount,
        parameters: TransactionParameters | None = None,
    ) -> AssetIdentifier:
        """Assemble the CreatePool contract, kept in `result`.

        Runs offline, with the target as actor.

        Returns:
            The pool shares asset identifier
        """
        self.result = self.execute_offline(
            self.target,
            CommandName.CREATE_POOL,
            {"provider": provider, "input_x": x, "input_y": y},
            parameters,
        )
        return self.identifier

    async def publish(
        self,
        registry: Account,
        parameters: TransactionParameters | None = None,
    ) -> Contract:
        """Assemble the contract publishing this pool to `registry`."""
        await self.synchronize()
        return self._dispatch(
            self.target, CommandName.PUBLISH, {"registry": registry}, parameters, None
        )

    def can_execute(
        self,
        actor: Account,
        command: str | CommandName,
        arguments: Arguments | None = None,
        identifier: AssetIdentifier | None = None,
    ) -> AllowanceResult:
        """Check whether `actor` may execute `command` against the held state.

        Raises:
            InvalidCommand: If `command` is unknown
            MissingArgument: If a mandatory argument is absent
        """
        instance = self._command(actor, command, arguments, None, identifier)
        return commands.can_execute(instance, actor)

    async def execute(
        self,
        actor: Account,
        command: str | CommandName,
        arguments: Arguments | None = None,
        parameters: TransactionParameters | None = None,
        identifier: AssetIdentifier | None = None,
    ) -> Contract:
        """Synchronize, then assemble the contract of `command`.

        The actor and the `provider` argument, when given, are synchronized
        as share holders.

        Raises:
            InvalidCommand: If `command` is unknown
            MissingArgument: If a mandatory argument is absent
            OperationForbidden: If `actor` may not execute `command`
            EmptyContract: If the command produced no operations
        """
        options = _as_options(arguments)
        await self.synchronize(self.holders_of(actor, options))
        return self._dispatch(actor, command, options, parameters, identifier)

    def execute_offline(
        self,
        actor: Account,
        command: str | CommandName,
        arguments: Arguments | None = None,
        parameters: TransactionParameters | None = None,
        identifier: AssetIdentifier | None = None,
    ) -> Contract:
        """Assemble the contract of `command` without synchronizing."""
        return self._dispatch(actor, command, arguments, parameters, identifier)

    def _dispatch(
        self,
        actor: Account,
        command: str | CommandName,
        arguments: Arguments | None,
        parameters: TransactionParameters | None,
        identifier: AssetIdentifier | None,
    ) -> Contract:
        instance = self._command(actor, command, arguments, parameters, identifier)
        return commands.execute(instance, actor)

    def _command(
        self,
        actor: Account,
        command: str | CommandName,
        arguments: Arguments | None,
        parameters: TransactionParameters | None,
        identifier: AssetIdentifier | None,
    ) -> Command:
        context = Context(REVISION, actor, self.reader, parameters, _as_options(arguments))
        return create_command(command, context, identifier or self.identifier, self.snapshot)

    def descriptor(self, command: str | CommandName) -> str:
        """Descriptor `command` writes into its execution proof for this pool."""
        name = parse_command_name(command).value
        return f"{STANDARD_NAME}(v{REVISION}):{name}:{self.identifier.id}"

    @staticmethod
    def holders_of(actor: Account, arguments: Arguments | None = None) -> list[Account]:
        """Accounts whose shares balance matters: the actor and the provider argument."""
        holders = [actor]
        for option in _as_options(arguments):
            if option.name != "provider" or option.value is None:
                continue
            try:
                provider = Account.model_validate(option.value)
            except ValidationError:
                # Reported by the command's own argument validation
                continue
            if provider not in holders:
                holders.append(provider)
        return holders
