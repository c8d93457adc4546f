"""Command contract and execution state machine.

Every pool command goes through the same steps:

    Unchecked -> Authorized -> Assembled -> Executed
    Unchecked -> Rejected

1. Mandatory arguments are checked for presence (MissingArgument).
2. Arguments are validated once into the command's typed record
   (pydantic ValidationError when malformed).
3. The command's allowance rule decides (AllowanceResult).
4. On execute(), a denied allowance raises OperationForbidden; otherwise
   the command's transaction list is wrapped into one unsigned Contract
   (EmptyContract when the list is empty).

Commands only describe what differs between them (name, mandatory
arguments, allowance rule, transaction list); the steps above live in
the free functions of this module.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import ClassVar, Protocol

import structlog
from pydantic import BaseModel

from swapable.constants import STANDARD_NAME
from swapable.context import Context
from swapable.errors import EmptyContract, MissingArgument, OperationForbidden
from swapable.models.assets import Account, AssetIdentifier
from swapable.models.options import AllowanceResult, CommandOption
from swapable.models.pool import PoolSnapshot
from swapable.models.transactions import (
    Contract,
    EmbeddedTransaction,
    LedgerAsset,
    Transaction,
    TransferTransaction,
)

logger = structlog.get_logger()


class Command(Protocol):
    """Protocol for pool commands."""

    name: ClassVar[str]
    arguments: ClassVar[tuple[str, ...]]
    context: Context
    identifier: AssetIdentifier

    @property
    def descriptor(self) -> str:
        """Execution proof prefix identifying the command and pool."""
        ...

    def parse_arguments(self) -> BaseModel:
        """Validate the context arguments into the command's record."""
        ...

    def allowance(self, actor: Account, args: BaseModel) -> AllowanceResult:
        """Decide whether `actor` may execute the command with `args`."""
        ...

    def build_transactions(self, args: BaseModel) -> list[EmbeddedTransaction]:
        """Ordered operations of the contract, each with its signer."""
        ...


class BaseCommand(ABC):
    """Shared behavior of pool commands.

    Subclasses set `name`, `arguments` and `arguments_model`, and implement
    build_transactions(). The default allowance only lets the pool's
    target account execute the command.

    Args:
        context: Execution context of this invocation
        identifier: The pool shares asset identifier
        snapshot: Pool state read from the ledger, None when unavailable
    """

    name: ClassVar[str] = ""
    arguments: ClassVar[tuple[str, ...]] = ()
    arguments_model: ClassVar[type[BaseModel]]

    def __init__(
        self,
        context: Context,
        identifier: AssetIdentifier,
        snapshot: PoolSnapshot | None = None,
    ):
        self.context = context
        self.identifier = identifier
        self.snapshot = snapshot

    @property
    def target(self) -> Account:
        return self.identifier.target

    @property
    def descriptor(self) -> str:
        """Descriptor: "<standard>(v<revision>):<command>:<pool id>"."""
        return f"{STANDARD_NAME}(v{self.context.revision}):{self.name}:{self.identifier.id}"

    def parse_arguments(self) -> BaseModel:
        return self.arguments_model.model_validate(self.context.arguments)

    def allowance(self, actor: Account, args: BaseModel) -> AllowanceResult:
        if actor != self.target:
            return AllowanceResult.denied(f"Only the pool target may execute {self.name}")
        return AllowanceResult.allowed()

    @abstractmethod
    def build_transactions(self, args: BaseModel) -> list[EmbeddedTransaction]:
        """Ordered operations of the contract, each with its signer."""

    def require_snapshot(self) -> PoolSnapshot:
        """The pool snapshot of a command whose allowance needed one.

        Raises:
            OperationForbidden: If the pool state is unavailable
        """
        if self.snapshot is None:
            raise OperationForbidden(f"Pool state is unavailable ({self.name})")
        return self.snapshot

    def is_pool_pair(self, first: str, second: str) -> bool:
        """Whether two ledger asset ids are the pool's pair, in any order.

        True when the snapshot does not know the pair.
        """
        pair = self.snapshot.pair if self.snapshot is not None else None
        if pair is None:
            return True
        return {first, second} == set(pair)

    # Transaction helpers

    def signed_by(self, signer: Account, transaction: Transaction) -> EmbeddedTransaction:
        return EmbeddedTransaction(signer=signer, transaction=transaction)

    def transfer(
        self,
        recipient: Account,
        assets: Iterable[tuple[str, int]] = (),
        message: str = "",
    ) -> TransferTransaction:
        """Transfer of (ledger asset id, amount) pairs and an optional message."""
        return TransferTransaction(
            recipient_address=recipient.address,
            assets=[LedgerAsset(asset_id=asset_id, amount=amount) for asset_id, amount in assets],
            message=message,
        )

    def proof(self, *fields: object) -> str:
        """Execution proof message: the descriptor followed by `fields`."""
        return ":".join([self.descriptor, *(str(f) for f in fields)])

    def __repr__(self) -> str:
        return f"{type(self).__name__}(pool={self.identifier.id}, target={self.target.address})"


def assert_has_mandatory_arguments(command: Command) -> None:
    """Check that every mandatory argument is present and not None.

    Raises:
        MissingArgument: For the first absent argument
    """
    for name in command.arguments:
        if command.context.get_input(name) is None:
            raise MissingArgument(f'Missing argument "{name}" ({command.name})')


def _apply_options(command: Command, options: Iterable[CommandOption] | None) -> None:
    if options is None:
        return
    for option in options:
        command.context.set_input(option.name, option.value)


def _authorize(
    command: Command,
    actor: Account,
    options: Iterable[CommandOption] | None,
) -> tuple[AllowanceResult, BaseModel]:
    _apply_options(command, options)
    assert_has_mandatory_arguments(command)
    args = command.parse_arguments()
    return command.allowance(actor, args), args


def can_execute(
    command: Command,
    actor: Account,
    options: Iterable[CommandOption] | None = None,
) -> AllowanceResult:
    """Check whether `actor` may execute `command`.

    Args:
        command: The command to check
        actor: Account requesting the execution
        options: Arguments added to the command context before checking

    Returns:
        AllowanceResult, denied results carry a message

    Raises:
        MissingArgument: If a mandatory argument is absent
        pydantic.ValidationError: If an argument is malformed
    """
    allowance, _ = _authorize(command, actor, options)
    return allowance


def prepare(command: Command, args: BaseModel) -> Contract:
    """Wrap the command's operations into one unsigned contract.

    Raises:
        EmptyContract: If the command produces no operations
    """
    transactions = command.build_transactions(args)
    if not transactions:
        raise EmptyContract(f"No transactions result from the execution of {command.name}")

    parameters = command.context.parameters
    return Contract(
        network_type=command.context.reader.network_type,
        deadline=parameters.deadline,
        max_fee=parameters.max_fee,
        transactions=transactions,
    )


def execute(
    command: Command,
    actor: Account,
    options: Iterable[CommandOption] | None = None,
) -> Contract:
    """Authorize `actor` and assemble the command's contract.

    Raises:
        MissingArgument: If a mandatory argument is absent
        pydantic.ValidationError: If an argument is malformed
        OperationForbidden: If the allowance rule denies the execution
        EmptyContract: If the command produces no operations
    """
    allowance, args = _authorize(command, actor, options)
    if not allowance:
        logger.info(
            "command_forbidden",
            command=command.name,
            actor=actor.address,
            reason=allowance.message,
        )
        raise OperationForbidden(f"Operation forbidden ({command.name}): {allowance.message}")

    contract = prepare(command, args)
    logger.info(
        "command_executed",
        command=command.name,
        pool=command.identifier.id,
        actor=actor.address,
        transactions=len(contract.transactions),
        signers=len(contract.signers),
    )
    return contract
