"""Execution context of a pool command."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from swapable.ledger.reader import Reader
from swapable.models.assets import Account
from swapable.models.options import CommandOption, TransactionParameters


class Context:
    """Everything a command needs for one invocation.

    A context is built per call and discarded with the command that used it.
    Arguments are not validated here; each command validates its own.

    Attributes:
        revision: Standard revision the command is executed under
        actor: Account requesting the execution
        reader: Ledger adapter
        parameters: Broadcast parameters of the resulting contract
    """

    def __init__(
        self,
        revision: int,
        actor: Account,
        reader: Reader,
        parameters: TransactionParameters | None = None,
        options: Iterable[CommandOption] = (),
    ):
        self.revision = revision
        self.actor = actor
        self.reader = reader
        self.parameters = parameters if parameters is not None else TransactionParameters()
        self._options: dict[str, CommandOption] = {}
        for option in options:
            self._options[option.name] = option

    @property
    def options(self) -> list[CommandOption]:
        return list(self._options.values())

    @property
    def arguments(self) -> dict[str, Any]:
        """Argument values by name."""
        return {name: option.value for name, option in self._options.items()}

    def has_input(self, name: str) -> bool:
        return name in self._options

    def get_input(self, name: str, default: Any = None) -> Any:
        """Value of argument `name`, or `default` when absent. Never raises."""
        option = self._options.get(name)
        return option.value if option is not None else default

    def set_input(self, name: str, value: Any) -> Context:
        """Add argument `name`, replacing a previous value of the same name."""
        self._options[name] = CommandOption(name=name, value=value)
        return self
