"""Static table of pool commands.

Command names resolve to factories through a fixed enum-keyed table.
Accepts the kebab-case name used in descriptors ("add-liquidity") as well
as the class name ("AddLiquidity").
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Protocol

from swapable.commands.add_liquidity import AddLiquidity
from swapable.commands.base import Command
from swapable.commands.create_pool import CreatePool
from swapable.commands.publish import Publish
from swapable.commands.remove_liquidity import RemoveLiquidity
from swapable.commands.swap import Swap
from swapable.context import Context
from swapable.errors import InvalidCommand
from swapable.models.assets import AssetIdentifier
from swapable.models.pool import PoolSnapshot


class CommandName(str, Enum):
    CREATE_POOL = "create-pool"
    ADD_LIQUIDITY = "add-liquidity"
    REMOVE_LIQUIDITY = "remove-liquidity"
    SWAP = "swap"
    PUBLISH = "publish"


class CommandFactory(Protocol):
    def __call__(
        self,
        context: Context,
        identifier: AssetIdentifier,
        snapshot: PoolSnapshot | None = None,
    ) -> Command: ...


COMMANDS: dict[CommandName, CommandFactory] = {
    CommandName.CREATE_POOL: CreatePool,
    CommandName.ADD_LIQUIDITY: AddLiquidity,
    CommandName.REMOVE_LIQUIDITY: RemoveLiquidity,
    CommandName.SWAP: Swap,
    CommandName.PUBLISH: Publish,
}

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def parse_command_name(name: str | CommandName) -> CommandName:
    """Resolve a command name.

    Raises:
        InvalidCommand: If no command has that name
    """
    if isinstance(name, CommandName):
        return name
    kebab = _CAMEL_BOUNDARY.sub("-", name.strip()).lower()
    try:
        return CommandName(kebab)
    except ValueError:
        raise InvalidCommand(f"Unknown command: {name!r}") from None


def create_command(
    name: str | CommandName,
    context: Context,
    identifier: AssetIdentifier,
    snapshot: PoolSnapshot | None = None,
) -> Command:
    """Instantiate the command registered under `name`.

    Raises:
        InvalidCommand: If no command has that name
    """
    return COMMANDS[parse_command_name(name)](context, identifier, snapshot)
