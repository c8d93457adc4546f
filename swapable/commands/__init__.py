"""Pool commands and their execution state machine."""

from swapable.commands.add_liquidity import AddLiquidity
from swapable.commands.base import (
    BaseCommand,
    Command,
    assert_has_mandatory_arguments,
    can_execute,
    execute,
    prepare,
)
from swapable.commands.create_pool import CreatePool
from swapable.commands.publish import Publish
from swapable.commands.registry import COMMANDS, CommandName, create_command, parse_command_name
from swapable.commands.remove_liquidity import RemoveLiquidity
from swapable.commands.swap import Swap

__all__ = [
    # State machine
    "BaseCommand",
    "Command",
    "assert_has_mandatory_arguments",
    "can_execute",
    "execute",
    "prepare",
    # Commands
    "AddLiquidity",
    "CreatePool",
    "Publish",
    "RemoveLiquidity",
    "Swap",
    # Lookup
    "COMMANDS",
    "CommandName",
    "create_command",
    "parse_command_name",
]
