"""Tests for the static command table."""

import pytest

from swapable.commands import (
    COMMANDS,
    AddLiquidity,
    CommandName,
    CreatePool,
    Publish,
    RemoveLiquidity,
    Swap,
    create_command,
    parse_command_name,
)
from swapable.errors import InvalidCommand
from tests.helpers import POOL_ID, TARGET, make_context, make_identifier, make_snapshot


class TestParseCommandName:
    @pytest.mark.parametrize(
        "name,expected",
        [
            ("create-pool", CommandName.CREATE_POOL),
            ("CreatePool", CommandName.CREATE_POOL),
            ("AddLiquidity", CommandName.ADD_LIQUIDITY),
            ("remove-liquidity", CommandName.REMOVE_LIQUIDITY),
            ("Swap", CommandName.SWAP),
            (CommandName.PUBLISH, CommandName.PUBLISH),
        ],
    )
    def test_known_names(self, name, expected):
        assert parse_command_name(name) == expected

    @pytest.mark.parametrize("name", ["", "mint", "create_pool", "Transfer"])
    def test_unknown_name(self, name):
        """Unknown commands are a typed error, never ignored."""
        with pytest.raises(InvalidCommand):
            parse_command_name(name)


class TestCreateCommand:
    def test_table_covers_every_name(self):
        assert set(COMMANDS) == set(CommandName)

    @pytest.mark.parametrize(
        "name,cls",
        [
            ("create-pool", CreatePool),
            ("add-liquidity", AddLiquidity),
            ("remove-liquidity", RemoveLiquidity),
            ("swap", Swap),
            ("publish", Publish),
        ],
    )
    def test_instantiates(self, name, cls):
        snapshot = make_snapshot()
        command = create_command(name, make_context(), make_identifier(POOL_ID, TARGET), snapshot)
        assert isinstance(command, cls)
        assert command.name == name
        assert command.snapshot is snapshot

    def test_unknown_command(self):
        with pytest.raises(InvalidCommand, match="mint"):
            create_command("mint", make_context(), make_identifier(POOL_ID, TARGET))
