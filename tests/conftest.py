"""Pytest configuration and fixtures."""

import asyncio

import pytest

from swapable.ledger.memory import InMemoryReader
from swapable.market import AutomatedPool
from swapable.models import Account, AssetAmount
from tests.helpers import (
    PROVIDER,
    REGISTRY,
    TARGET,
    TRADER,
    X_NONCE,
    Y_NONCE,
    fund,
    make_account,
    make_amount,
    make_pool,
)


@pytest.fixture
def reader() -> InMemoryReader:
    """An empty in-memory ledger on the default test network."""
    return InMemoryReader()


@pytest.fixture
def target() -> Account:
    return make_account(TARGET)


@pytest.fixture
def provider() -> Account:
    return make_account(PROVIDER)


@pytest.fixture
def trader() -> Account:
    return make_account(TRADER)


@pytest.fixture
def registry_account() -> Account:
    return make_account(REGISTRY)


@pytest.fixture
def input_x() -> AssetAmount:
    return make_amount(X_NONCE, 10)


@pytest.fixture
def input_y() -> AssetAmount:
    return make_amount(Y_NONCE, 10)


@pytest.fixture
def pool(reader) -> AutomatedPool:
    """The SWP:XYM pool, not created yet."""
    return make_pool(reader)


@pytest.fixture
def created_pool(reader, pool, provider, input_x, input_y) -> AutomatedPool:
    """The SWP:XYM pool created on the ledger with 10 X and 10 Y.

    The provider holds 10_000_000 shares and 999_990 of each currency
    afterwards.
    """
    fund(reader, PROVIDER)
    pool.create(provider, input_x, input_y)
    reader.announce(pool.result)
    asyncio.run(pool.synchronize([provider]))
    return pool
