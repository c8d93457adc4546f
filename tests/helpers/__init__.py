"""Test helpers module for shared test utilities.

This module consolidates common test utilities to reduce duplication:
- constants: Accounts, network and pool constants
- factories: Account, asset, context, snapshot and pool factory functions
"""

from tests.helpers.constants import (
    FEE_ASSET_ID,
    GENERATION_HASH,
    ISSUER,
    POOL_ID,
    POOL_NAME,
    PROVIDER,
    REGISTRY,
    SHARES_ASSET_ID,
    STRANGER,
    TARGET,
    TRADER,
    X_NONCE,
    Y_NONCE,
)
from tests.helpers.factories import (
    fund,
    make_account,
    make_amount,
    make_context,
    make_identifier,
    make_pool,
    make_snapshot,
)

__all__ = [
    # Constants
    "FEE_ASSET_ID",
    "GENERATION_HASH",
    "ISSUER",
    "POOL_ID",
    "POOL_NAME",
    "PROVIDER",
    "REGISTRY",
    "SHARES_ASSET_ID",
    "STRANGER",
    "TARGET",
    "TRADER",
    "X_NONCE",
    "Y_NONCE",
    # Factories
    "fund",
    "make_account",
    "make_amount",
    "make_context",
    "make_identifier",
    "make_pool",
    "make_snapshot",
]
