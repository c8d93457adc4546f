"""Tests for pool state models."""

from swapable.models import PoolInfo, PoolSnapshot
from tests.helpers import (
    POOL_ID,
    PROVIDER,
    SHARES_ASSET_ID,
    STRANGER,
    TARGET,
    X_NONCE,
    Y_NONCE,
    make_account,
    make_identifier,
    make_snapshot,
)


class TestPoolSnapshot:
    """Tests for PoolSnapshot model."""

    def test_reserve_of_identifier_or_asset_id(self):
        snapshot = make_snapshot(reserve_x=10, reserve_y=20)
        x = make_identifier(X_NONCE)
        assert snapshot.reserve_of(x) == 10
        assert snapshot.reserve_of(make_identifier(Y_NONCE).asset_id) == 20

    def test_unknown_reserve_is_zero(self):
        assert make_snapshot().reserve_of(SHARES_ASSET_ID) == 0

    def test_shares_of(self):
        snapshot = make_snapshot(holdings={PROVIDER: 42})
        assert snapshot.shares_of(make_account(PROVIDER)) == 42
        assert snapshot.shares_of(make_account(STRANGER)) == 0

    def test_pair(self):
        snapshot = make_snapshot()
        assert snapshot.pair == (
            make_identifier(X_NONCE).asset_id,
            make_identifier(Y_NONCE).asset_id,
        )
        assert make_snapshot(with_pair=False).pair is None

    def test_parse_camel_case(self):
        snapshot = PoolSnapshot.model_validate(
            {"sharesSupply": "1000", "reserves": {"0x" + SHARES_ASSET_ID.lower(): 5}}
        )
        assert snapshot.shares_supply == 1000
        assert snapshot.reserves == {SHARES_ASSET_ID: 5}
        assert snapshot.holdings == {}


class TestPoolInfo:
    def test_serializes_with_aliases(self):
        info = PoolInfo(
            target=TARGET,
            pool_id=POOL_ID,
            shares_asset_id=SHARES_ASSET_ID,
            x_asset_id=SHARES_ASSET_ID,
            y_asset_id=SHARES_ASSET_ID,
        )
        data = info.model_dump(by_alias=True)
        assert data["poolId"] == POOL_ID
        assert data["sharesAssetId"] == SHARES_ASSET_ID
