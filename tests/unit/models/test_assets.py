"""Tests for account and asset models."""

import pytest
from pydantic import ValidationError

from swapable.models import Account, AssetAmount, AssetIdentifier, AssetSource
from tests.helpers import GENERATION_HASH, ISSUER, POOL_ID, POOL_NAME, SHARES_ASSET_ID, TARGET
from tests.helpers import make_account, make_identifier


class TestAccount:
    """Tests for Account model."""

    def test_pretty_address_is_normalized(self):
        """Dash-separated, lowercase addresses are accepted."""
        pretty = "-".join(TARGET[i : i + 6] for i in range(0, len(TARGET), 6)).lower()
        assert Account(address=pretty).address == TARGET

    def test_pretty(self):
        assert make_account(TARGET).pretty().replace("-", "") == TARGET

    def test_equality_is_by_address(self):
        """Public key plays no part in identity."""
        with_key = Account(address=TARGET, publicKey="AB" * 32)
        assert with_key == make_account(TARGET)
        assert len({with_key, make_account(TARGET)}) == 1

    def test_different_addresses_differ(self):
        assert make_account(TARGET) != make_account(ISSUER)

    def test_rejects_malformed_address(self):
        with pytest.raises(ValidationError):
            Account(address="T" * 38)

    def test_rejects_malformed_public_key(self):
        with pytest.raises(ValidationError):
            Account(address=TARGET, public_key="XYZ")


class TestAssetIdentifier:
    """Tests for AssetIdentifier model."""

    def test_create_for_source(self):
        """Pool identifiers are derived from name, target and source."""
        identifier = AssetIdentifier.create_for_source(
            POOL_NAME, make_account(TARGET), AssetSource(source=GENERATION_HASH)
        )
        assert identifier.id == POOL_ID
        assert identifier.target == make_account(TARGET)
        assert identifier.asset_id == SHARES_ASSET_ID

    def test_source_is_case_insensitive(self):
        lower = AssetSource(source=GENERATION_HASH.lower())
        assert lower.source == GENERATION_HASH

    def test_nonce_is_normalized(self):
        identifier = AssetIdentifier(id="0xABCDEF01", target=make_account(ISSUER))
        assert identifier.id == "abcdef01"

    def test_rejects_malformed_nonce(self):
        with pytest.raises(ValidationError):
            AssetIdentifier(id="abc", target=make_account(ISSUER))

    def test_frozen(self):
        identifier = make_identifier()
        with pytest.raises(ValidationError):
            identifier.id = "00000001"


class TestAssetAmount:
    """Tests for AssetAmount model."""

    def test_accepts_decimal_string(self):
        amount = AssetAmount(identifier=make_identifier(), amount="1000")
        assert amount.amount == 1000

    @pytest.mark.parametrize("value", [-1, True, 2**64, "1.5", 1.5])
    def test_rejects_invalid_amounts(self, value):
        with pytest.raises(ValidationError):
            AssetAmount(identifier=make_identifier(), amount=value)

    def test_parse_from_json(self):
        data = {"identifier": {"id": "0000000a", "target": {"address": ISSUER}}, "amount": 7}
        amount = AssetAmount.model_validate(data)
        assert amount.identifier == make_identifier("0000000a")
        assert amount.amount == 7
