"""Tests for command options, transaction parameters and allowance results."""

from datetime import UTC, datetime, timedelta

import pytest
from pydantic import ValidationError

from swapable.models import AllowanceResult, CommandOption, TransactionParameters


class TestCommandOption:
    def test_requires_name(self):
        with pytest.raises(ValidationError):
            CommandOption(name="", value=1)

    def test_value_is_untyped(self):
        assert CommandOption(name="anything", value={"a": [1, 2]}).value == {"a": [1, 2]}


class TestTransactionParameters:
    """Tests for TransactionParameters model."""

    def test_defaults(self):
        """Deadline defaults to two hours from now, in UTC."""
        before = datetime.now(UTC)
        params = TransactionParameters()
        assert params.deadline is not None
        assert params.deadline.tzinfo is not None
        assert before + timedelta(hours=2) <= params.deadline
        assert params.deadline <= datetime.now(UTC) + timedelta(hours=2)
        assert params.epoch_adjustment == 1573430400
        assert params.max_fee is None

    def test_naive_deadline_is_utc(self):
        params = TransactionParameters(deadline=datetime(2030, 1, 1, 12, 0))
        assert params.deadline == datetime(2030, 1, 1, 12, 0, tzinfo=UTC)

    def test_parse_camel_case(self):
        params = TransactionParameters.model_validate({"epochAdjustment": 1615853185, "maxFee": "2000"})
        assert params.epoch_adjustment == 1615853185
        assert params.max_fee == 2000

    def test_deadline_ms(self):
        """Deadline is expressed relative to the network epoch."""
        epoch = datetime.fromtimestamp(1573430400, UTC)
        params = TransactionParameters(deadline=epoch + timedelta(seconds=90))
        assert params.deadline_ms == 90_000

    def test_deadline_ms_without_deadline(self):
        """Unvalidated parameters carry no default deadline."""
        params = TransactionParameters.model_construct(deadline=None)
        with pytest.raises(ValueError, match="deadline is not set"):
            params.deadline_ms


class TestAllowanceResult:
    def test_allowed_is_truthy(self):
        result = AllowanceResult.allowed()
        assert result
        assert result.status is True
        assert result.message is None

    def test_denied_is_falsy_with_message(self):
        result = AllowanceResult.denied("nope")
        assert not result
        assert result.message == "nope"
