"""Command arguments, transaction parameters and allowance results."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

from pydantic import BaseModel, Field, model_validator

from swapable.constants import DEFAULT_DEADLINE_HOURS, DEFAULT_EPOCH_ADJUSTMENT
from swapable.models.types import Amount


class CommandOption(BaseModel):
    """A named command argument.

    Values are left untyped here; each command validates its own arguments
    into a typed record before computing anything.
    """

    name: str = Field(min_length=1)
    value: Any

    model_config = {"frozen": True}


class TransactionParameters(BaseModel):
    """Per-call broadcast parameters of a contract.

    Attributes:
        epoch_adjustment: Network epoch offset, in seconds since the unix epoch
        deadline: Time after which the contract can no longer be announced.
            Defaults to now + DEFAULT_DEADLINE_HOURS.
        max_fee: Maximum fee paid for the contract, None for the network default
    """

    epoch_adjustment: int = Field(default=DEFAULT_EPOCH_ADJUSTMENT, alias="epochAdjustment", ge=0)
    deadline: datetime | None = None
    max_fee: Amount | None = Field(default=None, alias="maxFee")

    model_config = {"populate_by_name": True}

    @model_validator(mode="after")
    def _default_deadline(self) -> TransactionParameters:
        if self.deadline is None:
            self.deadline = datetime.now(UTC) + timedelta(hours=DEFAULT_DEADLINE_HOURS)
        elif self.deadline.tzinfo is None:
            self.deadline = self.deadline.replace(tzinfo=UTC)
        return self

    @property
    def deadline_ms(self) -> int:
        """Deadline in milliseconds relative to the network epoch."""
        if self.deadline is None:
            raise ValueError("deadline is not set")
        epoch = datetime.fromtimestamp(self.epoch_adjustment, UTC)
        return int((self.deadline - epoch).total_seconds() * 1000)


class AllowanceResult(BaseModel):
    """Result of an allowance check. Carries no side effects."""

    status: bool
    message: str | None = None

    model_config = {"frozen": True}

    @classmethod
    def allowed(cls) -> AllowanceResult:
        return cls(status=True)

    @classmethod
    def denied(cls, message: str) -> AllowanceResult:
        return cls(status=False, message=message)

    def __bool__(self) -> bool:
        return self.status
