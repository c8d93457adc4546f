"""Request and response bodies of the HTTP service."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from swapable.models.assets import Account
from swapable.models.options import TransactionParameters
from swapable.models.pool import PoolSnapshot
from swapable.models.transactions import Contract


class CommandRequest(BaseModel):
    """A command to assemble for pool `name` owned by `target`.

    Without a snapshot the command runs offline (e.g. create-pool).
    """

    target: Account
    actor: Account
    arguments: dict[str, Any] = Field(default_factory=dict)
    parameters: TransactionParameters | None = None
    snapshot: PoolSnapshot | None = None

    model_config = {"populate_by_name": True}


class CommandResponse(BaseModel):
    command: str
    descriptor: str
    contract: Contract
    payload: str
    uri: str

    model_config = {"populate_by_name": True}
