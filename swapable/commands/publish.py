"""Publish: announce a pool to a registry account."""

from __future__ import annotations

from pydantic import BaseModel

from swapable.commands.base import BaseCommand
from swapable.models.assets import Account
from swapable.models.transactions import EmbeddedTransaction


class PublishArguments(BaseModel):
    registry: Account

    model_config = {"frozen": True}


class Publish(BaseCommand):
    """Sends the pool's descriptor to a registry account.

    Only the pool target may publish (default allowance). Registries list
    pools by scanning their incoming messages for this descriptor.
    """

    name = "publish"
    arguments = ("registry",)
    arguments_model = PublishArguments

    def build_transactions(self, args: PublishArguments) -> list[EmbeddedTransaction]:
        return [self.signed_by(self.target, self.transfer(args.registry, message=self.descriptor))]
