"""Network configuration for pool commands."""

import os
from dataclasses import dataclass
from enum import IntEnum

from swapable.constants import DEFAULT_EPOCH_ADJUSTMENT


class NetworkType(IntEnum):
    """Ledger network kinds, by their one-byte network identifier."""

    MAIN_NET = 104
    TEST_NET = 152
    MIJIN = 96
    MIJIN_TEST = 144
    PRIVATE = 120
    PRIVATE_TEST = 168


@dataclass(frozen=True)
class NetworkConfig:
    """Identity parameters of the ledger network pools are computed for.

    Attributes:
        network_type: Network kind, embedded in every contract
        generation_hash: Genesis generation hash, also the pools' asset source
        epoch_adjustment: Network epoch offset (seconds since unix epoch)
        fee_asset_id: Ledger asset id of the network fee currency
    """

    network_type: NetworkType = NetworkType.TEST_NET
    generation_hash: str = "ACECD90E7B248E012803228ADB4424F0D966D24149B72E58987D2BF2F2AF03C4"
    epoch_adjustment: int = DEFAULT_EPOCH_ADJUSTMENT
    fee_asset_id: str = "519FC24B9223E0B4"


# Default configuration instance (public test network)
DEFAULT_NETWORK_CONFIG = NetworkConfig()


def load_network_config() -> NetworkConfig:
    """Build a NetworkConfig from environment variables.

    Configuration via environment variables:
    - SWAPABLE_NETWORK_TYPE: Network identifier byte or name (default: TEST_NET)
    - SWAPABLE_GENERATION_HASH: Network generation hash
    - SWAPABLE_EPOCH_ADJUSTMENT: Epoch offset in seconds
    - SWAPABLE_FEE_ASSET_ID: Fee currency asset id

    Raises:
        ValueError: If SWAPABLE_NETWORK_TYPE is not a known network
    """
    default = DEFAULT_NETWORK_CONFIG
    raw_type = os.environ.get("SWAPABLE_NETWORK_TYPE")
    if raw_type is None:
        network_type = default.network_type
    elif raw_type.isdigit():
        network_type = NetworkType(int(raw_type))
    else:
        try:
            network_type = NetworkType[raw_type.upper()]
        except KeyError as err:
            raise ValueError(f"Unknown network type: {raw_type}") from err

    return NetworkConfig(
        network_type=network_type,
        generation_hash=os.environ.get("SWAPABLE_GENERATION_HASH", default.generation_hash).upper(),
        epoch_adjustment=int(
            os.environ.get("SWAPABLE_EPOCH_ADJUSTMENT", str(default.epoch_adjustment))
        ),
        fee_asset_id=os.environ.get("SWAPABLE_FEE_ASSET_ID", default.fee_asset_id).upper(),
    )
