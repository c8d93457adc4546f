"""API endpoints for assembling pool contracts.

The service is stateless: each request carries the pool state it should
be computed against, which seeds an in-memory ledger for that request only.
"""

import os

import structlog
from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError

from swapable.api.schemas import CommandRequest, CommandResponse
from swapable.config import NetworkConfig, load_network_config
from swapable.constants import X_ID_KEY_NAME, Y_ID_KEY_NAME
from swapable.errors import (
    EmptyContract,
    InvalidCommand,
    MissingArgument,
    OperationForbidden,
)
from swapable.keys import generate_uint64_key
from swapable.ledger.memory import InMemoryReader
from swapable.ledger.reader import MetadataEntry
from swapable.market import AutomatedPool
from swapable.models.options import AllowanceResult
from swapable.models.pool import PoolSnapshot

logger = structlog.get_logger()

router = APIRouter()

# Networks this service assembles contracts for
# Configurable via environment variable SWAPABLE_SUPPORTED_NETWORKS (comma-separated)
SUPPORTED_NETWORKS = set(os.environ.get("SWAPABLE_SUPPORTED_NETWORKS", "testnet").split(","))


def get_network_config() -> NetworkConfig:
    """Dependency provider for the network configuration.

    Override this in tests:
        app.dependency_overrides[get_network_config] = lambda: config
    """
    return load_network_config()


def _seed(reader: InMemoryReader, pool: AutomatedPool, snapshot: PoolSnapshot) -> None:
    shares_id = pool.identifier.asset_id
    target = pool.target.address
    reader.add_asset(shares_id, snapshot.shares_supply, target)
    for asset_id, amount in snapshot.reserves.items():
        reader.set_balance(target, asset_id, amount)
    for address, amount in snapshot.holdings.items():
        reader.set_balance(address, shares_id, amount)
    if snapshot.pair is not None:
        for key_name, value in zip((X_ID_KEY_NAME, Y_ID_KEY_NAME), snapshot.pair, strict=True):
            reader.add_metadata(
                MetadataEntry(
                    scoped_metadata_key=generate_uint64_key(key_name),
                    source_address=target,
                    target_address=target,
                    value=value,
                    target_asset_id=shares_id,
                )
            )


def _pool_for(network: str, name: str, request: CommandRequest, config: NetworkConfig) -> AutomatedPool:
    if network not in SUPPORTED_NETWORKS:
        logger.warning(
            "unsupported_network",
            network=network,
            supported_networks=sorted(SUPPORTED_NETWORKS),
        )
        raise HTTPException(status_code=404, detail=f"Unsupported network: {network}")

    reader = InMemoryReader(config)
    pool = AutomatedPool(name, reader, request.target)
    if request.snapshot is not None:
        _seed(reader, pool, request.snapshot)
    return pool


def _validation_detail(err: ValidationError) -> list[dict[str, object]]:
    return [
        {"loc": list(e["loc"]), "msg": e["msg"], "type": e["type"]}
        for e in err.errors(include_url=False)
    ]


@router.post("/{network}/pools/{name}/{command}", response_model_exclude_none=True)
async def execute_command(
    network: str,
    name: str,
    command: str,
    request: CommandRequest,
    config: NetworkConfig = Depends(get_network_config),
) -> CommandResponse:
    """Assemble the unsigned contract of `command` on pool `name`.

    Error Handling:
        - Unknown network or command: 404
        - Missing or malformed arguments: 422
        - Actor not allowed to execute the command: 403
        - Command produced no operations: 500
    """
    logger.info(
        "received_command",
        network=network,
        pool=name,
        command=command,
        actor=request.actor.address,
        online=request.snapshot is not None,
    )
    pool = _pool_for(network, name, request, config)

    try:
        if request.snapshot is not None:
            contract = await pool.execute(
                request.actor, command, request.arguments, request.parameters
            )
        else:
            contract = pool.execute_offline(
                request.actor, command, request.arguments, request.parameters
            )
        descriptor = pool.descriptor(command)
    except InvalidCommand as err:
        raise HTTPException(status_code=404, detail=str(err)) from err
    except MissingArgument as err:
        raise HTTPException(status_code=422, detail=str(err)) from err
    except ValidationError as err:
        raise HTTPException(status_code=422, detail=_validation_detail(err)) from err
    except OperationForbidden as err:
        raise HTTPException(status_code=403, detail=str(err)) from err
    except EmptyContract as err:
        logger.exception("empty_contract", pool=name, command=command)
        raise HTTPException(status_code=500, detail=str(err)) from err

    logger.info(
        "returning_contract",
        pool=name,
        command=command,
        transactions=len(contract.transactions),
    )
    return CommandResponse(
        command=command,
        descriptor=descriptor,
        contract=contract,
        payload=contract.to_payload(),
        uri=contract.to_uri(),
    )


@router.post("/{network}/pools/{name}/{command}/allowance")
async def check_allowance(
    network: str,
    name: str,
    command: str,
    request: CommandRequest,
    config: NetworkConfig = Depends(get_network_config),
) -> AllowanceResult:
    """Check whether the actor may execute `command`, without assembling it."""
    pool = _pool_for(network, name, request, config)

    try:
        if request.snapshot is not None:
            await pool.synchronize(pool.holders_of(request.actor, request.arguments))
        return pool.can_execute(request.actor, command, request.arguments)
    except InvalidCommand as err:
        raise HTTPException(status_code=404, detail=str(err)) from err
    except MissingArgument as err:
        raise HTTPException(status_code=422, detail=str(err)) from err
    except ValidationError as err:
        raise HTTPException(status_code=422, detail=_validation_detail(err)) from err
