"""Shared type definitions for Swapable models.

These types are used across asset, transaction and pool models.
"""

from typing import Annotated, Any

from pydantic import BeforeValidator, Field

# Maximum uint64 value (ledger amounts are unsigned 64-bit integers)
UINT64_MAX = 2**64 - 1


def validate_amount(value: Any) -> int:
    """Validate that a value is a valid uint64 amount.

    Args:
        value: Value to validate (int or decimal string)

    Returns:
        Valid amount as int

    Raises:
        ValueError: If value is not a non-negative integer within uint64 range
    """
    if isinstance(value, bool):
        raise ValueError(f"Amount must be an integer, got {value!r}")

    if isinstance(value, str):
        try:
            value = int(value)
        except ValueError as err:
            raise ValueError(f"Amount must be a decimal integer string: '{value}'") from err

    if not isinstance(value, int):
        raise ValueError(f"Amount must be int or string, got {type(value).__name__}")

    if value < 0:
        raise ValueError(f"Amount cannot be negative: {value}")
    if value > UINT64_MAX:
        raise ValueError(f"Amount overflow: {value} > 2^64-1")

    return value


def normalize_hex(value: Any) -> Any:
    """Strip an optional 0x prefix from hex strings."""
    if isinstance(value, str) and value[:2].lower() == "0x":
        return value[2:]
    return value


def normalize_address(address: str) -> str:
    """Normalize a ledger address: uppercase, without dashes.

    Addresses are sometimes displayed in pretty form
    (e.g. "TB2IMF-LYCQFZ-..."), the plain form is used everywhere else.
    """
    return address.replace("-", "").upper()


def _normalize_address(value: Any) -> Any:
    if isinstance(value, str):
        return normalize_address(value)
    return value


# Base32 ledger address in plain form (39 chars)
Address = Annotated[
    str,
    BeforeValidator(_normalize_address),
    Field(pattern=r"^[A-Z2-7]{39}$", description="Ledger address (base32, plain form)"),
]

# 32-byte public key as hex
PublicKey = Annotated[
    str,
    BeforeValidator(normalize_hex),
    Field(pattern=r"^[a-fA-F0-9]{64}$"),
]

# 4-byte asset nonce (pool identifier) as lowercase hex
AssetNonce = Annotated[
    str,
    BeforeValidator(lambda v: normalize_hex(v).lower() if isinstance(v, str) else v),
    Field(pattern=r"^[a-f0-9]{8}$", description="4-byte asset nonce"),
]

# 64-bit ledger asset id as uppercase hex
LedgerAssetId = Annotated[
    str,
    BeforeValidator(lambda v: normalize_hex(v).upper() if isinstance(v, str) else v),
    Field(pattern=r"^[A-F0-9]{16}$", description="64-bit ledger asset id"),
]

# 64-bit scoped metadata key as uppercase hex
MetadataKey = LedgerAssetId

# Unsigned 64-bit amount (validated)
Amount = Annotated[
    int,
    BeforeValidator(validate_amount),
    Field(description="Unsigned 64-bit amount in atomic units"),
]

# 32-byte hash (e.g. network generation hash)
Hash256 = Annotated[
    str,
    BeforeValidator(lambda v: normalize_hex(v).upper() if isinstance(v, str) else v),
    Field(pattern=r"^[A-F0-9]{64}$"),
]
