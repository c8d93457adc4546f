"""Deterministic identifier and key derivation.

Three derivations are used throughout the package:

- derive_pool_nonce(): the 4-byte pool identifier, from a pool name, the
  target address and the asset source (network generation hash).
- derive_asset_id(): the 64-bit ledger asset id for a (nonce, owner) pair.
- generate_uint64_key(): the 64-bit scoped metadata key for a name.

All three are pure functions of their inputs. The registry reader relies on
them producing bit-identical results to the ledger.
"""

from __future__ import annotations

import base64
import binascii
import hashlib

# Highest bit of a 64-bit word
_UINT64_HIGH_BIT = 1 << 63


def address_to_bytes(address: str) -> bytes:
    """Decode a base32 ledger address (39 chars, unpadded) into its 24 raw bytes.

    Raises:
        ValueError: If the address is not valid base32
    """
    padded = address.upper() + "=" * (-len(address) % 8)
    try:
        return base64.b32decode(padded)
    except binascii.Error as err:
        raise ValueError(f"Invalid ledger address: {address}") from err


def derive_pool_nonce(name: str, target_address: str, source: str) -> str:
    """Derive the 4-byte pool identifier as 8 lowercase hex chars.

    The identifier is the left-most 4 bytes of
    sha3_512(target_address + "-" + source + "-" + name).

    Args:
        name: Pool name (e.g. "SWP:XYM")
        target_address: Address of the pool's target account
        source: Asset source, i.e. the network generation hash

    Returns:
        Hex-encoded 4-byte identifier
    """
    data = f"{target_address}-{source}-{name}".encode()
    return hashlib.sha3_512(data).digest()[:4].hex()


def derive_asset_id(nonce: str, owner_address: str) -> str:
    """Derive the 64-bit ledger asset id for a nonce owned by an address.

    id = uint64_le(sha3_256(owner || nonce)[:8]) with the highest bit cleared.

    Args:
        nonce: 4-byte nonce as 8 hex chars
        owner_address: Base32 address of the asset owner

    Returns:
        16 uppercase hex chars
    """
    digest = hashlib.sha3_256(address_to_bytes(owner_address) + bytes.fromhex(nonce)).digest()
    value = int.from_bytes(digest[:8], "little") & (_UINT64_HIGH_BIT - 1)
    return f"{value:016X}"


def generate_uint64_key(name: str) -> str:
    """Generate a scoped metadata key from a name.

    key = uint64_le(sha3_256(name)[:8]) with the highest bit set.

    Example:
        >>> generate_uint64_key("Pool_Id")
        '8399C1CBB066F944'
    """
    digest = hashlib.sha3_256(name.encode()).digest()
    value = int.from_bytes(digest[:8], "little") | _UINT64_HIGH_BIT
    return f"{value:016X}"
