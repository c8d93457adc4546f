"""Shared account and asset constants for tests.

Addresses are plain-form base32 test network addresses.

Usage:
    from tests.helpers import TARGET, PROVIDER
    # or
    from tests.helpers.constants import TARGET, PROVIDER
"""

# =============================================================================
# Network
# =============================================================================

GENERATION_HASH = "ACECD90E7B248E012803228ADB4424F0D966D24149B72E58987D2BF2F2AF03C4"
FEE_ASSET_ID = "519FC24B9223E0B4"

# =============================================================================
# Accounts
# =============================================================================

TARGET = "TB2IMFLYCQFZC6NZLWVQL26FZN6BNCNBZJP7WJQ"  # pool target (reserves, shares issuer)
ISSUER = "TCS5GSPGMCTGTI46SSZIBZMRVTLM4BDQ7MRXAYI"  # issuer of the paired currencies
PROVIDER = "TAPROVIDERQ3MBKNJ2ZV6RKH5O3VYXHWCNDIBHA"  # liquidity provider
TRADER = "TBTRADERXW5E3QG2LKZPJ7HUAA3DNPSLMFDVEGQ"
REGISTRY = "TCREGISTRYN4JSQD7OU2MAAFL2RXHXKAO5YGTEI"
STRANGER = "TDRANDOMPXNY3ZQE7S4GOSUSJHMK52LSKGAVLBA"

# =============================================================================
# Pool
# =============================================================================

POOL_NAME = "SWP:XYM"
POOL_ID = "91a1d506"  # derive_pool_nonce(POOL_NAME, TARGET, GENERATION_HASH)
SHARES_ASSET_ID = "23920B7C1500E09C"  # derive_asset_id(POOL_ID, TARGET)

# Nonces of the paired currencies, owned by ISSUER
X_NONCE = "0000000a"
Y_NONCE = "0000000b"

# Metadata keys (generate_uint64_key)
POOL_ID_KEY = "8399C1CBB066F944"
X_ID_KEY = "9B2823771F48325D"
Y_ID_KEY = "826A59AE988FFE4B"
