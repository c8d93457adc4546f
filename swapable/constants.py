"""Protocol constants for Swapable automated liquidity pools.

Centralizes the open standard name, its revision and the ledger-level
parameters shared by every pool command.
"""

# Open standard name, used as the prefix of every command descriptor
STANDARD_NAME = "Swapable"

# Revision 1: @ubcdigital/swapable@v1.0.0
# Revision 2: @ubcdigital/swapable@v1.2.0
REVISION = 2

# Pool shares are issued with 6 decimal places: shares = 1_000_000 * sqrt(x * y)
SHARES_SCALE = 1_000_000
SHARES_DIVISIBILITY = 6

# Genesis timestamp offset of the public test network (seconds since unix epoch)
DEFAULT_EPOCH_ADJUSTMENT = 1573430400

# Default deadline window for unsigned contracts (hours)
DEFAULT_DEADLINE_HOURS = 2

# Metadata keys attached to the pool shares asset at creation time.
# Values are generated with swapable.keys.generate_uint64_key() and must stay
# in sync with the registry reader.
POOL_ID_KEY_NAME = "Pool_Id"
X_ID_KEY_NAME = "X_Id"
Y_ID_KEY_NAME = "Y_Id"

# Page size used when scanning a registry account's transactions
DEFAULT_PAGE_SIZE = 100
