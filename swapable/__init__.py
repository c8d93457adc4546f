"""Swapable - automated liquidity pools for digital assets."""

from swapable.market import AutomatedPool
from swapable.registry import Registry

__version__ = "1.3.2"
__all__ = ["AutomatedPool", "Registry", "__version__"]
