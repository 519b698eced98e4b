"""
Monnayeur - collateral-backed stablecoin creation on Solana.
"""

__version__ = "0.1.0"
