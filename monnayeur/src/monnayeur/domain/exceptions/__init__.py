"""
Domain exceptions package.
"""

from monnayeur.domain.exceptions.base import (
    BuildError,
    MonnayeurException,
    ValidationError,
)
from monnayeur.domain.exceptions.catalog import BondCatalogError
from monnayeur.domain.exceptions.transaction import (
    ConfirmationTimeoutError,
    ExpiredError,
    OnChainError,
    RPCConnectionError,
    RPCException,
    SubmissionError,
    WalletError,
)

__all__ = [
    "MonnayeurException",
    "ValidationError",
    "BuildError",
    "WalletError",
    "SubmissionError",
    "ExpiredError",
    "OnChainError",
    "ConfirmationTimeoutError",
    "RPCException",
    "RPCConnectionError",
    "BondCatalogError",
]
