"""
Transaction lifecycle exceptions.

Raised while signing, submitting and confirming a creation transaction.
"""

from typing import Optional

from monnayeur.domain.exceptions.base import MonnayeurException


class WalletError(MonnayeurException):
    """External wallet refused, failed or returned an invalid signature."""


class SubmissionError(MonnayeurException):
    """Transaction was rejected before it reached the ledger."""


class ExpiredError(MonnayeurException):
    """Blockhash validity window passed without the transaction landing."""

    def __init__(
        self, signature: str, last_valid_block_height: int, block_height: int
    ):
        super().__init__(
            f"Transaction {signature} expired: block height {block_height} "
            f"passed last valid height {last_valid_block_height}",
            {
                "signature": signature,
                "last_valid_block_height": last_valid_block_height,
                "block_height": block_height,
            },
        )
        self.signature = signature


class OnChainError(MonnayeurException):
    """Transaction was executed and rejected by the program."""

    def __init__(self, signature: str, error: object):
        super().__init__(
            f"Transaction {signature} failed on-chain: {error}",
            {"signature": signature, "error": error},
        )
        self.signature = signature
        self.error = error


class ConfirmationTimeoutError(MonnayeurException):
    """
    Local wait for confirmation gave up.

    The transaction may still land; only polling stopped.
    """

    def __init__(self, signature: str, timeout: float):
        super().__init__(
            f"Stopped waiting for {signature} after {timeout:.1f}s "
            f"(transaction may still be confirmed)",
            {"signature": signature, "timeout": timeout},
        )
        self.signature = signature
        self.timeout = timeout


class RPCException(MonnayeurException):
    """RPC call failed."""

    def __init__(
        self,
        message: str,
        details: Optional[dict] = None,
        rpc_error: Optional[dict] = None,
    ):
        super().__init__(message, details)
        self.rpc_error = rpc_error or {}


class RPCConnectionError(RPCException):
    """RPC endpoint unreachable or timed out."""
