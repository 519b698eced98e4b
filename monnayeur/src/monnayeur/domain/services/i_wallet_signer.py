"""
Wallet signer service interface.

The wallet holds the authority key. Monnayeur hands it the exact message
bytes and receives a detached signature; the private key never crosses
this boundary.
"""

from abc import ABC, abstractmethod

from solders.pubkey import Pubkey
from solders.signature import Signature


class IWalletSigner(ABC):
    """Abstract capability to sign with the authority key."""

    @property
    @abstractmethod
    def pubkey(self) -> Pubkey:
        """Authority public key (also the fee payer)."""

    @abstractmethod
    async def sign_message(self, message: bytes) -> Signature:
        """
        Sign serialized message bytes.

        Args:
            message: Serialized transaction message

        Returns:
            ed25519 signature over ``message``

        Raises:
            Exception: Any failure, including the user refusing to sign
        """
