"""
Ledger RPC service interface.

The subset of Solana JSON-RPC the creation flow depends on.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from solders.pubkey import Pubkey

from monnayeur.domain.value_objects import BlockhashWindow


class ILedgerRPC(ABC):
    """Abstract Solana JSON-RPC client."""

    @abstractmethod
    async def get_latest_blockhash(self) -> BlockhashWindow:
        """Fetch a recent blockhash together with its last valid height."""

    @abstractmethod
    async def get_minimum_balance_for_rent_exemption(self, size: int) -> int:
        """Lamports needed to keep an account of ``size`` bytes rent-exempt."""

    @abstractmethod
    async def send_raw_transaction(self, raw: bytes) -> str:
        """
        Broadcast a serialized signed transaction.

        Returns:
            Transaction signature (base58)

        Raises:
            RPCException: If the node rejects the transaction
        """

    @abstractmethod
    async def get_signature_status(self, signature: str) -> Optional[dict]:
        """
        Status of one signature.

        Returns:
            Status dict (``confirmationStatus``, ``err``, ``slot``) or None
            if the node has not seen the signature
        """

    @abstractmethod
    async def get_block_height(self) -> int:
        """Current block height."""

    @abstractmethod
    async def get_token_accounts_by_owner(
        self, owner: Pubkey, mint: Pubkey
    ) -> List[dict]:
        """Parsed token accounts of ``owner`` for ``mint``."""

    @abstractmethod
    async def get_health(self) -> str:
        """Node health ("ok" when the node is caught up)."""
