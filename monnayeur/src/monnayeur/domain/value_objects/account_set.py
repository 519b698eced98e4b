"""
AccountSet value object - Accounts taking part in one creation attempt.
"""

from dataclasses import dataclass
from typing import List

from solders.keypair import Keypair
from solders.pubkey import Pubkey


@dataclass(frozen=True)
class AccountSet:
    """
    Accounts for a single creation attempt.

    The two keypairs are ephemeral: generated for this attempt, never
    persisted and never reused by a retry. The authority is the wallet's
    public key; its private key stays with the wallet.
    """

    authority: Pubkey
    stablecoin_mint: Keypair
    stablecoin_data: Keypair
    bond_mint: str

    @property
    def local_signers(self) -> List[Keypair]:
        """Keypairs whose signatures are produced locally."""
        return [self.stablecoin_mint, self.stablecoin_data]

    def to_dict(self) -> dict:
        return {
            "authority": str(self.authority),
            "stablecoin_mint": str(self.stablecoin_mint.pubkey()),
            "stablecoin_data": str(self.stablecoin_data.pubkey()),
            "bond_mint": self.bond_mint,
        }
