"""
Account deriver - fresh identities for a creation attempt.
"""

from solders.keypair import Keypair
from solders.pubkey import Pubkey

from monnayeur.domain.value_objects import AccountSet


class AccountDeriver:
    """Generate the ephemeral mint and metadata keypairs for one attempt."""

    def generate(self, authority: Pubkey, bond_mint: str) -> AccountSet:
        """
        Create a new AccountSet.

        Args:
            authority: Wallet public key
            bond_mint: Backing bond mint address

        Returns:
            AccountSet with two freshly generated keypairs
        """
        return AccountSet(
            authority=authority,
            stablecoin_mint=Keypair(),
            stablecoin_data=Keypair(),
            bond_mint=bond_mint,
        )
