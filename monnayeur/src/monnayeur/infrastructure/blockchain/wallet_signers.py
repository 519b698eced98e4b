"""
Wallet signer implementations.
"""

import json
from pathlib import Path

from solders.keypair import Keypair
from solders.pubkey import Pubkey
from solders.signature import Signature

from monnayeur.domain.exceptions import WalletError
from monnayeur.domain.services import IWalletSigner


def load_keypair(keypair_path: str) -> Keypair:
    """
    Load Solana keypair from JSON file.

    Args:
        keypair_path: Path to keypair JSON file (64-byte array)

    Returns:
        Solana Keypair object

    Raises:
        WalletError: If the file is missing or not a keypair
    """
    path = Path(keypair_path).expanduser()

    if not path.exists():
        raise WalletError(f"Keypair not found: {keypair_path}")

    try:
        with open(path, "r") as f:
            secret_key = json.load(f)
        return Keypair.from_bytes(bytes(secret_key))
    except (ValueError, TypeError) as e:
        raise WalletError(f"Invalid keypair file {keypair_path}: {e}") from e


class KeypairWalletSigner(IWalletSigner):
    """Wallet signer backed by a local keypair (CLI and tests)."""

    def __init__(self, keypair: Keypair):
        self._keypair = keypair

    @classmethod
    def from_file(cls, keypair_path: str) -> "KeypairWalletSigner":
        return cls(load_keypair(keypair_path))

    @property
    def pubkey(self) -> Pubkey:
        return self._keypair.pubkey()

    async def sign_message(self, message: bytes) -> Signature:
        return self._keypair.sign_message(message)
