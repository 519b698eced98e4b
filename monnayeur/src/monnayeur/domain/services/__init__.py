"""
Domain service interfaces.
"""

from monnayeur.domain.services.i_ledger_rpc import ILedgerRPC
from monnayeur.domain.services.i_wallet_signer import IWalletSigner

__all__ = ["ILedgerRPC", "IWalletSigner"]
