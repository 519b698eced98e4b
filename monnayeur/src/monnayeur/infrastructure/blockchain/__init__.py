"""
Solana transaction components.
"""

from monnayeur.infrastructure.blockchain.account_deriver import AccountDeriver
from monnayeur.infrastructure.blockchain.balance_precondition import (
    BalancePrecondition,
)
from monnayeur.infrastructure.blockchain.instruction_builder import (
    MINT_ACCOUNT_SIZE,
    InstructionBuilder,
)
from monnayeur.infrastructure.blockchain.signing_coordinator import (
    SigningCoordinator,
)
from monnayeur.infrastructure.blockchain.solana_rpc_client import SolanaRPCClient
from monnayeur.infrastructure.blockchain.submission_manager import (
    SubmissionManager,
)
from monnayeur.infrastructure.blockchain.transaction_assembler import (
    TransactionAssembler,
)
from monnayeur.infrastructure.blockchain.wallet_signers import (
    KeypairWalletSigner,
    load_keypair,
)

__all__ = [
    "AccountDeriver",
    "BalancePrecondition",
    "InstructionBuilder",
    "MINT_ACCOUNT_SIZE",
    "SigningCoordinator",
    "SolanaRPCClient",
    "SubmissionManager",
    "TransactionAssembler",
    "KeypairWalletSigner",
    "load_keypair",
]
