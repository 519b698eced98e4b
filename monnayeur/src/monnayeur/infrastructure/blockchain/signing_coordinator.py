"""
Signing coordinator - ephemeral keys first, then the external wallet.
"""

from typing import Dict, Iterable, Optional

from solders.keypair import Keypair
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.transaction import Transaction

from monnayeur.domain.exceptions import WalletError
from monnayeur.domain.services import IWalletSigner
from monnayeur.domain.value_objects import SignedTransaction, TransactionEnvelope
from shared.reporter import SystemReporter


class SigningCoordinator:
    """
    Collect every required signature over the envelope's message bytes.

    Signatures end up in the order of the message's required signers.
    A signer that did not sign keeps the all-zero default signature, so
    submission rejects the transaction before broadcast.
    """

    def __init__(self, reporter: Optional[SystemReporter] = None):
        self.reporter = reporter

    async def sign(
        self,
        envelope: TransactionEnvelope,
        local_signers: Iterable[Keypair],
        external_signer: Optional[IWalletSigner],
    ) -> SignedTransaction:
        """
        Sign with local keypairs, then await the wallet for the authority.

        Raises:
            WalletError: Wallet unavailable, refused, failed, or returned a
                signature that does not verify
        """
        message_bytes = envelope.message_bytes
        required = set(envelope.required_signers)

        signatures: Dict[Pubkey, Signature] = {}
        for keypair in local_signers:
            pubkey = keypair.pubkey()
            if pubkey not in required:
                if self.reporter:
                    self.reporter.warning(
                        f"Ignoring local signer {pubkey}: not required",
                        context="Signing",
                    )
                continue
            signatures[pubkey] = keypair.sign_message(message_bytes)

        authority, signature = await self._sign_external(
            external_signer, message_bytes
        )
        signatures[authority] = signature

        ordered = [
            signatures.get(pubkey, Signature.default())
            for pubkey in envelope.required_signers
        ]
        transaction = Transaction.populate(envelope.message, ordered)

        if self.reporter:
            self.reporter.debug(
                f"Collected {len(signatures)}/{len(ordered)} signatures",
                context="Signing",
            )

        return SignedTransaction(envelope=envelope, transaction=transaction)

    async def _sign_external(
        self, signer: Optional[IWalletSigner], message_bytes: bytes
    ):
        """Await the wallet signature and verify it against the message."""
        if signer is None:
            raise WalletError("No wallet signer available")

        try:
            authority = signer.pubkey
            signature = await signer.sign_message(message_bytes)
        except WalletError:
            raise
        except Exception as e:
            raise WalletError(
                f"Wallet failed to sign: {e}",
                details={"error_type": type(e).__name__},
            ) from e

        if not isinstance(signature, Signature):
            raise WalletError(
                f"Wallet returned {type(signature).__name__}, expected Signature"
            )

        if not signature.verify(authority, message_bytes):
            raise WalletError(
                "Wallet signature does not verify against the message",
                details={"authority": str(authority)},
            )

        return authority, signature
