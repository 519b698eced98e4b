"""
Transaction value objects.

The pieces that flow through one attempt: blockhash window, built
instructions, assembled envelope, signed transaction, confirmation.
"""

from dataclasses import dataclass
from typing import NamedTuple, Optional, Tuple

from solders.hash import Hash
from solders.instruction import Instruction
from solders.message import Message
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.transaction import Transaction

from monnayeur.domain.exceptions import OnChainError


@dataclass(frozen=True)
class BlockhashWindow:
    """
    Recent blockhash with the last block height at which it is valid.

    Both values always come from the same getLatestBlockhash response.
    """

    blockhash: Hash
    last_valid_block_height: int


class StablecoinInstructions(NamedTuple):
    """The three instructions of a creation transaction, in execution order."""

    create_account: Instruction
    initialize_mint: Instruction
    create_stablecoin: Instruction


@dataclass(frozen=True)
class TransactionEnvelope:
    """Compiled, unsigned transaction bound to a fee payer and blockhash."""

    message: Message
    instructions: Tuple[Instruction, ...]
    fee_payer: Pubkey
    window: BlockhashWindow

    @property
    def message_bytes(self) -> bytes:
        """Exact bytes every signer signs."""
        return bytes(self.message)

    @property
    def required_signers(self) -> Tuple[Pubkey, ...]:
        """Signer keys in the order the signature vector must follow."""
        count = self.message.header.num_required_signatures
        return tuple(self.message.account_keys[:count])


@dataclass(frozen=True)
class SignedTransaction:
    """Envelope plus its signature vector, ready for submission."""

    envelope: TransactionEnvelope
    transaction: Transaction

    @property
    def signature(self) -> Signature:
        """Transaction id (the fee payer's signature)."""
        return self.transaction.signatures[0]

    @property
    def window(self) -> BlockhashWindow:
        return self.envelope.window

    def serialize(self) -> bytes:
        return bytes(self.transaction)


@dataclass(frozen=True)
class ConfirmationResult:
    """
    Outcome of a landed transaction.

    on_chain_error is set when the program rejected the transaction,
    None on success.
    """

    signature: str
    on_chain_error: Optional[object] = None
    slot: Optional[int] = None
    confirmation_status: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.on_chain_error is None

    def raise_for_error(self) -> "ConfirmationResult":
        """Raise OnChainError if the program rejected the transaction."""
        if self.on_chain_error is not None:
            raise OnChainError(self.signature, self.on_chain_error)
        return self
