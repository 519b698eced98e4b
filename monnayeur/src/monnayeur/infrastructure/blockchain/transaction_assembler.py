"""
Transaction assembler - one atomic envelope per attempt.
"""

from solders.message import Message
from solders.pubkey import Pubkey

from monnayeur.domain.value_objects import (
    BlockhashWindow,
    StablecoinInstructions,
    TransactionEnvelope,
)


class TransactionAssembler:
    """Compile the creation instructions into a legacy message."""

    def assemble(
        self,
        instructions: StablecoinInstructions,
        fee_payer: Pubkey,
        window: BlockhashWindow,
    ) -> TransactionEnvelope:
        """
        Bind instructions to a fee payer and blockhash.

        Order is create-account, initialize-mint, create-stablecoin.
        """
        ordered = (
            instructions.create_account,
            instructions.initialize_mint,
            instructions.create_stablecoin,
        )
        message = Message.new_with_blockhash(list(ordered), fee_payer, window.blockhash)
        return TransactionEnvelope(
            message=message,
            instructions=ordered,
            fee_payer=fee_payer,
            window=window,
        )
