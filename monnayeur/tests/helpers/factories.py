"""
Factories for creation-flow test objects.
"""

from typing import Optional, Tuple

from solders.keypair import Keypair
from solders.pubkey import Pubkey

from monnayeur.config.settings import ProgramConfig
from monnayeur.domain.value_objects import (
    AccountSet,
    SignedTransaction,
    StablecoinSpec,
    TransactionEnvelope,
)
from monnayeur.infrastructure.blockchain import (
    AccountDeriver,
    InstructionBuilder,
    KeypairWalletSigner,
    SigningCoordinator,
    TransactionAssembler,
)

PROGRAM_ID = "CGnwq4D9qErCRjPujz5MVkMaixR8BLRACpAmLWsqoRRe"
BOND_MINT = "Es9vMFrzaCERmJfrF4H2FYD4KCoNkY11McCe8BenwNYB"


def program_config(decimals: int = 6) -> ProgramConfig:
    return ProgramConfig(program_id=Pubkey.from_string(PROGRAM_ID), decimals=decimals)


def make_spec(**overrides) -> StablecoinSpec:
    fields = {
        "name": "Peso Digital",
        "symbol": "MXND",
        "decimals": 6,
        "icon_url": "https://example.com/mxnd.png",
        "target_currency": "MXN",
        "bond_mint": BOND_MINT,
    }
    fields.update(overrides)
    return StablecoinSpec(**fields)


def make_wallet() -> KeypairWalletSigner:
    return KeypairWalletSigner(Keypair())


async def make_envelope(
    rpc, wallet: KeypairWalletSigner, spec: Optional[StablecoinSpec] = None
) -> Tuple[TransactionEnvelope, AccountSet]:
    """Build and assemble a creation transaction against ``rpc``."""
    spec = spec or make_spec()
    accounts = AccountDeriver().generate(wallet.pubkey, spec.bond_mint)
    window = await rpc.get_latest_blockhash()
    instructions = await InstructionBuilder(rpc, program_config()).build(
        spec, accounts
    )
    envelope = TransactionAssembler().assemble(instructions, wallet.pubkey, window)
    return envelope, accounts


async def make_signed(rpc, wallet: KeypairWalletSigner) -> SignedTransaction:
    """Fully signed creation transaction."""
    envelope, accounts = await make_envelope(rpc, wallet)
    return await SigningCoordinator().sign(envelope, accounts.local_signers, wallet)
