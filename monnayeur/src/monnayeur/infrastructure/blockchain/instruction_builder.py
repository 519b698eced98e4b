"""
Instruction builder for stablecoin creation.

Builds the three instructions of a creation transaction:
1. System program create-account for the new mint
2. SPL token InitializeMint
3. Stablecoin program create_stablecoin (Anchor)

Wire format of create_stablecoin:
    data = sha256("global:create_stablecoin")[:8]
           + borsh(name: string, symbol: string, decimals: u8,
                   icon_url: string, target_currency: string)
    accounts = authority (signer, writable), stablecoin_data (signer,
               writable), stablecoin_mint (writable), bond_mint, token
               program, system program, rent sysvar
"""

import hashlib
from typing import Optional

from borsh_construct import U8, CStruct, String
from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey
from solders.system_program import ID as SYS_PROGRAM_ID
from solders.system_program import CreateAccountParams, create_account
from solders.sysvar import RENT
from spl.token.instructions import InitializeMintParams, initialize_mint

from monnayeur.config.settings import ProgramConfig
from monnayeur.domain.exceptions import BuildError
from monnayeur.domain.services import ILedgerRPC
from monnayeur.domain.value_objects import (
    AccountSet,
    StablecoinInstructions,
    StablecoinSpec,
)
from shared.reporter import SystemReporter

# Size of an SPL token mint account
MINT_ACCOUNT_SIZE = 82

CREATE_STABLECOIN_LAYOUT = CStruct(
    "name" / String,
    "symbol" / String,
    "decimals" / U8,
    "icon_url" / String,
    "target_currency" / String,
)


def sighash(name: str) -> bytes:
    """Anchor instruction discriminator."""
    return hashlib.sha256(f"global:{name}".encode()).digest()[:8]


CREATE_STABLECOIN_DISCRIMINATOR = sighash("create_stablecoin")


def encode_create_stablecoin_args(spec: StablecoinSpec) -> bytes:
    """
    Encode create_stablecoin instruction data.

    Raises:
        BuildError: If an argument cannot be Borsh-encoded
    """
    try:
        args = CREATE_STABLECOIN_LAYOUT.build(
            {
                "name": spec.name,
                "symbol": spec.symbol,
                "decimals": spec.decimals,
                "icon_url": spec.icon_url,
                "target_currency": spec.target_currency,
            }
        )
    except Exception as e:
        raise BuildError(
            f"Cannot encode create_stablecoin arguments: {e}",
            details=spec.to_dict(),
        ) from e
    return CREATE_STABLECOIN_DISCRIMINATOR + args


class InstructionBuilder:
    """
    Build creation instructions against a fixed program configuration.

    Only ``build`` touches the network, to read the rent-exempt minimum.
    """

    def __init__(
        self,
        rpc: ILedgerRPC,
        program: ProgramConfig,
        reporter: Optional[SystemReporter] = None,
    ):
        self.rpc = rpc
        self.program = program
        self.reporter = reporter

    def build_create_account(
        self,
        payer: Pubkey,
        new_account: Pubkey,
        space: int,
        rent_exempt_lamports: int,
        owner: Pubkey,
    ) -> Instruction:
        """System program allocation funded with the rent-exempt minimum."""
        return create_account(
            CreateAccountParams(
                from_pubkey=payer,
                to_pubkey=new_account,
                lamports=rent_exempt_lamports,
                space=space,
                owner=owner,
            )
        )

    def build_initialize_mint(
        self,
        mint: Pubkey,
        decimals: int,
        mint_authority: Pubkey,
        freeze_authority: Optional[Pubkey],
    ) -> Instruction:
        """SPL token InitializeMint."""
        return initialize_mint(
            InitializeMintParams(
                decimals=decimals,
                program_id=self.program.token_program_id,
                mint=mint,
                mint_authority=mint_authority,
                freeze_authority=freeze_authority,
            )
        )

    def build_create_stablecoin(
        self, spec: StablecoinSpec, accounts: AccountSet
    ) -> Instruction:
        """
        Stablecoin program create_stablecoin instruction.

        Raises:
            BuildError: If bond_mint does not parse or args cannot be encoded
        """
        try:
            bond_mint = Pubkey.from_string(accounts.bond_mint)
        except (ValueError, TypeError) as e:
            raise BuildError(
                f"Invalid bond mint address: {accounts.bond_mint!r}",
                details={"bond_mint": accounts.bond_mint},
            ) from e

        data = encode_create_stablecoin_args(spec)

        keys = [
            AccountMeta(accounts.authority, is_signer=True, is_writable=True),
            AccountMeta(
                accounts.stablecoin_data.pubkey(), is_signer=True, is_writable=True
            ),
            AccountMeta(
                accounts.stablecoin_mint.pubkey(), is_signer=False, is_writable=True
            ),
            AccountMeta(bond_mint, is_signer=False, is_writable=False),
            AccountMeta(
                self.program.token_program_id, is_signer=False, is_writable=False
            ),
            AccountMeta(SYS_PROGRAM_ID, is_signer=False, is_writable=False),
            AccountMeta(RENT, is_signer=False, is_writable=False),
        ]
        return Instruction(self.program.program_id, data, keys)

    async def build(
        self, spec: StablecoinSpec, accounts: AccountSet
    ) -> StablecoinInstructions:
        """
        Fetch the rent-exempt minimum and build all three instructions.

        The same decimals value goes to InitializeMint and create_stablecoin.
        The wallet authority is both mint and freeze authority.
        """
        # Encode first so bad arguments fail before the rent lookup
        create_stablecoin = self.build_create_stablecoin(spec, accounts)

        rent = await self.rpc.get_minimum_balance_for_rent_exemption(
            MINT_ACCOUNT_SIZE
        )
        if self.reporter:
            self.reporter.debug(
                f"Mint rent-exempt minimum: {rent} lamports", context="Builder"
            )

        mint = accounts.stablecoin_mint.pubkey()
        return StablecoinInstructions(
            create_account=self.build_create_account(
                payer=accounts.authority,
                new_account=mint,
                space=MINT_ACCOUNT_SIZE,
                rent_exempt_lamports=rent,
                owner=self.program.token_program_id,
            ),
            initialize_mint=self.build_initialize_mint(
                mint=mint,
                decimals=spec.decimals,
                mint_authority=accounts.authority,
                freeze_authority=accounts.authority,
            ),
            create_stablecoin=create_stablecoin,
        )
