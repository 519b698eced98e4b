"""
Create Stablecoin use case.

Runs one stablecoin creation end to end: derive accounts, build, assemble,
sign, submit and confirm. Restarts from fresh accounts and a fresh
blockhash when a transaction expires.
"""

from dataclasses import asdict, dataclass
from typing import Optional

from monnayeur.config.settings import ProgramConfig
from monnayeur.domain.exceptions import (
    ExpiredError,
    RPCException,
    ValidationError,
    WalletError,
)
from monnayeur.domain.services import ILedgerRPC, IWalletSigner
from monnayeur.domain.value_objects import StablecoinSpec
from monnayeur.infrastructure.blockchain import (
    AccountDeriver,
    BalancePrecondition,
    InstructionBuilder,
    SigningCoordinator,
    SubmissionManager,
    TransactionAssembler,
)
from shared.reporter import SystemReporter


@dataclass
class StablecoinCreationResult:
    """
    Result of a successful stablecoin creation.

    Attributes:
        signature: Confirmed transaction signature
        stablecoin_mint: Address of the new token mint
        stablecoin_data: Address of the stablecoin metadata account
        bond_mint: Backing bond mint
        attempts: Number of attempts used (expiry restarts included)
        bond_balance: Caller's bond holding before creation, None if the
            lookup failed
    """

    signature: str
    stablecoin_mint: str
    stablecoin_data: str
    bond_mint: str
    attempts: int
    bond_balance: Optional[int] = None

    def to_dict(self) -> dict:
        return asdict(self)


class CreateStablecoin:
    """
    Create a bond-backed stablecoin in one atomic transaction.

    Business rules:
    - decimals must equal the configured stablecoin decimals
    - bond balance is advisory; zero balance does not stop creation
    - only ExpiredError is retried, each retry with new keypairs
    - WalletError and OnChainError are terminal
    """

    def __init__(
        self,
        rpc: ILedgerRPC,
        wallet_signer: Optional[IWalletSigner],
        program: ProgramConfig,
        submission_manager: Optional[SubmissionManager] = None,
        max_attempts: int = 3,
        reporter: Optional[SystemReporter] = None,
        account_deriver: Optional[AccountDeriver] = None,
    ):
        """
        Initialize use case with dependencies.

        Args:
            rpc: Ledger RPC client shared by all components
            wallet_signer: External signer for the authority
            program: Program configuration
            submission_manager: Optional pre-configured submission manager
            max_attempts: Attempts allowed when transactions expire
            reporter: Optional reporter
            account_deriver: Optional account deriver
        """
        self.rpc = rpc
        self.wallet_signer = wallet_signer
        self.program = program
        self.max_attempts = max(1, max_attempts)
        self.reporter = reporter

        self.account_deriver = account_deriver or AccountDeriver()
        self.instruction_builder = InstructionBuilder(rpc, program, reporter)
        self.assembler = TransactionAssembler()
        self.signing_coordinator = SigningCoordinator(reporter)
        self.submission_manager = submission_manager or SubmissionManager(
            rpc, reporter=reporter
        )
        self.balance_precondition = BalancePrecondition(rpc, reporter)

    def _log(self, level: str, msg: str) -> None:
        if self.reporter:
            getattr(self.reporter, level)(msg, context="CreateStablecoin")

    async def execute(self, spec: StablecoinSpec) -> StablecoinCreationResult:
        """
        Execute stablecoin creation.

        Cancelling the task running this call stops the local wait only; a
        transaction already broadcast may still be included afterwards.

        Args:
            spec: Validated stablecoin parameters

        Returns:
            StablecoinCreationResult of the confirmed transaction

        Raises:
            ValidationError: decimals differ from configuration
            WalletError: Wallet unavailable or refused to sign
            SubmissionError: Transaction rejected before reaching the ledger
            OnChainError: Program rejected the transaction
            ExpiredError: Every attempt expired
            ConfirmationTimeoutError: Local wait gave up
        """
        if spec.decimals != self.program.decimals:
            raise ValidationError(
                "decimals",
                f"{spec.decimals} does not match configured "
                f"stablecoin decimals {self.program.decimals}",
            )

        if self.wallet_signer is None:
            raise WalletError("No wallet signer available")

        try:
            authority = self.wallet_signer.pubkey
        except Exception as e:
            raise WalletError(f"Wallet unavailable: {e}") from e

        bond_balance = await self._bond_balance(authority, spec)

        last_error: Optional[ExpiredError] = None
        for attempt in range(1, self.max_attempts + 1):
            accounts = self.account_deriver.generate(authority, spec.bond_mint)
            mint = str(accounts.stablecoin_mint.pubkey())
            self._log(
                "info",
                f"Attempt {attempt}/{self.max_attempts}: "
                f"creating {spec.symbol} with mint {mint}",
            )

            window = await self.rpc.get_latest_blockhash()
            instructions = await self.instruction_builder.build(spec, accounts)
            envelope = self.assembler.assemble(instructions, authority, window)
            signed = await self.signing_coordinator.sign(
                envelope, accounts.local_signers, self.wallet_signer
            )
            signature = await self.submission_manager.submit(signed)

            try:
                result = await self.submission_manager.confirm(signature, window)
            except ExpiredError as e:
                self._log("warning", f"Attempt {attempt} expired, discarding {mint}")
                last_error = e
                continue

            result.raise_for_error()
            self._log("info", f"Created {spec.symbol}: mint {mint}, tx {signature}")

            return StablecoinCreationResult(
                signature=signature,
                stablecoin_mint=mint,
                stablecoin_data=str(accounts.stablecoin_data.pubkey()),
                bond_mint=spec.bond_mint,
                attempts=attempt,
                bond_balance=bond_balance,
            )

        raise last_error

    async def _bond_balance(self, authority, spec: StablecoinSpec) -> Optional[int]:
        """Advisory bond balance lookup; failures are logged, not raised."""
        try:
            balance = await self.balance_precondition.check_balance(
                authority, spec.bond_mint_pubkey
            )
        except RPCException as e:
            self._log("warning", f"Bond balance lookup failed: {e.message}")
            return None

        if balance == 0:
            self._log(
                "warning",
                f"{authority} holds no {spec.bond_mint}; "
                f"the program may reject the creation",
            )
        return balance
