"""
Submission manager - broadcast and confirmation polling.
"""

import asyncio
from typing import Optional

from monnayeur.domain.exceptions import (
    ConfirmationTimeoutError,
    ExpiredError,
    OnChainError,
    RPCException,
    SubmissionError,
)
from monnayeur.domain.services import ILedgerRPC
from monnayeur.domain.value_objects import (
    BlockhashWindow,
    ConfirmationResult,
    SignedTransaction,
)
from shared.reporter import SystemReporter

COMMITMENT_RANK = {"processed": 0, "confirmed": 1, "finalized": 2}


def preflight_instruction_error(rpc_error: dict) -> Optional[object]:
    """
    Program error reported by a failed preflight simulation, if any.

    Returns:
        The ``err`` value when it is an InstructionError, else None
    """
    data = rpc_error.get("data")
    if not isinstance(data, dict):
        return None
    err = data.get("err")
    if isinstance(err, dict) and "InstructionError" in err:
        return err
    return None


class SubmissionManager:
    """
    Broadcast signed transactions and wait for them to land.

    Broadcast is never retried here. Expiry is reported with ExpiredError
    and left to the caller.
    """

    def __init__(
        self,
        rpc: ILedgerRPC,
        commitment: str = "confirmed",
        poll_interval: float = 1.0,
        timeout: Optional[float] = None,
        reporter: Optional[SystemReporter] = None,
    ):
        self.rpc = rpc
        self.commitment = commitment
        self.poll_interval = poll_interval
        self.timeout = timeout
        self.reporter = reporter

    async def submit(self, signed: SignedTransaction) -> str:
        """
        Verify all signatures locally, then broadcast.

        Returns:
            Transaction signature (base58)

        Raises:
            SubmissionError: Missing or invalid signature (nothing sent), or
                the node rejected the transaction
            OnChainError: Preflight simulation failed inside the program
        """
        results = signed.transaction.verify_with_results()
        invalid = [
            str(pubkey)
            for pubkey, valid in zip(signed.envelope.required_signers, results)
            if not valid
        ]
        if invalid or len(results) != len(signed.envelope.required_signers):
            raise SubmissionError(
                f"Transaction not fully signed: missing or invalid signature "
                f"for {', '.join(invalid) or 'unknown signer'}",
                details={"invalid_signers": invalid},
            )

        local_signature = str(signed.signature)
        try:
            signature = await self.rpc.send_raw_transaction(signed.serialize())
        except RPCException as e:
            program_error = preflight_instruction_error(e.rpc_error)
            if program_error is not None:
                if self.reporter:
                    self.reporter.error(
                        f"Program rejected {local_signature} in preflight: "
                        f"{program_error}",
                        context="Submission",
                    )
                raise OnChainError(local_signature, program_error) from e

            raise SubmissionError(
                f"Transaction rejected: {e.message}",
                details={"signature": local_signature, **e.details},
            ) from e

        if self.reporter:
            self.reporter.info(f"Broadcast {signature}", context="Submission")

        return signature or local_signature

    def _reached_commitment(self, status: dict) -> bool:
        level = status.get("confirmationStatus") or "processed"
        target = COMMITMENT_RANK.get(self.commitment, 1)
        return COMMITMENT_RANK.get(level, 0) >= target

    async def confirm(
        self,
        signature: str,
        window: BlockhashWindow,
        poll_interval: Optional[float] = None,
        timeout: Optional[float] = None,
    ) -> ConfirmationResult:
        """
        Poll until the transaction lands or its blockhash expires.

        Each round reads the signature status, then the block height. Once
        the height is past the window the status is read once more, and
        only a missing status means expiry; a status still visible below
        the target commitment keeps the poll going. RPC errors while
        polling are logged and polling continues.

        Cancelling the awaiting task only stops polling: a broadcast
        transaction may still be included after cancellation.

        Args:
            signature: Transaction signature
            window: Blockhash window the transaction was built with
            poll_interval: Seconds between rounds (default: manager setting)
            timeout: Local wall-clock limit (default: manager setting)

        Returns:
            ConfirmationResult, with on_chain_error set if the program
            rejected the transaction

        Raises:
            ExpiredError: Block height passed last_valid_block_height and
                the signature is unknown to the node
            ConfirmationTimeoutError: Local wait gave up (the transaction
                may still land)
        """
        interval = self.poll_interval if poll_interval is None else poll_interval
        limit = self.timeout if timeout is None else timeout

        loop = asyncio.get_running_loop()
        started = loop.time()

        while True:
            try:
                status = await self.rpc.get_signature_status(signature)
                if status is not None and self._reached_commitment(status):
                    return self._result(signature, status)

                height = await self.rpc.get_block_height()
                if height > window.last_valid_block_height:
                    # The transaction may have landed since the status read.
                    status = await self.rpc.get_signature_status(signature)
                    if status is None:
                        if self.reporter:
                            self.reporter.warning(
                                f"{signature} expired at height {height} "
                                f"(last valid {window.last_valid_block_height})",
                                context="Confirmation",
                            )
                        raise ExpiredError(
                            signature, window.last_valid_block_height, height
                        )
                    if self._reached_commitment(status):
                        return self._result(signature, status)

            except RPCException as e:
                if self.reporter:
                    self.reporter.warning(
                        f"Polling {signature} failed, continuing: {e.message}",
                        context="Confirmation",
                    )

            if limit is not None and loop.time() - started >= limit:
                raise ConfirmationTimeoutError(signature, limit)

            await asyncio.sleep(interval)

    def _result(self, signature: str, status: dict) -> ConfirmationResult:
        result = ConfirmationResult(
            signature=signature,
            on_chain_error=status.get("err"),
            slot=status.get("slot"),
            confirmation_status=status.get("confirmationStatus"),
        )
        self._log_result(result)
        return result

    def _log_result(self, result: ConfirmationResult) -> None:
        if not self.reporter:
            return
        if result.succeeded:
            self.reporter.info(
                f"Confirmed {result.signature} ({result.confirmation_status})",
                context="Confirmation",
            )
        else:
            self.reporter.error(
                f"{result.signature} failed on-chain: {result.on_chain_error}",
                context="Confirmation",
            )
