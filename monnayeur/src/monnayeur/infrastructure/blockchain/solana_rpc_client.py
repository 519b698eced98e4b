"""
Solana RPC client with resilience patterns.

Features:
- One shared aiohttp session per client
- Circuit breaker around every call
- Retry with exponential backoff for idempotent queries only
- Per-request timeout
"""

import asyncio
import base64
from typing import Any, List, Optional

import aiohttp
from solders.hash import Hash
from solders.pubkey import Pubkey

from monnayeur.config.settings import MonnayeurConfig, get_settings
from monnayeur.domain.exceptions import RPCConnectionError, RPCException
from monnayeur.domain.services import ILedgerRPC
from monnayeur.domain.value_objects import BlockhashWindow
from shared.reporter import SystemReporter
from shared.resilience import (
    CircuitBreaker,
    CircuitBreakerConfig,
    CircuitBreakerOpenError,
    Retry,
    RetryError,
)

TRANSIENT_ERRORS = (RPCException,)


class SolanaRPCClient(ILedgerRPC):
    """
    Solana JSON-RPC client with circuit breaker and retry logic.

    Only transport failures count against the circuit breaker.
    sendTransaction is never retried.
    """

    def __init__(
        self,
        rpc_url: Optional[str] = None,
        settings: Optional[MonnayeurConfig] = None,
        reporter: Optional[SystemReporter] = None,
    ):
        """
        Initialize Solana RPC client.

        Args:
            rpc_url: Optional RPC URL. If None, uses settings.
            settings: Optional config. If None, uses global settings.
            reporter: Optional reporter for debug logging
        """
        self._settings = settings or get_settings()
        self.rpc_url = rpc_url or self._settings.rpc_url
        self.commitment = self._settings.commitment
        self.skip_preflight = self._settings.skip_preflight
        self.reporter = reporter

        cb_config = self._settings.get_circuit_breaker_config()
        self.circuit_breaker = CircuitBreaker(
            name="solana_rpc",
            config=CircuitBreakerConfig(
                failure_threshold=cb_config.failure_threshold,
                success_threshold=cb_config.success_threshold,
                timeout=cb_config.timeout,
                expected_exceptions=(RPCConnectionError,),
            ),
        )

        retry_config = self._settings.get_retry_config()
        retry_config.retry_on = TRANSIENT_ERRORS
        self.retry = Retry(name="rpc_query", config=retry_config)

        self.rpc_timeout = self._settings.resilience.timeouts.rpc_call

        self._session: Optional[aiohttp.ClientSession] = None
        self._lock = asyncio.Lock()
        self._request_id = 0

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create the shared HTTP session."""
        async with self._lock:
            if self._session is None or self._session.closed:
                self._session = aiohttp.ClientSession(
                    timeout=aiohttp.ClientTimeout(total=self.rpc_timeout)
                )
            return self._session

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None

    async def __aenter__(self) -> "SolanaRPCClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def call_rpc(
        self,
        method: str,
        params: Optional[list] = None,
        idempotent: bool = True,
    ) -> Any:
        """
        Call Solana RPC method with resilience.

        Args:
            method: RPC method name
            params: Optional method parameters
            idempotent: Whether the call may be retried

        Returns:
            The ``result`` member of the response

        Raises:
            RPCException: On RPC error, transport failure or open circuit
        """
        call = self._call_rpc_with_retry if idempotent else self._call_rpc_inner
        try:
            return await self.circuit_breaker.call_async(call, method, params)
        except CircuitBreakerOpenError as e:
            raise RPCException(
                str(e),
                details={"method": method, "circuit_breaker": e.breaker_name},
            ) from e

    async def _call_rpc_with_retry(
        self,
        method: str,
        params: Optional[list] = None,
    ) -> Any:
        """Call RPC with retry logic."""
        try:
            return await self.retry.execute_async(
                self._call_rpc_inner,
                method,
                params,
            )
        except RetryError as e:
            raise e.last_exception from e

    async def _call_rpc_inner(
        self,
        method: str,
        params: Optional[list] = None,
    ) -> Any:
        """Inner RPC call implementation."""
        if not self.rpc_url:
            raise RPCException("Solana RPC URL not configured")

        self._request_id += 1
        payload = {
            "jsonrpc": "2.0",
            "id": self._request_id,
            "method": method,
            "params": params or [],
        }

        if self.reporter:
            self.reporter.debug(f"-> {method}", context="RPC")

        session = await self._get_session()
        try:
            async with session.post(self.rpc_url, json=payload) as response:
                response.raise_for_status()
                data = await response.json()
        except aiohttp.ClientError as e:
            raise RPCConnectionError(
                f"RPC connection error: {str(e)}",
                details={"method": method},
            ) from e
        except asyncio.TimeoutError as e:
            raise RPCConnectionError(
                f"RPC timeout: {method}",
                details={"method": method, "timeout": self.rpc_timeout},
            ) from e

        if "error" in data:
            error = data["error"]
            message = error.get("message", error) if isinstance(error, dict) else error
            raise RPCException(
                f"RPC error: {message}",
                details={"method": method, "error": error},
                rpc_error=error if isinstance(error, dict) else {"message": error},
            )

        return data.get("result")

    async def get_latest_blockhash(self) -> BlockhashWindow:
        """
        Fetch a recent blockhash and its last valid block height.

        Returns:
            BlockhashWindow from a single response
        """
        result = await self.call_rpc(
            "getLatestBlockhash", [{"commitment": self.commitment}]
        )
        value = result["value"]
        return BlockhashWindow(
            blockhash=Hash.from_string(value["blockhash"]),
            last_valid_block_height=int(value["lastValidBlockHeight"]),
        )

    async def get_minimum_balance_for_rent_exemption(self, size: int) -> int:
        """
        Minimum lamports for a rent-exempt account.

        Args:
            size: Account data size in bytes
        """
        result = await self.call_rpc(
            "getMinimumBalanceForRentExemption",
            [size, {"commitment": self.commitment}],
        )
        return int(result)

    async def send_raw_transaction(self, raw: bytes) -> str:
        """
        Broadcast a signed transaction (not retried).

        Args:
            raw: Serialized signed transaction

        Returns:
            Transaction signature (base58)
        """
        encoded = base64.b64encode(raw).decode("ascii")
        return await self.call_rpc(
            "sendTransaction",
            [
                encoded,
                {
                    "encoding": "base64",
                    "skipPreflight": self.skip_preflight,
                    "preflightCommitment": self.commitment,
                },
            ],
            idempotent=False,
        )

    async def get_signature_status(self, signature: str) -> Optional[dict]:
        """
        Status of a transaction signature.

        Returns:
            Status dict or None if the signature is unknown to the node
        """
        result = await self.call_rpc(
            "getSignatureStatuses",
            [[signature], {"searchTransactionHistory": False}],
        )
        statuses = result.get("value") or []
        return statuses[0] if statuses else None

    async def get_block_height(self) -> int:
        """Current block height at the configured commitment."""
        result = await self.call_rpc(
            "getBlockHeight", [{"commitment": self.commitment}]
        )
        return int(result)

    async def get_token_accounts_by_owner(
        self, owner: Pubkey, mint: Pubkey
    ) -> List[dict]:
        """
        Parsed SPL token accounts of an owner for one mint.

        Returns:
            List of ``{"pubkey", "account"}`` entries (jsonParsed encoding)
        """
        result = await self.call_rpc(
            "getTokenAccountsByOwner",
            [
                str(owner),
                {"mint": str(mint)},
                {"encoding": "jsonParsed", "commitment": self.commitment},
            ],
        )
        return result.get("value") or []

    async def get_health(self) -> str:
        """Node health ("ok" when healthy)."""
        return await self.call_rpc("getHealth")
