"""
RPC connection status checks.

Checks:
- Endpoint reachability (getLatestBlockhash round trip)
- Node health (getHealth)
"""

import asyncio
import time
from typing import AsyncIterator, Optional

from monnayeur.domain.exceptions import RPCException
from monnayeur.domain.services import ILedgerRPC
from shared.health import HealthCheck, HealthStatus
from shared.reporter import SystemReporter

CHECK_NAME = "solana_rpc"


class ConnectionMonitor:
    """
    Report whether the configured RPC endpoint is usable.

    HEALTHY when a blockhash can be fetched and the node reports "ok",
    DEGRADED when the blockhash works but the node reports otherwise,
    UNHEALTHY when the blockhash cannot be fetched.
    """

    def __init__(
        self,
        rpc: ILedgerRPC,
        endpoint: Optional[str] = None,
        reporter: Optional[SystemReporter] = None,
    ):
        self.rpc = rpc
        self.endpoint = endpoint
        self.reporter = reporter

    async def check(self) -> HealthCheck:
        """Run one connection check."""
        started = time.perf_counter()
        metadata = {"endpoint": self.endpoint} if self.endpoint else {}

        try:
            window = await self.rpc.get_latest_blockhash()
        except RPCException as e:
            return HealthCheck.finished(
                CHECK_NAME,
                HealthStatus.UNHEALTHY,
                f"RPC Error: {e.message}",
                started,
                metadata,
            )

        metadata.update(
            latency_ms=round((time.perf_counter() - started) * 1000, 1),
            last_valid_block_height=window.last_valid_block_height,
        )

        try:
            node_health = await self.rpc.get_health()
        except RPCException as e:
            node_health = e.message

        if node_health == "ok":
            status, message = HealthStatus.HEALTHY, "Connected"
        else:
            status, message = HealthStatus.DEGRADED, f"Connected ({node_health})"

        return HealthCheck.finished(CHECK_NAME, status, message, started, metadata)

    async def watch(self, interval: float = 10.0) -> AsyncIterator[HealthCheck]:
        """
        Check repeatedly, yielding every result.

        Status changes are logged when a reporter is set: a worse status
        as a warning, a recovery as info.
        """
        previous: Optional[HealthCheck] = None
        while True:
            result = await self.check()
            changed = previous is None or result.status != previous.status
            if self.reporter and changed:
                if result.worse_than(previous):
                    self.reporter.warning(result.message, context="Connection")
                else:
                    self.reporter.info(result.message, context="Connection")
            previous = result
            yield result
            await asyncio.sleep(interval)
