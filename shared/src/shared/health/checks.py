"""
Health check result types.

Used by the RPC connection monitor to report endpoint reachability.
"""

import time
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional


class HealthStatus(str, Enum):
    """Health status levels, ordered from best to worst."""

    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"

    @property
    def severity(self) -> int:
        return list(HealthStatus).index(self)


@dataclass
class HealthCheck:
    """
    Outcome of one probe against a dependency.

    Attributes:
        name: Probe name (e.g. "solana_rpc")
        status: Resulting status
        message: Human readable summary
        duration: Seconds the probe took
        timestamp: When the probe finished
        metadata: Probe specific values (latency, block height, endpoint)
    """

    name: str
    status: HealthStatus
    message: Optional[str] = None
    duration: Optional[float] = None
    timestamp: Optional[datetime] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def finished(
        cls,
        name: str,
        status: HealthStatus,
        message: str,
        started: float,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> "HealthCheck":
        """
        Build a result for a probe started at ``started``.

        Args:
            started: ``time.perf_counter()`` value taken before the probe
        """
        return cls(
            name=name,
            status=status,
            message=message,
            duration=time.perf_counter() - started,
            timestamp=datetime.now(),
            metadata=dict(metadata or {}),
        )

    @property
    def is_healthy(self) -> bool:
        return self.status == HealthStatus.HEALTHY

    def worse_than(self, other: Optional["HealthCheck"]) -> bool:
        """True if this result is more severe than ``other`` (None is healthy)."""
        baseline = other.status if other else HealthStatus.HEALTHY
        return self.status.severity > baseline.severity

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly form; unset fields are omitted."""
        data: Dict[str, Any] = {"name": self.name, "status": self.status.value}
        if self.message:
            data["message"] = self.message
        if self.duration is not None:
            data["duration_ms"] = round(self.duration * 1000, 1)
        if self.timestamp:
            data["timestamp"] = self.timestamp.isoformat()
        if self.metadata:
            data["metadata"] = dict(self.metadata)
        return data
