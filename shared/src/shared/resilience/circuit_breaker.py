"""
Circuit Breaker Pattern Implementation.

Stops calling a failing RPC endpoint so a burst of creation attempts does
not pile up against an unavailable node.

State Machine:
    CLOSED -> OPEN -> HALF_OPEN -> CLOSED
           |                    |
           +--------------------+
"""

import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Optional

from shared.resilience.exceptions import CircuitBreakerOpenError


class CircuitBreakerState(str, Enum):
    """Circuit breaker states."""

    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


@dataclass
class CircuitBreakerConfig:
    """
    Circuit breaker configuration.

    Attributes:
        failure_threshold: Number of failures before opening circuit
        success_threshold: Number of successes to close from half-open
        timeout: Seconds to wait before trying half-open
        half_open_max_calls: Max calls allowed while half-open
        expected_exceptions: Exception types counted as failures
    """

    failure_threshold: int = 5
    success_threshold: int = 2
    timeout: float = 30.0
    half_open_max_calls: int = 3
    expected_exceptions: tuple = (Exception,)


class CircuitBreaker:
    """
    Circuit breaker for async calls.

    Only exceptions listed in ``expected_exceptions`` count as failures;
    anything else propagates without touching the breaker state.

    Example:
        breaker = CircuitBreaker("solana_rpc")
        result = await breaker.call_async(client.post, payload)
    """

    def __init__(self, name: str, config: Optional[CircuitBreakerConfig] = None):
        """
        Initialize circuit breaker.

        Args:
            name: Unique name for this circuit breaker
            config: Configuration (uses defaults if not provided)
        """
        self.name = name
        self.config = config or CircuitBreakerConfig()

        self._state = CircuitBreakerState.CLOSED
        self._failure_count = 0
        self._success_count = 0
        self._last_failure_time: Optional[float] = None
        self._half_open_calls = 0

        self._total_calls = 0
        self._total_failures = 0

    @property
    def state(self) -> CircuitBreakerState:
        """Get current state."""
        return self._state

    @property
    def failure_count(self) -> int:
        """Get current failure count."""
        return self._failure_count

    async def call_async(
        self, func: Callable[..., Awaitable[Any]], *args, **kwargs
    ) -> Any:
        """
        Execute async function with circuit breaker protection.

        Raises:
            CircuitBreakerOpenError: If circuit is open
            Exception: Any exception from the function
        """
        self._total_calls += 1

        if not self._can_attempt():
            raise CircuitBreakerOpenError(self.name, self._failure_count)

        if self._state == CircuitBreakerState.HALF_OPEN:
            self._half_open_calls += 1

        try:
            result = await func(*args, **kwargs)
        except self.config.expected_exceptions:
            self._on_failure()
            raise

        self._on_success()
        return result

    def _can_attempt(self) -> bool:
        """Check if a call may go through in the current state."""
        if self._state == CircuitBreakerState.CLOSED:
            return True

        if self._state == CircuitBreakerState.OPEN:
            if self._should_attempt_reset():
                self._transition_to(CircuitBreakerState.HALF_OPEN)
                return True
            return False

        return self._half_open_calls < self.config.half_open_max_calls

    def _should_attempt_reset(self) -> bool:
        """Check if enough time has passed to try half-open."""
        if self._last_failure_time is None:
            return False
        return time.monotonic() - self._last_failure_time >= self.config.timeout

    def _on_success(self) -> None:
        """Handle successful call."""
        if self._state == CircuitBreakerState.CLOSED:
            self._failure_count = 0
        elif self._state == CircuitBreakerState.HALF_OPEN:
            self._success_count += 1
            if self._success_count >= self.config.success_threshold:
                self._transition_to(CircuitBreakerState.CLOSED)

    def _on_failure(self) -> None:
        """Handle failed call."""
        self._total_failures += 1
        self._failure_count += 1
        self._last_failure_time = time.monotonic()

        if self._state == CircuitBreakerState.HALF_OPEN:
            self._transition_to(CircuitBreakerState.OPEN)
        elif self._failure_count >= self.config.failure_threshold:
            self._transition_to(CircuitBreakerState.OPEN)

    def _transition_to(self, state: CircuitBreakerState) -> None:
        """Move to a new state and reset the per-state counters."""
        self._state = state
        self._success_count = 0
        self._half_open_calls = 0
        if state != CircuitBreakerState.OPEN:
            self._failure_count = 0
        if state == CircuitBreakerState.CLOSED:
            self._last_failure_time = None

    def reset(self) -> None:
        """Manually reset circuit breaker to CLOSED state."""
        self._transition_to(CircuitBreakerState.CLOSED)

    def get_stats(self) -> dict:
        """
        Get circuit breaker statistics.

        Returns:
            Dictionary with statistics
        """
        return {
            "name": self.name,
            "state": self._state.value,
            "failure_count": self._failure_count,
            "total_calls": self._total_calls,
            "total_failures": self._total_failures,
        }
