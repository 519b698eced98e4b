"""
Resilience patterns for network clients.

- Circuit Breaker: Prevents cascading failures
- Retry: Automatic retry with exponential backoff (idempotent calls only)
"""

from shared.resilience.circuit_breaker import (
    CircuitBreaker,
    CircuitBreakerConfig,
    CircuitBreakerState,
)
from shared.resilience.exceptions import (
    CircuitBreakerError,
    CircuitBreakerOpenError,
)
from shared.resilience.retry import (
    BackoffStrategy,
    Retry,
    RetryConfig,
    RetryError,
)

__all__ = [
    # Circuit Breaker
    "CircuitBreaker",
    "CircuitBreakerConfig",
    "CircuitBreakerState",
    "CircuitBreakerError",
    "CircuitBreakerOpenError",
    # Retry
    "Retry",
    "RetryConfig",
    "RetryError",
    "BackoffStrategy",
]
