"""
Circuit breaker exceptions.
"""


class CircuitBreakerError(Exception):
    """Base exception for circuit breaker errors."""

    def __init__(self, message: str, breaker_name: str):
        self.message = message
        self.breaker_name = breaker_name
        super().__init__(self.message)


class CircuitBreakerOpenError(CircuitBreakerError):
    """
    Raised when the circuit breaker is open.

    The protected endpoint is considered unavailable and calls are
    rejected locally without touching the network.
    """

    def __init__(self, breaker_name: str, failure_count: int):
        self.failure_count = failure_count
        message = (
            f"Circuit breaker '{breaker_name}' is OPEN "
            f"({failure_count} failures). Calls are blocked."
        )
        super().__init__(message, breaker_name)
