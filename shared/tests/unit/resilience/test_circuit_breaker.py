"""
Unit tests for CircuitBreaker.

Tests circuit breaker state machine with async calls.

Usage:
    pytest shared/tests/unit/resilience/test_circuit_breaker.py
"""

import asyncio

from shared.resilience import (
    CircuitBreaker,
    CircuitBreakerConfig,
    CircuitBreakerOpenError,
    CircuitBreakerState,
)
from shared.tests import LaborantTest


class TransportError(Exception):
    pass


async def succeed():
    return "success"


async def fail():
    raise TransportError("connection refused")


class TestCircuitBreaker(LaborantTest):
    """Test CircuitBreaker core functionality."""

    component_name = "shared"
    test_category = "unit"

    def _create_breaker(self, name="test_service", timeout=1.0):
        """Create a fresh circuit breaker for each test."""
        config = CircuitBreakerConfig(
            failure_threshold=3,
            success_threshold=2,
            timeout=timeout,
            half_open_max_calls=2,
            expected_exceptions=(TransportError,),
        )
        return CircuitBreaker(name, config)

    async def _trip(self, breaker):
        for _ in range(breaker.config.failure_threshold):
            try:
                await breaker.call_async(fail)
            except TransportError:
                pass

    def test_initialization(self):
        """Test circuit breaker initializes in CLOSED state."""
        breaker = self._create_breaker()

        assert breaker.name == "test_service"
        assert breaker.state == CircuitBreakerState.CLOSED
        assert breaker.failure_count == 0

    async def test_successful_call(self):
        """Test successful call in CLOSED state."""
        breaker = self._create_breaker()

        result = await breaker.call_async(succeed)

        assert result == "success"
        assert breaker.state == CircuitBreakerState.CLOSED

    async def test_opens_after_threshold(self):
        """Test circuit opens after failure threshold."""
        self.reporter.info("Testing circuit opening", context="Test")
        breaker = self._create_breaker()

        await self._trip(breaker)

        assert breaker.state == CircuitBreakerState.OPEN
        assert breaker.failure_count == 3

    async def test_success_resets_failure_count(self):
        """Test a success in CLOSED state clears earlier failures."""
        breaker = self._create_breaker()

        try:
            await breaker.call_async(fail)
        except TransportError:
            pass
        await breaker.call_async(succeed)

        assert breaker.failure_count == 0

    async def test_open_rejects_calls(self):
        """Test OPEN circuit rejects calls without executing them."""
        breaker = self._create_breaker()
        await self._trip(breaker)
        calls = []

        async def tracked():
            calls.append(1)

        try:
            await breaker.call_async(tracked)
            assert False, "Should have raised CircuitBreakerOpenError"
        except CircuitBreakerOpenError as e:
            assert e.breaker_name == "test_service"
            assert e.failure_count == 3

        assert calls == []

    async def test_unexpected_exceptions_not_counted(self):
        """Test exceptions outside expected_exceptions leave state alone."""
        breaker = self._create_breaker()

        async def bad_request():
            raise ValueError("invalid params")

        for _ in range(5):
            try:
                await breaker.call_async(bad_request)
                assert False, "Should have raised ValueError"
            except ValueError:
                pass

        assert breaker.state == CircuitBreakerState.CLOSED
        assert breaker.failure_count == 0

    async def test_half_open_recovers(self):
        """Test HALF_OPEN closes after enough successes."""
        self.reporter.info("Testing recovery through HALF_OPEN", context="Test")
        breaker = self._create_breaker(timeout=0.05)
        await self._trip(breaker)

        await asyncio.sleep(0.06)
        await breaker.call_async(succeed)
        assert breaker.state == CircuitBreakerState.HALF_OPEN

        await breaker.call_async(succeed)
        assert breaker.state == CircuitBreakerState.CLOSED

    async def test_half_open_failure_reopens(self):
        """Test a failure in HALF_OPEN reopens the circuit."""
        breaker = self._create_breaker(timeout=0.05)
        await self._trip(breaker)

        await asyncio.sleep(0.06)
        try:
            await breaker.call_async(fail)
        except TransportError:
            pass

        assert breaker.state == CircuitBreakerState.OPEN

    async def test_reset_and_stats(self):
        """Test manual reset and statistics."""
        breaker = self._create_breaker()
        await self._trip(breaker)

        stats = breaker.get_stats()
        assert stats["state"] == "open"
        assert stats["total_failures"] == 3

        breaker.reset()
        assert breaker.state == CircuitBreakerState.CLOSED
        assert await breaker.call_async(succeed) == "success"


if __name__ == "__main__":
    TestCircuitBreaker.run_as_main()
