"""
Health check types shared by components.
"""

from shared.health.checks import HealthCheck, HealthStatus

__all__ = [
    "HealthStatus",
    "HealthCheck",
]
