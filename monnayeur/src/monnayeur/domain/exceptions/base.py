"""
Base domain exceptions.
"""

from typing import Optional


class MonnayeurException(Exception):
    """Base exception for all Monnayeur errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(MonnayeurException):
    """Raised when a creation request fails validation."""

    def __init__(self, field: str, reason: str):
        """
        Initialize validation error.

        Args:
            field: Field that failed validation
            reason: Reason for validation failure
        """
        super().__init__(
            f"Validation failed for '{field}': {reason}",
            {"field": field, "reason": reason},
        )
        self.field = field
        self.reason = reason


class BuildError(MonnayeurException):
    """Raised when instructions cannot be built from a valid request."""
