"""
Bond catalog exceptions.
"""

from typing import Optional

from monnayeur.domain.exceptions.base import MonnayeurException


class BondCatalogError(MonnayeurException):
    """Raised when the bond catalog service call fails."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        """
        Initialize catalog error.

        Args:
            message: Error message
            status_code: HTTP status code from the catalog, if any
        """
        super().__init__(message, {"status_code": status_code})
        self.status_code = status_code
