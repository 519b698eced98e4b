"""
Bond catalog client.

Lists the bonds that can back a stablecoin, from the catalog HTTP service.
"""

import asyncio
from typing import List, Optional

import httpx

from monnayeur.domain.exceptions import BondCatalogError
from monnayeur.domain.value_objects import Bond, parse_bonds
from shared.reporter import SystemReporter


class BondCatalogClient:
    """
    Read-only client for ``GET {base_url}/bonds``.

    The HTTP client is created lazily on first use and released by close().
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        reporter: Optional[SystemReporter] = None,
    ):
        """
        Initialize catalog client.

        Args:
            base_url: Catalog service base URL
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests)
            reporter: Optional reporter
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.reporter = reporter
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._lock = asyncio.Lock()

    async def _ensure_client(self) -> httpx.AsyncClient:
        """Ensure HTTP client is initialized."""
        if self._client is None:
            async with self._lock:
                if self._client is None:
                    self._client = httpx.AsyncClient(
                        timeout=self.timeout,
                        transport=self._transport,
                    )
        return self._client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "BondCatalogClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def list_bonds(self) -> List[Bond]:
        """
        Fetch and parse the bond catalog.

        Malformed entries are dropped.

        Raises:
            BondCatalogError: If the request fails or the body is not a list
        """
        try:
            client = await self._ensure_client()
            response = await client.get(f"{self.base_url}/bonds")
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise BondCatalogError(
                f"Bond catalog returned {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.RequestError as e:
            raise BondCatalogError(f"Network error querying bond catalog: {e}") from e
        except ValueError as e:
            raise BondCatalogError(f"Invalid bond catalog response: {e}") from e

        entries = data.get("bonds") if isinstance(data, dict) else data
        if not isinstance(entries, list):
            raise BondCatalogError("Invalid bond catalog response: expected a list")

        bonds = parse_bonds(entries)
        if self.reporter and len(bonds) != len(entries):
            self.reporter.warning(
                f"Discarded {len(entries) - len(bonds)} malformed bond entries",
                context="BondCatalog",
            )
        return bonds
