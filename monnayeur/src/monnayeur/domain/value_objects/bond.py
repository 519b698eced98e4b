"""
Bond value object - Entry of the bond catalog.
"""

from dataclasses import dataclass
from typing import Any, Iterable, List, Optional

from solders.pubkey import Pubkey

DEFAULT_BOND_NAME = "Unnamed Bond"
DEFAULT_BOND_SYMBOL = "USTRY"


@dataclass(frozen=True)
class Bond:
    """Bond that can back a stablecoin."""

    mint: str
    name: str = DEFAULT_BOND_NAME
    symbol: str = DEFAULT_BOND_SYMBOL

    def __str__(self) -> str:
        return f"{self.name} ({self.symbol}) {self.mint}"

    def to_dict(self) -> dict:
        return {"mint": self.mint, "name": self.name, "symbol": self.symbol}


def parse_bond(entry: Any) -> Optional[Bond]:
    """
    Parse one catalog entry.

    Accepts the catalog shape ``{"mint": {"address", "name", "symbol"}}``
    and a flat ``{"mint": "<address>", "name", "symbol"}``.

    Returns:
        Bond, or None if the entry has no valid mint address
    """
    if not isinstance(entry, dict):
        return None

    mint = entry.get("mint")
    details = mint if isinstance(mint, dict) else entry
    address = mint.get("address") if isinstance(mint, dict) else mint

    if not isinstance(address, str) or not address:
        return None

    try:
        Pubkey.from_string(address)
    except ValueError:
        return None

    name = details.get("name")
    symbol = details.get("symbol")
    return Bond(
        mint=address,
        name=name if isinstance(name, str) and name else DEFAULT_BOND_NAME,
        symbol=symbol if isinstance(symbol, str) and symbol else DEFAULT_BOND_SYMBOL,
    )


def parse_bonds(entries: Iterable[Any]) -> List[Bond]:
    """Parse catalog entries, discarding malformed ones."""
    bonds = []
    for entry in entries:
        bond = parse_bond(entry)
        if bond is not None:
            bonds.append(bond)
    return bonds
