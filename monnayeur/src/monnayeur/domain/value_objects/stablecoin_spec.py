"""
StablecoinSpec value object - Immutable stablecoin creation request.
"""

from dataclasses import dataclass

from solders.pubkey import Pubkey

from monnayeur.domain.exceptions import ValidationError

U8_MAX = 255


@dataclass(frozen=True)
class StablecoinSpec:
    """
    Parameters of a stablecoin to create.

    Business rules:
    - bond_mint must be a valid base58 Solana address
    - decimals must fit an unsigned 8-bit integer
    - Validated once on creation, before any network call
    """

    name: str
    symbol: str
    decimals: int
    icon_url: str
    target_currency: str
    bond_mint: str

    def __post_init__(self):
        """Validate spec on creation."""
        if isinstance(self.decimals, bool) or not isinstance(self.decimals, int):
            raise ValidationError(
                "decimals", f"must be an integer, got {self.decimals!r}"
            )

        if not 0 <= self.decimals <= U8_MAX:
            raise ValidationError(
                "decimals", f"{self.decimals} is outside 0..{U8_MAX}"
            )

        try:
            Pubkey.from_string(self.bond_mint)
        except (ValueError, TypeError) as e:
            raise ValidationError(
                "bond_mint", f"{self.bond_mint!r} is not a valid Solana address"
            ) from e

    @property
    def bond_mint_pubkey(self) -> Pubkey:
        return Pubkey.from_string(self.bond_mint)

    def to_dict(self) -> dict:
        """Convert to dictionary representation."""
        return {
            "name": self.name,
            "symbol": self.symbol,
            "decimals": self.decimals,
            "icon_url": self.icon_url,
            "target_currency": self.target_currency,
            "bond_mint": self.bond_mint,
        }
