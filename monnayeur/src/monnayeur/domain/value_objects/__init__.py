"""
Domain value objects.
"""

from monnayeur.domain.value_objects.account_set import AccountSet
from monnayeur.domain.value_objects.bond import Bond, parse_bond, parse_bonds
from monnayeur.domain.value_objects.stablecoin_spec import StablecoinSpec
from monnayeur.domain.value_objects.transaction import (
    BlockhashWindow,
    ConfirmationResult,
    SignedTransaction,
    StablecoinInstructions,
    TransactionEnvelope,
)

__all__ = [
    "AccountSet",
    "Bond",
    "parse_bond",
    "parse_bonds",
    "StablecoinSpec",
    "BlockhashWindow",
    "ConfirmationResult",
    "SignedTransaction",
    "StablecoinInstructions",
    "TransactionEnvelope",
]
