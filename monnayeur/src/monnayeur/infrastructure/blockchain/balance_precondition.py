"""
Bond balance precondition (advisory).
"""

from typing import Optional

from solders.pubkey import Pubkey

from monnayeur.domain.services import ILedgerRPC
from shared.reporter import SystemReporter


class BalancePrecondition:
    """Report how much of a bond an owner holds."""

    def __init__(self, rpc: ILedgerRPC, reporter: Optional[SystemReporter] = None):
        self.rpc = rpc
        self.reporter = reporter

    async def check_balance(self, owner: Pubkey, mint: Pubkey) -> int:
        """
        Raw token amount summed over all of the owner's accounts for mint.

        Returns:
            Amount in base units, 0 if the owner has no token account
        """
        accounts = await self.rpc.get_token_accounts_by_owner(owner, mint)

        total = 0
        for entry in accounts:
            try:
                amount = entry["account"]["data"]["parsed"]["info"]["tokenAmount"][
                    "amount"
                ]
                total += int(amount)
            except (KeyError, TypeError, ValueError):
                if self.reporter:
                    self.reporter.warning(
                        f"Skipping unparsed token account {entry.get('pubkey')}",
                        context="Balance",
                    )

        return total
