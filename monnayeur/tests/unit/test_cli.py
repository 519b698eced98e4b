"""
Unit tests for the monnayeur CLI.

Usage:
    pytest monnayeur/tests/unit/test_cli.py
"""

from datetime import datetime
from unittest.mock import AsyncMock, patch

from click.testing import CliRunner
from shared.health import HealthCheck, HealthStatus
from shared.tests import LaborantTest
from solders.keypair import Keypair

from helpers.factories import BOND_MINT
from monnayeur.cli import cli
from monnayeur.domain.exceptions import BondCatalogError
from monnayeur.domain.value_objects import Bond
from monnayeur.infrastructure.catalog import BondCatalogClient
from monnayeur.infrastructure.monitoring import ConnectionMonitor


class TestCli(LaborantTest):
    """Unit tests for command parsing and output."""

    component_name = "monnayeur"
    test_category = "unit"

    def setup_test(self):
        self.runner = CliRunner()

    def invoke(self, *args):
        return self.runner.invoke(cli, ["--config", "test.yaml", *args])

    def test_balance_rejects_invalid_owner(self):
        """Test an invalid address is a usage error."""
        self.reporter.info("Testing address validation", context="Test")

        result = self.invoke("balance", "--owner", "nope", "--mint", BOND_MINT)

        assert result.exit_code == 2
        assert "not a valid Solana address" in result.output

    def test_create_rejects_unknown_currency(self):
        """Test target currency is restricted to USD, EUR and MXN."""
        result = self.invoke(
            "create",
            "--name", "Pound",
            "--symbol", "GBPS",
            "--currency", "GBP",
            "--bond-mint", BOND_MINT,
            "--keypair", "id.json",
        )

        assert result.exit_code == 2

    def test_create_missing_keypair_file(self):
        """Test an unreadable keypair exits 1 with the wallet error."""
        with self.runner.isolated_filesystem():
            result = self.invoke(
                "create",
                "--name", "Peso Digital",
                "--symbol", "MXND",
                "--currency", "mxn",
                "--bond-mint", BOND_MINT,
                "--keypair", "missing.json",
            )

        assert result.exit_code == 1

    def test_bonds_lists_catalog(self):
        """Test bonds prints one line per bond."""
        self.reporter.info("Testing bonds command", context="Test")

        bonds = [Bond(mint=BOND_MINT, name="US Treasury 2026", symbol="UST26")]
        with patch.object(
            BondCatalogClient, "list_bonds", AsyncMock(return_value=bonds)
        ):
            result = self.invoke("bonds")

        assert result.exit_code == 0
        assert "UST26" in result.output
        assert BOND_MINT in result.output

    def test_bonds_catalog_error(self):
        """Test catalog failure exits 1."""
        with patch.object(
            BondCatalogClient,
            "list_bonds",
            AsyncMock(side_effect=BondCatalogError("Bond catalog returned 503", 503)),
        ):
            result = self.invoke("bonds")

        assert result.exit_code == 1
        assert "503" in result.output

    def test_status_unhealthy_exit_code(self):
        """Test status exits 1 when the endpoint is unreachable."""
        check = HealthCheck(
            name="solana_rpc",
            status=HealthStatus.UNHEALTHY,
            message="RPC Error: connection refused",
            timestamp=datetime.now(),
        )
        with patch.object(ConnectionMonitor, "check", AsyncMock(return_value=check)):
            result = self.invoke("status")

        assert result.exit_code == 1
        assert "connection refused" in result.output

    def test_balance_prints_amount(self):
        """Test balance prints the raw amount."""
        owner = str(Keypair().pubkey())
        with patch(
            "monnayeur.cli.BalancePrecondition.check_balance",
            AsyncMock(return_value=2_500_000),
        ):
            result = self.invoke("balance", "--owner", owner, "--mint", BOND_MINT)

        assert result.exit_code == 0
        assert "2500000" in result.output


if __name__ == "__main__":
    TestCli.run_as_main()
