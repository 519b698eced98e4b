"""
Unit tests for StablecoinSpec value object.

Usage:
    pytest monnayeur/tests/unit/domain/test_stablecoin_spec.py
"""

from shared.tests import LaborantTest

from helpers.factories import BOND_MINT, make_spec
from monnayeur.domain.exceptions import ValidationError


class TestStablecoinSpec(LaborantTest):
    """Unit tests for StablecoinSpec validation."""

    component_name = "monnayeur"
    test_category = "unit"

    def test_valid_spec(self):
        """Test valid spec keeps its fields."""
        self.reporter.info("Testing valid spec", context="Test")

        spec = make_spec()

        assert spec.symbol == "MXND"
        assert str(spec.bond_mint_pubkey) == BOND_MINT
        assert spec.to_dict()["target_currency"] == "MXN"

    def test_invalid_bond_mint(self):
        """Test non-address bond mint raises ValidationError."""
        self.reporter.info("Testing invalid bond mint", context="Test")

        try:
            make_spec(bond_mint="not-an-address")
            assert False, "Should have raised ValidationError"
        except ValidationError as e:
            assert e.field == "bond_mint"
            self.reporter.info(f"Validation error: {e.message}", context="Test")

    def test_empty_bond_mint(self):
        """Test empty bond mint raises ValidationError."""
        try:
            make_spec(bond_mint="")
            assert False, "Should have raised ValidationError"
        except ValidationError as e:
            assert e.field == "bond_mint"

    def test_decimals_bounds(self):
        """Test decimals must fit in u8."""
        self.reporter.info("Testing decimals bounds", context="Test")

        assert make_spec(decimals=0).decimals == 0
        assert make_spec(decimals=255).decimals == 255

        for bad in (-1, 256, 1.5, True):
            try:
                make_spec(decimals=bad)
                assert False, f"Should have raised ValidationError for {bad!r}"
            except ValidationError as e:
                assert e.field == "decimals"

    def test_spec_is_immutable(self):
        """Test spec fields cannot be reassigned."""
        spec = make_spec()

        try:
            spec.symbol = "EURD"
            assert False, "Should have raised FrozenInstanceError"
        except AttributeError:
            pass


if __name__ == "__main__":
    TestStablecoinSpec.run_as_main()
