from monnayeur.infrastructure.catalog.bond_catalog_client import BondCatalogClient

__all__ = ["BondCatalogClient"]
