from monnayeur.application.use_cases.create_stablecoin import (
    CreateStablecoin,
    StablecoinCreationResult,
)

__all__ = ["CreateStablecoin", "StablecoinCreationResult"]
