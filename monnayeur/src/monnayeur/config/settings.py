"""
Monnayeur configuration with hybrid YAML + ENV support.

Priority: Environment variables > environment YAML > default YAML > Pydantic defaults
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml
from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from solders.pubkey import Pubkey
from spl.token.constants import TOKEN_PROGRAM_ID

from shared.resilience import CircuitBreakerConfig, RetryConfig

CLUSTER_URLS = {
    "devnet": "https://api.devnet.solana.com",
    "testnet": "https://api.testnet.solana.com",
    "mainnet-beta": "https://api.mainnet-beta.solana.com",
}


class CircuitBreakerSettings(BaseSettings):
    """Circuit breaker configuration for external services."""

    failure_threshold: int = Field(default=5, ge=1, le=100)
    success_threshold: int = Field(default=2, ge=1, le=10)
    timeout: float = Field(default=30.0, ge=1.0, le=600.0)


class RetrySettings(BaseSettings):
    """Retry configuration for idempotent RPC queries."""

    max_attempts: int = Field(default=3, ge=1, le=10)
    initial_delay: float = Field(default=0.5, ge=0.0, le=10.0)
    max_delay: float = Field(default=5.0, ge=0.0, le=300.0)
    exponential_base: float = Field(default=2.0, ge=1.0, le=10.0)
    jitter: bool = Field(default=True)


class TimeoutSettings(BaseSettings):
    """Timeout configuration for operations (seconds)."""

    rpc_call: float = Field(default=10.0, ge=0.1, le=60.0)
    catalog_call: float = Field(default=10.0, ge=0.1, le=60.0)
    confirmation_poll_interval: float = Field(default=1.0, ge=0.0, le=30.0)
    transaction_confirmation: Optional[float] = Field(default=None, ge=1.0)


class ResilienceSettings(BaseSettings):
    """Resilience patterns configuration."""

    circuit_breaker: CircuitBreakerSettings = Field(
        default_factory=CircuitBreakerSettings
    )
    retry: RetrySettings = Field(default_factory=RetrySettings)
    timeouts: TimeoutSettings = Field(default_factory=TimeoutSettings)


@dataclass(frozen=True)
class ProgramConfig:
    """
    Immutable on-chain program configuration.

    Built once from settings and injected into the instruction builder.
    """

    program_id: Pubkey
    token_program_id: Pubkey = TOKEN_PROGRAM_ID
    decimals: int = 6


class MonnayeurConfig(BaseSettings):
    """Monnayeur configuration schema."""

    model_config = SettingsConfigDict(
        env_prefix="MONNAYEUR_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    # Blockchain configuration
    solana_network: str = Field(default="devnet")
    solana_rpc_url: Optional[str] = Field(default=None)
    program_id: str = Field(default="CGnwq4D9qErCRjPujz5MVkMaixR8BLRACpAmLWsqoRRe")
    commitment: str = Field(default="confirmed")
    skip_preflight: bool = Field(default=False)

    # Creation flow
    stablecoin_decimals: int = Field(default=6, ge=0, le=18)
    max_creation_attempts: int = Field(default=3, ge=1, le=10)

    # Bond catalog
    bond_catalog_url: str = Field(default="http://localhost:3000/api")

    # Logging
    log_level: str = Field(default="info")
    log_dir: Optional[str] = Field(default=None)

    resilience: ResilienceSettings = Field(default_factory=ResilienceSettings)

    @computed_field
    @property
    def rpc_url(self) -> str:
        """Explicit RPC URL, or the public endpoint of the configured cluster."""
        return self.solana_rpc_url or CLUSTER_URLS[self.solana_network]

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = ["debug", "info", "warning", "error", "critical"]
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(f"Invalid log_level. Must be one of: {allowed}")
        return v_lower

    @field_validator("solana_network")
    @classmethod
    def validate_network(cls, v: str) -> str:
        """Validate Solana network."""
        allowed = list(CLUSTER_URLS)
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(f"Invalid network. Must be one of: {allowed}")
        return v_lower

    @field_validator("commitment")
    @classmethod
    def validate_commitment(cls, v: str) -> str:
        """Validate commitment level."""
        allowed = ["processed", "confirmed", "finalized"]
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(f"Invalid commitment. Must be one of: {allowed}")
        return v_lower

    @field_validator("program_id")
    @classmethod
    def validate_program_id(cls, v: str) -> str:
        """Validate program id is a base58 public key."""
        try:
            Pubkey.from_string(v)
        except ValueError as e:
            raise ValueError(f"Invalid program_id: {v}") from e
        return v

    def program_config(self) -> ProgramConfig:
        """Build the immutable program configuration."""
        return ProgramConfig(
            program_id=Pubkey.from_string(self.program_id),
            decimals=self.stablecoin_decimals,
        )

    def get_circuit_breaker_config(self) -> CircuitBreakerConfig:
        """Circuit breaker config for an RPC endpoint."""
        settings = self.resilience.circuit_breaker
        return CircuitBreakerConfig(
            failure_threshold=settings.failure_threshold,
            success_threshold=settings.success_threshold,
            timeout=settings.timeout,
        )

    def get_retry_config(self) -> RetryConfig:
        """Retry config for idempotent RPC queries."""
        settings = self.resilience.retry
        return RetryConfig(
            max_attempts=settings.max_attempts,
            initial_delay=settings.initial_delay,
            max_delay=settings.max_delay,
            backoff_multiplier=settings.exponential_base,
            jitter=settings.jitter,
        )


def load_config(config_file: Optional[str] = None) -> MonnayeurConfig:
    """
    Load configuration from YAML files.

    Priority: Environment variables > environment-specific YAML > default YAML

    Args:
        config_file: Optional YAML filename override

    Returns:
        MonnayeurConfig instance
    """
    env = os.getenv("ENV", "production")

    config_map = {
        "production": "production.yaml",
        "development": "development.yaml",
        "test": "test.yaml",
    }

    current_file = Path(__file__).resolve()
    project_root = current_file.parent.parent.parent.parent
    config_dir = project_root / "config"

    default_config_path = config_dir / "default.yaml"
    merged_config = {}

    if default_config_path.exists():
        with open(default_config_path, "r") as f:
            loaded = yaml.safe_load(f)
            if loaded:
                merged_config = loaded

    if config_file is None:
        config_file = os.getenv("MONNAYEUR_CONFIG")
        if not config_file:
            config_file = config_map.get(env, "production.yaml")

    env_config_path = Path(config_file)
    if not env_config_path.is_absolute():
        env_config_path = config_dir / config_file

    if env_config_path.exists():
        with open(env_config_path, "r") as f:
            loaded = yaml.safe_load(f)
            if loaded:
                merged_config.update(loaded)

    # Init kwargs outrank env vars in pydantic-settings; drop YAML keys the
    # environment already sets so env vars keep priority.
    for key in list(merged_config):
        if f"MONNAYEUR_{key.upper()}" in os.environ:
            del merged_config[key]

    return MonnayeurConfig(**merged_config)


# Global settings instance
_settings: Optional[MonnayeurConfig] = None


def get_settings() -> MonnayeurConfig:
    """
    Get singleton settings instance.

    Returns:
        MonnayeurConfig instance
    """
    global _settings
    if _settings is None:
        _settings = load_config()
    return _settings
