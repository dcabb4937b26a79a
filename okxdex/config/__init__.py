"""Configuration utilities for the OKX DEX tooling."""

from .loader import (
    API_CREDENTIAL_KEYS,
    ApiCredentials,
    ConfigurationError,
    DefaultsConfig,
    DexConfig,
    SolanaConfig,
    load_config,
    load_credentials,
    load_solana_config,
)

__all__ = [
    "API_CREDENTIAL_KEYS",
    "ApiCredentials",
    "ConfigurationError",
    "DefaultsConfig",
    "DexConfig",
    "SolanaConfig",
    "load_config",
    "load_credentials",
    "load_solana_config",
]
