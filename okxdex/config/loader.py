"""Environment-driven configuration for the OKX DEX tooling."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Iterable, List, Mapping, Optional

from dotenv import load_dotenv

DEFAULT_BASE_URL = "https://www.okx.com"
DEFAULT_API_VERSION = "/api/v5/dex"
HELIUS_RPC_TEMPLATE = "https://mainnet.helius-rpc.com/?api-key={api_key}"

API_CREDENTIAL_KEYS = (
    "REACT_APP_API_KEY",
    "REACT_APP_SECRET_KEY",
    "REACT_APP_API_PASSPHRASE",
    "REACT_APP_PROJECT_ID",
)
SOLANA_KEYS = ("USER_ADDRESS", "PRIVATE_KEY")


class ConfigurationError(ValueError):
    """Raised when configuration data is invalid or missing."""


def _require_keys(data: Mapping[str, str], keys: Iterable[str], context: str) -> None:
    missing = [key for key in keys if not (data.get(key) or "").strip()]
    if missing:
        raise ConfigurationError(f"{context} missing required keys: {', '.join(missing)}")


def _positive_int(data: Mapping[str, str], key: str, default: int) -> int:
    raw = (data.get(key) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{key} must be an integer, got {raw!r}") from exc
    if value <= 0:
        raise ConfigurationError(f"{key} must be positive")
    return value


def _positive_float(data: Mapping[str, str], key: str, default: float) -> float:
    raw = (data.get(key) or "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{key} must be a number, got {raw!r}") from exc
    if value <= 0:
        raise ConfigurationError(f"{key} must be positive")
    return value


@dataclass(frozen=True)
class ApiCredentials:
    """Credentials used to sign DEX API requests."""

    api_key: str
    secret_key: str = field(repr=False)
    passphrase: str = field(repr=False)
    project_id: str

    def missing_fields(self) -> List[str]:
        """Return the names of credential fields that are empty."""
        return [name for name in ("api_key", "secret_key", "passphrase", "project_id") if not getattr(self, name)]


@dataclass(frozen=True)
class SolanaConfig:
    """Settings for submitting transactions to Solana."""

    rpc_url: str = field(repr=False)
    user_address: str
    private_key: str = field(repr=False)
    max_retries: int = 8
    backoff_seconds: float = 2.0
    send_max_retries: int = 5
    confirm_sleep_seconds: float = 0.5
    rpc_timeout: float = 10.0


@dataclass(frozen=True)
class DefaultsConfig:
    """Default operational parameters."""

    quote_slippage: str = "0.1"
    swap_slippage: str = "0.05"
    cross_chain_slippage: str = "0.025"
    api_timeout: int = 10


@dataclass(frozen=True)
class DexConfig:
    """Typed wrapper around the tooling configuration."""

    credentials: ApiCredentials
    defaults: DefaultsConfig
    base_url: str = DEFAULT_BASE_URL
    api_version: str = DEFAULT_API_VERSION
    solana: Optional[SolanaConfig] = None

    def ensure_solana(self) -> SolanaConfig:
        """Return the Solana settings or raise if they were not loaded."""
        if self.solana is None:
            raise ConfigurationError("Solana settings required but not configured")
        return self.solana


def _resolve_rpc_url(env: Mapping[str, str]) -> str:
    explicit = (env.get("SOLANA_RPC_URL") or "").strip()
    if explicit:
        return explicit
    api_key = (env.get("HELIUS_API_KEY") or "").strip()
    if not api_key:
        raise ConfigurationError("solana missing required keys: HELIUS_API_KEY (or SOLANA_RPC_URL)")
    return HELIUS_RPC_TEMPLATE.format(api_key=api_key)


def load_credentials(env: Mapping[str, str]) -> ApiCredentials:
    """Build :class:`ApiCredentials` from ``env``."""
    _require_keys(env, API_CREDENTIAL_KEYS, "api credentials")
    return ApiCredentials(
        api_key=env["REACT_APP_API_KEY"].strip(),
        secret_key=env["REACT_APP_SECRET_KEY"].strip(),
        passphrase=env["REACT_APP_API_PASSPHRASE"].strip(),
        project_id=env["REACT_APP_PROJECT_ID"].strip(),
    )


def load_solana_config(env: Mapping[str, str]) -> SolanaConfig:
    """Build :class:`SolanaConfig` from ``env``."""
    rpc_url = _resolve_rpc_url(env)
    _require_keys(env, SOLANA_KEYS, "solana")
    return SolanaConfig(
        rpc_url=rpc_url,
        user_address=env["USER_ADDRESS"].strip(),
        private_key=env["PRIVATE_KEY"].strip(),
        max_retries=_positive_int(env, "SOLANA_MAX_RETRIES", 8),
        backoff_seconds=_positive_float(env, "SOLANA_BACKOFF_SECONDS", 2.0),
    )


def load_config(env: Optional[Mapping[str, str]] = None, *, require_solana: bool = False) -> DexConfig:
    """Load and validate configuration from the environment.

    When ``env`` is omitted, a ``.env`` file is read into ``os.environ`` first.
    """
    if env is None:
        load_dotenv()
        env = os.environ

    credentials = load_credentials(env)
    defaults = DefaultsConfig(
        swap_slippage=(env.get("SWAP_SLIPPAGE") or "").strip() or DefaultsConfig.swap_slippage,
        api_timeout=_positive_int(env, "OKX_API_TIMEOUT", DefaultsConfig.api_timeout),
    )
    base_url = ((env.get("OKX_BASE_URL") or "").strip() or DEFAULT_BASE_URL).rstrip("/")

    solana = load_solana_config(env) if require_solana else None

    return DexConfig(
        credentials=credentials,
        defaults=defaults,
        base_url=base_url,
        solana=solana,
    )


__all__ = [
    "API_CREDENTIAL_KEYS",
    "ApiCredentials",
    "ConfigurationError",
    "DexConfig",
    "DefaultsConfig",
    "SolanaConfig",
    "load_config",
    "load_credentials",
    "load_solana_config",
]
