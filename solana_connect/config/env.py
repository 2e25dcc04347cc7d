"""
Environment variable loading for Solana Connect.

- SOLANA_RPC_URL: RPC endpoint (highest priority)
- HELIUS_API_KEY: Helius API key (used when SOLANA_RPC_URL is unset)
- SOLANA_NETWORK: mainnet | devnet (default: mainnet)
- SOLANA_COMMITMENT: processed | confirmed | finalized (default: confirmed)
- SOLANA_RPC_TIMEOUT: transport timeout in seconds (default: 10)
- Loads .env from project root when available.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

from solana_connect.config.settings import (
    DEFAULT_COMMITMENT,
    DEFAULT_TIMEOUT_SEC,
    DEVNET_RPC_URL,
    MAINNET_RPC_URL,
    GatewayConfig,
)

# Project root: config is solana_connect/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_PACKAGE_DIR = _CONFIG_DIR.parent
_ROOT = _PACKAGE_DIR.parent
_ENV_PATH = _ROOT / ".env"

HELIUS_MAINNET_URL_TEMPLATE = "https://mainnet.helius-rpc.com/?api-key={key}"
HELIUS_DEVNET_URL_TEMPLATE = "https://devnet.helius-rpc.com/?api-key={key}"


def load_connect_env() -> None:
    """Load .env from project root. Safe to call multiple times; existing env wins."""
    load_dotenv(_ENV_PATH, override=False)


def get_solana_network() -> str:
    """
    Return SOLANA_NETWORK from env: mainnet | devnet.
    Default: mainnet.
    """
    raw = (os.getenv("SOLANA_NETWORK") or os.getenv("SOLANA_CLUSTER") or "mainnet").strip().lower()
    if raw == "devnet":
        return "devnet"
    return "mainnet"


def get_solana_rpc_url() -> str:
    """
    Resolve Solana RPC URL from env.
    Order: SOLANA_RPC_URL > HELIUS_API_KEY (network-specific) > devnet/mainnet default.
    """
    url = (os.getenv("SOLANA_RPC_URL") or "").strip()
    if url:
        return url
    network = get_solana_network()
    key = (os.getenv("HELIUS_API_KEY") or "").strip()
    if key:
        template = HELIUS_DEVNET_URL_TEMPLATE if network == "devnet" else HELIUS_MAINNET_URL_TEMPLATE
        return template.format(key=key)
    return DEVNET_RPC_URL if network == "devnet" else MAINNET_RPC_URL


def _get_timeout() -> float:
    raw = (os.getenv("SOLANA_RPC_TIMEOUT") or "").strip()
    if not raw:
        return DEFAULT_TIMEOUT_SEC
    try:
        return float(raw)
    except ValueError as e:
        raise ValueError(f"SOLANA_RPC_TIMEOUT must be a number, got '{raw}'") from e


def load_gateway_config() -> GatewayConfig:
    """Build a GatewayConfig from the environment. Call once at the process boundary."""
    load_connect_env()
    return GatewayConfig(
        rpc_url=get_solana_rpc_url(),
        commitment=(os.getenv("SOLANA_COMMITMENT") or DEFAULT_COMMITMENT).strip().lower(),
        timeout=_get_timeout(),
    )


def mask_rpc_url(rpc: str) -> str:
    """Hide an API key embedded in an RPC URL before it is logged."""
    if "api-key=" in rpc:
        return rpc.split("api-key=")[0] + "api-key=***"
    return rpc
