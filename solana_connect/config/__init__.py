"""
Configuration for Solana Connect.

The environment is read here and nowhere else. Callers build a GatewayConfig
once at the process boundary and inject it into the gateway.
"""

from solana_connect.config.env import load_gateway_config  # noqa: F401
from solana_connect.config.settings import GatewayConfig  # noqa: F401

__all__ = ["GatewayConfig", "load_gateway_config"]
