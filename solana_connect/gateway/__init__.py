"""
Wallet & Ledger Gateway — single-call Solana operations for agent frameworks.
"""

from solana_connect.gateway.client import get_connection
from solana_connect.gateway.gateway import WalletGateway

__all__ = ["WalletGateway", "get_connection"]
