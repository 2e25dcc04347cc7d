"""
Core — cross-cutting error types shared by the wallet, gateway and API layers.
"""

from solana_connect.core.exceptions import (
    InvalidAddress,
    InvalidKeyMaterial,
    RequestFailed,
    SolanaConnectError,
    TransferFailed,
)

__all__ = [
    "SolanaConnectError",
    "InvalidKeyMaterial",
    "InvalidAddress",
    "RequestFailed",
    "TransferFailed",
]
