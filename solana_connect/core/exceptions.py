"""
Application-level exceptions.

Every error raised by the gateway is a SolanaConnectError. Remote and
transport failures keep the original exception as __cause__ and copy its
message, so callers see what the node actually said.
"""

from __future__ import annotations


class SolanaConnectError(Exception):
    """Base class for all Solana Connect errors."""


class InvalidKeyMaterial(SolanaConnectError, ValueError):
    """Key material is neither a 64-entry byte list nor a base58 64-byte secret."""

    def __init__(self, message: str, key_format: str | None = None):
        super().__init__(message)
        self.key_format = key_format


class InvalidAddress(SolanaConnectError, ValueError):
    """A wallet, mint or token-account address is not a valid base58 public key."""

    def __init__(self, message: str, address: str | None = None):
        super().__init__(message)
        self.address = address


class RequestFailed(SolanaConnectError):
    """The RPC endpoint rejected a request or could not be reached."""

    def __init__(self, message: str, method: str | None = None):
        super().__init__(message)
        self.method = method


class TransferFailed(RequestFailed):
    """A transfer transaction could not be built, signed or submitted."""
