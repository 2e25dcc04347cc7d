"""Wallet address validation utilities."""

from solders.pubkey import Pubkey

from solana_connect.core.exceptions import InvalidAddress


def to_pubkey(address: str, kind: str = "wallet") -> Pubkey:
    """Parse a base58 address or raise InvalidAddress naming what it was meant to be."""
    raw = address.strip() if isinstance(address, str) else ""
    if not raw:
        raise InvalidAddress(f"{kind} address must be non-empty", address=address)
    try:
        return Pubkey.from_string(raw)
    except ValueError as e:
        raise InvalidAddress(f"Invalid Solana {kind} address '{raw}': {e}", address=raw) from e
