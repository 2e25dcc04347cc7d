"""
Value objects returned by the gateway.

All are frozen and live only for the call that produced them. to_dict()
gives the JSON shape handed to agent frameworks.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from solders.keypair import Keypair

TX_STATUS_SUCCESS = "success"
TX_STATUS_FAILED = "failed"


@dataclass(frozen=True)
class WalletInfo:
    """Result of connect(): address plus the exportable secret."""

    address: str
    private_key: str
    keypair: Keypair = field(repr=False, compare=False)

    def to_dict(self) -> dict[str, Any]:
        return {"address": self.address, "privateKey": self.private_key}


@dataclass(frozen=True)
class TokenHolding:
    mint: str
    balance: float

    def to_dict(self) -> dict[str, Any]:
        return {"mint": self.mint, "balance": self.balance}


@dataclass(frozen=True)
class BalanceReport:
    """SOL balance plus nonzero fungible-token and NFT holdings."""

    sol: float
    tokens: list[TokenHolding] = field(default_factory=list)
    nfts: list[TokenHolding] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "sol": self.sol,
            "tokens": [t.to_dict() for t in self.tokens],
            "nfts": [n.to_dict() for n in self.nfts],
        }


@dataclass(frozen=True)
class TokenAccountInfo:
    """One SPL token account. balance is the RPC's uiAmountString."""

    mint: str
    balance: str
    decimals: int
    address: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "mint": self.mint,
            "balance": self.balance,
            "decimals": self.decimals,
            "address": self.address,
        }


@dataclass(frozen=True)
class TransferResult:
    """Signature and echoed details of a submitted transfer. mint is None for SOL."""

    signature: str
    sender: str
    recipient: str
    amount: float
    timestamp: str
    mint: str | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "signature": self.signature,
            "from": self.sender,
            "to": self.recipient,
            "amount": self.amount,
            "timestamp": self.timestamp,
        }
        if self.mint is not None:
            out["token"] = self.mint
        return out


@dataclass(frozen=True)
class TransactionRecord:
    signature: str
    slot: int
    block_time: int | None
    status: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "signature": self.signature,
            "slot": self.slot,
            "blockTime": self.block_time,
            "status": self.status,
        }
