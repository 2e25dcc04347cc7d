"""Key material parsing and the value objects returned by the gateway."""

from solana_connect.wallet.keys import (
    KeyFormat,
    KeyParseResult,
    detect_key_format,
    export_secret,
    load_keypair,
    parse_key_material,
)
from solana_connect.wallet.models import (
    BalanceReport,
    TokenAccountInfo,
    TokenHolding,
    TransactionRecord,
    TransferResult,
    WalletInfo,
)

__all__ = [
    "KeyFormat",
    "KeyParseResult",
    "detect_key_format",
    "export_secret",
    "load_keypair",
    "parse_key_material",
    "BalanceReport",
    "TokenAccountInfo",
    "TokenHolding",
    "TransactionRecord",
    "TransferResult",
    "WalletInfo",
]
