"""
Solana Connect — wallet and ledger gateway for agent frameworks.

Wraps a Solana JSON-RPC endpoint and the SPL token program into single-call
operations: connect a wallet, read balances and token accounts, send SOL or
SPL tokens, and list recent transactions.
"""

__version__ = "0.1.0"
