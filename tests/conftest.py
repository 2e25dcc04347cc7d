"""
Pytest fixtures for Solana Connect tests. RPC is replaced by a MagicMock client
handed to the gateway through its connection factory.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import base58
import pytest
from solders.keypair import Keypair

# Valid Solana pubkeys (base58, 32 bytes)
VALID_WALLET = "9QCfNuQuxct1Xk9ytFYgxc5fThmTzL4pHQnSjjrVUrka"
VALID_WALLET_2 = "7F1WzVNQ1Qpurqxxdyv3UrFQR3uoNepULVW9A4bAJ5nZ"
USDC_MINT = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"
NFT_MINT = "7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsU"
VALID_SIG = "5VERv8NMvzbJMEkV8xnrLkEaWRtSz9CosKDYjCJjBRnbJLgp8uirBgmQpjKhoR4tjF3ZpRzrFmBV6UjKdiSZkQUW"


def token_account(pubkey: str, mint: str, amount: str, decimals: int, ui_amount: float | None) -> dict:
    """jsonParsed keyed token account, as returned by getTokenAccountsByOwner."""
    ui_string = str(ui_amount) if ui_amount is not None else "0"
    return {
        "pubkey": pubkey,
        "account": {
            "data": {
                "parsed": {
                    "info": {
                        "mint": mint,
                        "owner": VALID_WALLET,
                        "tokenAmount": {
                            "amount": amount,
                            "decimals": decimals,
                            "uiAmount": ui_amount,
                            "uiAmountString": ui_string,
                        },
                    },
                    "type": "account",
                },
                "program": "spl-token",
            },
        },
    }


@pytest.fixture
def sender_keypair() -> Keypair:
    return Keypair.from_seed(bytes(range(32)))


@pytest.fixture
def sender_base58(sender_keypair) -> str:
    return base58.b58encode(bytes(sender_keypair)).decode()


@pytest.fixture
def sender_byte_list(sender_keypair) -> str:
    return ",".join(str(b) for b in bytes(sender_keypair))


@pytest.fixture
def mock_client():
    """MagicMock standing in for solana.rpc.api.Client."""
    from solders.hash import Hash

    client = MagicMock()
    client.get_latest_blockhash.return_value = MagicMock(value=MagicMock(blockhash=Hash.default()))
    client.send_transaction.return_value = MagicMock(value=VALID_SIG)
    return client


@pytest.fixture
def opened_urls() -> list[str]:
    return []


@pytest.fixture
def gateway(mock_client, opened_urls):
    """WalletGateway whose connection factory records the URL and returns mock_client."""
    from solana_connect.config.settings import GatewayConfig
    from solana_connect.gateway import WalletGateway

    def factory(rpc_url, commitment="confirmed", timeout=10.0):
        opened_urls.append(rpc_url)
        return mock_client

    return WalletGateway(GatewayConfig(rpc_url="https://rpc.test.invalid"), connection_factory=factory)


@pytest.fixture
def client(gateway):
    """FastAPI TestClient over the mocked gateway."""
    from fastapi.testclient import TestClient

    from solana_connect.api_server.server import create_app

    return TestClient(create_app(gateway))
