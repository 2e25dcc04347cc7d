"""
Environment boundary: RPC URL resolution order and GatewayConfig validation.
"""

from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("SOLANA_RPC_URL", "HELIUS_API_KEY", "SOLANA_NETWORK", "SOLANA_CLUSTER", "SOLANA_COMMITMENT", "SOLANA_RPC_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)


def test_default_is_public_mainnet():
    from solana_connect.config.env import get_solana_rpc_url
    from solana_connect.config.settings import MAINNET_RPC_URL

    assert get_solana_rpc_url() == MAINNET_RPC_URL


def test_explicit_rpc_url_wins(monkeypatch):
    from solana_connect.config.env import get_solana_rpc_url

    monkeypatch.setenv("SOLANA_RPC_URL", " https://my.rpc.invalid ")
    monkeypatch.setenv("HELIUS_API_KEY", "abc")
    assert get_solana_rpc_url() == "https://my.rpc.invalid"


def test_helius_key_follows_network(monkeypatch):
    from solana_connect.config.env import get_solana_rpc_url

    monkeypatch.setenv("HELIUS_API_KEY", "abc")
    assert get_solana_rpc_url() == "https://mainnet.helius-rpc.com/?api-key=abc"
    monkeypatch.setenv("SOLANA_NETWORK", "devnet")
    assert get_solana_rpc_url() == "https://devnet.helius-rpc.com/?api-key=abc"


def test_devnet_default(monkeypatch):
    from solana_connect.config.env import get_solana_rpc_url
    from solana_connect.config.settings import DEVNET_RPC_URL

    monkeypatch.setenv("SOLANA_NETWORK", "devnet")
    assert get_solana_rpc_url() == DEVNET_RPC_URL


def test_load_gateway_config(monkeypatch):
    from solana_connect.config.env import load_gateway_config

    monkeypatch.setenv("SOLANA_RPC_URL", "https://my.rpc.invalid")
    monkeypatch.setenv("SOLANA_COMMITMENT", "Finalized")
    monkeypatch.setenv("SOLANA_RPC_TIMEOUT", "2.5")
    cfg = load_gateway_config()
    assert cfg.rpc_url == "https://my.rpc.invalid"
    assert cfg.commitment == "finalized"
    assert cfg.timeout == 2.5


def test_bad_timeout_env(monkeypatch):
    from solana_connect.config.env import load_gateway_config

    monkeypatch.setenv("SOLANA_RPC_TIMEOUT", "soon")
    with pytest.raises(ValueError, match="SOLANA_RPC_TIMEOUT"):
        load_gateway_config()


def test_gateway_config_validation():
    from solana_connect.config.settings import GatewayConfig

    with pytest.raises(ValueError):
        GatewayConfig(rpc_url="")
    with pytest.raises(ValueError, match="commitment"):
        GatewayConfig(commitment="max")
    with pytest.raises(ValueError):
        GatewayConfig(timeout=0)


def test_with_rpc_url():
    from solana_connect.config.settings import GatewayConfig

    base = GatewayConfig(rpc_url="https://a.invalid", commitment="finalized", timeout=3.0)
    assert base.with_rpc_url(None) is base
    assert base.with_rpc_url("") is base
    other = base.with_rpc_url("https://b.invalid")
    assert other.rpc_url == "https://b.invalid"
    assert other.commitment == "finalized"
    assert other.timeout == 3.0


def test_mask_rpc_url():
    from solana_connect.config.env import mask_rpc_url

    assert mask_rpc_url("https://mainnet.helius-rpc.com/?api-key=secret") == "https://mainnet.helius-rpc.com/?api-key=***"
    assert mask_rpc_url("https://api.devnet.solana.com") == "https://api.devnet.solana.com"


def test_get_connection_uses_commitment_and_timeout():
    from unittest.mock import patch

    from solana_connect.gateway.client import get_connection

    with patch("solana_connect.gateway.client.Client") as mock_client_cls:
        get_connection("https://a.invalid", commitment="finalized", timeout=4.0)
    mock_client_cls.assert_called_once_with("https://a.invalid", commitment="finalized", timeout=4.0)
