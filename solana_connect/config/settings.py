"""
Gateway settings.

GatewayConfig is a plain value: it never touches the environment. Use
solana_connect.config.env.load_gateway_config() at the process boundary to
build one from env vars.
"""

from __future__ import annotations

from dataclasses import dataclass

MAINNET_RPC_URL = "https://api.mainnet-beta.solana.com"
DEVNET_RPC_URL = "https://api.devnet.solana.com"
DEFAULT_COMMITMENT = "confirmed"
DEFAULT_TIMEOUT_SEC = 10.0

VALID_COMMITMENTS = ("processed", "confirmed", "finalized")


@dataclass(frozen=True)
class GatewayConfig:
    """Endpoint settings for WalletGateway. Defaults to public mainnet."""

    rpc_url: str = MAINNET_RPC_URL
    commitment: str = DEFAULT_COMMITMENT
    timeout: float = DEFAULT_TIMEOUT_SEC

    def __post_init__(self) -> None:
        if not (self.rpc_url or "").strip():
            raise ValueError("rpc_url must be non-empty")
        if self.commitment not in VALID_COMMITMENTS:
            raise ValueError(
                f"Unknown commitment '{self.commitment}'. Available: {list(VALID_COMMITMENTS)}"
            )
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")

    def with_rpc_url(self, rpc_url: str | None) -> GatewayConfig:
        """Return a copy pointing at rpc_url, or self when rpc_url is empty."""
        if not rpc_url or rpc_url.strip() == self.rpc_url:
            return self
        return GatewayConfig(rpc_url=rpc_url.strip(), commitment=self.commitment, timeout=self.timeout)
