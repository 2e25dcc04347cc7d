"""
Main entrypoint: Solana Connect HTTP tool surface.

Reads the environment once (SOLANA_RPC_URL / HELIUS_API_KEY / SOLANA_NETWORK,
SOLANA_COMMITMENT, SOLANA_RPC_TIMEOUT, API_HOST, API_PORT, LOG_LEVEL), builds the
gateway and serves it with uvicorn.

Equivalent: uvicorn solana_connect.api_server.app:app --host 0.0.0.0 --port 8000
"""

import os

# Configure structured JSON logging before other imports that may log
from solana_connect.logging import get_logger

logger = get_logger("main")


def main() -> None:
    """Build the gateway from env and run the FastAPI server in the main thread."""
    from solana_connect.api_server.server import create_app
    from solana_connect.config.env import load_gateway_config, mask_rpc_url
    from solana_connect.gateway import WalletGateway
    import uvicorn

    config = load_gateway_config()
    api_host = os.getenv("API_HOST", "127.0.0.1").strip()
    api_port = int(os.getenv("API_PORT", "8000").strip() or "8000")

    app = create_app(WalletGateway(config))
    logger.info(
        "main_server_starting",
        host=api_host,
        port=api_port,
        rpc=mask_rpc_url(config.rpc_url),
    )
    uvicorn.run(app, host=api_host, port=api_port, log_level=os.getenv("LOG_LEVEL", "info").lower())


if __name__ == "__main__":
    main()
