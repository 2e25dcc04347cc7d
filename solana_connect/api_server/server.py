"""
FastAPI server — HTTP tool surface over WalletGateway.

Each route delegates to one gateway operation and returns its to_dict() shape.
The gateway is app-scoped: pass one to create_app(), or let the lifespan build
it from the environment (load_gateway_config) at startup.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

from fastapi import Depends, FastAPI, Query, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from solana_connect import __version__
from solana_connect.config.env import load_gateway_config, mask_rpc_url
from solana_connect.core.exceptions import InvalidAddress, InvalidKeyMaterial, RequestFailed
from solana_connect.gateway.gateway import DEFAULT_TX_LIMIT, MAX_TX_LIMIT, WalletGateway
from solana_connect.logging import get_logger, short_address

logger = get_logger(__name__)


# -----------------------------------------------------------------------------
# Request models
# -----------------------------------------------------------------------------

class ConnectRequest(BaseModel):
    """POST /wallet/connect body. Omit private_key to generate a new wallet."""

    private_key: str | None = Field(None, description="Byte list or base58 secret key")


class SendSolRequest(BaseModel):
    """POST /transfer/sol body."""

    private_key: str = Field(..., min_length=1, description="Sender secret key (byte list or base58)")
    to: str = Field(..., min_length=32, max_length=44, description="Recipient address (base58)")
    amount: float = Field(..., gt=0, description="Amount in SOL")
    rpc_url: str | None = Field(None, description="Override the configured RPC endpoint")


class SendTokenRequest(BaseModel):
    """POST /transfer/token body."""

    private_key: str = Field(..., min_length=1, description="Sender secret key (byte list or base58)")
    to: str = Field(..., min_length=32, max_length=44, description="Recipient wallet address (base58)")
    mint: str = Field(..., min_length=32, max_length=44, description="Token mint address (base58)")
    amount: float = Field(..., gt=0, description="Amount in whole tokens")
    rpc_url: str | None = Field(None, description="Override the configured RPC endpoint")


# -----------------------------------------------------------------------------
# App factory
# -----------------------------------------------------------------------------

def get_gateway(request: Request) -> WalletGateway:
    """Dependency: the app-scoped gateway."""
    return request.app.state.gateway


def create_app(gateway: WalletGateway | None = None) -> FastAPI:
    """Build the ASGI app. Without a gateway, one is configured from env at startup."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if app.state.gateway is None:
            app.state.gateway = WalletGateway(load_gateway_config())
        cfg = app.state.gateway.config
        logger.info("api_gateway_ready", rpc=mask_rpc_url(cfg.rpc_url), commitment=cfg.commitment)
        yield
        logger.info("api_stopped")

    app = FastAPI(
        title="Solana Connect API",
        description="Wallet, balance, transfer and history operations over one Solana RPC endpoint.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.gateway = gateway

    # -------------------------------------------------------------------------
    # Error mapping
    # -------------------------------------------------------------------------

    @app.exception_handler(InvalidKeyMaterial)
    def invalid_key_handler(request: Request, exc: InvalidKeyMaterial) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(InvalidAddress)
    def invalid_address_handler(request: Request, exc: InvalidAddress) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(RequestFailed)
    def request_failed_handler(request: Request, exc: RequestFailed) -> JSONResponse:
        logger.warning("api_upstream_failed", path=request.url.path, method=exc.method, error=str(exc))
        return JSONResponse(status_code=502, content={"detail": str(exc)})

    @app.exception_handler(ValueError)
    def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    # -------------------------------------------------------------------------
    # Routes
    # -------------------------------------------------------------------------

    @app.get("/health")
    def health() -> dict[str, str]:
        """Liveness probe: API is up."""
        return {"status": "ok"}

    @app.post("/wallet/connect")
    def connect_wallet(
        body: ConnectRequest | None = None,
        gw: WalletGateway = Depends(get_gateway),
    ) -> dict[str, Any]:
        """Import a wallet from private_key, or generate one when it is omitted."""
        info = gw.connect(body.private_key if body else None)
        return info.to_dict()

    @app.get("/wallet/{address}/balance")
    def wallet_balance(address: str, gw: WalletGateway = Depends(get_gateway)) -> dict[str, Any]:
        return gw.get_balance(address.strip()).to_dict()

    @app.get("/wallet/{address}/token-accounts")
    def wallet_token_accounts(address: str, gw: WalletGateway = Depends(get_gateway)) -> list[dict[str, Any]]:
        return [a.to_dict() for a in gw.list_token_accounts(address.strip())]

    @app.get("/wallet/{address}/transactions")
    def wallet_transactions(
        address: str,
        limit: int = Query(DEFAULT_TX_LIMIT, ge=1, le=MAX_TX_LIMIT),
        gw: WalletGateway = Depends(get_gateway),
    ) -> list[dict[str, Any]]:
        return [t.to_dict() for t in gw.list_transactions(address.strip(), limit)]

    @app.post("/transfer/sol")
    def transfer_sol(body: SendSolRequest, gw: WalletGateway = Depends(get_gateway)) -> dict[str, Any]:
        """Send SOL. Not idempotent: each call submits a new transaction."""
        logger.info("api_transfer_sol", to=short_address(body.to), amount=body.amount)
        result = gw.send_sol(body.private_key, body.to, body.amount, rpc_url=body.rpc_url)
        return result.to_dict()

    @app.post("/transfer/token")
    def transfer_token(body: SendTokenRequest, gw: WalletGateway = Depends(get_gateway)) -> dict[str, Any]:
        """Send SPL tokens between associated token accounts. Not idempotent."""
        logger.info(
            "api_transfer_token",
            to=short_address(body.to),
            mint=short_address(body.mint),
            amount=body.amount,
        )
        result = gw.send_token(body.private_key, body.to, body.mint, body.amount, rpc_url=body.rpc_url)
        return result.to_dict()

    return app
